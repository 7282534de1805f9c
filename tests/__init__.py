"""
Test Suite for the 2-d Tree Point Index

This package contains unit tests and integration tests for:
- Point and Rectangle geometry
- Brute-force PointSet behaviour
- 2-d tree correctness against the brute-force PointSet
- Point generation, point files and the CLI harness

Run tests with: pytest -v
"""
