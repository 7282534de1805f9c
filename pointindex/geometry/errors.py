"""Exceptions raised by the point index structures."""


class EmptyStructureError(ValueError):
    """Raised when a query needs at least one stored point and there are none."""
