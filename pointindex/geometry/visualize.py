"""
Plotting for 2-d Trees

Draws the stored points and the splitting segments of every node:
red for vertical (x) splits, blue for horizontal (y) splits. Each
segment spans only the node's own rectangle, so the picture shows the
actual partition of the plane.
"""

from typing import Any, Optional

from .kd_tree import KdTree
from .rectangle import UNIT_SQUARE, Rectangle


def plot_extent(tree: KdTree, margin: float = 0.05) -> Rectangle:
    """
    Rectangle to draw for a tree.

    Finite bounds are drawn as they are. An unbounded tree is drawn over
    the unit square when its points fit there, otherwise over the points'
    bounding box padded by margin (relative to its larger side).
    """
    if tree.bounds.is_finite:
        return tree.bounds

    coords = tree.to_array()
    if len(coords) == 0 or all(UNIT_SQUARE.contains(p) for p in tree.points()):
        return UNIT_SQUARE

    lo = coords.min(axis=0)
    hi = coords.max(axis=0)
    pad = margin * max(float(hi[0] - lo[0]), float(hi[1] - lo[1]), 1.0)
    return Rectangle(lo[0] - pad, lo[1] - pad, hi[0] + pad, hi[1] + pad)


def plot_kdtree(
    tree: KdTree,
    ax: Optional[Any] = None,
    save_path: Optional[str] = None,
    show: bool = False
) -> Any:
    """
    Plot the points and partition of a 2-d tree.

    Args:
        tree: Tree to draw
        ax: Existing matplotlib Axes to draw on; a new figure is created if None
        save_path: If provided, save figure to this path
        show: Whether to call plt.show()

    Returns:
        The matplotlib Axes drawn on

    Raises:
        ImportError: If matplotlib is not installed
    """
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    view = plot_extent(tree)

    # Segments of an unbounded tree are clipped to the drawn extent
    for node in tree.nodes():
        rect = node.rect
        if node.axis == 0:
            ax.plot([node.split_value, node.split_value],
                    [max(rect.ymin, view.ymin), min(rect.ymax, view.ymax)],
                    color='red', linewidth=0.8)
        else:
            ax.plot([max(rect.xmin, view.xmin), min(rect.xmax, view.xmax)],
                    [node.split_value, node.split_value],
                    color='blue', linewidth=0.8)

    coords = tree.to_array()
    if len(coords):
        ax.scatter(coords[:, 0], coords[:, 1], c='black', s=12, zorder=3)

    ax.set_xlim(view.xmin, view.xmax)
    ax.set_ylim(view.ymin, view.ymax)
    ax.set_aspect('equal')
    ax.set_title(f'2-d tree ({tree.size()} points, height {tree.height()})')

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')
    if show:
        plt.show()

    return ax
