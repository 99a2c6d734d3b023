"""Extraction of a discrete path graph from the trail field."""

from typing import List
import numpy as np

from .state import PathEdge


class PathExtractor:
    """
    Thresholds the trail grid into grid-adjacency edges.

    Row-major scan; every cell strictly above threshold links to its right
    neighbour and then to the neighbour below when those are also above
    threshold. Diagonal neighbours are never linked. Endpoints are cell
    corners in continuous units.
    """

    def __init__(self, cell_size: float, threshold: float = 0.2):
        self.cell_size = cell_size
        self.threshold = threshold

    def extract(self, field: np.ndarray) -> List[PathEdge]:
        """Return the edge list for the given grid."""
        rows, cols = field.shape
        active = field > self.threshold
        size = self.cell_size
        edges: List[PathEdge] = []

        for row, col in np.argwhere(active).tolist():
            value = float(field[row, col])
            x, y = col * size, row * size

            if col + 1 < cols and active[row, col + 1]:
                edges.append(PathEdge(
                    x1=x, y1=y,
                    x2=(col + 1) * size, y2=y,
                    strength=(value + float(field[row, col + 1])) / 2
                ))

            if row + 1 < rows and active[row + 1, col]:
                edges.append(PathEdge(
                    x1=x, y1=y,
                    x2=x, y2=(row + 1) * size,
                    strength=(value + float(field[row + 1, col])) / 2
                ))

        return edges
