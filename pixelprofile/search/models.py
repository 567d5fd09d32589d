from dataclasses import dataclass

from pixelprofile.geometry.models import Line2D, Point2D


@dataclass
class SearchResult:
    """
    Outcome of refining one line with ProfileSearch.

    Attributes:
        point: Final position (center of gravity of `line`)
        line: Final search line, re-centered on `point`
        iterations: Number of best-position steps performed
        movement: Movement distance measured in the last step
        converged: True if movement dropped below the convergence threshold
    """

    point: Point2D
    line: Line2D
    iterations: int
    movement: float
    converged: bool

    def __repr__(self) -> str:
        return (
            f"SearchResult(point=({self.point.x:.2f}, {self.point.y:.2f}), "
            f"iterations={self.iterations}, movement={self.movement:.3f}, "
            f"converged={self.converged})"
        )
