from dataclasses import dataclass
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .particles import Particle


@dataclass(frozen=True)
class ProximityEdge:
    i: int
    j: int
    distance: float
    alpha: float


def line_alpha(distance: float, threshold: float, alpha_max: float = 0.1) -> float:
    """Linear fade: alpha_max at distance 0, 0 at the threshold."""
    return alpha_max * (1.0 - distance / threshold)


def _edge(particles: Sequence[Particle], i: int, j: int, threshold: float, alpha_max: float) -> Optional[ProximityEdge]:
    a = particles[i]
    b = particles[j]
    dx = a.x - b.x
    dy = a.y - b.y
    d = math.sqrt(dx * dx + dy * dy)
    if d < threshold:
        return ProximityEdge(i, j, d, line_alpha(d, threshold, alpha_max))
    return None


def edges_brute_force(particles: Sequence[Particle], threshold: float, alpha_max: float = 0.1) -> List[ProximityEdge]:
    # O(N^2): fine for a few hundred particles
    out = []
    n = len(particles)
    for i in range(n):
        for j in range(i + 1, n):
            e = _edge(particles, i, j, threshold, alpha_max)
            if e is not None:
                out.append(e)
    return out


def edges_grid(particles: Sequence[Particle], threshold: float, alpha_max: float = 0.1) -> List[ProximityEdge]:
    """
    Uniform grid bucketed at the threshold.

    Any pair closer than the threshold sits in the same or a neighbouring
    cell, so only those 9 cells are compared. Each unordered cell pair is
    visited once by looking at the 4 "forward" neighbours plus the cell
    itself.
    """
    cells: Dict[Tuple[int, int], List[int]] = {}
    for idx, p in enumerate(particles):
        key = (int(math.floor(p.x / threshold)), int(math.floor(p.y / threshold)))
        cells.setdefault(key, []).append(idx)

    forward = ((1, -1), (1, 0), (1, 1), (0, 1))
    out = []
    for (cx, cy), members in cells.items():
        for a_pos, i in enumerate(members):
            for j in members[a_pos + 1:]:
                e = _edge(particles, min(i, j), max(i, j), threshold, alpha_max)
                if e is not None:
                    out.append(e)
        for ox, oy in forward:
            other = cells.get((cx + ox, cy + oy))
            if not other:
                continue
            for i in members:
                for j in other:
                    e = _edge(particles, min(i, j), max(i, j), threshold, alpha_max)
                    if e is not None:
                        out.append(e)

    out.sort(key=lambda e: (e.i, e.j))
    return out


def proximity_edges(
    particles: Sequence[Particle],
    threshold: float,
    alpha_max: float = 0.1,
    use_grid: Optional[bool] = None,
    grid_min_count: int = 300,
) -> List[ProximityEdge]:
    if use_grid is None:
        use_grid = len(particles) >= grid_min_count
    if use_grid:
        return edges_grid(particles, threshold, alpha_max)
    return edges_brute_force(particles, threshold, alpha_max)
