import logging
from typing import List, Optional

import numpy as np

from .config import FieldConfig
from .particles import Particle, advance, draw_particle, spawn_particles
from .proximity import ProximityEdge, proximity_edges

logger = logging.getLogger("particle_field")


def _dims(width: float, height: float):
    # a minimised window reports 0x0; never negative
    return max(0.0, float(width)), max(0.0, float(height))


class ParticleField:
    """
    The particle set of one animation plus the canvas bounds it lives in.

    Particles are created once here; step() and resize() mutate them in
    place and never add or remove any.
    """

    def __init__(self, width: float, height: float, cfg: Optional[FieldConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        self.cfg = cfg or FieldConfig()
        self.cfg.validate()
        self.width, self.height = _dims(width, height)
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.seed)
        self.particles: List[Particle] = spawn_particles(self.cfg, self.width, self.height, self.rng)

    def __len__(self) -> int:
        return len(self.particles)

    def step(self) -> None:
        for p in self.particles:
            advance(p)

    def edges(self) -> List[ProximityEdge]:
        return proximity_edges(
            self.particles,
            self.cfg.proximity_threshold,
            alpha_max=self.cfg.line_alpha_max,
            grid_min_count=self.cfg.grid_index_min_count,
        )

    def render(self, surface) -> int:
        """Clear the surface, draw particles then edges. Returns the edge count."""
        surface.clear()
        for p in self.particles:
            draw_particle(surface, p, self.cfg.color)

        r, g, b = self.cfg.color
        edges = self.edges()
        for e in edges:
            a = self.particles[e.i]
            bp = self.particles[e.j]
            surface.stroke_line(a.x, a.y, bp.x, bp.y, (r, g, b, e.alpha), self.cfg.line_width)
        return len(edges)

    def resize(self, width: float, height: float) -> None:
        # bounds only; positions and speeds are left where they are
        self.width, self.height = _dims(width, height)
        for p in self.particles:
            p.canvas_width = self.width
            p.canvas_height = self.height
        logger.debug("field resized to %sx%s", width, height)
