from dataclasses import dataclass
import math
from typing import List

import numpy as np

from .config import FieldConfig

def wrap_coord(value: float, dim: float) -> float:
    """
    Snap a coordinate back inside [0, dim).

    Past the far edge the particle reappears at 0; below 0 it reappears at
    the far edge. The far edge itself is excluded, so "the far edge" means
    the largest float below dim. A zero-sized canvas pins everything at 0.
    """
    if dim <= 0:
        return 0.0
    if value >= dim:
        return 0.0
    if value < 0:
        return math.nextafter(dim, 0.0)
    return value

@dataclass
class Particle:
    x: float
    y: float
    size: float
    speed_x: float
    speed_y: float
    opacity: float
    canvas_width: float
    canvas_height: float

def spawn_particles(cfg: FieldConfig, width: float, height: float, rng: np.random.Generator) -> List[Particle]:
    n = cfg.count
    xs = rng.uniform(0.0, width, n)
    ys = rng.uniform(0.0, height, n)
    sizes = rng.uniform(cfg.size_range[0], cfg.size_range[1], n)
    sx = rng.uniform(-cfg.speed_range, cfg.speed_range, n)
    sy = rng.uniform(-cfg.speed_range, cfg.speed_range, n)
    alphas = rng.uniform(cfg.opacity_range[0], cfg.opacity_range[1], n)

    out = []
    for k in range(n):
        out.append(Particle(
            x=wrap_coord(float(xs[k]), width),
            y=wrap_coord(float(ys[k]), height),
            size=float(sizes[k]),
            speed_x=float(sx[k]),
            speed_y=float(sy[k]),
            opacity=float(alphas[k]),
            canvas_width=float(width),
            canvas_height=float(height),
        ))
    return out

def advance(p: Particle) -> None:
    p.x = wrap_coord(p.x + p.speed_x, p.canvas_width)
    p.y = wrap_coord(p.y + p.speed_y, p.canvas_height)

def draw_particle(surface, p: Particle, color) -> None:
    r, g, b = color
    surface.fill_circle(p.x, p.y, p.size, (r, g, b, p.opacity))
