import json
from pathlib import Path

import numpy as np
import xarray as xr

from .field import ParticleField


# ---------------------------
# Run recorder
# ---------------------------

def record_run(field: ParticleField, steps: int, every_n: int = 1) -> xr.Dataset:
    """
    Step the field `steps` times and keep positions every `every_n` steps.

    Frame 0 is the state before the first step. Returns a Dataset with
    x, y on (frame, particle) and edge_count on frame.
    """
    if steps < 0:
        raise ValueError(f"steps must be >= 0, got {steps}")
    if every_n < 1:
        raise ValueError(f"every_n must be >= 1, got {every_n}")

    n = len(field)
    n_frames = steps // every_n + 1
    xs = np.empty((n_frames, n), dtype=np.float64)
    ys = np.empty((n_frames, n), dtype=np.float64)
    edge_counts = np.empty(n_frames, dtype=np.int64)
    step_index = np.empty(n_frames, dtype=np.int64)

    def keep(slot, k):
        xs[slot] = [p.x for p in field.particles]
        ys[slot] = [p.y for p in field.particles]
        edge_counts[slot] = len(field.edges())
        step_index[slot] = k

    keep(0, 0)
    slot = 1
    for k in range(1, steps + 1):
        field.step()
        if k % every_n == 0:
            keep(slot, k)
            slot += 1

    return xr.Dataset(
        data_vars={
            "x": (("frame", "particle"), xs),
            "y": (("frame", "particle"), ys),
            "edge_count": (("frame",), edge_counts),
        },
        coords={
            "frame": np.arange(n_frames),
            "particle": np.arange(n),
            "step": (("frame",), step_index),
        },
        attrs={
            "width": field.width,
            "height": field.height,
            "proximity_threshold": field.cfg.proximity_threshold,
        },
    )


# ---------------------------
# GeoJSON-style writers
# ---------------------------

def snapshot_to_geojson(field: ParticleField) -> dict:
    """Current particles as Points and proximity edges as LineStrings, in canvas units."""
    feats = []
    for idx, p in enumerate(field.particles):
        feats.append({
            "type": "Feature",
            "properties": {"kind": "particle", "id": idx, "size": p.size, "opacity": p.opacity},
            "geometry": {"type": "Point", "coordinates": [p.x, p.y]}
        })
    for e in field.edges():
        a = field.particles[e.i]
        b = field.particles[e.j]
        feats.append({
            "type": "Feature",
            "properties": {"kind": "edge", "i": e.i, "j": e.j, "distance": e.distance, "alpha": e.alpha},
            "geometry": {"type": "LineString", "coordinates": [[a.x, a.y], [b.x, b.y]]}
        })
    return {
        "type": "FeatureCollection",
        "properties": {"width": field.width, "height": field.height},
        "features": feats,
    }


def write_json(path: Path, payload) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f)
    return path
