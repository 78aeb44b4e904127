# run_field.py

import logging
import os
from pathlib import Path

import numpy as np

from .animation import ParticleFieldAnimation
from .config import FieldConfig
from .field import ParticleField
from .footprint import occupancy_hist
from .hosts import TickHost, TkHost
from .record import record_run, snapshot_to_geojson, write_json
from .surface import RecordingSurface

# ================= CONFIG =================
OUTPUT_FOLDER = "field_output"

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_COUNT = 80
FOOTPRINT_BINS = (40, 30)
RECORD_EVERY = 10
# ========================================


def run_window(width: int, height: int, cfg: FieldConfig) -> None:
    """Open a window and animate until it is closed."""
    import tkinter as tk

    root = tk.Tk()
    root.title("particle field")
    root.geometry(f"{width}x{height}")

    host = TkHost(root, frame_interval_ms=cfg.frame_interval_ms, background=cfg.background)
    anim = ParticleFieldAnimation(host, cfg)

    def on_close():
        anim.teardown()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    if not anim.start():
        print("No drawing surface; running without background.")
    root.mainloop()


def run_headless(width: int, height: int, steps: int, cfg: FieldConfig, output_folder: str = OUTPUT_FOLDER):
    """
    Drive the animation for `steps` frames on a TickHost, then record a
    separate run of the same length and write snapshot + footprint files.
    """
    if steps < 1:
        raise ValueError(f"STEPS must be >= 1, got {steps}")

    surface = RecordingSurface(width, height)
    host = TickHost(width, height, surface_factory=lambda: surface)
    anim = ParticleFieldAnimation(host, cfg, rng=np.random.default_rng(cfg.seed))

    print("Animating...")
    anim.start()
    # start() already drew frame 1
    host.run(max_frames=steps - 1)
    field = anim.field
    print(f"frames: {anim.frames}  circles: {surface.circles}  lines: {surface.lines}")

    print("Writing snapshot...")
    out_dir = Path(output_folder)
    snap_path = write_json(out_dir / "snapshot.geojson", snapshot_to_geojson(field))
    anim.teardown()

    print("Recording footprint run...")
    rec_field = ParticleField(width, height, cfg, rng=np.random.default_rng(cfg.seed))
    ds = record_run(rec_field, steps, every_n=RECORD_EVERY)
    P, xedges, yedges = occupancy_hist(ds, *FOOTPRINT_BINS)

    foot_path = write_json(out_dir / "footprint.json", {
        "width": width,
        "height": height,
        "xedges": xedges.tolist(),
        "yedges": yedges.tolist(),
        "occupancy": P.tolist(),
        "mean_edges": float(ds["edge_count"].mean()),
    })

    print("Saved outputs:")
    print(snap_path)
    print(foot_path)
    return snap_path, foot_path


def main():
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING"))

    width = int(os.environ.get("WIDTH", DEFAULT_WIDTH))
    height = int(os.environ.get("HEIGHT", DEFAULT_HEIGHT))
    seed = os.environ.get("SEED")
    cfg = FieldConfig(
        count=int(os.environ.get("COUNT", DEFAULT_COUNT)),
        seed=int(seed) if seed is not None else None,
    )

    steps = os.environ.get("STEPS")
    if steps is None:
        run_window(width, height, cfg)
    else:
        run_headless(width, height, int(steps), cfg, os.environ.get("OUTPUT_FOLDER", OUTPUT_FOLDER))


if __name__ == "__main__":
    main()
