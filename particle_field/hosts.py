import threading
import time
from typing import Callable, Dict, Optional, Tuple

from .surface import RecordingSurface, Surface, SurfaceUnavailable, blend_hex

ResizeCallback = Callable[[int, int], None]


# ---------------------------
# Headless host
# ---------------------------

class TickHost:
    """
    Fixed-tick frame loop for running an animation without a window.

    Frame callbacks queue up through request_frame() and run() invokes them
    one per tick until stop() is called (from any thread), nothing is
    pending, or max_frames is reached. tick_seconds=0 runs as fast as
    possible. A stop() ends the current (or next) run() only; later runs
    go ahead.
    """

    def __init__(self, width: int, height: int, tick_seconds: float = 0.0,
                 surface_factory: Optional[Callable[[], Optional[Surface]]] = None,
                 sleep=time.sleep, clock=time.monotonic):
        self.width = width
        self.height = height
        self.tick_seconds = tick_seconds
        self._surface_factory = surface_factory or (lambda: RecordingSurface(self.width, self.height))
        self._sleep = sleep
        self._clock = clock
        self._stop = threading.Event()

        self._pending: Dict[int, Callable[[], None]] = {}
        self._resize_cbs: Dict[int, ResizeCallback] = {}
        self._next_id = 1
        self.frames_requested = 0
        self.frames_run = 0
        self.surfaces_released = 0

    def _new_id(self) -> int:
        i = self._next_id
        self._next_id += 1
        return i

    # host interface

    def viewport_size(self) -> Tuple[int, int]:
        return self.width, self.height

    def acquire_surface(self) -> Optional[Surface]:
        return self._surface_factory()

    def request_frame(self, callback: Callable[[], None]) -> int:
        self.frames_requested += 1
        handle = self._new_id()
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def release_surface(self, surface) -> None:
        self.surfaces_released += 1

    def bind_resize(self, callback: ResizeCallback) -> int:
        token = self._new_id()
        self._resize_cbs[token] = callback
        return token

    def unbind_resize(self, token: int) -> None:
        self._resize_cbs.pop(token, None)

    # driving

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def resize_listeners(self) -> int:
        return len(self._resize_cbs)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        for cb in list(self._resize_cbs.values()):
            cb(width, height)

    def stop(self) -> None:
        self._stop.set()

    def run(self, max_frames: Optional[int] = None) -> int:
        frames = 0
        next_tick = self._clock()
        while not self._stop.is_set() and self._pending:
            if max_frames is not None and frames >= max_frames:
                break
            if self.tick_seconds > 0:
                delay = next_tick - self._clock()
                if delay > 0:
                    self._sleep(delay)
                next_tick += self.tick_seconds

            handle = next(iter(self._pending))
            callback = self._pending.pop(handle)
            callback()
            frames += 1
        self._stop.clear()
        self.frames_run += frames
        return frames


# ---------------------------
# Tk host
# ---------------------------

class TkHost:
    """
    Runs the animation on a full-window canvas inside a tkinter root.

    canvas_factory defaults to tk.Canvas; it takes the root plus canvas
    options and must return a widget with place() and destroy().
    """

    def __init__(self, root, frame_interval_ms: int = 16,
                 background: Tuple[int, int, int] = (255, 255, 255),
                 canvas_factory=None):
        self.root = root
        self.frame_interval_ms = frame_interval_ms
        self.background = background
        self.canvas_factory = canvas_factory
        self._last_size: Optional[Tuple[int, int]] = None

    def viewport_size(self) -> Tuple[int, int]:
        self.root.update()
        w = self.root.winfo_width()
        h = self.root.winfo_height()
        # not mapped yet: winfo_* says 1x1, the wm geometry has what was asked for
        if w <= 1 or h <= 1:
            w, h = _geometry_size(self.root.geometry())
        self._last_size = (w, h)
        return w, h

    def acquire_surface(self) -> Surface:
        import tkinter as tk
        from .surface import TkSurface

        factory = self.canvas_factory or tk.Canvas
        w, h = self._last_size or self.viewport_size()
        try:
            canvas = factory(
                self.root, width=w, height=h, highlightthickness=0,
                bg=blend_hex(self.background + (1.0,), self.background),
            )
            canvas.place(x=0, y=0, relwidth=1, relheight=1)
        except tk.TclError as exc:
            raise SurfaceUnavailable(f"could not create canvas: {exc}") from exc
        return TkSurface(canvas, self.background)

    def release_surface(self, surface) -> None:
        surface.canvas.destroy()

    def request_frame(self, callback: Callable[[], None]):
        return self.root.after(self.frame_interval_ms, callback)

    def cancel_frame(self, handle) -> None:
        self.root.after_cancel(handle)

    def bind_resize(self, callback: ResizeCallback):
        def on_configure(event):
            # <Configure> on the root also fires for every child widget
            if event.widget is not self.root:
                return
            size = (event.width, event.height)
            if size == self._last_size:
                return
            self._last_size = size
            callback(event.width, event.height)

        return self.root.bind("<Configure>", on_configure, add="+")

    def unbind_resize(self, token) -> None:
        self.root.unbind("<Configure>", token)


def _geometry_size(geometry: str) -> Tuple[int, int]:
    """'800x600+10+20' -> (800, 600)"""
    size = geometry.split("+")[0].split("-")[0]
    w, h = size.split("x")
    return int(w), int(h)
