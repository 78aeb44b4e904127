from types import SimpleNamespace

import pytest

from particle_field.animation import ParticleFieldAnimation
from particle_field.config import FieldConfig
from particle_field.hosts import TkHost
from particle_field.surface import SurfaceUnavailable, TkSurface


class FakeRoot:
    """Just enough of a tk root for TkHost: after, bind, winfo, geometry."""

    def __init__(self, width=1, height=1, geometry="800x600+0+0"):
        self.width = width
        self.height = height
        self._geometry = geometry
        self.updates = 0
        self.after_calls = []
        self.cancelled = []
        self.bindings = {}

    def update(self):
        self.updates += 1

    def winfo_width(self):
        return self.width

    def winfo_height(self):
        return self.height

    def geometry(self):
        return self._geometry

    def after(self, ms, callback):
        handle = f"after#{len(self.after_calls)}"
        self.after_calls.append((ms, callback))
        return handle

    def after_cancel(self, handle):
        self.cancelled.append(handle)

    def bind(self, sequence, func, add=None):
        token = f"bind#{len(self.bindings)}"
        self.bindings[token] = (sequence, func, add)
        return token

    def unbind(self, sequence, token):
        del self.bindings[token]

    def configure_event(self, widget, width, height):
        for sequence, func, _ in list(self.bindings.values()):
            if sequence == "<Configure>":
                func(SimpleNamespace(widget=widget, width=width, height=height))


class FakeCanvas:
    def __init__(self, root, **options):
        self.root = root
        self.options = dict(options)
        self.items = []
        self.placed = None
        self.destroyed = False

    def place(self, **kwargs):
        self.placed = kwargs

    def cget(self, key):
        return str(self.options[key])

    def config(self, **kwargs):
        self.options.update(kwargs)

    def delete(self, tag):
        self.items = []

    def create_oval(self, *coords, **kwargs):
        self.items.append(("oval", coords, kwargs))

    def create_line(self, *coords, **kwargs):
        self.items.append(("line", coords, kwargs))

    def destroy(self):
        self.destroyed = True


def test_viewport_size_uses_geometry_before_window_is_mapped() -> None:
    root = FakeRoot(width=1, height=1, geometry="800x600+40+30")
    host = TkHost(root)
    assert host.viewport_size() == (800, 600)
    assert root.updates == 1


def test_viewport_size_uses_window_size_once_mapped() -> None:
    root = FakeRoot(width=1280, height=720)
    assert TkHost(root).viewport_size() == (1280, 720)


def test_frames_go_through_after_and_after_cancel() -> None:
    root = FakeRoot()
    host = TkHost(root, frame_interval_ms=20)
    calls = []

    handle = host.request_frame(lambda: calls.append(1))
    ms, callback = root.after_calls[0]
    assert ms == 20
    callback()
    assert calls == [1]

    host.cancel_frame(handle)
    assert root.cancelled == [handle]


def test_configure_ignores_children_and_unchanged_size() -> None:
    root = FakeRoot()
    host = TkHost(root)
    host.viewport_size()
    seen = []
    token = host.bind_resize(lambda w, h: seen.append((w, h)))
    assert root.bindings[token][2] == "+"

    root.configure_event(object(), 300, 200)   # a child widget
    root.configure_event(root, 800, 600)       # same size as before
    root.configure_event(root, 1024, 768)
    root.configure_event(root, 1024, 768)

    assert seen == [(1024, 768)]

    host.unbind_resize(token)
    root.configure_event(root, 640, 480)
    assert seen == [(1024, 768)]
    assert root.bindings == {}


def test_acquire_surface_places_full_window_canvas() -> None:
    pytest.importorskip("tkinter")
    root = FakeRoot()
    host = TkHost(root, canvas_factory=FakeCanvas)

    surface = host.acquire_surface()

    assert isinstance(surface, TkSurface)
    assert (surface.width, surface.height) == (800, 600)
    assert surface.canvas.placed == {"x": 0, "y": 0, "relwidth": 1, "relheight": 1}
    assert surface.canvas.options["bg"] == "#ffffff"


def test_canvas_error_becomes_surface_unavailable() -> None:
    tk = pytest.importorskip("tkinter")

    def broken(root, **options):
        raise tk.TclError("no display")

    host = TkHost(FakeRoot(), canvas_factory=broken)
    with pytest.raises(SurfaceUnavailable):
        host.acquire_surface()


def test_release_surface_destroys_canvas() -> None:
    canvas = FakeCanvas(None, width=10, height=10)
    TkHost(FakeRoot()).release_surface(TkSurface(canvas))
    assert canvas.destroyed


def test_tk_surface_blends_alpha_over_background() -> None:
    canvas = FakeCanvas(None, width=10, height=10)
    surface = TkSurface(canvas, background=(255, 255, 255))

    surface.fill_circle(5.0, 5.0, 2.0, (0, 0, 0, 0.5))
    surface.stroke_line(0.0, 0.0, 3.0, 4.0, (0, 0, 0, 0.0), 1.0)

    kind, coords, opts = canvas.items[0]
    assert kind == "oval"
    assert coords == (3.0, 3.0, 7.0, 7.0)
    assert opts["fill"] == "#808080"
    assert opts["outline"] == ""
    assert canvas.items[1][2]["fill"] == "#ffffff"

    surface.set_size(40, 30)
    assert (canvas.options["width"], canvas.options["height"]) == (40, 30)
    surface.clear()
    assert canvas.items == []


def test_animation_lifecycle_on_tk_host() -> None:
    pytest.importorskip("tkinter")
    root = FakeRoot()
    host = TkHost(root, canvas_factory=FakeCanvas)
    anim = ParticleFieldAnimation(host, FieldConfig(count=12, seed=3))

    assert anim.start() is True
    canvas = anim.surface.canvas
    assert sum(1 for item in canvas.items if item[0] == "oval") == 12
    assert len(root.after_calls) == 1

    root.configure_event(root, 400, 300)
    assert (canvas.options["width"], canvas.options["height"]) == (400, 300)
    assert (anim.field.width, anim.field.height) == (400.0, 300.0)

    root.after_calls[0][1]()
    assert anim.frames == 2
    assert len(root.after_calls) == 2

    anim.teardown()
    assert root.cancelled == ["after#1"]
    assert root.bindings == {}
    assert canvas.destroyed
