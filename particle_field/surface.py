from typing import List, Tuple

Rgba = Tuple[int, int, int, float]


class SurfaceUnavailable(RuntimeError):
    pass


def blend_hex(rgba: Rgba, background: Tuple[int, int, int]) -> str:
    """
    Composite an rgba colour over an opaque background and return '#rrggbb'.

    Tk canvases have no alpha channel, so translucency is baked into the
    colour against the known background.
    """
    r, g, b, a = rgba
    a = max(0.0, min(1.0, float(a)))
    br, bg, bb = background
    out = [
        int(round(c * a + base * (1.0 - a)))
        for c, base in ((r, br), (g, bg), (b, bb))
    ]
    return "#{:02x}{:02x}{:02x}".format(*out)


class Surface:
    """Minimal 2D drawing interface the animation renders through."""

    width: int = 0
    height: int = 0

    def set_size(self, width: int, height: int) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def fill_circle(self, x: float, y: float, radius: float, rgba: Rgba) -> None:
        raise NotImplementedError

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, rgba: Rgba, width: float = 1.0) -> None:
        raise NotImplementedError


class RecordingSurface(Surface):
    """
    In-memory surface: keeps the draw calls of the current frame and running
    totals. Used for headless runs.
    """

    def __init__(self, width: int = 0, height: int = 0):
        self.width = width
        self.height = height
        self.ops: List[tuple] = []
        self.clears = 0
        self.circles = 0
        self.lines = 0

    @property
    def draw_calls(self) -> int:
        return self.circles + self.lines

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def clear(self) -> None:
        self.clears += 1
        self.ops = []

    def fill_circle(self, x, y, radius, rgba) -> None:
        self.circles += 1
        self.ops.append(("circle", x, y, radius, rgba))

    def stroke_line(self, x0, y0, x1, y1, rgba, width=1.0) -> None:
        self.lines += 1
        self.ops.append(("line", x0, y0, x1, y1, rgba, width))


class TkSurface(Surface):
    def __init__(self, canvas, background: Tuple[int, int, int] = (255, 255, 255)):
        self.canvas = canvas
        self.background = background
        self.width = int(canvas.cget("width"))
        self.height = int(canvas.cget("height"))

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.canvas.config(width=width, height=height)

    def clear(self) -> None:
        self.canvas.delete("all")

    def fill_circle(self, x, y, radius, rgba) -> None:
        color = blend_hex(rgba, self.background)
        self.canvas.create_oval(
            x - radius, y - radius, x + radius, y + radius,
            fill=color, outline="", tags="particle"
        )

    def stroke_line(self, x0, y0, x1, y1, rgba, width=1.0) -> None:
        self.canvas.create_line(
            x0, y0, x1, y1,
            fill=blend_hex(rgba, self.background), width=width, tags="edge"
        )
