"""Image and canvas fixtures shared by the test suite."""
import os

import pytest
from PIL import Image

from services.layout import page_start


class RecordingCanvas:
    """Drawing surface that records primitives instead of producing a PDF."""

    LINE_HEIGHT = 1.15

    def __init__(self):
        self.page = 0
        self.ops: list[tuple] = []

    def start_page(self):
        self.page += 1
        self.ops.append((self.page, "page"))
        return page_start(self.page)

    def finalize(self) -> bytes:
        return b"%PDF-recorded"

    def draw_rect(self, box, fill=None, stroke=None, line_width=None):
        self.ops.append((self.page, "rect", box, fill))

    def draw_line(self, x1, y1, x2, y2, color=None, line_width=0.5):
        self.ops.append((self.page, "line", (x1, y1, x2, y2)))

    def draw_polygon(self, points, fill=None, stroke=None, line_width=None):
        self.ops.append((self.page, "polygon", tuple(points), fill))

    def draw_text(self, text, x, y, *, size=11, style="", color=None, width=None, align="L"):
        self.ops.append((self.page, "text", str(text), x, y))
        return size * self.LINE_HEIGHT

    def text_height(self, text, width, *, size=11, style=""):
        return size * self.LINE_HEIGHT

    def draw_image(self, path, box, fit="contain"):
        found = bool(path) and os.path.exists(path)
        self.ops.append((self.page, "image", path, box, fit))
        return found

    # helpers for assertions

    def texts(self, page=None) -> list[str]:
        return [op[2] for op in self.ops if op[1] == "text" and (page is None or op[0] == page)]

    def images(self, page=None) -> list[tuple]:
        return [op[2:] for op in self.ops if op[1] == "image" and (page is None or op[0] == page)]

    def page_of(self, text: str) -> int:
        return next(op[0] for op in self.ops if op[1] == "text" and op[2] == text)

    def pages_with(self, text: str) -> list[int]:
        return [op[0] for op in self.ops if op[1] == "text" and op[2] == text]


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a solid-colour image file and returning its path."""

    def _make(name="photo.jpg", size=(400, 300), color=(120, 140, 160), mode="RGB"):
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return str(path)

    return _make
