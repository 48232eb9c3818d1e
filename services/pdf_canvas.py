"""fpdf2 drawing surface used by the property report composer.

The composer only ever calls the primitives defined here (rectangles, lines,
polygons, wrapped text, fitted images, new pages), all in points with a
top-left origin, so layouts read the same as the geometry in services.layout.
"""

import logging

from PIL import Image
from fpdf import FPDF

from services.layout import (
    MARGIN, TAGLINE_Y, TAGLINE_SIZE,
    Box, Cursor, FitMode, fit_image, logo_box, page_start,
)

logger = logging.getLogger(__name__)

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
PRIMARY_BLUE = (30, 58, 138)
ACCENT_GOLD = (245, 158, 11)
SLATE = (51, 65, 85)
MID_GREY = (102, 102, 102)
CHARCOAL = (31, 41, 55)
INK = (17, 24, 39)
RULE_GREY = (224, 224, 224)
SEPARATOR_GREY = (203, 213, 225)
PLACEHOLDER_GREY = (204, 204, 204)

FONT_FAMILY = "Helvetica"
LINE_HEIGHT_FACTOR = 1.15
TAGLINE = "Elevating Your Property Experience"
TEXT_ENCODING = "windows-1252"


def _printable(text) -> str:
    """Core PDF fonts only carry cp1252; anything else prints as '?'."""
    return str(text).encode(TEXT_ENCODING, "replace").decode(TEXT_ENCODING)


class PropertyReportPDF(FPDF):
    """A4 report in points with the logo + tagline header on every page."""

    def __init__(self, logo_path: str | None = None):
        super().__init__(orientation="P", unit="pt", format="A4")
        self.logo_path = logo_path
        self.core_fonts_encoding = TEXT_ENCODING
        self.set_margins(MARGIN, MARGIN, MARGIN)
        self.set_auto_page_break(False)
        self.c_margin = 0
        self._images: dict[str, Image.Image | None] = {}

    def header(self):
        logo = self.load_image(self.logo_path)
        if logo is not None:
            box = logo_box(self.image_aspect(self.logo_path))
            self.image(logo, x=box.x, y=box.y, w=box.w, h=box.h)
        self.draw_text(TAGLINE, MARGIN, TAGLINE_Y, size=TAGLINE_SIZE, color=SLATE)

    # -- pages -------------------------------------------------------------

    def start_page(self) -> Cursor:
        self.add_page()
        return page_start(self.page_no())

    def finalize(self) -> bytes:
        return bytes(self.output())

    # -- shapes ------------------------------------------------------------

    def draw_rect(self, box: Box, fill=None, stroke=None, line_width: float | None = None):
        if fill is not None:
            self.set_fill_color(*fill)
        if stroke is not None:
            self.set_draw_color(*stroke)
        if line_width is not None:
            self.set_line_width(line_width)
        style = ("D" if stroke is not None else "") + ("F" if fill is not None else "")
        self.rect(box.x, box.y, box.w, box.h, style=style or "D")

    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color=RULE_GREY, line_width: float = 0.5):
        self.set_draw_color(*color)
        self.set_line_width(line_width)
        self.line(x1, y1, x2, y2)

    def draw_polygon(self, points, fill=None, stroke=None, line_width: float | None = None):
        if fill is not None:
            self.set_fill_color(*fill)
        if stroke is not None:
            self.set_draw_color(*stroke)
        if line_width is not None:
            self.set_line_width(line_width)
        style = ("D" if stroke is not None else "") + ("F" if fill is not None else "")
        self.polygon(list(points), style=style or "D")

    # -- text --------------------------------------------------------------

    def _use_font(self, size: float, style: str, color):
        self.set_font(FONT_FAMILY, style, size)
        self.set_text_color(*color)

    def draw_text(self, text, x: float, y: float, *, size: float = 11, style: str = "",
                  color=BLACK, width: float | None = None, align: str = "L") -> float:
        """Write wrapped text with its top edge at y; returns the height used."""
        self._use_font(size, style, color)
        if width is None:
            width = self.w - self.r_margin - x
        self.set_xy(x, y)
        return self.multi_cell(
            max(width, 1), size * LINE_HEIGHT_FACTOR, _printable(text), align=align, output="HEIGHT"
        )

    def text_height(self, text, width: float, *, size: float = 11, style: str = "") -> float:
        self.set_font(FONT_FAMILY, style, size)
        return self.multi_cell(
            max(width, 1), size * LINE_HEIGHT_FACTOR, _printable(text), dry_run=True, output="HEIGHT"
        )

    # -- images ------------------------------------------------------------

    def load_image(self, path: str | None) -> Image.Image | None:
        """Decoded image for a path, or None when it is missing or unreadable."""
        if not path:
            return None
        if path in self._images:
            return self._images[path]
        loaded = None
        try:
            with Image.open(path) as img:
                img.load()
                has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
                loaded = img.convert("RGBA" if has_alpha else "RGB")
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"Image not usable, drawing placeholder instead: {path} ({e})")
        self._images[path] = loaded
        return loaded

    def image_aspect(self, path: str | None) -> float | None:
        """Height / width of an image, if it can be read."""
        img = self.load_image(path)
        if img is None or img.width == 0:
            return None
        return img.height / img.width

    def draw_placeholder(self, box: Box):
        self.draw_rect(box, fill=PLACEHOLDER_GREY)

    def draw_image(self, path: str | None, box: Box, fit: FitMode = FitMode.CONTAIN) -> bool:
        """Fit an image into box, clipped to it. Returns False if a placeholder was drawn."""
        img = self.load_image(path)
        if img is None:
            self.draw_placeholder(box)
            return False
        placed = fit_image(box, img.width, img.height, fit)
        with self.rect_clip(box.x, box.y, box.w, box.h):
            self.image(img, x=placed.x, y=placed.y, w=placed.w, h=placed.h)
        return True
