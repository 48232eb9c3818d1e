"""Page geometry for the property report.

Everything here is pure arithmetic over a fixed A4 page measured in PDF points
(72 per inch, origin top-left, y growing downwards). Layout functions take an
explicit Cursor for the current vertical position and hand back boxes plus the
cursor where the next block starts; nothing here touches a PDF document.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple

from models.epc import EPC_BANDS, EpcBand, band_index, grade_for

INCH = 72
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 0.75 * INCH
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
CONTENT_BOTTOM = PAGE_HEIGHT - MARGIN

# Header: logo, tagline, then the content area.
HEADER_TOP_OFFSET = 0.45 * INCH
LOGO_WIDTH = 1.4 * INCH
LOGO_HEIGHT_RATIO = 0.4  # used when the logo's aspect ratio isn't known up front
LOGO_HEIGHT_ESTIMATE = LOGO_WIDTH * LOGO_HEIGHT_RATIO
TAGLINE_GAP = 12
TAGLINE_SIZE = 9
SECTION_SPACING = 20
TAGLINE_Y = HEADER_TOP_OFFSET + LOGO_HEIGHT_ESTIMATE + TAGLINE_GAP
CONTENT_TOP = TAGLINE_Y + TAGLINE_SIZE + SECTION_SPACING

PAGE_TITLE_SIZE = 24
PAGE_TITLE_ADVANCE = 30
SECTION_TITLE_SIZE = 14


class FitMode(str, Enum):
    CONTAIN = "contain"  # whole image visible, letterboxed
    COVER = "cover"      # box filled, overflow cropped
    STRETCH = "stretch"  # exact box, aspect ratio ignored


class Box(NamedTuple):
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    @property
    def center_y(self) -> float:
        return self.y + self.h / 2


@dataclass(frozen=True)
class Cursor:
    """Vertical write position on a given page."""
    y: float
    page: int = 1

    def down(self, dy: float) -> "Cursor":
        return replace(self, y=self.y + dy)

    def at(self, y: float) -> "Cursor":
        return replace(self, y=y)

    def next_page(self) -> "Cursor":
        return Cursor(CONTENT_TOP, self.page + 1)


def page_start(page: int) -> Cursor:
    return Cursor(CONTENT_TOP, page)


def fit_image(box: Box, image_w: float, image_h: float, mode: FitMode = FitMode.CONTAIN) -> Box:
    """Where an image of the given pixel size lands for a target box.

    For COVER the result overflows the box on one axis; callers clip to `box`.
    """
    mode = FitMode(mode)
    if mode is FitMode.STRETCH or image_w <= 0 or image_h <= 0:
        return box
    scale_w = box.w / image_w
    scale_h = box.h / image_h
    scale = max(scale_w, scale_h) if mode is FitMode.COVER else min(scale_w, scale_h)
    w = image_w * scale
    h = image_h * scale
    return Box(box.x + (box.w - w) / 2, box.y + (box.h - h) / 2, w, h)


def logo_box(aspect_ratio: float | None = None) -> Box:
    """Logo frame; aspect_ratio is height / width when the image has been measured."""
    ratio = aspect_ratio if aspect_ratio and aspect_ratio > 0 else LOGO_HEIGHT_RATIO
    return Box(MARGIN, HEADER_TOP_OFFSET, LOGO_WIDTH, LOGO_WIDTH * ratio)


def distribute(x: float, total_w: float, count: int, gap: float) -> list[tuple[float, float]]:
    """(x, width) of `count` equal slots across `total_w` separated by `gap`."""
    slot_w = (total_w - gap * (count - 1)) / count
    return [(x + i * (slot_w + gap), slot_w) for i in range(count)]


# ---------------------------------------------------------------- cover page

COVER_TITLE_SIZE = 24
COVER_TITLE_GAP = 0.1 * INCH
HERO_HEIGHT = 4.5 * INCH
THUMBNAIL_COUNT = 3
THUMBNAIL_HEIGHT = 1.5 * INCH
THUMBNAIL_GAP = 0.2 * INCH
COVER_FOOTER_HEIGHT = 0.4 * INCH
COVER_FOOTER_TEXT_SIZE = 11


@dataclass(frozen=True)
class CoverLayout:
    title: Box
    hero: Box
    thumbnails: tuple[Box, ...]
    footer: Box
    caption_y: float
    end: Cursor


def cover_layout(cursor: Cursor, title_height: float) -> CoverLayout:
    title = Box(MARGIN, cursor.y, CONTENT_WIDTH, title_height)
    hero = Box(MARGIN, title.bottom + COVER_TITLE_GAP, CONTENT_WIDTH, HERO_HEIGHT)
    thumb_y = hero.bottom + THUMBNAIL_GAP
    thumbnails = tuple(
        Box(x, thumb_y, w, THUMBNAIL_HEIGHT)
        for x, w in distribute(MARGIN, CONTENT_WIDTH, THUMBNAIL_COUNT, THUMBNAIL_GAP)
    )
    footer = Box(MARGIN, CONTENT_BOTTOM - COVER_FOOTER_HEIGHT, CONTENT_WIDTH, COVER_FOOTER_HEIGHT)
    caption_y = footer.center_y - 6
    end = cursor.at(thumb_y + THUMBNAIL_HEIGHT + THUMBNAIL_GAP)
    return CoverLayout(title, hero, thumbnails, footer, caption_y, end)


# ------------------------------------------------------ investment section

INVESTMENT_TITLE_ADVANCE = 32
INVESTMENT_SUBTITLE_ADVANCE = 22
METRIC_BOX_COUNT = 3
METRIC_BOX_GAP = 0.15 * INCH
METRIC_BOX_HEIGHT = 1.3 * INCH
METRIC_BOX_PADDING = 12
METRIC_LABEL_OFFSET = 15
METRIC_VALUE_OFFSET = 40
METRICS_ADVANCE = 25

COLUMN_GAP = 0.2 * INCH
COLUMN_LABEL_SHARE = 2.2 / 3.5  # label : value = 2.2in : 1.3in
COLUMN_HEADING_ADVANCE = 20
RIGHT_COLUMN_INDENT = 15
CELL_PADDING = 5
ROW_HEIGHT = 18
ROW_RULE_OFFSET = 12

PROFIT_LABEL_WIDTH = 2 * INCH
PROFIT_VALUE_WIDTH = 2 * INCH
PROFIT_BAR_WIDTH = PROFIT_LABEL_WIDTH + PROFIT_VALUE_WIDTH
PROFIT_BAR_HEIGHT = 0.9 * INCH
PROFIT_BAR_GAP = 10
PROFIT_TOP_GAP = 0.5 * INCH
PROFIT_LABEL_PADDING = 18


@dataclass(frozen=True)
class BreakdownColumn:
    """One label/value table. Labels are left aligned, values right aligned."""
    heading_x: float
    label_x: float
    label_w: float
    value_x: float
    value_w: float
    rule_x0: float
    rule_x1: float


@dataclass(frozen=True)
class BreakdownRow:
    y: float
    rule_y: float | None  # no separator under the total row


@dataclass(frozen=True)
class ProfitBar:
    box: Box
    label: Box
    value: Box


@dataclass(frozen=True)
class InvestmentLayout:
    title_y: float
    subtitle_y: float
    metric_boxes: tuple[Box, ...]
    heading_y: float
    left: BreakdownColumn
    right: BreakdownColumn
    left_rows: tuple[BreakdownRow, ...]
    right_rows: tuple[BreakdownRow, ...]
    profit_bars: tuple[ProfitBar, ...]
    end: Cursor


def breakdown_columns() -> tuple[BreakdownColumn, BreakdownColumn]:
    col_w = (CONTENT_WIDTH - COLUMN_GAP) / 2
    label_w = col_w * COLUMN_LABEL_SHARE
    value_w = col_w - label_w

    left_x = MARGIN
    left = BreakdownColumn(
        heading_x=left_x,
        label_x=left_x + CELL_PADDING,
        label_w=label_w - 2 * CELL_PADDING,
        value_x=left_x + label_w,
        value_w=value_w - CELL_PADDING,
        rule_x0=left_x,
        rule_x1=left_x + col_w,
    )
    right_x = left_x + col_w + COLUMN_GAP
    right = BreakdownColumn(
        heading_x=right_x + RIGHT_COLUMN_INDENT,
        label_x=right_x + RIGHT_COLUMN_INDENT,
        label_w=label_w - RIGHT_COLUMN_INDENT - CELL_PADDING,
        value_x=right_x + label_w,
        value_w=value_w - CELL_PADDING,
        rule_x0=right_x + RIGHT_COLUMN_INDENT,
        rule_x1=right_x + col_w,
    )
    return left, right


def breakdown_rows(start_y: float, count: int) -> tuple[BreakdownRow, ...]:
    rows = []
    for i in range(count):
        y = start_y + i * ROW_HEIGHT
        rows.append(BreakdownRow(y, y + ROW_RULE_OFFSET if i < count - 1 else None))
    return tuple(rows)


def profit_bars(top: float, count: int = 3) -> tuple[ProfitBar, ...]:
    x = (PAGE_WIDTH - PROFIT_BAR_WIDTH) / 2
    bars = []
    for i in range(count):
        y = top + i * (PROFIT_BAR_HEIGHT + PROFIT_BAR_GAP)
        box = Box(x, y, PROFIT_BAR_WIDTH, PROFIT_BAR_HEIGHT)
        label = Box(
            x + PROFIT_LABEL_PADDING, y, PROFIT_LABEL_WIDTH - 2 * PROFIT_LABEL_PADDING, PROFIT_BAR_HEIGHT
        )
        value = Box(
            x + PROFIT_LABEL_WIDTH + METRIC_BOX_PADDING, y,
            PROFIT_VALUE_WIDTH - 2 * METRIC_BOX_PADDING, PROFIT_BAR_HEIGHT,
        )
        bars.append(ProfitBar(box, label, value))
    return tuple(bars)


def investment_layout(cursor: Cursor, left_count: int, right_count: int,
                      bar_count: int = 3) -> InvestmentLayout:
    """Title, metric boxes, two breakdown tables and the profit bars of one section."""
    title_y = cursor.y
    subtitle_y = title_y + INVESTMENT_TITLE_ADVANCE
    metrics_y = subtitle_y + INVESTMENT_SUBTITLE_ADVANCE
    metric_boxes = tuple(
        Box(x, metrics_y, w, METRIC_BOX_HEIGHT)
        for x, w in distribute(MARGIN, CONTENT_WIDTH, METRIC_BOX_COUNT, METRIC_BOX_GAP)
    )

    heading_y = metrics_y + METRIC_BOX_HEIGHT + METRICS_ADVANCE
    rows_y = heading_y + COLUMN_HEADING_ADVANCE
    left, right = breakdown_columns()
    left_rows = breakdown_rows(rows_y, left_count)
    right_rows = breakdown_rows(rows_y, right_count)

    tables_end = rows_y + max(left_count, right_count) * ROW_HEIGHT
    bars = profit_bars(tables_end + PROFIT_TOP_GAP, bar_count)
    end_y = bars[-1].box.bottom + PROFIT_BAR_GAP if bars else tables_end
    return InvestmentLayout(
        title_y, subtitle_y, metric_boxes, heading_y, left, right,
        left_rows, right_rows, bars, cursor.at(end_y),
    )


# ------------------------------------------------------ key information page

KEY_IMAGE_WIDTH = 6.5 * INCH
KEY_IMAGE_HEIGHT = 3.5 * INCH
IMAGE_BOTTOM_GAP = 20
METRIC_STRIP_COLUMNS = 4
METRIC_STRIP_LABEL_OFFSET = 8
METRIC_STRIP_VALUE_OFFSET = 28
METRIC_STRIP_ADVANCE = 60
FEATURES_HEADING_ADVANCE = 20
FEATURE_INDENT = 20
FEATURE_GAP = 5


@dataclass(frozen=True)
class KeyInformationLayout:
    title_y: float
    image: Box
    metric_cells: tuple[Box, ...]
    label_y: float
    value_y: float
    features_heading_y: float
    features_top: float
    feature_x: float
    feature_w: float


def metric_strip(y: float, columns: int) -> tuple[Box, ...]:
    col_w = CONTENT_WIDTH / columns
    return tuple(
        Box(MARGIN + i * col_w + CELL_PADDING, y, col_w - 2 * CELL_PADDING, METRIC_STRIP_ADVANCE)
        for i in range(columns)
    )


def key_information_layout(cursor: Cursor) -> KeyInformationLayout:
    title_y = cursor.y
    image = Box(MARGIN, title_y + PAGE_TITLE_ADVANCE, min(KEY_IMAGE_WIDTH, CONTENT_WIDTH), KEY_IMAGE_HEIGHT)
    strip_y = image.bottom + IMAGE_BOTTOM_GAP
    heading_y = strip_y + METRIC_STRIP_ADVANCE
    return KeyInformationLayout(
        title_y=title_y,
        image=image,
        metric_cells=metric_strip(strip_y, METRIC_STRIP_COLUMNS),
        label_y=strip_y + METRIC_STRIP_LABEL_OFFSET,
        value_y=strip_y + METRIC_STRIP_VALUE_OFFSET,
        features_heading_y=heading_y,
        features_top=heading_y + FEATURES_HEADING_ADVANCE,
        feature_x=MARGIN + FEATURE_INDENT,
        feature_w=CONTENT_WIDTH - FEATURE_INDENT,
    )


# ------------------------------------------------ other key information page

OTHER_IMAGE_HEIGHT = 3.3 * INCH
EPC_TITLE_OFFSET = 14
EPC_TITLE_ADVANCE = 30
EPC_CHART_SPAN = 5.8 * INCH
EPC_BLOCK_ADVANCE = 2.4 * INCH + 20
DETAIL_VALUE_OFFSET = 15
DETAIL_ROW_ADVANCE = 35
DISCLAIMER_GAP = 10
DISCLAIMER_ADVANCE = 40
BROADBAND_HEADING_ADVANCE = 20
BROADBAND_COLUMNS = 3


@dataclass(frozen=True)
class OtherInformationLayout:
    title_y: float
    image: Box
    epc_title_y: float
    chart_x: float
    chart_y: float
    details_top: float


def other_information_layout(cursor: Cursor) -> OtherInformationLayout:
    title_y = cursor.y
    image = Box(MARGIN, title_y + PAGE_TITLE_ADVANCE, CONTENT_WIDTH, OTHER_IMAGE_HEIGHT)
    epc_y = image.bottom + IMAGE_BOTTOM_GAP
    chart_y = epc_y + EPC_TITLE_ADVANCE
    return OtherInformationLayout(
        title_y=title_y,
        image=image,
        epc_title_y=epc_y + EPC_TITLE_OFFSET,
        chart_x=(PAGE_WIDTH - EPC_CHART_SPAN) / 2,
        chart_y=chart_y,
        details_top=chart_y + EPC_BLOCK_ADVANCE,
    )


def broadband_columns(y: float) -> tuple[Box, ...]:
    col_w = CONTENT_WIDTH / BROADBAND_COLUMNS
    return tuple(Box(MARGIN + i * col_w, y, col_w, DETAIL_ROW_ADVANCE) for i in range(BROADBAND_COLUMNS))


# --------------------------------------------------------------- EPC chart

EPC_CHART_WIDTH = 4.6 * INCH
EPC_BAR_HEIGHT = 0.18 * INCH
EPC_BAR_SPACING = 0.09 * INCH
EPC_BAR_SHIFT = 0.15 * INCH
EPC_HEADER_OFFSET = 16
EPC_SCORE_COLUMN_OFFSET = 1.05 * INCH
EPC_SCORE_COLUMN_WIDTH = 0.95 * INCH
EPC_VALUE_COLUMN_GAP = 0.2 * INCH
EPC_VALUE_COLUMN_WIDTH = 0.9 * INCH
EPC_LETTER_PADDING = 0.08 * INCH
EPC_LETTER_CLEARANCE = 0.32 * INCH
EPC_SEPARATOR_OVERHANG = 6
BADGE_WIDTH = 0.8 * INCH
BADGE_HEIGHT = 0.24 * INCH
BADGE_TIP = 0.2 * INCH
BADGE_INSET = 0.04 * INCH
BADGE_COLUMN_PADDING = 0.14 * INCH
CURRENT_BADGE_COLOR = (255, 216, 107)
POTENTIAL_BADGE_COLOR = (201, 242, 155)


@dataclass(frozen=True)
class EpcBar:
    band: EpcBand
    bar: Box
    range_box: Box
    letter_x: float
    letter_y: float


@dataclass(frozen=True)
class ValueBadge:
    score: int
    grade: str
    points: tuple[tuple[float, float], ...]
    text: Box
    color: tuple[int, int, int]


@dataclass(frozen=True)
class EpcChartLayout:
    header_y: float
    score_header: Box
    rating_header: Box
    current_header: Box
    potential_header: Box
    separators: tuple[tuple[float, float, float], ...]  # (x, y_top, y_bottom)
    bars: tuple[EpcBar, ...]
    current_badge: ValueBadge
    potential_badge: ValueBadge
    captions: tuple[Box, Box]
    bottom: float


def epc_row_y(top: float, index: int) -> float:
    return top + index * (EPC_BAR_HEIGHT + EPC_BAR_SPACING)


def epc_band_center(top: float, score: int) -> float:
    """Vertical centre of the bar row that `score` belongs to."""
    return epc_row_y(top, band_index(score)) + EPC_BAR_HEIGHT / 2


def value_badge(x: float, center_y: float, score: int, color, max_width: float) -> ValueBadge:
    """Right-pointing tag reading "<score> | <grade>", centred on a band row."""
    w = min(BADGE_WIDTH, max_width)
    y0 = center_y - BADGE_HEIGHT / 2
    points = (
        (x, y0),
        (x + w, y0),
        (x + w + BADGE_TIP, center_y),
        (x + w, y0 + BADGE_HEIGHT),
        (x, y0 + BADGE_HEIGHT),
    )
    text = Box(x + 5, y0 + 2, w - 7, BADGE_HEIGHT - 4)
    return ValueBadge(score, grade_for(score), points, text, color)


def epc_chart_layout(x: float, y: float, current: int, potential: int) -> EpcChartLayout:
    start_x = x - EPC_BAR_SHIFT
    score_x = start_x - EPC_SCORE_COLUMN_OFFSET
    current_x = start_x + EPC_CHART_WIDTH + EPC_VALUE_COLUMN_GAP
    potential_x = current_x + EPC_VALUE_COLUMN_WIDTH + EPC_VALUE_COLUMN_GAP
    header_y = y - EPC_HEADER_OFFSET
    rows = len(EPC_BANDS)

    # Bars stay strictly proportional to rank; the unit shrinks if the longest
    # bar plus its letter would reach into the value columns.
    max_letter_x = current_x - EPC_LETTER_CLEARANCE
    max_bar = max(0.0, max_letter_x - start_x - EPC_LETTER_PADDING)
    unit = min(EPC_CHART_WIDTH, max_bar) / rows

    bars = []
    for i, band in enumerate(EPC_BANDS):
        row_y = epc_row_y(y, i)
        bar = Box(start_x, row_y, unit * (i + 1), EPC_BAR_HEIGHT)
        bars.append(EpcBar(
            band=band,
            bar=bar,
            range_box=Box(score_x, row_y + EPC_BAR_HEIGHT / 2 - 6, EPC_SCORE_COLUMN_WIDTH, 12),
            letter_x=min(bar.right + EPC_LETTER_PADDING, max_letter_x),
            letter_y=row_y + EPC_BAR_HEIGHT / 2 - 7,
        ))

    chart_bottom = epc_row_y(y, rows) - EPC_BAR_SPACING
    separators = tuple(
        (col_x - EPC_VALUE_COLUMN_GAP / 2, y - EPC_SEPARATOR_OVERHANG, chart_bottom + EPC_SEPARATOR_OVERHANG)
        for col_x in (current_x, potential_x)
    )

    badge_max = EPC_VALUE_COLUMN_WIDTH - BADGE_COLUMN_PADDING
    current_badge = value_badge(
        current_x + BADGE_INSET, epc_band_center(y, current), current, CURRENT_BADGE_COLOR, badge_max
    )
    potential_badge = value_badge(
        potential_x + BADGE_INSET, epc_band_center(y, potential), potential, POTENTIAL_BADGE_COLOR, badge_max
    )

    caption_y = chart_bottom + EPC_BAR_SPACING + 8
    half = EPC_CHART_WIDTH / 2
    captions = (
        Box(start_x, caption_y, half, 12),
        Box(start_x + half, caption_y, half, 12),
    )

    return EpcChartLayout(
        header_y=header_y,
        score_header=Box(score_x, header_y, EPC_SCORE_COLUMN_WIDTH, 16),
        rating_header=Box(start_x, header_y, EPC_CHART_WIDTH / 2, 16),
        current_header=Box(current_x, header_y, EPC_VALUE_COLUMN_WIDTH, 16),
        potential_header=Box(potential_x, header_y, EPC_VALUE_COLUMN_WIDTH, 16),
        separators=separators,
        bars=tuple(bars),
        current_badge=current_badge,
        potential_badge=potential_badge,
        captions=captions,
        bottom=caption_y + 12,
    )


# ----------------------------------------------------------- city map page

MAP_ASPECT_RATIO = 1280 / 768
CITY_IMAGE_COUNT = 3
CITY_IMAGE_SIZE = 2.3 * INCH
CITY_IMAGE_MIN_GAP = 0.1 * INCH
CITY_SECTION_GAP = 20
CITY_ABOUT_GAP = 15
POPULATION_VALUE_OFFSET = 80


def city_map_box(cursor: Cursor) -> Box:
    """Composite map scaled to the content width at its known 1280x768 ratio."""
    return Box(MARGIN, cursor.y, CONTENT_WIDTH, CONTENT_WIDTH / MAP_ASPECT_RATIO)


def city_image_row(y: float, count: int = CITY_IMAGE_COUNT) -> tuple[Box, ...]:
    size = min(CITY_IMAGE_SIZE, (CONTENT_WIDTH - (count - 1) * CITY_IMAGE_MIN_GAP) / count)
    gap = (CONTENT_WIDTH - count * size) / (count - 1) if count > 1 else 0
    return tuple(Box(MARGIN + i * (size + gap), y, size, size) for i in range(count))


# ------------------------------------------------ floor plans and gallery

FLOOR_PLAN_WIDTH = 6.5 * INCH
FLOOR_PLAN_HEIGHT = 4.5 * INCH
GALLERY_WIDTH = 5.4 * INCH
GALLERY_HEIGHT = 2.8 * INCH
GALLERY_SPACING = 60
GALLERY_TITLE_PADDING = 28


def floor_plan_box(cursor: Cursor) -> Box:
    return Box(MARGIN, cursor.y + PAGE_TITLE_ADVANCE, min(FLOOR_PLAN_WIDTH, CONTENT_WIDTH), FLOOR_PLAN_HEIGHT)


def paginate_gallery(count: int, title_height: float) -> list[list[Box]]:
    """Gallery boxes grouped by page.

    Each page opens with the section title; an image moves to a new page when it
    and the spacing after it would cross the bottom margin.
    """
    if count <= 0:
        return []
    x = MARGIN + (CONTENT_WIDTH - GALLERY_WIDTH) / 2
    top = CONTENT_TOP + title_height + GALLERY_TITLE_PADDING
    pages: list[list[Box]] = [[]]
    y = top
    for _ in range(count):
        if pages[-1] and y + GALLERY_HEIGHT + GALLERY_SPACING > CONTENT_BOTTOM:
            pages.append([])
            y = top
        pages[-1].append(Box(x, y, GALLERY_WIDTH, GALLERY_HEIGHT))
        y += GALLERY_HEIGHT + GALLERY_SPACING
    return pages
