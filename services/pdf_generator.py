"""Compose the property investment PDF report."""

import os
import logging
import tempfile
from datetime import date
from typing import NamedTuple

from config import SAMPLE_IMAGES_DIR
from models.calculators import DEFAULT_CALCULATOR, CalculatorType, run_calculator
from models.currency import (
    format_currency, format_ordinal_date, format_percent, format_plain_number,
)
from models.epc import epc_scores
from services.image_selection import ImageSelector, hero_candidates
from services.layout import (
    MARGIN, CONTENT_WIDTH, PAGE_TITLE_SIZE, PAGE_TITLE_ADVANCE, SECTION_TITLE_SIZE,
    COVER_TITLE_SIZE, COVER_FOOTER_TEXT_SIZE, THUMBNAIL_COUNT,
    METRIC_BOX_PADDING, METRIC_LABEL_OFFSET, METRIC_VALUE_OFFSET,
    FEATURE_GAP, DETAIL_VALUE_OFFSET, DETAIL_ROW_ADVANCE, DISCLAIMER_GAP,
    DISCLAIMER_ADVANCE, BROADBAND_HEADING_ADVANCE, CITY_SECTION_GAP, CITY_ABOUT_GAP,
    POPULATION_VALUE_OFFSET, CITY_IMAGE_COUNT,
    Cursor, FitMode,
    cover_layout, investment_layout, key_information_layout, other_information_layout,
    broadband_columns, epc_chart_layout, city_map_box, city_image_row, floor_plan_box,
    paginate_gallery,
)
from services.pdf_canvas import (
    PropertyReportPDF, BLACK, WHITE, ACCENT_GOLD, PRIMARY_BLUE, MID_GREY, CHARCOAL, INK,
    RULE_GREY, SEPARATOR_GREY,
)

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
GALLERY_TITLE = "Property Images"

DEFAULT_CITY = "Liverpool"
DEFAULT_ABOUT_CITY = (
    "Liverpool is a port city and metropolitan borough in Merseyside, England. "
    "It is the administrative, cultural and economic centre of the Liverpool City "
    "Region with a population of over 1.5 million."
)
DEFAULT_POPULATION = "508,986"
SAMPLE_DIRECTIONS = ("directions.png", "directions.jpg")
SAMPLE_CITY_IMAGES = ("liverpool1.jpg", "liverpool2.jpg", "liverpool3.jpg")

BROADBAND_FIELDS = (
    ("Broadband available", "broadband_available"),
    ("Highest available download speed", "download_speed"),
    ("Highest available upload speed", "upload_speed"),
)

EPC_DISCLAIMER = (
    "This EPC data is accurate up to 6 months ago. If a more recent EPC assessment "
    "was done within this period, it will not be displayed here."
)


class ReportOutputError(ValueError):
    """The output destination cannot receive a report."""


class Line(NamedTuple):
    label: str
    value: str
    size: float = 11


class Breakdown(NamedTuple):
    costs_heading: str
    costs: list[Line]
    expenses_heading: str
    expenses: list[Line]


# ------------------------------------------------------------ inputs


def selected_calculators(data: dict) -> list[CalculatorType]:
    """Calculator sections to render, in order.

    Accepts a list, a comma-separated string or a single value under
    `selected_calculators`, falling back to `calculator_type`, then standard BTL.
    """
    data = data or {}
    raw = data.get("selected_calculators") or data.get("calculator_type")
    if isinstance(raw, str):
        raw = raw.split(",")
    elif raw is not None and not isinstance(raw, (list, tuple)):
        raw = [raw]
    names = [str(r).strip() for r in (raw or []) if r is not None and str(r).strip()]
    if not names:
        return [DEFAULT_CALCULATOR]
    return [CalculatorType.coerce(n) for n in names]


def section_inputs(data: dict, calc_type: CalculatorType) -> dict:
    """Top-level fields overlaid with the section's own `calculator_<type>` fields."""
    data = data or {}
    overrides = data.get(f"calculator_{calc_type.value}")
    merged = {**data, **(overrides if isinstance(overrides, dict) else {})}
    merged["calculator_type"] = calc_type.value
    return merged


def headline_metrics(result: dict) -> dict:
    return {
        "purchase_price": result.get("purchase_price", 0.0),
        "monthly_rent": result.get("monthly_rent", result.get("monthly_income", 0.0)),
        "rental_yield": result.get("rental_yield", 0.0),
        "monthly_profit": result.get("monthly_profit", 0.0),
        "annual_profit": result.get("annual_profit", result.get("net_profit", 0.0)),
        "roi": result.get("roi", 0.0),
    }


def _mortgage_line(r: dict) -> Line:
    rate = format_plain_number(r["mortgage_rate"])
    return Line(f"Mortgage @ {rate}% (Interest Only)", format_currency(r["annual_mortgage_interest"]), 10)


def _deposit_line(r: dict) -> Line:
    return Line(f"Deposit ({format_plain_number(r['deposit_percent'])}%)", format_currency(r["deposit_amount"]))


def _lines(r: dict, rows) -> list[Line]:
    return [Line(label, format_currency(r[key])) for label, key in rows]


def breakdown_for(calc_type: CalculatorType, r: dict) -> Breakdown:
    """Costs (left) and expenses (right) tables; the last line of each is its total."""
    if calc_type in (CalculatorType.STANDARD_BTL, CalculatorType.PURCHASE):
        return Breakdown(
            "Total Purchase Costs",
            [_deposit_line(r)] + _lines(r, [
                ("Stamp Duty", "stamp_duty"),
                ("Survey", "survey_cost"),
                ("Legal Fees", "legal_fees"),
                ("Loan Set-up", "loan_setup"),
                ("Total Investment Required", "total_investment"),
            ]),
            "Total Annual Expenses",
            [_mortgage_line(r)] + _lines(r, [
                ("Council Tax", "council_tax"),
                ("Repairs / Maintenance", "repairs_maintenance"),
                ("Electric / Gas", "utilities"),
                ("Water", "water"),
                ("Broadband / TV", "broadband_tv"),
                ("Insurance", "insurance"),
                ("Total", "total_annual_expenses"),
            ]),
        )
    if calc_type is CalculatorType.BRR:
        ltv = format_plain_number(r["refinance_ltv"])
        return Breakdown(
            "Total Purchase Costs",
            [_deposit_line(r)] + _lines(r, [
                ("Refurbishment", "refurb_cost"),
                ("Total Initial Investment", "total_initial_investment"),
                (f"Refinance @ {ltv}% LTV", "refinance_amount"),
                ("Money Back on Refinance", "money_back"),
                ("Net Investment Required", "net_investment"),
            ]),
            "Total Annual Expenses",
            [_mortgage_line(r)] + _lines(r, [
                ("Council Tax", "council_tax"),
                ("Repairs / Maintenance", "repairs_maintenance"),
                ("Insurance", "insurance"),
                ("Total", "total_annual_expenses"),
            ]),
        )
    if calc_type is CalculatorType.FLIP:
        return Breakdown(
            "Total Purchase Costs",
            _lines(r, [
                ("Purchase Price", "purchase_price"),
                ("Refurbishment", "refurb_cost"),
                ("Stamp Duty", "stamp_duty"),
                ("Survey", "survey_cost"),
                ("Legal Fees", "legal_fees"),
                ("Finance Costs", "finance_cost"),
                ("Total Investment Required", "total_investment"),
            ]),
            "Total Sale Costs",
            _lines(r, [
                ("Sale Price", "sale_price"),
                ("Legal Fees (Sale)", "legal_fees_sale"),
                ("Estate Agent Fees", "estate_agent_fees"),
                ("Total", "total_sale_costs"),
            ]),
        )
    if calc_type is CalculatorType.HOLIDAY_LET:
        mgmt = format_plain_number(r["management_fee_percent"])
        return Breakdown(
            "Total Purchase Costs",
            [_deposit_line(r)] + _lines(r, [
                ("Mortgage Amount", "mortgage_amount"),
                ("Total Investment Required", "total_investment"),
            ]),
            "Total Annual Expenses",
            [_mortgage_line(r)] + _lines(r, [
                (f"Management ({mgmt}%)", "management_fee"),
                ("Cleaning", "total_cleaning_fees"),
                ("Council Tax", "council_tax"),
                ("Electric / Gas", "utilities"),
                ("Insurance", "insurance"),
                ("Total", "total_annual_expenses"),
            ]),
        )
    if calc_type is CalculatorType.RENT_TO_HMO:
        rooms = f"{r['occupied_rooms']} of {format_plain_number(r['number_of_rooms'])}"
        return Breakdown(
            "Rental Income",
            [Line("Rooms Let", rooms)] + _lines(r, [
                ("Rent per Room", "rent_per_room"),
                ("Monthly Income", "monthly_income"),
                ("Annual Income", "annual_income"),
            ]),
            "Total Annual Expenses",
            _lines(r, [
                ("Rent Paid to Landlord", "annual_rent_paid"),
                ("Council Tax", "council_tax"),
                ("Electric / Gas", "utilities"),
                ("Insurance", "insurance"),
                ("Management", "management_fee"),
                ("Total", "total_annual_expenses"),
            ]),
        )
    mgmt = format_plain_number(r["management_fee_percent"])
    return Breakdown(
        "Rental Income",
        _lines(r, [("Nightly Rate", "daily_rate")])
        + [Line("Nights Let per Year", f"{r['occupied_days']:,.0f}")]
        + _lines(r, [
            ("Monthly Income", "monthly_income"),
            ("Annual Income", "annual_income"),
        ]),
        "Total Annual Expenses",
        _lines(r, [
            ("Rent Paid to Landlord", "annual_rent_paid"),
            (f"Management ({mgmt}%)", "management_fee"),
            ("Cleaning", "total_cleaning_fees"),
            ("Council Tax", "council_tax"),
            ("Electric / Gas", "utilities"),
            ("Insurance", "insurance"),
            ("Total", "total_annual_expenses"),
        ]),
    )


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return str(value).strip() if value is not None else ""


def _sample_image(*names: str) -> str | None:
    for name in names:
        path = os.path.join(SAMPLE_IMAGES_DIR, name)
        if os.path.exists(path):
            return path
    return None


def directions_image(images: dict) -> str | None:
    supplied = (images.get("directions") or [None])[0]
    if supplied and os.path.exists(supplied):
        return supplied
    return _sample_image(*SAMPLE_DIRECTIONS)


def city_images(images: dict) -> list[str | None]:
    """Exactly three city photo slots; sample photos stand in when none were supplied."""
    queue = list(images.get("city") or [])
    if not queue:
        queue = [p for p in (_sample_image(name) for name in SAMPLE_CITY_IMAGES) if p]
    queue = queue[:CITY_IMAGE_COUNT]
    return queue + [None] * (CITY_IMAGE_COUNT - len(queue))


# ------------------------------------------------------------ pages


def _page_title(pdf, cursor: Cursor, title: str) -> Cursor:
    pdf.draw_text(title, MARGIN, cursor.y, size=PAGE_TITLE_SIZE, style="B", color=BLACK)
    return cursor.down(PAGE_TITLE_ADVANCE)


def render_cover(pdf, cursor: Cursor, data: dict, images: dict,
                 selector: ImageSelector, report_date: date) -> Cursor:
    address = _text(data, "address")
    postal_code = _text(data, "postal_code")
    title = f"{address}, {postal_code}" if postal_code else address
    title_h = pdf.text_height(title, CONTENT_WIDTH, size=COVER_TITLE_SIZE, style="B") if title else 0

    layout = cover_layout(cursor, title_h)
    if title:
        pdf.draw_text(title, layout.title.x, layout.title.y, size=COVER_TITLE_SIZE, style="B",
                      color=BLACK, width=layout.title.w)

    hero, thumbnails = selector.pick_with_rest(hero_candidates(images), THUMBNAIL_COUNT)
    pdf.draw_image(hero, layout.hero, FitMode.COVER)
    for i, box in enumerate(layout.thumbnails):
        pdf.draw_image(thumbnails[i] if i < len(thumbnails) else None, box, FitMode.COVER)

    pdf.draw_rect(layout.footer, fill=ACCENT_GOLD)
    pdf.draw_text(f"Report created on {format_ordinal_date(report_date)}", layout.footer.x, layout.caption_y,
                  size=COVER_FOOTER_TEXT_SIZE, color=WHITE, width=layout.footer.w, align="C")
    return layout.end


def _breakdown_table(pdf, column, rows, heading_y: float, heading: str, lines: list[Line]):
    pdf.draw_text(heading, column.heading_x, heading_y, size=12, style="B", color=BLACK)
    for i, (row, line) in enumerate(zip(rows, lines)):
        style = "B" if i == len(lines) - 1 else ""
        pdf.draw_text(line.label, column.label_x, row.y, size=line.size, style=style,
                      color=BLACK, width=column.label_w)
        pdf.draw_text(line.value, column.value_x, row.y, size=11, style=style,
                      color=BLACK, width=column.value_w, align="R")
        if row.rule_y is not None:
            pdf.draw_line(column.rule_x0, row.rule_y, column.rule_x1, row.rule_y, RULE_GREY, 0.5)


def render_investment_section(pdf, cursor: Cursor, data: dict, calc_type: CalculatorType) -> Cursor:
    result = run_calculator(calc_type, section_inputs(data, calc_type))
    metrics = headline_metrics(result)
    tables = breakdown_for(calc_type, result)
    layout = investment_layout(cursor, len(tables.costs), len(tables.expenses))

    pdf.draw_text("Investment Opportunity", MARGIN, layout.title_y, size=PAGE_TITLE_SIZE, style="B", color=BLACK)
    pdf.draw_text(f"{calc_type.display_name} Calculator", MARGIN, layout.subtitle_y, size=16, color=MID_GREY)

    boxes = (
        ("Purchase Price", format_currency(metrics["purchase_price"])),
        ("Estimated Monthly Rent", format_currency(metrics["monthly_rent"]) + "pcm"),
        ("Rental Yield", format_percent(metrics["rental_yield"])),
    )
    for box, (label, value) in zip(layout.metric_boxes, boxes):
        pdf.draw_rect(box, fill=ACCENT_GOLD)
        inner_x = box.x + METRIC_BOX_PADDING
        inner_w = box.w - 2 * METRIC_BOX_PADDING
        pdf.draw_text(label, inner_x, box.y + METRIC_LABEL_OFFSET, size=12, color=BLACK,
                      width=inner_w, align="C")
        pdf.draw_text(value, inner_x, box.y + METRIC_VALUE_OFFSET, size=24, style="B", color=WHITE,
                      width=inner_w, align="C")

    _breakdown_table(pdf, layout.left, layout.left_rows, layout.heading_y, tables.costs_heading, tables.costs)
    _breakdown_table(pdf, layout.right, layout.right_rows, layout.heading_y,
                     tables.expenses_heading, tables.expenses)

    bars = (
        ("Monthly Profit", format_currency(metrics["monthly_profit"])),
        ("Annual Profit", format_currency(metrics["annual_profit"])),
        ("ROI", format_percent(metrics["roi"])),
    )
    for bar, (label, value) in zip(layout.profit_bars, bars):
        pdf.draw_rect(bar.box, fill=ACCENT_GOLD)
        pdf.draw_text(label, bar.label.x, bar.label.center_y - 6, size=13, color=BLACK, width=bar.label.w)
        pdf.draw_text(value, bar.value.x, bar.value.center_y - 12, size=24, style="B", color=WHITE,
                      width=bar.value.w, align="R")

    logger.info(f"Rendered {calc_type.value} section, ROI {metrics['roi']:.2f}%")
    return layout.end


def render_key_information(pdf, cursor: Cursor, data: dict, images: dict, selector: ImageSelector) -> Cursor:
    layout = key_information_layout(cursor)
    _page_title(pdf, cursor, "Key Information")
    pdf.draw_image(selector.pick(hero_candidates(images)), layout.image, FitMode.CONTAIN)

    labels = ("Asking price", "Bedrooms", "Size", "On the market for")
    values = (
        _text(data, "asking_price") or NOT_AVAILABLE,
        _text(data, "bedrooms") or NOT_AVAILABLE,
        f"{_text(data, 'size_sqm') or NOT_AVAILABLE} sqm",
        f"{_text(data, 'days_on_market') or NOT_AVAILABLE} days",
    )
    for cell, label, value in zip(layout.metric_cells, labels, values):
        pdf.draw_text(label, cell.x, layout.label_y, size=11, color=BLACK, width=cell.w, align="C")
        pdf.draw_text(value, cell.x, layout.value_y, size=16, style="B", color=BLACK, width=cell.w, align="C")

    end = cursor.at(layout.features_heading_y)
    features = [f.strip() for f in _text(data, "key_features").split("\n") if f.strip()]
    if features:
        pdf.draw_text("Key Features", MARGIN, layout.features_heading_y, size=SECTION_TITLE_SIZE,
                      style="B", color=BLACK)
        y = layout.features_top
        for feature in features:
            y += pdf.draw_text(f"• {feature}", layout.feature_x, y, size=11, color=BLACK,
                               width=layout.feature_w) + FEATURE_GAP
        end = cursor.at(y)
    return end


def render_epc_chart(pdf, x: float, y: float, data: dict) -> float:
    current, potential = epc_scores(data)
    chart = epc_chart_layout(x, y, current, potential)

    for text, box, align in (
        ("Score", chart.score_header, "L"),
        ("Energy rating", chart.rating_header, "L"),
        ("Current", chart.current_header, "C"),
        ("Potential", chart.potential_header, "C"),
    ):
        pdf.draw_text(text, box.x, box.y, size=13, style="B", color=BLACK, width=box.w, align=align)
    for sep_x, top, bottom in chart.separators:
        pdf.draw_line(sep_x, top, sep_x, bottom, SEPARATOR_GREY, 1)

    for bar in chart.bars:
        pdf.draw_text(bar.band.label, bar.range_box.x, bar.range_box.y, size=11, style="B",
                      color=CHARCOAL, width=bar.range_box.w)
        pdf.draw_rect(bar.bar, fill=bar.band.color, stroke=BLACK, line_width=0.5)
        pdf.draw_text(bar.band.grade, bar.letter_x, bar.letter_y, size=14, style="B", color=INK)

    for badge in (chart.current_badge, chart.potential_badge):
        pdf.draw_polygon(badge.points, fill=badge.color, stroke=BLACK, line_width=0.5)
        pdf.draw_text(f"{badge.score} | {badge.grade}", badge.text.x, badge.text.y, size=9, style="B",
                      color=INK, width=badge.text.w)

    left, right = chart.captions
    pdf.draw_text("Very energy efficient - lower running costs", left.x, left.y, size=9,
                  color=MID_GREY, width=left.w)
    pdf.draw_text("Not energy efficient - higher running costs", right.x, right.y, size=9,
                  color=MID_GREY, width=right.w, align="R")
    return chart.bottom


def render_other_information(pdf, cursor: Cursor, data: dict, images: dict, selector: ImageSelector) -> Cursor:
    layout = other_information_layout(cursor)
    _page_title(pdf, cursor, "Other Key Information")
    pdf.draw_image(selector.pick(hero_candidates(images)), layout.image, FitMode.CONTAIN)

    pdf.draw_text("Energy Performance Certificate", MARGIN, layout.epc_title_y, size=SECTION_TITLE_SIZE,
                  style="B", color=BLACK, width=CONTENT_WIDTH, align="C")
    render_epc_chart(pdf, layout.chart_x, layout.chart_y, data)

    y = layout.details_top
    for label, key in (
        ("Latest available inspection date", "inspection_date"),
        ("Window glazing", "window_glazing"),
        ("Building construction age band", "building_age"),
    ):
        value = _text(data, key)
        if not value:
            continue
        pdf.draw_text(label, MARGIN, y, size=11, style="B", color=BLACK)
        pdf.draw_text(value, MARGIN, y + DETAIL_VALUE_OFFSET, size=11, color=BLACK)
        y += DETAIL_ROW_ADVANCE

    y += DISCLAIMER_GAP
    pdf.draw_text(EPC_DISCLAIMER, MARGIN, y, size=9, color=MID_GREY, width=CONTENT_WIDTH)
    y += DISCLAIMER_ADVANCE

    pdf.draw_text("Internet / Broadband Availability", MARGIN, y, size=SECTION_TITLE_SIZE, style="B", color=BLACK)
    y += BROADBAND_HEADING_ADVANCE
    columns = broadband_columns(y)
    # values share one baseline under the tallest wrapped label
    label_h = max(pdf.text_height(label, col.w, size=11) for col, (label, _) in zip(columns, BROADBAND_FIELDS))
    value_y = y + max(DETAIL_VALUE_OFFSET, label_h)
    for col, (label, key) in zip(columns, BROADBAND_FIELDS):
        pdf.draw_text(label, col.x, col.y, size=11, color=BLACK, width=col.w)
        pdf.draw_text(_text(data, key) or NOT_AVAILABLE, col.x, value_y, size=11,
                      style="B", color=BLACK, width=col.w)
    return cursor.at(max(y + DETAIL_ROW_ADVANCE, value_y + DETAIL_VALUE_OFFSET))


def render_floor_plan(pdf, cursor: Cursor, path: str | None) -> Cursor:
    _page_title(pdf, cursor, "Floor Plans")
    box = floor_plan_box(cursor)
    pdf.draw_image(path, box, FitMode.CONTAIN)
    return cursor.at(box.bottom)


def render_city_map(pdf, cursor: Cursor, data: dict, images: dict) -> Cursor:
    cursor = _page_title(pdf, cursor, "City Map")
    map_box = city_map_box(cursor)
    pdf.draw_image(directions_image(images), map_box, FitMode.STRETCH)

    y = map_box.bottom + CITY_SECTION_GAP
    pdf.draw_text("About the City", MARGIN, y, size=SECTION_TITLE_SIZE, style="B", color=BLACK)
    y += CITY_SECTION_GAP
    pdf.draw_text(_text(data, "city") or DEFAULT_CITY, MARGIN, y, size=12, style="B", color=PRIMARY_BLUE)
    y += CITY_SECTION_GAP
    about = _text(data, "about_city") or DEFAULT_ABOUT_CITY
    y += pdf.draw_text(about, MARGIN, y, size=11, color=BLACK, width=CONTENT_WIDTH) + CITY_ABOUT_GAP

    pdf.draw_text("Population: ", MARGIN, y, size=11, style="B", color=BLACK)
    pdf.draw_text(_text(data, "population") or DEFAULT_POPULATION, MARGIN + POPULATION_VALUE_OFFSET, y,
                  size=11, color=BLACK)
    y += 2 * CITY_SECTION_GAP

    row = city_image_row(y)
    for box, path in zip(row, city_images(images)):
        pdf.draw_image(path, box, FitMode.COVER)
    return cursor.at(row[0].bottom)


# ------------------------------------------------------------ document


def build_report(data: dict, images: dict, logo_path: str | None = None, *,
                 canvas=None, selector: ImageSelector | None = None,
                 report_date: date | None = None) -> bytes:
    """Render every page of the report and return the finished document."""
    data = data or {}
    images = images or {}
    pdf = canvas if canvas is not None else PropertyReportPDF(logo_path)
    selector = selector or ImageSelector()
    report_date = report_date or date.today()

    render_cover(pdf, pdf.start_page(), data, images, selector, report_date)

    calculators = selected_calculators(data)
    logger.info(f"Rendering {len(calculators)} calculator section(s): {[c.value for c in calculators]}")
    for calc_type in calculators:
        render_investment_section(pdf, pdf.start_page(), data, calc_type)

    render_key_information(pdf, pdf.start_page(), data, images, selector)
    render_other_information(pdf, pdf.start_page(), data, images, selector)

    floor_plans = list(images.get("floor_plans") or []) or [None]
    for path in floor_plans:
        render_floor_plan(pdf, pdf.start_page(), path)

    gallery = list(images.get("property", images.get("cover")) or [])
    title_h = pdf.text_height(GALLERY_TITLE, CONTENT_WIDTH, size=PAGE_TITLE_SIZE, style="B")
    gallery_pages = paginate_gallery(len(gallery), title_h)
    remaining = iter(gallery)
    for boxes in gallery_pages:
        cursor = pdf.start_page()
        pdf.draw_text(GALLERY_TITLE, MARGIN, cursor.y, size=PAGE_TITLE_SIZE, style="B", color=BLACK)
        for box in boxes:
            pdf.draw_image(next(remaining), box, FitMode.COVER)
    logger.info(f"Floor plan pages: {len(floor_plans)}, gallery pages: {len(gallery_pages)}")

    render_city_map(pdf, pdf.start_page(), data, images)
    return pdf.finalize()


def _check_output_path(output_path) -> str:
    if output_path is None:
        raise ReportOutputError("Invalid output path provided: path is None")
    if isinstance(output_path, os.PathLike):
        output_path = os.fspath(output_path)
    if not isinstance(output_path, str):
        raise ReportOutputError(
            f"Invalid output path provided: expected string, got {type(output_path).__name__}"
        )
    if not output_path.strip():
        raise ReportOutputError("Invalid output path provided: path is empty")

    path = os.path.normpath(output_path)
    if os.path.isdir(path):
        raise ReportOutputError(f"Invalid output path provided: {path} is a directory")
    parent = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(parent):
        raise ReportOutputError(f"Output directory does not exist: {parent}")
    if not os.access(parent, os.W_OK):
        raise ReportOutputError(f"Output directory is not writable: {parent}")
    return path


def generate_pdf(data: dict, images: dict, output_path, logo_path: str | None = None) -> str:
    """Generate the report at output_path and return the path written."""
    path = _check_output_path(output_path)
    content = build_report(data, images, logo_path)

    fd, tmp_path = tempfile.mkstemp(prefix=".report-", suffix=".pdf", dir=os.path.dirname(os.path.abspath(path)))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.info(f"PDF generated: {path} ({len(content)} bytes)")
    return path
