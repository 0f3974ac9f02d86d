import io
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..core.symbols import contrast_color
from .context import build_export_context

logger = logging.getLogger(__name__)

FONT_CANDIDATES = [
    Path("assets/fonts/DejaVuSans.ttf"),
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/local/share/fonts/DejaVuSans.ttf"),
]
FONT_NAME = "DejaVuSans"

MARGIN_X = 20  # mm
GRID_LEFT = 10  # mm
GRID_TOP = 20  # mm
GRID_MAX_W = 190  # mm
GRID_MAX_H = 250  # mm
LINE = 8  # mm between table rows

INSTRUCTIONS = [
    "1. Always start from the centre of the pattern and work outwards.",
    "2. Mark every 10 stitches on your fabric to make counting easier.",
    "3. Use a hoop or frame to keep the fabric taut while stitching.",
    "4. Finish one colour at a time to reduce thread changes.",
    "5. Do not knot on the back of your work; secure threads by passing",
    "   them under stitches that are already done.",
    "6. For large patterns split into sections, complete one section before",
    "   moving on to the next.",
    "7. Keep your work away from dust and light when you are not stitching.",
    "8. If the chart has many similar symbols, use a highlighter to mark",
    "   the areas you have already completed on the printed guide.",
]

SECTION_INSTRUCTIONS = [
    "1. This pattern is split into sections so it can be printed and used easily.",
    '2. Each section is numbered as "row-column" (for example 1-2).',
    "3. Sections in the same row sit next to each other from left to right.",
    "4. Rows are placed one below the other, from top to bottom.",
    "5. Use the stitch coordinates along the edges to line sections up.",
]


def _ensure_font() -> str:
    try:
        pdfmetrics.getFont(FONT_NAME)
        return FONT_NAME
    except KeyError:
        pass

    for candidate in FONT_CANDIDATES:
        if candidate.exists():
            try:
                pdfmetrics.registerFont(TTFont(FONT_NAME, str(candidate)))
                return FONT_NAME
            except Exception as exc:  # broken font file, fall back to built-in fonts
                logger.warning("Failed to register font %s: %s", candidate, exc)
                continue
    return "Helvetica"


def _bold(font_name: str) -> str:
    return "Helvetica-Bold" if font_name == "Helvetica" else font_name


def grid_cell_size(width: int, height: int) -> float:
    """Printed cell edge in mm."""
    if width <= 50 and height <= 50:
        return 3.0
    if width > 100 or height > 100:
        return 1.5
    return 2.0


def plan_sections(
    width: int,
    height: int,
    cell_mm: float,
    max_w: float = GRID_MAX_W,
    max_h: float = GRID_MAX_H,
) -> Dict[str, int]:
    """How the stitch grid is split across printed pages."""
    cols_per_page = max(1, int(max_w // cell_mm))
    rows_per_page = max(1, int(max_h // cell_mm))
    pages_x = max(1, -(-width // cols_per_page))
    pages_y = max(1, -(-height // rows_per_page))
    return {
        "cols_per_page": cols_per_page,
        "rows_per_page": rows_per_page,
        "pages_x": pages_x,
        "pages_y": pages_y,
        "pages": pages_x * pages_y,
    }


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


class _Writer:
    """Small wrapper that takes coordinates in mm from the top-left corner."""

    def __init__(self, c: canvas.Canvas, font: str) -> None:
        self.c = c
        self.font = font
        self.bold = _bold(font)
        self.page_w, self.page_h = A4

    def y(self, top_mm: float) -> float:
        return self.page_h - top_mm * mm

    def text(self, x_mm: float, top_mm: float, text: str, size: float = 11, bold: bool = False):
        self.c.setFont(self.bold if bold else self.font, size)
        self.c.drawString(x_mm * mm, self.y(top_mm), text)

    def centered(self, top_mm: float, text: str, size: float = 11, bold: bool = False):
        self.c.setFont(self.bold if bold else self.font, size)
        self.c.drawCentredString(self.page_w / 2, self.y(top_mm), text)

    def swatch(self, x_mm: float, top_mm: float, w_mm: float, h_mm: float, rgb: List[int]):
        self.c.setFillColorRGB(*(v / 255.0 for v in rgb))
        self.c.rect(x_mm * mm, self.y(top_mm + h_mm), w_mm * mm, h_mm * mm, stroke=0, fill=1)
        self.c.setFillColorRGB(0, 0, 0)


def _details(ctx: Dict[str, Any]) -> List[tuple]:
    size = ctx["finished_size"]
    return [
        ("Dimensions:", f"{ctx['grid']['width']} x {ctx['grid']['height']} stitches"),
        ("Fabric:", ctx["fabric"]["name"]),
        (
            "Finished size:",
            f"{size['width_in']} x {size['height_in']} in "
            f"({size['width_cm']} x {size['height_cm']} cm)",
        ),
        ("Thread type:", ctx["brand"]),
        ("Number of colours:", str(ctx["palette_size"])),
        ("Total stitches:", str(ctx["total_stitches"])),
        ("Difficulty:", ctx["difficulty"]),
    ]


def _title_page(w: _Writer, ctx: Dict[str, Any], image: Optional[bytes]) -> None:
    w.centered(30, "Cross-Stitch Pattern", size=24, bold=True)
    w.centered(45, ctx["title"], size=18, bold=True)
    w.centered(55, f"Created on: {date.today().isoformat()}", size=12)

    top = 70.0
    if image:
        try:
            img = Image.open(io.BytesIO(image))
            img_w, img_h = img.size
            scale = min(160 / img_w, 100 / img_h)
            draw_w, draw_h = img_w * scale, img_h * scale
            w.c.drawImage(
                ImageReader(img),
                (210 - draw_w) / 2 * mm,
                w.y(top + draw_h),
                width=draw_w * mm,
                height=draw_h * mm,
                preserveAspectRatio=True,
            )
            top += draw_h + 10
        except Exception as exc:
            # the picture is decoration only
            logger.warning("PDF cover image insert failed: %s", exc)

    w.text(MARGIN_X, top + 5, "Pattern details", size=14, bold=True)
    for i, (label, value) in enumerate(_details(ctx)):
        w.text(MARGIN_X, top + 15 + i * 10, f"{label} {value}", size=12)


def _symbol_legend(w: _Writer, ctx: Dict[str, Any]) -> float:
    """Two-column symbol key. Returns the next free top offset in mm."""

    def header(top: float, title: str) -> float:
        w.text(MARGIN_X, top, title, size=14, bold=True)
        top += 10
        for col in range(2):
            x = MARGIN_X + col * 90
            w.text(x, top, "Symbol", size=10, bold=True)
            w.text(x + 18, top, "Code", size=10, bold=True)
            w.text(x + 40, top, "Colour", size=10, bold=True)
        top += 5
        w.c.setLineWidth(0.2)
        w.c.line(MARGIN_X * mm, w.y(top), (MARGIN_X + 170) * mm, w.y(top))
        return top + 5

    legend = ctx["legend"]
    top = header(20, "Symbol Key")
    rows_per_page = int((280 - top) // LINE)
    per_page = rows_per_page * 2
    end = top
    for page_start in range(0, len(legend), per_page):
        if page_start:
            w.c.showPage()
            top = header(20, "Symbol Key (continued)")
        chunk = legend[page_start : page_start + per_page]
        per_col = -(-len(chunk) // 2)
        for i, entry in enumerate(chunk):
            col, row = divmod(i, per_col)
            x = MARGIN_X + col * 90
            row_top = top + row * LINE
            w.swatch(x, row_top - 4, 6, 5, entry["rgb"])
            w.c.setFillColorRGB(*(v / 255.0 for v in contrast_color(entry["rgb"])))
            w.text(x + 1.5, row_top, entry.get("symbol") or "?", size=9, bold=True)
            w.c.setFillColorRGB(0, 0, 0)
            w.text(x + 18, row_top, f"{ctx['brand']} {entry['code']}", size=10)
            w.text(x + 40, row_top, _truncate(entry.get("name") or "", 22), size=10)
        last_rows = -(-len(chunk) // 2)
        end = top + last_rows * LINE
    return end + 10


def _materials_list(w: _Writer, ctx: Dict[str, Any], top: float) -> None:
    def header(top: float, title: str) -> float:
        w.text(MARGIN_X, top, title, size=14, bold=True)
        top += 10
        w.text(MARGIN_X, top, "Colour", size=10, bold=True)
        w.text(MARGIN_X + 15, top, "Code", size=10, bold=True)
        w.text(MARGIN_X + 45, top, "Name", size=10, bold=True)
        w.text(MARGIN_X + 110, top, "Stitches", size=10, bold=True)
        w.text(MARGIN_X + 135, top, "Skeins", size=10, bold=True)
        top += 5
        w.c.setLineWidth(0.2)
        w.c.line(MARGIN_X * mm, w.y(top), (MARGIN_X + 160) * mm, w.y(top))
        return top + 5

    if top > 240:
        w.c.showPage()
        top = 20
    top = header(top, "Thread Materials List")
    for entry in ctx["legend"]:
        if top > 280:
            w.c.showPage()
            top = header(20, "Thread Materials List (continued)")
        w.swatch(MARGIN_X, top - 4, 10, 6, entry["rgb"])
        w.text(MARGIN_X + 15, top, f"{ctx['brand']} {entry['code']}", size=10)
        w.text(MARGIN_X + 45, top, _truncate(entry.get("name") or "", 30), size=10)
        w.text(MARGIN_X + 110, top, str(entry["stitch_count"]), size=10)
        w.text(MARGIN_X + 135, top, str(entry["skein_estimate"]), size=10)
        top += LINE


def _instructions_page(w: _Writer, ctx: Dict[str, Any]) -> None:
    w.text(MARGIN_X, 20, "Cross-Stitch Instructions", size=18, bold=True)
    w.text(MARGIN_X, 35, "Pattern information", size=14, bold=True)
    for i, (label, value) in enumerate(_details(ctx)):
        w.text(MARGIN_X, 45 + i * 8, label, size=11, bold=True)
        w.text(MARGIN_X + 50, 45 + i * 8, value, size=11)

    top = 45 + len(_details(ctx)) * 8 + 8
    w.text(MARGIN_X, top, "Tips for beginners", size=14, bold=True)
    top += 10
    for line in INSTRUCTIONS:
        w.text(MARGIN_X, top, line, size=11)
        top += 7

    if ctx["grid"]["width"] > 50 or ctx["grid"]["height"] > 50:
        top += 6
        w.text(MARGIN_X, top, "Joining the pattern sections", size=14, bold=True)
        top += 10
        for line in SECTION_INSTRUCTIONS:
            w.text(MARGIN_X, top, line, size=11)
            top += 7

    w.text(MARGIN_X, 270, "Enjoy stitching your cross-stitch design!", size=12)
    if ctx.get("source_name"):
        w.text(MARGIN_X, 280, f"Pattern generated from image: {ctx['source_name']}", size=10)


def _neighbours(row: int, col: int, pages_x: int, pages_y: int) -> str:
    parts = []
    if row > 1:
        parts.append(f"Above: {row - 1}-{col}")
    if col > 1:
        parts.append(f"Left: {row}-{col - 1}")
    if col < pages_x:
        parts.append(f"Right: {row}-{col + 1}")
    if row < pages_y:
        parts.append(f"Below: {row + 1}-{col}")
    return "Connects with: " + ", ".join(parts)


def _grid_pages(w: _Writer, ctx: Dict[str, Any]) -> int:
    matrix = ctx["matrix"]
    width, height = ctx["grid"]["width"], ctx["grid"]["height"]
    cell = grid_cell_size(width, height)
    plan = plan_sections(width, height, cell)
    lookup = {entry["code"]: entry for entry in ctx["legend"]}
    symbol_size = cell * mm * 0.7

    for py in range(plan["pages_y"]):
        for px in range(plan["pages_x"]):
            w.c.showPage()
            start_col = px * plan["cols_per_page"]
            end_col = min(start_col + plan["cols_per_page"], width)
            start_row = py * plan["rows_per_page"]
            end_row = min(start_row + plan["rows_per_page"], height)

            w.text(
                GRID_LEFT,
                GRID_TOP - 10,
                f"Pattern - Section {py + 1}-{px + 1} (of {plan['pages_y']} x {plan['pages_x']})",
                size=12,
                bold=True,
            )
            if plan["pages"] > 1:
                w.text(GRID_LEFT, GRID_TOP - 5, _neighbours(py + 1, px + 1, plan["pages_x"], plan["pages_y"]), size=8)

            w.c.setLineWidth(0.1)
            w.c.setStrokeColorRGB(0.78, 0.78, 0.78)
            for y in range(start_row, end_row):
                for x in range(start_col, end_col):
                    left = GRID_LEFT + (x - start_col) * cell
                    top = GRID_TOP + (y - start_row) * cell
                    entry = lookup.get(matrix[y][x])
                    if entry is not None:
                        w.swatch(left, top, cell, cell, entry["rgb"])
                    w.c.rect(left * mm, w.y(top + cell), cell * mm, cell * mm, stroke=1, fill=0)
                    if entry is not None and entry.get("symbol"):
                        w.c.setFillColorRGB(*(v / 255.0 for v in contrast_color(entry["rgb"])))
                        w.c.setFont(w.font, symbol_size)
                        w.c.drawCentredString(
                            (left + cell / 2) * mm,
                            w.y(top + cell / 2) - symbol_size / 3,
                            entry["symbol"],
                        )
                        w.c.setFillColorRGB(0, 0, 0)

            # stitch coordinates every 10 cells along the top and left edges
            w.c.setFont(w.font, 5)
            for x in range(start_col, end_col):
                if x % 10 == 0:
                    w.c.drawString((GRID_LEFT + (x - start_col) * cell) * mm, w.y(GRID_TOP - 1), str(x))
            for y in range(start_row, end_row):
                if y % 10 == 0:
                    w.c.drawRightString((GRID_LEFT - 1) * mm, w.y(GRID_TOP + (y - start_row) * cell + 1.5), str(y))
            w.c.setStrokeColorRGB(0, 0, 0)

    return plan["pages"]


def export_pdf(
    pattern: Any,
    *,
    title: Optional[str] = None,
    fabric_type: Optional[str] = None,
    source_name: Optional[str] = None,
    image: Optional[bytes] = None,
) -> bytes:
    """
    Paginated A4 pattern document.

    Pages: cover with details, symbol key + thread materials list,
    instructions, then the stitch grid split into numbered sections.
    image: optional PNG/JPEG bytes shown on the cover (source photo or preview).
    """
    ctx = build_export_context(
        pattern, title=title, fabric_type=fabric_type, source_name=source_name
    )

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(ctx["title"])
    w = _Writer(c, _ensure_font())

    _title_page(w, ctx, image)

    c.showPage()
    top = _symbol_legend(w, ctx)
    _materials_list(w, ctx, top)

    c.showPage()
    _instructions_page(w, ctx)

    sections = _grid_pages(w, ctx)
    logger.debug("PDF export: %s grid sections", sections)

    c.showPage()
    c.save()
    return buffer.getvalue()
