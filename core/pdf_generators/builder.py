"""
PDF Builder - page abstraction for direct-draw generators

Wraps a ReportLab canvas with millimetre units and a running vertical cursor
measured from the top of the page (ReportLab's origin is bottom-left, so every
y coordinate is flipped on the way out).

Page-break policy: every atomic unit (one wrapped line, one rule, one box)
checks the remaining space first and opens a new page when it would cross the
bottom margin. Lines are never split.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as rl_canvas

from .fonts import FontManager, get_font_manager

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# 1pt = 0.3527mm
PT_TO_MM = 0.3527


@dataclass
class PDFConfig:
    """Page geometry in millimetres."""
    page_width: float = 210.0
    page_height: float = 297.0
    margin_left: float = 20.0
    margin_right: float = 20.0
    margin_top: float = 20.0
    margin_bottom: float = 20.0
    line_height: float = 1.15


@dataclass
class DrawnText:
    """A text run placed on a page (kept for inspection and tests)."""
    page: int
    x: float
    y: float
    text: str
    font: str
    size: float


@dataclass
class LinkArea:
    """A clickable rectangle, top-left based, in millimetres."""
    page: int
    url: str
    x: float
    y: float
    width: float
    height: float


class PDFBuilder:
    """
    Millimetre-based drawing surface with automatic pagination.

    Usage:
        pdf = PDFBuilder()
        pdf.set_font("bold", 18)
        pdf.draw_text("Jane Doe", 20)
        pdf.add_space(5)
        pdf.add_text(summary, 20, 10.5, line_height=1.5)
        data = pdf.to_bytes()
    """

    def __init__(
        self,
        orientation: str = "portrait",
        font_manager: Optional[FontManager] = None,
        title: Optional[str] = None,
    ):
        pagesize = landscape(A4) if orientation == "landscape" else A4
        self.fonts = font_manager or get_font_manager()

        self.config = PDFConfig(
            page_width=pagesize[0] / mm,
            page_height=pagesize[1] / mm,
        )
        self.current_y = self.config.margin_top
        self.current_page = 1

        self._buffer = io.BytesIO()
        self.canvas = rl_canvas.Canvas(self._buffer, pagesize=pagesize)
        if title:
            self.canvas.setTitle(title)
        self.canvas.setCreator("Resume Builder")

        self._font_style = "normal"
        self._font_size = 11.0
        self._text_color: RGB = (0, 0, 0)
        self._finished: Optional[bytes] = None

        self.text_log: List[DrawnText] = []
        self.links: List[LinkArea] = []

        self._apply_font()

    # ========================================================================
    # Geometry
    # ========================================================================

    def get_content_width(self) -> float:
        return self.config.page_width - self.config.margin_left - self.config.margin_right

    def get_remaining_space(self) -> float:
        return self.config.page_height - self.config.margin_bottom - self.current_y

    def get_current_y(self) -> float:
        return self.current_y

    def set_current_y(self, y: float):
        self.current_y = y

    @property
    def page_count(self) -> int:
        return self.current_page

    @property
    def margin_left(self) -> float:
        return self.config.margin_left

    @property
    def right_edge(self) -> float:
        """x coordinate of the right margin."""
        return self.config.page_width - self.config.margin_right

    def check_page_break(self, required_height: float) -> bool:
        """Start a new page if `required_height` does not fit."""
        if self.current_y + required_height > self.config.page_height - self.config.margin_bottom:
            self.add_page()
            return True
        return False

    def add_page(self):
        self.canvas.showPage()
        self.current_page += 1
        self.current_y = self.config.margin_top
        # showPage resets graphics state
        self._apply_font()
        logger.debug(f"PDF page break -> page {self.current_page}")

    def add_space(self, height: float):
        self.current_y += height
        self.check_page_break(0)

    # ========================================================================
    # Font / Color State
    # ========================================================================

    def set_font(self, style: str = "normal", size: Optional[float] = None):
        self._font_style = style
        if size is not None:
            self._font_size = size
        self._apply_font()

    def set_text_color(self, color: Union[RGB, Sequence[int]]):
        self._text_color = tuple(color)  # type: ignore[assignment]

    def line_height_mm(self, font_size: Optional[float] = None, multiplier: Optional[float] = None) -> float:
        size = font_size if font_size is not None else self._font_size
        lh = multiplier if multiplier is not None else self.config.line_height
        return size * PT_TO_MM * lh

    def _apply_font(self):
        self.canvas.setFont(self.fonts.font_name(self._font_style), self._font_size)

    def _set_fill(self, color: RGB):
        self.canvas.setFillColorRGB(color[0] / 255, color[1] / 255, color[2] / 255)

    def _set_stroke(self, color: RGB):
        self.canvas.setStrokeColorRGB(color[0] / 255, color[1] / 255, color[2] / 255)

    def _flip(self, y: float) -> float:
        """Top-based mm -> ReportLab points from the bottom."""
        return (self.config.page_height - y) * mm

    # ========================================================================
    # Text Primitives
    # ========================================================================

    def text_width(self, text: str, style: Optional[str] = None, size: Optional[float] = None) -> float:
        """Rendered width of `text` in mm."""
        font = self.fonts.font_name(style or self._font_style)
        font_size = size if size is not None else self._font_size
        return pdfmetrics.stringWidth(self.fonts.safe_text(text), font, font_size) * PT_TO_MM

    def split_text(self, text: str, max_width: float) -> List[str]:
        """Wrap text into lines no wider than `max_width` mm."""
        if not text:
            return []
        font = self.fonts.font_name(self._font_style)
        lines: List[str] = []
        for paragraph in self.fonts.safe_text(text).split("\n"):
            wrapped = simpleSplit(paragraph, font, self._font_size, max_width * mm)
            lines.extend(wrapped or [""])
        return lines

    def draw_text(self, text: str, x: float, y: Optional[float] = None) -> float:
        """Place one run of text with its baseline at y (defaults to the cursor). Returns the width."""
        if not text:
            return 0.0
        y = self.current_y if y is None else y
        safe = self.fonts.safe_text(text)
        self._set_fill(self._text_color)
        self.canvas.drawString(x * mm, self._flip(y), safe)
        self.text_log.append(DrawnText(
            page=self.current_page, x=x, y=y, text=safe,
            font=self.fonts.font_name(self._font_style), size=self._font_size,
        ))
        return self.text_width(text)

    def draw_text_right(self, text: str, right: Optional[float] = None, y: Optional[float] = None) -> float:
        """Right-align text against `right` (defaults to the right margin)."""
        right = self.right_edge if right is None else right
        width = self.text_width(text)
        self.draw_text(text, right - width, y)
        return right - width

    def draw_text_centered(self, text: str, y: Optional[float] = None) -> float:
        """Center text on the page width."""
        x = (self.config.page_width - self.text_width(text)) / 2
        self.draw_text(text, x, y)
        return x

    def draw_link_text(self, text: str, x: float, url: str, y: Optional[float] = None) -> float:
        """Text with a clickable area over it. Returns the width."""
        y = self.current_y if y is None else y
        width = self.draw_text(text, x, y)
        height = self._font_size * PT_TO_MM
        self.add_link_area(url, x, y - height, width, height * 1.25)
        return width

    def add_link_area(self, url: str, x: float, y: float, width: float, height: float):
        """Register a link rectangle (top-left based mm)."""
        if not url or width <= 0 or height <= 0:
            return
        x1, y1 = x * mm, self._flip(y + height)
        x2, y2 = (x + width) * mm, self._flip(y)
        self.canvas.linkURL(url, (x1, y1, x2, y2), relative=0, thickness=0)
        self.links.append(LinkArea(self.current_page, url, x, y, width, height))

    def add_text(
        self,
        text: str,
        x: float,
        font_size: float = 11,
        align: str = "left",
        max_width: Optional[float] = None,
        font_style: Optional[str] = None,
        color: Optional[RGB] = None,
        line_height: Optional[float] = None,
    ) -> float:
        """
        Wrapped paragraph starting at the cursor.

        Font style and color default to the current state. Each line checks
        the page break before it is drawn. Returns the cursor after the text.
        """
        if max_width is None:
            max_width = self.get_content_width()
        self.set_font(font_style or self._font_style, font_size)
        if color is not None:
            self.set_text_color(color)

        line_mm = self.line_height_mm(font_size, line_height)
        for line in self.split_text(text, max_width):
            self.check_page_break(line_mm)
            if align == "center":
                x_pos = (self.config.page_width - self.text_width(line)) / 2
            elif align == "right":
                x_pos = self.right_edge - self.text_width(line)
            else:
                x_pos = x
            self.draw_text(line, x_pos)
            self.current_y += line_mm
        return self.current_y

    def add_wrapped_lines(
        self,
        lines: List[str],
        x: float,
        line_mm: float,
        first_prefix: Optional[Tuple[str, float, Optional[RGB]]] = None,
    ):
        """
        Draw pre-wrapped lines; the first may carry a prefix (bullet glyph,
        its x, its color).
        """
        for index, line in enumerate(lines):
            self.check_page_break(line_mm)
            if index == 0 and first_prefix is not None:
                glyph, glyph_x, glyph_color = first_prefix
                body_color = self._text_color
                if glyph_color is not None:
                    self.set_text_color(glyph_color)
                self.draw_text(glyph, glyph_x)
                self.set_text_color(body_color)
            self.draw_text(line, x)
            self.current_y += line_mm

    def add_heading(
        self,
        text: str,
        font_size: float = 14,
        underline: bool = True,
        underline_width: float = 0.5,
        space_after: float = 3,
        uppercase: bool = True,
        color: RGB = (0, 0, 0),
    ):
        """Bold heading with an underline matching the text width."""
        display = text.upper() if uppercase else text
        line_mm = self.line_height_mm(font_size)
        self.check_page_break(line_mm + space_after + 2)

        self.set_font("bold", font_size)
        self.set_text_color(color)
        width = self.draw_text(display, self.config.margin_left)

        if underline:
            self._line(self.config.margin_left, self.current_y + 1,
                       self.config.margin_left + width, self.current_y + 1,
                       underline_width, color)
        self.current_y += line_mm + space_after

    def add_section_heading(
        self,
        text: str,
        font_size: float = 14,
        space_after: float = 3,
        uppercase: bool = True,
        color: RGB = (0, 0, 0),
        rule_color: RGB = (128, 128, 128),
    ):
        """Bold heading with a full-width rule."""
        display = text.upper() if uppercase else text
        line_mm = self.line_height_mm(font_size)
        self.check_page_break(line_mm + space_after + 2)

        self.set_font("bold", font_size)
        self.set_text_color(color)
        self.draw_text(display, self.config.margin_left)
        self._line(self.config.margin_left, self.current_y + 1,
                   self.right_edge, self.current_y + 1, 0.5, rule_color)
        self.current_y += line_mm + space_after

    def add_bullet_list(
        self,
        items: List[str],
        font_size: float = 11,
        bullet_char: str = "•",
        indent: float = 5,
        space_after: float = 2,
        color: RGB = (0, 0, 0),
    ):
        self.set_font("normal", font_size)
        self.set_text_color(color)
        line_mm = self.line_height_mm(font_size)
        max_width = self.get_content_width() - indent

        for item in items:
            lines = self.split_text(item, max_width)
            self.add_wrapped_lines(
                lines, self.config.margin_left + indent, line_mm,
                first_prefix=(bullet_char, self.config.margin_left, None),
            )
        self.current_y += space_after

    def add_link(self, text: str, url: str, x: float, font_size: float = 11, color: RGB = (0, 0, 255)):
        self.set_font("normal", font_size)
        self.set_text_color(color)
        line_mm = self.line_height_mm(font_size)
        self.check_page_break(line_mm)
        self.draw_link_text(text, x, url)
        self.current_y += line_mm

    def add_icon(self, icon: str, x: float, y: float, size: float = 11, color: RGB = (100, 100, 100)):
        self.set_font("normal", size)
        self.set_text_color(color)
        self.draw_text(icon, x, y)

    def add_highlighted_text(
        self,
        text: str,
        x: float,
        font_size: float,
        highlight_color: RGB,
        text_color: RGB = (0, 0, 0),
        padding: float = 1,
    ):
        self.set_font("normal", font_size)
        width = self.text_width(text)
        height = font_size * PT_TO_MM
        self.check_page_break(height + padding * 2)

        self.add_filled_rect(x - padding, self.current_y - height + 1,
                             width + padding * 2, height + padding, highlight_color)
        self.set_text_color(text_color)
        self.draw_text(text, x)
        self.current_y += height + padding * 2

    def add_badge(
        self,
        text: str,
        x: float,
        y: float,
        background_color: RGB = (37, 99, 235),
        text_color: RGB = (255, 255, 255),
        font_size: float = 11,
        padding: float = 2,
        rounded: bool = True,
    ) -> float:
        """Label on a colored box; width = text + 2*padding. Returns the width."""
        self.set_font("bold", font_size)
        badge_width = self.text_width(text) + padding * 2
        badge_height = font_size * PT_TO_MM + padding
        top = y - badge_height + 2

        if rounded:
            self.add_rounded_rect(x, top, badge_width, badge_height, 2, fill_color=background_color)
        else:
            self.add_filled_rect(x, top, badge_width, badge_height, background_color)

        self.set_text_color(text_color)
        self.draw_text(text, x + padding, y)
        return badge_width

    def add_contact_info(
        self,
        items: List[Dict[str, str]],
        layout: str = "horizontal",
        icon_size: float = 10,
        text_size: float = 11,
        gap: float = 2,
        icon_color: RGB = (100, 100, 100),
        text_color: RGB = (0, 0, 0),
    ):
        """
        Icon + text pairs, side by side or stacked.

        Each item: {"icon": ..., "text": ..., "link": optional url}.
        """
        line_mm = max(icon_size, text_size) * PT_TO_MM

        if layout == "horizontal":
            x = self.config.margin_left
            self.check_page_break(line_mm + 2)
            for index, item in enumerate(items):
                self.add_icon(item["icon"], x, self.current_y, icon_size, icon_color)
                x += icon_size * PT_TO_MM + gap

                self.set_font("normal", text_size)
                self.set_text_color(text_color)
                if item.get("link"):
                    width = self.draw_link_text(item["text"], x, item["link"])
                else:
                    width = self.draw_text(item["text"], x)
                x += width + 8

                if index < len(items) - 1:
                    self.draw_text("•", x - 4)
            self.current_y += line_mm + 2
        else:
            for item in items:
                self.check_page_break(line_mm + 2)
                self.add_icon(item["icon"], self.config.margin_left, self.current_y, icon_size, icon_color)

                self.set_font("normal", text_size)
                self.set_text_color(text_color)
                x = self.config.margin_left + icon_size * PT_TO_MM + gap
                if item.get("link"):
                    self.draw_link_text(item["text"], x, item["link"])
                else:
                    self.draw_text(item["text"], x)
                self.current_y += line_mm + 2

    # ========================================================================
    # Shape Primitives
    # ========================================================================

    def _line(self, x1: float, y1: float, x2: float, y2: float, line_width: float, color: RGB):
        self.canvas.setLineWidth(line_width * mm)
        self._set_stroke(color)
        self.canvas.line(x1 * mm, self._flip(y1), x2 * mm, self._flip(y2))

    def add_horizontal_line(
        self,
        width: Optional[float] = None,
        line_width: float = 0.5,
        color: RGB = (0, 0, 0),
    ):
        """Rule from the left margin at the cursor, then advance 2mm."""
        length = width or self.get_content_width()
        self.check_page_break(2)
        self._line(self.config.margin_left, self.current_y,
                   self.config.margin_left + length, self.current_y,
                   line_width, color)
        self.current_y += 2

    def add_vertical_line(
        self,
        x: float,
        start_y: float,
        end_y: float,
        line_width: float = 0.5,
        color: RGB = (0, 0, 0),
    ):
        self._line(x, start_y, x, end_y, line_width, color)

    def add_filled_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill_color: RGB,
        border_color: Optional[RGB] = None,
        border_width: float = 0,
    ):
        """Filled rectangle; (x, y) is the top-left corner."""
        self._set_fill(fill_color)
        stroke = 0
        if border_color and border_width > 0:
            self._set_stroke(border_color)
            self.canvas.setLineWidth(border_width * mm)
            stroke = 1
        self.canvas.rect(x * mm, self._flip(y + height), width * mm, height * mm,
                         stroke=stroke, fill=1)

    def add_rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        fill_color: Optional[RGB] = None,
        border_color: Optional[RGB] = None,
        border_width: float = 0.5,
    ):
        if fill_color:
            self._set_fill(fill_color)
        if border_color:
            self._set_stroke(border_color)
            self.canvas.setLineWidth(border_width * mm)
        self.canvas.roundRect(
            x * mm, self._flip(y + height), width * mm, height * mm, radius * mm,
            stroke=1 if border_color else 0, fill=1 if fill_color else 0,
        )

    def add_background_section(
        self,
        height: float,
        fill_color: RGB,
        border_color: Optional[RGB] = None,
        border_width: float = 0,
        padding: float = 0,
    ):
        """Full content-width box starting at the cursor."""
        self.check_page_break(height)
        self.add_filled_rect(
            self.config.margin_left - padding,
            self.current_y - padding,
            self.get_content_width() + padding * 2,
            height + padding * 2,
            fill_color,
            border_color,
            border_width,
        )

    # ========================================================================
    # Columns
    # ========================================================================

    def add_two_columns(
        self,
        left_content: Callable[[], None],
        right_content: Callable[[], None],
        column_gap: float = 10,
        ratio: float = 0.5,
    ) -> float:
        """
        Draw two columns side by side and resume below the taller one.

        The margins are narrowed while each callback runs, so callbacks
        should position content from `margin_left` and measure with
        `get_content_width()`. `ratio` is the left column's share of the
        width available after the gap.
        """
        start_y = self.current_y
        start_page = self.current_page
        available = self.get_content_width() - column_gap
        left_width = available * ratio

        original_left = self.config.margin_left
        original_right = self.config.margin_right

        try:
            # Left column
            self.config.margin_right = self.config.page_width - original_left - left_width
            left_content()
            left_end = self.current_y

            # Right column; if the left one spilled onto a new page the
            # right one starts at the top of that page
            self.current_y = start_y if self.current_page == start_page else self.config.margin_top
            self.config.margin_left = original_left + left_width + column_gap
            self.config.margin_right = original_right
            right_page = self.current_page
            right_content()
            right_end = self.current_y
        finally:
            self.config.margin_left = original_left
            self.config.margin_right = original_right

        if self.current_page != right_page:
            left_end = right_end
        self.current_y = max(left_end, right_end)
        return self.current_y

    # ========================================================================
    # Output
    # ========================================================================

    def texts(self) -> List[str]:
        """Every text run drawn so far, in order."""
        return [t.text for t in self.text_log]

    def to_bytes(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        if self._finished is None:
            self.canvas.save()
            self._finished = self._buffer.getvalue()
        return self._finished

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())
        logger.info(f"PDF saved: {path} ({self.page_count} pages)")
        return path
