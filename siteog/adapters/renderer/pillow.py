"""Pillow card renderer.

Implements CardRendererPort by drawing the card layout onto a Pillow
canvas and encoding it as PNG. The title block is word-wrapped to the
layout's text width, each line centered horizontally and the whole
column (logo, title, byline) centered vertically.
"""

import logging
import re
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from siteog.core.models import CardLayout
from siteog.core.ports import CardRendererPort

logger = logging.getLogger(__name__)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

# Triangle mark in a 116x100 view box, scaled to the layout's logo size.
LOGO_VIEWBOX = (116, 100)
LOGO_POINTS = ((57.5, 0.0), (115.0, 100.0), (0.0, 100.0))

BYLINE_GAP = 24

_SPACE_RUN_RE = re.compile(r"( +)")


def load_font(size: int, font_data: bytes | None = None) -> Font:
    """Load the custom font at size, or Pillow's default typeface.

    Unparsable font data falls back to the default typeface.
    """
    if font_data:
        try:
            return ImageFont.truetype(BytesIO(font_data), size)
        except OSError as e:
            logger.warning(f"Cannot parse font data, using default typeface: {e}")
    return ImageFont.load_default(size=size)


def text_width(text: str, font: Font, spacing: float = 0.0) -> float:
    """Width of text as drawn by _draw_line.

    Without extra spacing the line is measured as a whole, kerning
    included; otherwise glyph by glyph plus spacing between glyphs.
    """
    if not text:
        return 0.0
    if not spacing:
        return font.getlength(text)
    return sum(font.getlength(ch) for ch in text) + spacing * (len(text) - 1)


def wrap_text(text: str, font: Font, max_width: float, spacing: float = 0.0) -> list[str]:
    """Wrap text to max_width pixels, keeping its whitespace.

    Explicit newlines always break. Runs of spaces are kept as written,
    except at a soft break, where they are dropped from the end of the
    line. Words wider than max_width are split between characters.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for token in _SPACE_RUN_RE.split(paragraph):
            if not token:
                continue
            candidate = current + token
            if text_width(candidate, font, spacing) <= max_width:
                current = candidate
                continue
            if token.startswith(" "):
                if current:
                    lines.append(current)
                    current = ""
                continue
            if current.strip():
                lines.append(current.rstrip(" "))
                current = ""
            for ch in token:
                if current and text_width(current + ch, font, spacing) > max_width:
                    lines.append(current)
                    current = ch
                else:
                    current += ch
        lines.append(current)
    return lines


class PillowCardRenderer(CardRendererPort):
    """Renders card layouts to PNG with Pillow."""

    def __init__(self, image_format: str = "PNG"):
        """Initialize the renderer.

        Args:
            image_format: Pillow encoder name for the output image.
        """
        self.image_format = image_format

    def render(self, layout: CardLayout, font_data: bytes | None = None) -> bytes:
        """Draw the card and return the encoded image."""
        image = Image.new("RGB", (layout.width, layout.height), layout.background_color)
        draw = ImageDraw.Draw(image)

        title_font = load_font(layout.font_size, font_data)
        spacing = layout.letter_spacing * layout.font_size
        line_box = layout.font_size * layout.line_height
        lines = wrap_text(layout.title, title_font, layout.text_width, spacing)

        byline_font = None
        if layout.byline:
            byline_font = load_font(layout.byline_font_size, font_data)

        # Total column height, centered on the canvas
        column_height = len(lines) * line_box
        if layout.show_logo:
            column_height += layout.logo_height + layout.title_margin_top
        if byline_font is not None:
            column_height += BYLINE_GAP + layout.byline_font_size * layout.line_height
        y = (layout.height - column_height) / 2

        if layout.show_logo:
            self._draw_logo(draw, layout, y)
            y += layout.logo_height + layout.title_margin_top

        for line in lines:
            self._draw_line(draw, line, title_font, layout, y, line_box, spacing, layout.text_color)
            y += line_box

        if byline_font is not None:
            y += BYLINE_GAP
            self._draw_line(
                draw,
                layout.byline,
                byline_font,
                layout,
                y,
                layout.byline_font_size * layout.line_height,
                0.0,
                layout.byline_color,
            )

        buffer = BytesIO()
        image.save(buffer, self.image_format)
        return buffer.getvalue()

    @staticmethod
    def _draw_logo(draw: ImageDraw.ImageDraw, layout: CardLayout, top: float) -> None:
        scale_x = layout.logo_width / LOGO_VIEWBOX[0]
        scale_y = layout.logo_height / LOGO_VIEWBOX[1]
        left = (layout.width - layout.logo_width) / 2
        points = [(left + x * scale_x, top + y * scale_y) for x, y in LOGO_POINTS]
        draw.polygon(points, fill=layout.text_color)

    @staticmethod
    def _draw_line(
        draw: ImageDraw.ImageDraw,
        line: str,
        font: Font,
        layout: CardLayout,
        top: float,
        line_box: float,
        spacing: float,
        color: tuple[int, int, int],
    ) -> None:
        size = getattr(font, "size", layout.font_size)
        x = (layout.width - text_width(line, font, spacing)) / 2
        y = top + (line_box - size) / 2
        if not spacing:
            draw.text((x, y), line, font=font, fill=color)
            return
        # Letter spacing has no Pillow equivalent, so kerning and shaping
        # across glyphs are lost on this path.
        for ch in line:
            draw.text((x, y), ch, font=font, fill=color)
            x += font.getlength(ch) + spacing
