"""
Font registration for the direct-draw PDF generators.

DejaVu Sans is preferred because it carries the bullet and icon glyphs
(▸ ▪ ✉ ☎ ⌂ →) the layouts use. Without it the builder falls back to the
built-in Helvetica family and swaps those glyphs for WinAnsi-safe ones.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)


FONT_SEARCH_PATHS = [
    "/usr/share/fonts/truetype/dejavu/",
    "/usr/share/fonts/TTF/",
    "/usr/share/fonts/dejavu/",
    "/usr/local/share/fonts/",
    os.path.expanduser("~/.fonts/"),
    os.path.expanduser("~/.local/share/fonts/"),
    "/Library/Fonts/",
    os.path.expanduser("~/Library/Fonts/"),
    str(Path(__file__).parent.parent.parent / "assets" / "fonts"),
]


def find_font_file(filename: str, search_paths: Optional[List[str]] = None) -> Optional[str]:
    """First existing `filename` across the search paths."""
    for search_path in search_paths or FONT_SEARCH_PATHS:
        path = Path(search_path) / filename
        if path.exists():
            return str(path)
    return None


class FontManager:
    """
    Registers the sans-serif family used by every generator.

    Handles:
    - Font file discovery across multiple paths
    - TTF registration with ReportLab
    - Style -> font name mapping (normal, bold, italic, bolditalic)
    """

    DEFAULT_SEARCH_PATHS = FONT_SEARCH_PATHS

    DEJAVU_FONTS = {
        'normal': ('DejaVuSans', 'DejaVuSans.ttf'),
        'bold': ('DejaVuSans-Bold', 'DejaVuSans-Bold.ttf'),
        'italic': ('DejaVuSans-Oblique', 'DejaVuSans-Oblique.ttf'),
        'bolditalic': ('DejaVuSans-BoldOblique', 'DejaVuSans-BoldOblique.ttf'),
    }

    FALLBACK_FONTS = {
        'normal': 'Helvetica',
        'bold': 'Helvetica-Bold',
        'italic': 'Helvetica-Oblique',
        'bolditalic': 'Helvetica-BoldOblique',
    }

    # Glyphs missing from the WinAnsi encoding of the standard fonts
    FALLBACK_GLYPHS = {
        '▸': '›',
        '▪': '•',
        '▶ ': '',
        '→': '»',
        '✉ ': '',
        '☎ ': '',
        '⌂ ': '',
        '✉': '',
        '☎': '',
        '⌂': '',
    }

    def __init__(self, additional_paths: Optional[List[str]] = None):
        self.search_paths = list(self.DEFAULT_SEARCH_PATHS)
        if additional_paths:
            self.search_paths = list(additional_paths) + self.search_paths

        self._fonts: Dict[str, str] = {}
        self._use_fallback = False
        self._register()

    @property
    def uses_fallback(self) -> bool:
        return self._use_fallback

    def find_font_file(self, filename: str) -> Optional[str]:
        """Find a font file in search paths."""
        return find_font_file(filename, self.search_paths)

    def _register(self):
        registered = {}
        for style, (font_name, font_file) in self.DEJAVU_FONTS.items():
            if font_name in pdfmetrics.getRegisteredFontNames():
                registered[style] = font_name
                continue
            font_path = self.find_font_file(font_file)
            if not font_path:
                break
            try:
                pdfmetrics.registerFont(TTFont(font_name, font_path))
            except Exception as e:
                logger.warning(f"Failed to register font {font_name}: {e}")
                break
            registered[style] = font_name
            logger.debug(f"Registered font: {font_name} from {font_path}")

        if len(registered) == len(self.DEJAVU_FONTS):
            self._fonts = registered
        else:
            logger.info("DejaVu Sans not found, using Helvetica fallback")
            self._fonts = dict(self.FALLBACK_FONTS)
            self._use_fallback = True

    def font_name(self, style: str = "normal") -> str:
        """Registered font name for a style."""
        key = style.lower().replace("-", "").replace("_", "").replace(" ", "")
        if key in ("regular", ""):
            key = "normal"
        elif key in ("oblique",):
            key = "italic"
        elif key in ("boldoblique", "italicbold"):
            key = "bolditalic"
        return self._fonts.get(key, self._fonts["normal"])

    def safe_text(self, text: str) -> str:
        """Replace glyphs the active font family cannot draw."""
        if not self._use_fallback or not text:
            return text
        for glyph, replacement in self.FALLBACK_GLYPHS.items():
            text = text.replace(glyph, replacement)
        return text


# Global instance
_font_manager: Optional[FontManager] = None


def get_font_manager() -> FontManager:
    """Get the shared font manager (fonts register once per process)."""
    global _font_manager
    if _font_manager is None:
        from config.settings import settings
        extra = [str(settings.fonts_dir)] if settings.fonts_dir else None
        _font_manager = FontManager(additional_paths=extra)
    return _font_manager
