"""
Text Normalization Utilities
Clean OCR'd screen text before classification
"""

import re
import unicodedata
from dataclasses import replace
from typing import Dict, List
import logging

from .types import OCRResult

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TextNormalizer:
    """
    Normalize raw OCR text from screen frames
    Handles: unicode, hyphenated line breaks, whitespace, homoglyphs, OCR errors

    normalize() is idempotent: normalize(normalize(x)) == normalize(x)
    """

    # Look-alike characters OCR engines emit for Latin text
    HOMOGLYPH_MAP: Dict[str, str] = {
        # Cyrillic
        'А': 'A', 'В': 'B', 'Е': 'E', 'К': 'K', 'М': 'M', 'Н': 'H',
        'О': 'O', 'Р': 'P', 'С': 'C', 'Т': 'T', 'Х': 'X',
        'а': 'a', 'е': 'e', 'о': 'o', 'р': 'p', 'с': 'c', 'х': 'x', 'у': 'y',
        # Greek
        'Α': 'A', 'Β': 'B', 'Ε': 'E', 'Κ': 'K', 'Μ': 'M', 'Ν': 'N',
        'Ο': 'O', 'Ρ': 'P', 'Τ': 'T', 'Χ': 'X', 'ο': 'o',
        # Ligatures
        'ﬁ': 'fi', 'ﬂ': 'fl', 'ﬀ': 'ff',
        # Typographic quotes
        '‘': "'", '’': "'", '“': '"', '”': '"',
    }

    # Word-level misrecognitions
    WORD_FIXES = [
        (re.compile(r'\bIhe\b'), 'The'),
        (re.compile(r'\b0f\b'), 'of'),
        (re.compile(r'\bl\b'), 'I'),
    ]

    _HYPHEN_BREAK = re.compile(r'(\w)-[ \t]*\r?\n\s*(\w)')
    _WHITESPACE = re.compile(r'\s+')
    # O/o -> 0 and l/I -> 1 only when both neighbours are digits
    _NUMERIC_CONTEXT = re.compile(r'(?<=\d)[OolI](?=\d)')
    _NUMERIC_FIXES = {'O': '0', 'o': '0', 'l': '1', 'I': '1'}

    def __init__(
        self,
        join_hyphenated: bool = True,
        normalize_whitespace: bool = True,
        fix_homoglyphs: bool = True,
        fix_common_ocr_errors: bool = True
    ):
        """
        Args:
            join_hyphenated: Join words split by a hyphen at a line break (wo-\\nrd -> word)
            normalize_whitespace: Collapse all whitespace to single spaces
            fix_homoglyphs: Map Cyrillic/Greek look-alikes, ligatures and curly quotes
            fix_common_ocr_errors: Fix digit/letter confusions and frequent word errors
        """
        self.join_hyphenated = join_hyphenated
        self.normalize_whitespace = normalize_whitespace
        self.fix_homoglyphs = fix_homoglyphs
        self.fix_common_ocr_errors = fix_common_ocr_errors

        self._homoglyph_table = str.maketrans(self.HOMOGLYPH_MAP)

    def normalize(self, text: str) -> str:
        """
        Apply full normalization pipeline

        Args:
            text: Raw OCR text (may be empty)

        Returns:
            Normalized text
        """
        if not text:
            return ""

        # 1. Unicode normalization (NFC form)
        text = unicodedata.normalize('NFC', text)

        # 2. Join words hyphenated across a line break
        if self.join_hyphenated:
            text = self._join_hyphenated(text)

        # 3. Collapse whitespace
        if self.normalize_whitespace:
            text = self._normalize_whitespace(text)

        # 4. Homoglyphs
        if self.fix_homoglyphs:
            text = text.translate(self._homoglyph_table)

        # 5. Common OCR errors
        if self.fix_common_ocr_errors:
            text = self._fix_ocr_errors(text)

        # Homoglyph mapping can leave base letters next to combining marks
        return unicodedata.normalize('NFC', text)

    def normalize_line(self, line: str) -> str:
        """Normalize a single line; always collapses whitespace inside the line"""
        return self._normalize_whitespace(self.normalize(line))

    def normalize_lines(self, text: str) -> List[str]:
        """
        Normalize text line by line, keeping line structure
        Blank lines are dropped
        """
        if not text:
            return []
        if self.join_hyphenated:
            text = self._join_hyphenated(unicodedata.normalize('NFC', text))
        lines = []
        for raw_line in text.splitlines():
            line = self.normalize_line(raw_line)
            if line:
                lines.append(line)
        return lines

    # Private normalization methods

    def _join_hyphenated(self, text: str) -> str:
        return self._HYPHEN_BREAK.sub(r'\1\2', text)

    def _normalize_whitespace(self, text: str) -> str:
        """Normalize all whitespace to single spaces"""
        return self._WHITESPACE.sub(' ', text).strip()

    def _fix_ocr_errors(self, text: str) -> str:
        """
        Fix common OCR character confusions

        Strategy:
        - Between digits, O/o -> 0 and l/I -> 1 (1O5 -> 105)
        - Frequent whole-word errors (Ihe -> The, 0f -> of, standalone l -> I)
        """
        text = self._NUMERIC_CONTEXT.sub(lambda m: self._NUMERIC_FIXES[m.group(0)], text)
        for pattern, correct in self.WORD_FIXES:
            text = pattern.sub(correct, text)
        return text


_default_normalizer = TextNormalizer()


def normalize(text: str) -> str:
    """Normalize OCR text with the default settings"""
    return _default_normalizer.normalize(text)


def normalize_line(line: str) -> str:
    return _default_normalizer.normalize_line(line)


def enhance_ocr_result(ocr_result: OCRResult, normalizer: TextNormalizer = None) -> OCRResult:
    """
    Return a copy of an OCR result with normalized text

    Args:
        ocr_result: OCR result to clean
        normalizer: TextNormalizer instance (or use default)
    """
    if not ocr_result.text:
        return ocr_result
    normalizer = normalizer or _default_normalizer
    enhanced = normalizer.normalize(ocr_result.text)
    if enhanced != ocr_result.text:
        logger.debug("Normalized OCR text for frame %s", ocr_result.frame_id)
    return replace(ocr_result, text=enhanced)
