"""Tests for the OCR text normalizer."""

import random

import pytest

from src.ocr.text_normalizer import TextNormalizer, enhance_ocr_result, normalize, normalize_line
from src.ocr.types import OCRResult


class TestNormalize:
    """Tests for the default normalization pipeline."""

    def test_empty_input(self):
        """Empty input yields empty output."""
        assert normalize("") == ""
        assert normalize(None) == ""

    def test_collapses_whitespace(self):
        """All whitespace runs become single spaces and the ends are trimmed."""
        assert normalize("  quarterly \t review\n\nnotes  ") == "quarterly review notes"

    def test_joins_hyphenated_line_break(self):
        """Words split by a hyphen at a line break are joined."""
        assert normalize("wo-\nrd") == "word"
        assert normalize("imple-\n   mentation plan") == "implementation plan"

    def test_keeps_inline_hyphen(self):
        """Hyphens inside a line are not touched."""
        assert normalize("follow-up items") == "follow-up items"

    def test_numeric_context_fixes(self):
        """Letters misread inside numbers become digits."""
        assert normalize("Total 1O5") == "Total 105"
        assert normalize("2l4") == "214"
        assert normalize("Q1 2O24") == "Q1 2024"

    def test_letters_outside_numbers_untouched(self):
        """O and I next to letters stay letters."""
        assert normalize("OKR Index") == "OKR Index"

    def test_word_fixes(self):
        """Frequent whole-word misrecognitions are corrected."""
        assert normalize("Ihe plan") == "The plan"
        assert normalize("top 0f page") == "top of page"
        assert normalize("l think so") == "I think so"

    def test_homoglyphs(self):
        """Cyrillic look-alikes, ligatures and curly quotes are mapped."""
        assert normalize("Сat") == "Cat"
        assert normalize("ﬁle") == "file"
        assert normalize("“done”") == '"done"'

    def test_normalize_line_single_line(self):
        """normalize_line returns one trimmed line."""
        assert normalize_line("   Name:   Alice  ") == "Name: Alice"


class TestNormalizeIdempotence:
    """normalize(normalize(x)) == normalize(x)."""

    @pytest.mark.parametrize("text", [
        "",
        "wo-\nrd",
        "1O-\n1",
        "1OO1 1lO1 1Ol2",
        "l l l",
        "Ihe 0f l",
        "у́ ё",
        " ́",
        "a-\ńb",
        "  mixed　spaces\r\n",
    ])
    def test_known_tricky_inputs(self, text):
        """Hand-picked inputs around rule interactions."""
        once = normalize(text)
        assert normalize(once) == once

    @pytest.mark.parametrize("seed", range(25))
    def test_random_inputs(self, seed):
        """Random strings over an alphabet rich in OCR confusions."""
        rng = random.Random(seed)
        alphabet = "aOolI0123456789 -\n\t:|fheСоу́ﬁ’"
        text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 60)))
        once = normalize(text)
        assert normalize(once) == once


class TestTextNormalizerOptions:
    """Tests for the configurable normalizer."""

    def test_disable_ocr_fixes(self):
        """With OCR fixes off, digit/letter confusions are kept."""
        normalizer = TextNormalizer(fix_common_ocr_errors=False)
        assert normalizer.normalize("1O5") == "1O5"

    def test_disable_homoglyphs(self):
        """With homoglyph mapping off, look-alikes are kept."""
        normalizer = TextNormalizer(fix_homoglyphs=False)
        assert normalizer.normalize("Сat") == "Сat"

    def test_normalize_lines_keeps_structure(self):
        """normalize_lines keeps one entry per non-blank line and joins hyphenation."""
        normalizer = TextNormalizer()
        lines = normalizer.normalize_lines("First  line\n\nsecond wo-\nrd\n   \nthird")
        assert lines == ["First line", "second word", "third"]

    def test_normalize_lines_empty(self):
        assert TextNormalizer().normalize_lines("") == []


class TestEnhanceOCRResult:
    """Tests for enhance_ocr_result."""

    def test_returns_normalized_copy(self):
        """The OCR result is copied with normalized text."""
        result = OCRResult(text="Ihe  budget", frame_id="f1", timestamp="2024-05-01T10:00:00Z")
        enhanced = enhance_ocr_result(result)
        assert enhanced.text == "The budget"
        assert enhanced.frame_id == "f1"
        assert result.text == "Ihe  budget"

    def test_empty_text_unchanged(self):
        result = OCRResult(text="", frame_id="f1", timestamp="2024-05-01T10:00:00Z")
        assert enhance_ocr_result(result) is result
