"""Tests for line layout classification."""

from src.ocr.layout_analyzer import LayoutClassifier, classify_lines
from src.ocr.types import ClassifiedLine, LineType


class TestClassifyLines:
    """Tests for classify_lines."""

    def test_key_value_block(self):
        """Two key: value lines are typed KEY_VALUE with confidence 0.85."""
        lines = list(classify_lines("Name: Alice\nRole: Engineer"))
        assert [l.line_type for l in lines] == [LineType.KEY_VALUE, LineType.KEY_VALUE]
        assert [l.confidence for l in lines] == [0.85, 0.85]
        assert [l.content for l in lines] == ["Name: Alice", "Role: Engineer"]

    def test_heading_rules(self):
        """Uppercase lines and lines ending with a colon are headings."""
        lines = list(classify_lines("AGENDA\nAction items:"))
        assert [l.line_type for l in lines] == [LineType.HEADING, LineType.HEADING]
        assert lines[0].confidence == 0.8

    def test_bullet_rules(self):
        """Bullet glyphs and numbered items are bullets."""
        lines = list(classify_lines("• Ship beta\n- Fix login\n* Review docs\n2. Plan launch"))
        assert all(l.line_type == LineType.BULLET for l in lines)
        assert all(l.confidence == 0.9 for l in lines)

    def test_paragraph_fallback(self):
        """Lines matching no other rule are paragraphs."""
        lines = list(classify_lines("We will revisit the roadmap next week"))
        assert lines[0].line_type == LineType.PARAGRAPH
        assert lines[0].confidence == 0.7

    def test_heading_wins_over_key_value(self):
        """Rule order: an uppercase key: value line is a heading."""
        lines = list(classify_lines("STATUS: OK"))
        assert lines[0].line_type == LineType.HEADING

    def test_blank_lines_dropped_and_trimmed(self):
        """Blank lines produce nothing and content is trimmed."""
        lines = list(classify_lines("\n   \n  Budget:   approved  \n\n"))
        assert len(lines) == 1
        assert lines[0].content == "Budget: approved"

    def test_empty_text(self):
        assert list(classify_lines("")) == []

    def test_restartable(self):
        """Calling again yields the same sequence."""
        text = "AGENDA\n- Item one\nOwner: Bob"
        assert list(classify_lines(text)) == list(classify_lines(text))

    def test_lazy(self):
        """Lines are produced on demand."""
        iterator = classify_lines("First line here\nSecond line here")
        first = next(iterator)
        assert isinstance(first, ClassifiedLine)
        assert first.content == "First line here"


class TestLayoutClassifier:
    """Tests for LayoutClassifier helpers."""

    def test_custom_confidences(self):
        classifier = LayoutClassifier(paragraph_confidence=0.5)
        lines = list(classifier.classify_lines("plain words"))
        assert lines[0].confidence == 0.5

    def test_summarize(self):
        """summarize counts every line type."""
        classifier = LayoutClassifier()
        lines = list(classifier.classify_lines("AGENDA\n- one\nName: Alice\nsome text"))
        assert LayoutClassifier.summarize(lines) == {
            'heading': 1, 'bullet': 1, 'key_value': 1, 'paragraph': 1,
        }

    def test_detect_keyvalue_pattern(self):
        """A form-like block is detected as a key:value pattern."""
        lines = list(classify_lines("Name: Alice\nRole: Engineer\nsome notes"))
        result = LayoutClassifier.detect_keyvalue_pattern(lines)
        assert result['has_pattern'] is True
        assert result['keyvalue_ratio'] == 2 / 3
        assert result['avg_key_length'] == 4.0
        assert result['keyvalue_lines'] == ["Name: Alice", "Role: Engineer"]

    def test_detect_keyvalue_pattern_single_pair(self):
        """One key:value line is not a pattern."""
        lines = list(classify_lines("Name: Alice"))
        assert LayoutClassifier.detect_keyvalue_pattern(lines)['has_pattern'] is False

    def test_detect_keyvalue_pattern_empty(self):
        result = LayoutClassifier.detect_keyvalue_pattern([])
        assert result['has_pattern'] is False
        assert result['keyvalue_ratio'] == 0.0
