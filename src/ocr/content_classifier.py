"""
Content Classifier: decide what a screen frame shows from its OCR text.

Types:
- table: rows and columns (delimiter or whitespace aligned)
- code: source code / SQL
- chart, diagram: visual elements recognised from their vocabulary
- image: frame with almost no text
- text: anything else, typed line by line
- unknown: frame without text

Detection is a strict priority chain (table -> code -> visual element -> text).
The first confident detector wins and the frame gets a single result; later
checks assume the earlier ones failed.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from src.utils.constant import (
    CODE_LINE_ENDING_RATIO,
    CODE_MAX_INDENT_WIDTHS,
    CODE_MIN_INDENTED_LINES,
    CODE_SCORE_SCALE,
    CODE_THRESHOLD,
    IMAGE_CONFIDENCE,
    IMAGE_MAX_CHARS,
    IMAGE_MAX_LINES,
    TABLE_CONFIDENCE,
    TEXT_CONFIDENCE,
    UNKNOWN_CONFIDENCE,
    VISUAL_HITS_SCALE,
    VISUAL_THRESHOLD,
)
from .layout_analyzer import LayoutClassifier
from .table_extractor import TableExtractor
from .text_normalizer import TextNormalizer
from .token_classifier import TokenClassifier
from .types import (
    ClassifiedContent,
    CodePayload,
    ContentType,
    Frame,
    OCRResult,
    TextPayload,
    VisualPayload,
    extract_text_from_frame,
)

logger = logging.getLogger(__name__)


class ContentClassifier:
    """
    Classifier for the content of a single screen frame.

    Uses TableExtractor, TokenClassifier and LayoutClassifier to map OCR text
    to one ContentType.
    """

    # Confidence thresholds for the heuristic detectors
    DEFAULT_THRESHOLDS = {
        ContentType.CODE: CODE_THRESHOLD,
        ContentType.CHART: VISUAL_THRESHOLD,
        ContentType.DIAGRAM: VISUAL_THRESHOLD,
    }

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        table_extractor: Optional[TableExtractor] = None,
        layout_classifier: Optional[LayoutClassifier] = None,
        token_classifier: Optional[TokenClassifier] = None,
        confidence_thresholds: Optional[Dict[ContentType, float]] = None,
        image_max_chars: int = IMAGE_MAX_CHARS,
        image_max_lines: int = IMAGE_MAX_LINES,
        code_score_scale: float = CODE_SCORE_SCALE,
        code_line_ending_ratio: float = CODE_LINE_ENDING_RATIO,
        code_min_indented_lines: int = CODE_MIN_INDENTED_LINES,
        code_max_indent_widths: int = CODE_MAX_INDENT_WIDTHS,
        visual_hits_scale: float = VISUAL_HITS_SCALE
    ):
        """
        Args:
            normalizer: TextNormalizer shared by the sub-components
            table_extractor: TableExtractor instance (created if None)
            layout_classifier: LayoutClassifier instance (created if None)
            token_classifier: TokenClassifier instance (created if None)
            confidence_thresholds: Custom thresholds per heuristic type
            image_max_chars: Text shorter than this may be an image
            image_max_lines: Text with fewer lines than this may be an image
            code_score_scale: Code score giving confidence 1.0
            code_line_ending_ratio: Share of lines ending in ; { } that counts as code
            code_min_indented_lines: Indented lines needed for the indentation signal
            code_max_indent_widths: Most distinct indentation widths still consistent
            visual_hits_scale: Vocabulary hits giving chart / diagram confidence 1.0
        """
        self.normalizer = normalizer or TextNormalizer()
        self.table_extractor = table_extractor or TableExtractor(normalizer=self.normalizer)
        self.layout_classifier = layout_classifier or LayoutClassifier(normalizer=self.normalizer)
        self.token_classifier = token_classifier or TokenClassifier()
        self.thresholds = self.DEFAULT_THRESHOLDS.copy()
        if confidence_thresholds:
            self.thresholds.update(confidence_thresholds)
        self.image_max_chars = image_max_chars
        self.image_max_lines = image_max_lines
        self.code_score_scale = code_score_scale
        self.code_line_ending_ratio = code_line_ending_ratio
        self.code_min_indented_lines = code_min_indented_lines
        self.code_max_indent_widths = code_max_indent_widths
        self.visual_hits_scale = visual_hits_scale

    def detect(self, frame: Frame, ocr_result: Optional[OCRResult] = None) -> List[ClassifiedContent]:
        """
        Classify a frame.

        Args:
            frame: Screen frame with pre-populated OCR text
            ocr_result: Optional OCR result used instead of frame.raw_text

        Returns:
            Non-empty list of ClassifiedContent (one entry per frame)
        """
        if not frame.raw_text and ocr_result is None:
            return [self._unknown(frame)]

        ocr = ocr_result or extract_text_from_frame(frame)
        text = ocr.text or ""

        try:
            return [self._detect_text(frame, text)]
        except Exception as e:
            logger.exception("Content detection failed for frame %s", frame.id)
            return [self._unknown(frame, error=str(e))]

    def _detect_text(self, frame: Frame, text: str) -> ClassifiedContent:
        # 1. Table
        table = self.table_extractor.extract(text)
        if table is not None:
            logger.debug("Frame %s: table %dx%d", frame.id, table.row_count, table.column_count)
            return ClassifiedContent(
                type=ContentType.TABLE,
                payload=table,
                confidence=TABLE_CONFIDENCE,
                timestamp=frame.captured_at,
                frame_id=frame.id,
                metadata={
                    'row_count': table.row_count,
                    'column_count': table.column_count,
                },
            )

        # 2. Code
        code = self.detect_code(text)
        if code['is_code']:
            logger.debug("Frame %s: code (%.2f, %s)", frame.id, code['confidence'], code['language'])
            return ClassifiedContent(
                type=ContentType.CODE,
                payload=CodePayload(text=text, language=code['language']),
                confidence=code['confidence'],
                timestamp=frame.captured_at,
                frame_id=frame.id,
                metadata={
                    'line_count': len(text.split('\n')),
                    'language': code['language'],
                },
            )

        # 3. Chart / diagram / image
        visual = self.detect_visual_element(text)
        if visual['type'] != ContentType.UNKNOWN:
            logger.debug("Frame %s: %s (%.2f)", frame.id, visual['type'].value, visual['confidence'])
            return ClassifiedContent(
                type=visual['type'],
                payload=VisualPayload(description=text, image=frame.image),
                confidence=visual['confidence'],
                timestamp=frame.captured_at,
                frame_id=frame.id,
                metadata={
                    'chart_hits': visual['chart_hits'],
                    'diagram_hits': visual['diagram_hits'],
                },
            )

        # 4. Plain text, typed line by line
        lines = tuple(self.layout_classifier.classify_lines(text))
        keyvalue = self.layout_classifier.detect_keyvalue_pattern(list(lines))
        return ClassifiedContent(
            type=ContentType.TEXT,
            payload=TextPayload(lines=lines),
            confidence=TEXT_CONFIDENCE,
            timestamp=frame.captured_at,
            frame_id=frame.id,
            metadata={
                'char_count': len(text),
                'line_count': len(text.split('\n')),
                'content_types': [line.line_type.value for line in lines],
                'keyvalue_ratio': keyvalue['keyvalue_ratio'],
            },
        )

    def detect_code(self, text: str) -> Dict[str, Any]:
        """
        Score how much the text looks like source code.

        Returns:
            {
                'is_code': bool,
                'confidence': float,  # min(1, score / code_score_scale)
                'score': int,
                'language': str,
                'keyword_counts': Dict[str, int]
            }
        """
        if not text:
            return {'is_code': False, 'confidence': 0.0, 'score': 0,
                    'language': 'unknown', 'keyword_counts': {}}

        lines = text.split('\n')
        score = 0

        # Consistent indentation
        widths = self.token_classifier.indentation_widths(lines)
        if len(widths) >= self.code_min_indented_lines and len(set(widths)) <= self.code_max_indent_widths:
            score += 2

        # Language keywords
        keyword_counts = self.token_classifier.count_keyword_classes(text)
        for hits in keyword_counts.values():
            if hits > 3:
                score += 2
            elif hits > 0:
                score += 1

        # Statement / block line endings
        if self.token_classifier.count_code_line_endings(lines) > len(lines) * self.code_line_ending_ratio:
            score += 2

        confidence = min(1.0, score / self.code_score_scale)
        is_code = confidence > self.thresholds[ContentType.CODE]

        return {
            'is_code': is_code,
            'confidence': confidence,
            'score': score,
            'language': self.token_classifier.guess_language(text) if is_code else 'unknown',
            'keyword_counts': keyword_counts,
        }

    def detect_visual_element(self, text: str) -> Dict[str, Any]:
        """
        Detect a chart, diagram or image from the frame text.

        Keyword hits are counted in the normalized text; the image fallback
        looks at the sparsity of the raw text.

        Returns:
            {
                'type': ContentType (CHART, DIAGRAM, IMAGE or UNKNOWN),
                'confidence': float,
                'chart_hits': int,
                'diagram_hits': int
            }
        """
        hits = self.token_classifier.count_visual_keywords(self.normalizer.normalize(text))
        chart_confidence = min(1.0, hits['chart'] / self.visual_hits_scale)
        diagram_confidence = min(1.0, hits['diagram'] / self.visual_hits_scale)

        result = {'chart_hits': hits['chart'], 'diagram_hits': hits['diagram']}

        # Ties go to chart
        if chart_confidence > self.thresholds[ContentType.CHART] and chart_confidence >= diagram_confidence:
            return {**result, 'type': ContentType.CHART, 'confidence': chart_confidence}
        if diagram_confidence > self.thresholds[ContentType.DIAGRAM]:
            return {**result, 'type': ContentType.DIAGRAM, 'confidence': diagram_confidence}

        # Sparse text: probably an image with a caption
        if len(text) < self.image_max_chars and len(text.split('\n')) < self.image_max_lines:
            return {**result, 'type': ContentType.IMAGE, 'confidence': IMAGE_CONFIDENCE}

        return {**result, 'type': ContentType.UNKNOWN, 'confidence': 0.0}

    def classify_frames(self, frames: Iterable[Frame]) -> List[ClassifiedContent]:
        """Classify every frame and flatten the results, keeping frame order."""
        contents: List[ClassifiedContent] = []
        for frame in frames:
            contents.extend(self.detect(frame))
        return contents

    @staticmethod
    def _unknown(frame: Frame, error: Optional[str] = None) -> ClassifiedContent:
        return ClassifiedContent(
            type=ContentType.UNKNOWN,
            payload=None,
            confidence=UNKNOWN_CONFIDENCE,
            timestamp=frame.captured_at,
            frame_id=frame.id,
            metadata={'error': error} if error else {},
        )

    @staticmethod
    def get_type_name(content_type: ContentType) -> str:
        """Display name for a content type."""
        names = {
            ContentType.TABLE: "Table",
            ContentType.CODE: "Code",
            ContentType.CHART: "Chart",
            ContentType.DIAGRAM: "Diagram",
            ContentType.IMAGE: "Image",
            ContentType.TEXT: "Text",
            ContentType.UNKNOWN: "Unknown",
        }
        return names.get(content_type, "Unknown")


_default_classifier = ContentClassifier()


def detect_content(
    frame: Frame,
    ocr_result: Optional[OCRResult] = None,
    confidence_thresholds: Optional[Dict[Any, float]] = None
) -> List[ClassifiedContent]:
    """
    Convenience function to classify one frame.

    Args:
        frame: Screen frame
        ocr_result: Optional pre-computed OCR result
        confidence_thresholds: Optional thresholds {'code': 0.5, 'chart': 0.4, ...}

    Returns:
        Non-empty list of ClassifiedContent

    Example:
        >>> frame = Frame(id='f1', captured_at='2024-05-01T10:00:00Z',
        ...               raw_text='Quarterly review agenda\\n'
        ...                        'Budget: approved for the next two quarters\\n'
        ...                        'Hiring: two engineers')
        >>> detect_content(frame)[0].type
        <ContentType.TEXT: 'text'>
    """
    if not confidence_thresholds:
        return _default_classifier.detect(frame, ocr_result)

    # Convert string keys to ContentType
    thresholds = {}
    for key, value in confidence_thresholds.items():
        if isinstance(key, ContentType):
            thresholds[key] = value
        elif key in [e.value for e in ContentType]:
            thresholds[ContentType(key)] = value

    return ContentClassifier(confidence_thresholds=thresholds).detect(frame, ocr_result)


def detect_code(text: str) -> Dict[str, Any]:
    return _default_classifier.detect_code(text)


def detect_visual_element(text: str) -> Dict[str, Any]:
    return _default_classifier.detect_visual_element(text)
