"""
OCR Module - Screen text normalization and content classification.

This module provides:
- TextNormalizer: Clean raw OCR text (whitespace, hyphenation, OCR errors)
- LayoutClassifier: Type lines as heading / bullet / key-value / paragraph
- TableExtractor: Extract delimiter or whitespace aligned tables
- ContentClassifier: Classify a frame as table, code, chart, diagram, image or text
- TokenClassifier: Keyword vocabularies behind the code and visual heuristics
"""

from .types import (
    ContentType,
    LineType,
    Frame,
    OCRResult,
    ClassifiedLine,
    ClassifiedContent,
    TablePayload,
    CodePayload,
    VisualPayload,
    TextPayload,
    extract_text_from_frame,
)
from .text_normalizer import TextNormalizer, normalize, enhance_ocr_result
from .layout_analyzer import LayoutClassifier, classify_lines
from .table_extractor import TableExtractor, extract_table
from .token_classifier import TokenClassifier
from .content_classifier import (
    ContentClassifier,
    detect_content,
    detect_code,
    detect_visual_element,
)

__all__ = [
    # Data model
    'ContentType',
    'LineType',
    'Frame',
    'OCRResult',
    'ClassifiedLine',
    'ClassifiedContent',
    'TablePayload',
    'CodePayload',
    'VisualPayload',
    'TextPayload',
    'extract_text_from_frame',

    # Normalization
    'TextNormalizer',
    'normalize',
    'enhance_ocr_result',

    # Layout and tables
    'LayoutClassifier',
    'classify_lines',
    'TableExtractor',
    'extract_table',

    # Content classification
    'TokenClassifier',
    'ContentClassifier',
    'detect_content',
    'detect_code',
    'detect_visual_element',
]
