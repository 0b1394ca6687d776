"""
Data model for screen frames and their classified content.

ClassifiedContent is a tagged union: the payload class is fixed by the
content type (see PAYLOAD_TYPES) and checked on construction.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from src.utils.timestamps import format_timestamp, parse_timestamp


class ContentType(Enum):
    """Content category of a screen frame."""
    TEXT = "text"
    TABLE = "table"
    CODE = "code"
    CHART = "chart"
    DIAGRAM = "diagram"
    IMAGE = "image"
    UNKNOWN = "unknown"


class LineType(Enum):
    """Semantic type of a single line of text."""
    HEADING = "heading"
    BULLET = "bullet"
    KEY_VALUE = "key_value"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Frame:
    """One timestamped screen capture with its externally extracted text."""

    id: str
    captured_at: datetime
    source_app: Optional[str] = None
    source_window: Optional[str] = None
    raw_text: Optional[str] = None
    image: Optional[Any] = None

    def __post_init__(self):
        object.__setattr__(self, 'captured_at', parse_timestamp(self.captured_at))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Frame":
        """
        Build a Frame from the capture collaborator's loose dict shape.

        Recognised keys: id, capturedAt/captured_at/timestamp,
        app_name/appName/source_app, window_name/windowName/source_window,
        text/raw_text, image/frame.
        """
        captured_at = _first(data, 'captured_at', 'capturedAt', 'timestamp')
        return cls(
            id=str(data.get('id', '')),
            captured_at=captured_at,
            source_app=_first(data, 'source_app', 'app_name', 'appName') or None,
            source_window=_first(data, 'source_window', 'window_name', 'windowName') or None,
            raw_text=_first(data, 'raw_text', 'text'),
            image=_first(data, 'image', 'frame') or None,
        )

    @property
    def timestamp(self) -> datetime:
        return self.captured_at


@dataclass(frozen=True)
class OCRResult:
    """Text extracted from a frame by an external OCR step."""

    text: str
    frame_id: str
    timestamp: datetime
    confidence: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, 'timestamp', parse_timestamp(self.timestamp))


def extract_text_from_frame(frame: Frame) -> OCRResult:
    """Wrap a frame's pre-populated OCR text as an OCRResult."""
    return OCRResult(
        text=frame.raw_text or "",
        frame_id=frame.id,
        timestamp=frame.captured_at,
        confidence=1.0,
    )


@dataclass(frozen=True)
class ClassifiedLine:
    """A single non-blank line with its layout type."""

    line_type: LineType
    content: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.line_type.value,
            'content': self.content,
            'confidence': self.confidence,
        }


@dataclass(frozen=True)
class TablePayload:
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def to_dict(self) -> Dict[str, Any]:
        return {'headers': list(self.headers), 'rows': [list(r) for r in self.rows]}


@dataclass(frozen=True)
class CodePayload:
    text: str
    language: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'language': self.language}


@dataclass(frozen=True)
class VisualPayload:
    """Chart, diagram or image: OCR text as description plus the frame image ref."""
    description: str
    image: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'description': self.description, 'has_image': self.image is not None}


@dataclass(frozen=True)
class TextPayload:
    lines: Tuple[ClassifiedLine, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {'lines': [line.to_dict() for line in self.lines]}


Payload = Union[TablePayload, CodePayload, VisualPayload, TextPayload, None]

PAYLOAD_TYPES = {
    ContentType.TABLE: TablePayload,
    ContentType.CODE: CodePayload,
    ContentType.CHART: VisualPayload,
    ContentType.DIAGRAM: VisualPayload,
    ContentType.IMAGE: VisualPayload,
    ContentType.TEXT: TextPayload,
    ContentType.UNKNOWN: type(None),
}


@dataclass(frozen=True)
class ClassifiedContent:
    """Classification of one frame."""

    type: ContentType
    payload: Payload
    confidence: float
    timestamp: datetime
    frame_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'timestamp', parse_timestamp(self.timestamp))
        expected = PAYLOAD_TYPES[self.type]
        if not isinstance(self.payload, expected):
            raise ValueError(
                f"{self.type.value} content requires {expected.__name__} payload, "
                f"got {type(self.payload).__name__}"
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence}")

    def with_metadata(self, **extra) -> "ClassifiedContent":
        return replace(self, metadata={**self.metadata, **extra})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'type': self.type.value,
            'payload': self.payload.to_dict() if self.payload is not None else None,
            'confidence': self.confidence,
            'timestamp': format_timestamp(self.timestamp),
            'frame_id': self.frame_id,
            'metadata': dict(self.metadata),
        }


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


__all__: List[str] = [
    'ContentType',
    'LineType',
    'Frame',
    'OCRResult',
    'extract_text_from_frame',
    'ClassifiedLine',
    'TablePayload',
    'CodePayload',
    'VisualPayload',
    'TextPayload',
    'Payload',
    'PAYLOAD_TYPES',
    'ClassifiedContent',
]
