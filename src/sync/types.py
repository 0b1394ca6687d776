"""
Data model for transcription utterances and their alignment with screen content.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Tuple

from src.ocr.types import ClassifiedContent
from src.utils.timestamps import format_timestamp, gap_ms, parse_timestamp

NO_VISUAL_CONTENT = "none"


@dataclass(frozen=True)
class Utterance:
    """One timestamped unit of transcribed speech."""

    id: str
    text: str
    timestamp: datetime
    speaker_id: Optional[int] = None
    confidence: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'timestamp', parse_timestamp(self.timestamp))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Utterance":
        """Build an Utterance from the transcription collaborator's dict shape."""
        speaker = data.get('speaker_id', data.get('speakerId'))
        return cls(
            id=str(data.get('id', '')),
            text=data.get('text') or '',
            timestamp=data.get('timestamp'),
            speaker_id=int(speaker) if speaker is not None else None,
            confidence=data.get('confidence'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'speaker_id': self.speaker_id,
            'text': self.text,
            'timestamp': format_timestamp(self.timestamp),
            'confidence': self.confidence,
        }


@dataclass(frozen=True)
class SynchronizedPair:
    """An utterance with the visual content closest to it in time (if any)."""

    utterance: Utterance
    visual_content: Optional[ClassifiedContent]
    sync_confidence: float

    def __post_init__(self):
        if not 0.0 <= self.sync_confidence <= 1.0:
            raise ValueError(f"sync_confidence must be in [0, 1], got {self.sync_confidence}")

    @property
    def timestamp(self) -> datetime:
        return self.utterance.timestamp

    @property
    def visual_content_type(self) -> str:
        if self.visual_content is None:
            return NO_VISUAL_CONTENT
        return self.visual_content.type.value

    def to_context_item(self) -> Dict[str, Any]:
        """Projection consumed by the notes-generation formatter."""
        return {
            'timestamp': format_timestamp(self.timestamp),
            'transcription': self.utterance.text,
            'visual_content_type': self.visual_content_type,
            'sync_confidence': self.sync_confidence,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'utterance': self.utterance.to_dict(),
            'visual_content': self.visual_content.to_dict() if self.visual_content else None,
            'timestamp': format_timestamp(self.timestamp),
            'sync_confidence': self.sync_confidence,
        }


@dataclass(frozen=True)
class Segment:
    """A maximal run of time-contiguous synchronized pairs."""

    pairs: Tuple[SynchronizedPair, ...]

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[SynchronizedPair]:
        return iter(self.pairs)

    def __getitem__(self, index):
        return self.pairs[index]

    @property
    def start(self) -> Optional[datetime]:
        return self.pairs[0].timestamp if self.pairs else None

    @property
    def end(self) -> Optional[datetime]:
        return self.pairs[-1].timestamp if self.pairs else None

    @property
    def duration_ms(self) -> float:
        if not self.pairs:
            return 0.0
        return gap_ms(self.end, self.start)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': format_timestamp(self.start) if self.start else None,
            'end': format_timestamp(self.end) if self.end else None,
            'duration_ms': self.duration_ms,
            'pairs': [pair.to_context_item() for pair in self.pairs],
        }


@dataclass(frozen=True)
class SegmentContext:
    """Compact textual/visual summary of a segment."""

    transcription_text: str
    visual_summary: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'transcription_text': self.transcription_text,
            'visual_summary': self.visual_summary,
            'timestamp': format_timestamp(self.timestamp),
        }
