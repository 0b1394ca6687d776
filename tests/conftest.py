"""Shared fixtures for meetsync tests."""

from datetime import datetime, timedelta, timezone

import pytest

from src.ocr.types import (
    ClassifiedContent,
    CodePayload,
    ContentType,
    Frame,
    TablePayload,
    TextPayload,
    VisualPayload,
)
from src.sync.types import Utterance

BASE_TIME = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    """Timestamp `seconds` after the test meeting start."""
    return BASE_TIME + timedelta(seconds=seconds)


@pytest.fixture
def make_frame():
    """Factory for frames captured `seconds` after the meeting start."""

    def _make(frame_id="f1", seconds=0.0, raw_text=None, **kwargs):
        return Frame(id=frame_id, captured_at=at(seconds), raw_text=raw_text, **kwargs)

    return _make


@pytest.fixture
def make_utterance():
    """Factory for utterances spoken `seconds` after the meeting start."""

    def _make(utterance_id="u1", seconds=0.0, text="hello", **kwargs):
        return Utterance(id=utterance_id, text=text, timestamp=at(seconds), **kwargs)

    return _make


@pytest.fixture
def make_content():
    """Factory for classified content at `seconds` after the meeting start."""

    def _make(frame_id="f1", seconds=0.0, content_type=ContentType.IMAGE, metadata=None):
        payloads = {
            ContentType.TABLE: TablePayload(headers=("a", "b"), rows=(("1", "2"),)),
            ContentType.CODE: CodePayload(text="x = 1;"),
            ContentType.TEXT: TextPayload(lines=()),
            ContentType.UNKNOWN: None,
        }
        payload = payloads.get(content_type, VisualPayload(description="caption"))
        return ClassifiedContent(
            type=content_type,
            payload=payload,
            confidence=0.8,
            timestamp=at(seconds),
            frame_id=frame_id,
            metadata=metadata or {},
        )

    return _make
