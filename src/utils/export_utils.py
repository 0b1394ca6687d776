"""
Utilities to export a synchronized meeting as JSON-ready data.
"""

import json
from typing import Any, Dict, Optional, Sequence

from src.ocr.types import ClassifiedContent
from src.sync.segment_grouper import SegmentGrouper
from src.sync.types import Segment, SynchronizedPair
from src.utils.timestamps import format_timestamp, utc_now


def export_meeting_to_dict(
    contents: Sequence[ClassifiedContent],
    pairs: Sequence[SynchronizedPair],
    segments: Sequence[Segment],
    metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build the export structure for a meeting.

    Args:
        contents: Classified content of all frames
        pairs: Synchronized pairs
        segments: Segments built from the pairs
        metadata: Extra metadata (title, participants, ...)
    """
    grouper = SegmentGrouper()
    return {
        'version': '1.0.0',
        'created_at': format_timestamp(utc_now()),
        'metadata': metadata or {},
        'visual': {
            'num_contents': len(contents),
            'contents': [c.to_dict() for c in contents],
        },
        'sync': {
            'num_pairs': len(pairs),
            'pairs': [p.to_context_item() for p in pairs],
        },
        'segments': {
            'num_segments': len(segments),
            'segments': [
                {**s.to_dict(), 'context': grouper.extract_context(s).to_dict()}
                for s in segments
            ],
        },
    }


def export_meeting_to_json(
    contents: Sequence[ClassifiedContent],
    pairs: Sequence[SynchronizedPair],
    segments: Sequence[Segment],
    metadata: Optional[Dict[str, Any]] = None,
    indent: int = 2
) -> str:
    """Serialize export_meeting_to_dict() as a JSON string."""
    data = export_meeting_to_dict(contents, pairs, segments, metadata)
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)


def export_context_items(pairs: Sequence[SynchronizedPair]) -> str:
    """
    Lightweight export: only the per-pair projection the notes generator reads
    ({timestamp, transcription, visual_content_type, sync_confidence}).
    """
    return json.dumps([p.to_context_item() for p in pairs], indent=2, ensure_ascii=False)
