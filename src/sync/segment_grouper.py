"""
Segment grouping: split the synchronized timeline into contextual segments
wherever the speech pauses for longer than a threshold, and summarize each
segment for the notes generator.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Sequence, Union

import numpy as np

from src.ocr.types import ClassifiedContent, ContentType
from src.utils.constant import DEFAULT_MAX_SEGMENT_GAP_MS
from src.utils.timestamps import gap_ms, to_milliseconds, utc_now
from .types import Segment, SegmentContext, SynchronizedPair

logger = logging.getLogger(__name__)


class SegmentGrouper:
    """Partition an ordered pair sequence into time-contiguous segments."""

    # Phrases for visual content types without counts
    TYPE_PHRASES: Dict[ContentType, str] = {
        ContentType.TEXT: 'Text content',
        ContentType.CHART: 'Chart or graph',
        ContentType.DIAGRAM: 'Diagram or flowchart',
        ContentType.IMAGE: 'Image content',
        ContentType.UNKNOWN: 'Unknown visual content',
    }

    def __init__(self, max_gap_ms: Union[float, timedelta] = DEFAULT_MAX_SEGMENT_GAP_MS):
        """
        Args:
            max_gap_ms: A gap between neighbouring pairs larger than this
                        (ms or timedelta) starts a new segment
        """
        self.max_gap_ms = to_milliseconds(max_gap_ms)

    def group(self, pairs: Sequence[SynchronizedPair]) -> List[Segment]:
        """
        Group pairs into segments.

        Every input pair ends up in exactly one segment; segments are ordered
        and non-empty.
        """
        if not pairs:
            return []

        sorted_pairs = sorted(pairs, key=lambda p: p.timestamp)

        segments: List[Segment] = []
        current = [sorted_pairs[0]]
        for prev, pair in zip(sorted_pairs, sorted_pairs[1:]):
            if gap_ms(pair.timestamp, prev.timestamp) > self.max_gap_ms:
                segments.append(Segment(pairs=tuple(current)))
                current = []
            current.append(pair)
        segments.append(Segment(pairs=tuple(current)))

        logger.debug("Grouped %d pairs into %d segments", len(sorted_pairs), len(segments))
        return segments

    def describe_visual(self, content: ClassifiedContent) -> str:
        """Human-readable phrase for one piece of visual content."""
        metadata = content.metadata or {}
        if content.type == ContentType.TABLE:
            rows = metadata.get('row_count') or 'unknown'
            cols = metadata.get('column_count') or 'unknown'
            return f"Table with {rows} rows and {cols} columns"
        if content.type == ContentType.CODE:
            lines = metadata.get('line_count') or 'unknown'
            return f"Code snippet ({lines} lines)"
        return self.TYPE_PHRASES.get(content.type, self.TYPE_PHRASES[ContentType.UNKNOWN])

    def extract_context(self, segment: Union[Segment, Sequence[SynchronizedPair]]) -> SegmentContext:
        """
        Summarize a segment.

        Returns:
            SegmentContext with the space-joined transcription, one phrase per
            distinct visual type (first occurrence order) and the first pair's
            timestamp (now for an empty segment)
        """
        pairs = list(segment)
        if not pairs:
            return SegmentContext(transcription_text='', visual_summary='', timestamp=utc_now())

        transcription_text = ' '.join(pair.utterance.text for pair in pairs)

        seen_types = set()
        descriptions = []
        for pair in pairs:
            content = pair.visual_content
            if content is None or content.type in seen_types:
                continue
            seen_types.add(content.type)
            descriptions.append(self.describe_visual(content))

        return SegmentContext(
            transcription_text=transcription_text,
            visual_summary=', '.join(descriptions),
            timestamp=pairs[0].timestamp,
        )

    @staticmethod
    def summarize(segments: Sequence[Segment]) -> Dict[str, float]:
        """
        Aggregate numbers over a list of segments.

        Returns:
            {
                'num_segments': int,
                'avg_pairs_per_segment': float,
                'avg_duration_ms': float,
                'median_gap_between_segments_ms': float
            }
        """
        if not segments:
            return {'num_segments': 0, 'avg_pairs_per_segment': 0.0,
                    'avg_duration_ms': 0.0, 'median_gap_between_segments_ms': 0.0}

        gaps = [gap_ms(nxt.start, cur.end) for cur, nxt in zip(segments, segments[1:])]
        return {
            'num_segments': len(segments),
            'avg_pairs_per_segment': float(np.mean([len(s) for s in segments])),
            'avg_duration_ms': float(np.mean([s.duration_ms for s in segments])),
            'median_gap_between_segments_ms': float(np.median(gaps)) if gaps else 0.0,
        }


def group_into_segments(
    pairs: Sequence[SynchronizedPair],
    max_gap_ms: Union[float, timedelta] = DEFAULT_MAX_SEGMENT_GAP_MS
) -> List[Segment]:
    """Convenience function around SegmentGrouper.group."""
    return SegmentGrouper(max_gap_ms=max_gap_ms).group(pairs)


def extract_segment_context(segment: Union[Segment, Sequence[SynchronizedPair]]) -> SegmentContext:
    """Summarize one segment with the default phrases."""
    return SegmentGrouper().extract_context(segment)
