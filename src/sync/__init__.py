"""
Cross-modal synchronization of transcription and screen content.
Pairs utterances with classified frames and groups the timeline into segments.
"""

from .types import Utterance, SynchronizedPair, Segment, SegmentContext, NO_VISUAL_CONTENT
from .synchronizer import StreamSynchronizer, synchronize
from .segment_grouper import SegmentGrouper, group_into_segments, extract_segment_context

__all__ = [
    'Utterance',
    'SynchronizedPair',
    'Segment',
    'SegmentContext',
    'NO_VISUAL_CONTENT',
    'StreamSynchronizer',
    'synchronize',
    'SegmentGrouper',
    'group_into_segments',
    'extract_segment_context',
]
