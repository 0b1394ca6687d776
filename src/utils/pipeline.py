"""
Meeting pipeline: Frame → Classification → Synchronization → Segments
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Union

from src.ocr.content_classifier import ContentClassifier
from src.ocr.types import ClassifiedContent, Frame
from src.sync.segment_grouper import SegmentGrouper
from src.sync.synchronizer import StreamSynchronizer
from src.sync.types import Segment, SynchronizedPair, Utterance
from src.utils.constant import DEFAULT_MAX_SEGMENT_GAP_MS, DEFAULT_MAX_SYNC_GAP_MS
from src.utils.timestamps import format_timestamp

logger = logging.getLogger(__name__)


class MeetingPipeline:
    """
    Controller for one meeting:
    owns the append-only frame, content and utterance buffers, classifies
    each frame on arrival and recomputes pairs/segments from the full
    history on demand.
    """

    def __init__(
        self,
        content_classifier: Optional[ContentClassifier] = None,
        max_sync_gap_ms: Union[float, timedelta] = DEFAULT_MAX_SYNC_GAP_MS,
        max_segment_gap_ms: Union[float, timedelta] = DEFAULT_MAX_SEGMENT_GAP_MS
    ):
        """
        Args:
            content_classifier: ContentClassifier instance (created if None)
            max_sync_gap_ms: Maximum utterance/visual distance for pairing
            max_segment_gap_ms: Pause length that starts a new segment
        """
        self.content_classifier = content_classifier or ContentClassifier()
        self.synchronizer = StreamSynchronizer(max_gap_ms=max_sync_gap_ms)
        self.grouper = SegmentGrouper(max_gap_ms=max_segment_gap_ms)

        self.frames: List[Frame] = []
        self.contents: List[ClassifiedContent] = []
        self.utterances: List[Utterance] = []

    def add_frame(self, frame: Union[Frame, Dict[str, Any]]) -> List[ClassifiedContent]:
        """
        Register a captured frame and classify it.

        Args:
            frame: Frame or the capture collaborator's dict

        Returns:
            The frame's classified content

        Raises:
            InvalidTimestampError: frame dict carries an unparseable timestamp
        """
        if isinstance(frame, dict):
            frame = Frame.from_dict(frame)

        detected = self.content_classifier.detect(frame)
        self.frames.append(frame)
        self.contents.extend(detected)
        logger.debug("Frame %s classified as %s", frame.id, [c.type.value for c in detected])
        return detected

    def add_contents(self, contents: List[ClassifiedContent]) -> None:
        """Register content classified elsewhere (e.g. by a BatchProcessor)."""
        self.contents.extend(contents)

    def add_utterance(self, utterance: Union[Utterance, Dict[str, Any]]) -> Utterance:
        """
        Register a transcription utterance.

        Raises:
            InvalidTimestampError: utterance dict carries an unparseable timestamp
        """
        if isinstance(utterance, dict):
            utterance = Utterance.from_dict(utterance)
        self.utterances.append(utterance)
        return utterance

    def synchronize(self) -> List[SynchronizedPair]:
        """Pair every utterance so far with its nearest visual content."""
        return self.synchronizer.synchronize(self.contents, self.utterances)

    def segments(self) -> List[Segment]:
        """Recompute segments over the full history."""
        return self.grouper.group(self.synchronize())

    def process(self) -> Dict[str, Any]:
        """
        Run synchronization and grouping over everything received so far.

        Returns:
            dict: pairs, segments, per-segment context and the flat context
            items for the notes generator
        """
        pairs = self.synchronize()
        segments = self.grouper.group(pairs)
        contexts = [self.grouper.extract_context(segment) for segment in segments]

        logger.info(
            "Processed meeting: %d frames, %d utterances, %d pairs, %d segments",
            len(self.frames), len(self.utterances), len(pairs), len(segments)
        )

        return {
            'success': True,
            'num_frames': len(self.frames),
            'num_contents': len(self.contents),
            'num_utterances': len(self.utterances),
            'pairs': pairs,
            'segments': segments,
            'contexts': contexts,
            'context_items': [pair.to_context_item() for pair in pairs],
        }

    def time_range(self) -> Dict[str, Optional[str]]:
        """First and last timestamp seen across both streams."""
        stamps = [c.timestamp for c in self.contents] + [u.timestamp for u in self.utterances]
        if not stamps:
            return {'start': None, 'end': None}
        return {'start': format_timestamp(min(stamps)), 'end': format_timestamp(max(stamps))}
