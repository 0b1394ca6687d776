"""
Stream synchronization: pair every transcription utterance with the
classified screen content closest to it in time.

Utterances drive the pairing: one pair per utterance. Visual content that no
utterance picks is simply not referenced.
"""

import logging
from datetime import timedelta
from typing import List, Optional, Sequence, Tuple, Union

from src.ocr.types import ClassifiedContent
from src.utils.constant import DEFAULT_MAX_SYNC_GAP_MS
from src.utils.timestamps import gap_ms, to_milliseconds
from .types import SynchronizedPair, Utterance

logger = logging.getLogger(__name__)


class StreamSynchronizer:
    """
    Align utterances with visual content by timestamp.

    Confidence decays linearly with the temporal distance: 1.0 at zero gap,
    approaching 0 at max_gap_ms. Beyond the maximum gap the utterance is kept
    without visual content and with confidence 0.
    """

    def __init__(self, max_gap_ms: Union[float, timedelta] = DEFAULT_MAX_SYNC_GAP_MS):
        """
        Args:
            max_gap_ms: Maximum distance (ms or timedelta) between an utterance
                        and the visual content paired with it
        """
        self.max_gap_ms = to_milliseconds(max_gap_ms)

    def synchronize(
        self,
        visual_contents: Sequence[ClassifiedContent],
        utterances: Sequence[Utterance]
    ) -> List[SynchronizedPair]:
        """
        Pair each utterance with its nearest visual content.

        Args:
            visual_contents: Classified content of any number of frames
            utterances: Transcription utterances

        Returns:
            One SynchronizedPair per utterance, ordered by utterance timestamp
        """
        if not utterances:
            return []

        # Stable sorts: equal timestamps keep input order
        sorted_visuals = sorted(visual_contents, key=lambda c: c.timestamp)
        sorted_utterances = sorted(utterances, key=lambda u: u.timestamp)

        pairs = [self._pair(utterance, sorted_visuals) for utterance in sorted_utterances]

        matched = sum(1 for p in pairs if p.visual_content is not None)
        logger.debug(
            "Synchronized %d utterances with %d visual contents (%d matched, max gap %.0f ms)",
            len(pairs), len(sorted_visuals), matched, self.max_gap_ms
        )
        return pairs

    def find_closest(
        self,
        utterance: Utterance,
        sorted_visuals: Sequence[ClassifiedContent]
    ) -> Tuple[Optional[ClassifiedContent], float]:
        """
        Linear scan for the visual content closest to the utterance.

        Ties go to the earliest visual content (input must be sorted).

        Returns:
            (closest content or None, gap in ms)
        """
        closest = None
        smallest_gap = float('inf')
        for content in sorted_visuals:
            gap = gap_ms(content.timestamp, utterance.timestamp)
            if gap < smallest_gap:
                smallest_gap = gap
                closest = content
        return closest, smallest_gap

    def confidence_for_gap(self, gap: float) -> float:
        """Linear decay: 1 - gap / max_gap; 0 outside the window."""
        if gap == 0:
            return 1.0
        if self.max_gap_ms == 0 or gap >= self.max_gap_ms:
            return 0.0
        return 1.0 - gap / self.max_gap_ms

    def _pair(self, utterance: Utterance, sorted_visuals: Sequence[ClassifiedContent]) -> SynchronizedPair:
        closest, gap = self.find_closest(utterance, sorted_visuals)
        confidence = self.confidence_for_gap(gap) if closest is not None else 0.0

        # A zero confidence pair carries no visual content
        if confidence <= 0.0:
            return SynchronizedPair(utterance=utterance, visual_content=None, sync_confidence=0.0)

        return SynchronizedPair(utterance=utterance, visual_content=closest, sync_confidence=confidence)


def synchronize(
    visual_contents: Sequence[ClassifiedContent],
    utterances: Sequence[Utterance],
    max_gap_ms: Union[float, timedelta] = DEFAULT_MAX_SYNC_GAP_MS
) -> List[SynchronizedPair]:
    """Convenience function around StreamSynchronizer."""
    return StreamSynchronizer(max_gap_ms=max_gap_ms).synchronize(visual_contents, utterances)
