"""
Batch processor for screen frames.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from tqdm import tqdm

from src.ocr.content_classifier import ContentClassifier
from src.ocr.types import ClassifiedContent, Frame

logger = logging.getLogger(__name__)


class BatchProcessor:
    """
    Classify a batch of frames.

    Each frame is classified independently, so the work can be spread over a
    thread pool; results are always returned in input order.
    """

    def __init__(self, content_classifier: Optional[ContentClassifier] = None, show_progress: bool = True):
        """
        Args:
            content_classifier: ContentClassifier instance (created if None)
            show_progress: Show a tqdm progress bar
        """
        self.classifier = content_classifier or ContentClassifier()
        self.show_progress = show_progress

    def classify_frames(
        self,
        frames: Sequence[Frame],
        max_workers: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Classify every frame.

        Args:
            frames: Frames to classify
            max_workers: Thread pool size; None or 1 runs sequentially

        Returns:
            dict: {
                'contents': List[ClassifiedContent] in frame order,
                'processed': int,
                'success': int,
                'failed': int,
                'errors': List[{'frame_id', 'error'}]
            }
        """
        stats = {
            'contents': [],
            'processed': 0,
            'success': 0,
            'failed': 0,
            'errors': []
        }

        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                results = list(tqdm(
                    executor.map(self._classify_one, frames),
                    total=len(frames),
                    desc="Classifying frames",
                    disable=not self.show_progress
                ))
        else:
            results = [
                self._classify_one(frame)
                for frame in tqdm(frames, desc="Classifying frames", disable=not self.show_progress)
            ]

        for result in results:
            stats['processed'] += 1
            if result['success']:
                stats['success'] += 1
                stats['contents'].extend(result['contents'])
            else:
                stats['failed'] += 1
                stats['errors'].append({
                    'frame_id': result['frame_id'],
                    'error': result.get('error', 'Unknown error')
                })

        logger.info(
            "Classified %d frames (%d ok, %d failed)",
            stats['processed'], stats['success'], stats['failed']
        )
        return stats

    def _classify_one(self, frame: Frame) -> Dict[str, Any]:
        """
        Classify one frame into a result dict.

        ContentClassifier.detect already degrades its own failures to UNKNOWN,
        so the failure branch only records errors from a substituted classifier.
        """
        try:
            contents: List[ClassifiedContent] = self.classifier.detect(frame)
        except Exception as e:
            logger.warning("Failed to classify frame %s: %s", frame.id, e)
            return {'success': False, 'frame_id': frame.id, 'error': str(e)}
        return {'success': True, 'frame_id': frame.id, 'contents': contents}
