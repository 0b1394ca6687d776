"""
Statistics collector for a synchronized meeting.
"""

from typing import Any, Dict, Sequence

import numpy as np
import pandas as pd

from src.ocr.types import ClassifiedContent
from src.sync.types import NO_VISUAL_CONTENT, Segment, SynchronizedPair


def pairs_to_dataframe(pairs: Sequence[SynchronizedPair]) -> pd.DataFrame:
    """
    Tabular view of synchronized pairs, one row per utterance.

    Columns: timestamp, utterance_id, speaker_id, transcription,
    visual_content_type, frame_id, sync_confidence
    """
    columns = ['timestamp', 'utterance_id', 'speaker_id', 'transcription',
               'visual_content_type', 'frame_id', 'sync_confidence']
    rows = [
        {
            'timestamp': pair.timestamp,
            'utterance_id': pair.utterance.id,
            'speaker_id': pair.utterance.speaker_id,
            'transcription': pair.utterance.text,
            'visual_content_type': pair.visual_content_type,
            'frame_id': pair.visual_content.frame_id if pair.visual_content else None,
            'sync_confidence': pair.sync_confidence,
        }
        for pair in pairs
    ]
    return pd.DataFrame(rows, columns=columns)


class StatisticsCollector:
    """
    Collect and summarize statistics of classified content and synchronized pairs.
    """

    @staticmethod
    def collect(
        contents: Sequence[ClassifiedContent],
        pairs: Sequence[SynchronizedPair],
        segments: Sequence[Segment] = ()
    ) -> Dict[str, Any]:
        """
        Compute statistics for one meeting.

        Args:
            contents: Classified content of all frames
            pairs: Synchronized pairs
            segments: Segments built from the pairs

        Returns:
            dict: Complete statistics
        """
        stats = {
            'total_contents': len(contents),
            'total_pairs': len(pairs),
            'total_segments': len(segments),
            'matched_pairs': 0,
            'match_ratio': 0.0,
            'avg_sync_confidence': 0.0,
            'median_sync_confidence': 0.0,
            'avg_content_confidence': 0.0,
            'content_type_counts': {},
            'paired_type_counts': {},
            'avg_sync_confidence_by_type': {},
        }

        # Content type distribution
        for content in contents:
            ctype = content.type.value
            stats['content_type_counts'][ctype] = stats['content_type_counts'].get(ctype, 0) + 1

        if contents:
            stats['avg_content_confidence'] = float(np.mean([c.confidence for c in contents]))

        if not pairs:
            return stats

        df = pairs_to_dataframe(pairs)
        matched = df[df['visual_content_type'] != NO_VISUAL_CONTENT]

        stats['matched_pairs'] = int(len(matched))
        stats['match_ratio'] = len(matched) / len(df)
        stats['avg_sync_confidence'] = float(np.mean(df['sync_confidence']))
        stats['median_sync_confidence'] = float(np.median(df['sync_confidence']))
        stats['paired_type_counts'] = {
            str(k): int(v) for k, v in df['visual_content_type'].value_counts().items()
        }
        if not matched.empty:
            by_type = matched.groupby('visual_content_type')['sync_confidence'].mean()
            stats['avg_sync_confidence_by_type'] = {str(k): float(v) for k, v in by_type.items()}

        return stats

    @staticmethod
    def print_statistics(stats: Dict[str, Any]) -> None:
        """
        Print statistics in a readable layout.

        Args:
            stats: Statistics dict from collect()
        """
        print(f"\n{'='*70}")
        print("MEETING SYNC STATISTICS")
        print(f"{'='*70}")
        print(f"Classified Frames: {stats['total_contents']:,}")
        print(f"Utterances: {stats['total_pairs']:,}")
        print(f"Segments: {stats['total_segments']:,}")
        print(f"Matched Utterances: {stats['matched_pairs']:,} ({stats['match_ratio']:.1%})")

        print(f"\nConfidence:")
        print(f"  Avg sync: {stats['avg_sync_confidence']:.3f}")
        print(f"  Median sync: {stats['median_sync_confidence']:.3f}")
        print(f"  Avg classification: {stats['avg_content_confidence']:.3f}")

        if stats['content_type_counts']:
            print(f"\nContent Type Distribution:")
            total = stats['total_contents']
            for ctype, count in sorted(stats['content_type_counts'].items(),
                                       key=lambda x: x[1], reverse=True):
                pct = (count / total * 100) if total > 0 else 0
                print(f"  {ctype:15}: {count:,} ({pct:.1f}%)")

        if stats['avg_sync_confidence_by_type']:
            print(f"\nAvg Sync Confidence by Visual Type:")
            for ctype, conf in sorted(stats['avg_sync_confidence_by_type'].items()):
                print(f"  {ctype:15}: {conf:.3f}")

        print(f"{'='*70}\n")
