"""
Timeline visualization utilities.
Plot utterances, their paired screen content and segment boundaries over time.
"""

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from typing import Dict, List, Optional, Sequence

from src.ocr.types import ClassifiedContent
from src.sync.types import NO_VISUAL_CONTENT, Segment, SynchronizedPair


TYPE_COLORS: Dict[str, str] = {
    'text': 'orange',
    'table': 'red',
    'code': 'purple',
    'chart': 'green',
    'diagram': 'teal',
    'image': 'blue',
    'unknown': 'gray',
    NO_VISUAL_CONTENT: 'lightgray',
}


def visualize_timeline(
    pairs: Sequence[SynchronizedPair],
    contents: Sequence[ClassifiedContent] = (),
    segments: Sequence[Segment] = (),
    ax: Optional[plt.Axes] = None,
    title: str = 'Meeting timeline'
):
    """
    Visualize a synchronized meeting.

    Bottom lane: classified frames; top lane: utterances colored by the
    visual type they were paired with, sized by sync confidence. Segments are
    drawn as shaded spans.

    Args:
        pairs: Synchronized pairs
        contents: Classified frame content (optional)
        segments: Segments (optional)
        ax: Axes to draw on (new figure if None)
        title: Plot title

    Returns:
        The matplotlib Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(14, 4))
    else:
        fig = ax.figure

    origin = _origin(pairs, contents)

    def seconds(ts):
        return (ts - origin).total_seconds()

    # Segment spans
    for idx, segment in enumerate(segments):
        start, end = seconds(segment.start), seconds(segment.end)
        rect = patches.Rectangle(
            (start, -0.5), max(end - start, 0.5), 2.0,
            facecolor='lightyellow' if idx % 2 == 0 else 'lightcyan',
            edgecolor='none',
            alpha=0.5
        )
        ax.add_patch(rect)

    # Frames
    for content in contents:
        ax.scatter(
            seconds(content.timestamp), 0,
            marker='s', s=60,
            color=TYPE_COLORS.get(content.type.value, 'gray')
        )

    # Utterances
    for pair in pairs:
        ax.scatter(
            seconds(pair.timestamp), 1,
            marker='o', s=20 + 80 * pair.sync_confidence,
            color=TYPE_COLORS.get(pair.visual_content_type, 'gray')
        )

    ax.set_yticks([0, 1])
    ax.set_yticklabels(['frames', 'utterances'])
    ax.set_ylim(-0.75, 1.75)
    ax.set_xlabel('seconds since start')
    ax.set_title(title)

    used_types = _used_types(pairs, contents)
    handles = [patches.Patch(color=TYPE_COLORS[t], label=t) for t in used_types]
    if handles:
        ax.legend(handles=handles, loc='upper right', fontsize=8)

    return fig


def _origin(pairs: Sequence[SynchronizedPair], contents: Sequence[ClassifiedContent]):
    stamps = [p.timestamp for p in pairs] + [c.timestamp for c in contents]
    return min(stamps) if stamps else None


def _used_types(pairs: Sequence[SynchronizedPair], contents: Sequence[ClassifiedContent]) -> List[str]:
    seen: List[str] = []
    for name in [c.type.value for c in contents] + [p.visual_content_type for p in pairs]:
        if name not in seen and name in TYPE_COLORS:
            seen.append(name)
    return seen
