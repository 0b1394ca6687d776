"""
Default tunables for classification, synchronization and segmentation.
"""

# Stream synchronization (milliseconds)
DEFAULT_MAX_SYNC_GAP_MS = 5000

# Segment grouping (milliseconds)
DEFAULT_MAX_SEGMENT_GAP_MS = 30000

# Content-type detector
TABLE_CONFIDENCE = 0.8
TEXT_CONFIDENCE = 0.9
IMAGE_CONFIDENCE = 0.7
UNKNOWN_CONFIDENCE = 1.0

CODE_THRESHOLD = 0.4
CODE_SCORE_SCALE = 10.0
CODE_LINE_ENDING_RATIO = 0.3
CODE_MIN_INDENTED_LINES = 3
CODE_MAX_INDENT_WIDTHS = 3

VISUAL_THRESHOLD = 0.4
VISUAL_HITS_SCALE = 5.0
IMAGE_MAX_CHARS = 50
IMAGE_MAX_LINES = 5

# Layout classifier
HEADING_CONFIDENCE = 0.8
BULLET_CONFIDENCE = 0.9
KEY_VALUE_CONFIDENCE = 0.85
PARAGRAPH_CONFIDENCE = 0.7
