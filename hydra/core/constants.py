"""
Constants
Centralised storage for scoring weights, category tables, id formats and diff settings.
"""
MANIFEST_VERSION = "1.0.0"
FIX_ID_PREFIX = "fix"
BUG_ID_PREFIX = "hydra"
ID_WIDTH = 3

# Composite candidate score weights (sum to 1.0)
WEIGHT_RELATEDNESS = 0.40
WEIGHT_CATEGORY_FIT = 0.35
WEIGHT_SEVERITY_FIT = 0.25

MIN_SEVERITY = 1
MAX_SEVERITY = 5

# Category → implied severity (1–5). Used by both scoring and the applier.
CATEGORY_SEVERITY: dict[str, int] = {
    "security":       5,
    "concurrency":    4,
    "async":          4,
    "resource":       4,
    "error-handling": 3,
    "null-safety":    3,
    "database":       3,
    "react":          3,
    "logic":          2,
    "correctness":    2,
}
DEFAULT_CATEGORY_SEVERITY = 3

# Diff generator
DIFF_CONTEXT_LINES = 3
DIFF_LOOKAHEAD = 8
