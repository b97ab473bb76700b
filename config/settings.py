"""
CLOPE Configuration Settings
Central configuration for all modules.
"""

# =============================================================================
# Config File Lookup
# =============================================================================
# Project config file names, in lookup order
CONFIG_FILE_NAMES = [
    "clope.yaml",
    ".clope.yaml",
    "clope.yml",
]

# =============================================================================
# Dataset Configuration
# =============================================================================
# Label of a transaction that has not been placed yet
UNASSIGNED_CLUSTER = -1

# =============================================================================
# Clustering Configuration
# =============================================================================
# Repulsion coefficient r: higher values give more, purer clusters
DEFAULT_REPULSION = 2.0

# Upper bound on improvement passes (None = run until a pass moves nothing)
CLOPE_MAX_PASSES = None

# How placement deltas are probed: 'analytic' (counters only) or 'copy'
DEFAULT_PROBE = "analytic"
PROBE_MODES = ("analytic", "copy")

# =============================================================================
# Analysis Configuration
# =============================================================================
ANALYSIS_TOP_ITEMS = 5

# Silhouette is quadratic in the number of transactions
SILHOUETTE_MAX_SAMPLES = 5000
