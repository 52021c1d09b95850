# =============================================================================
# Utility Functions for Use in the surfaces, the optimizers and
# IntersectionFinder
# =============================================================================

# This __init__ file imports every methods in pyintersect/geo_utils
from .file_io import *  # noqa: F401, F403
from .norm import *  # noqa: F401, F403
from .wrapping import *  # noqa: F401, F403
