"""Blueprint validation.

- rules: independent checks on one storey group, a pair of adjacent groups,
  or the blueprint as a whole
- engine: runs every rule and collects every failure before deciding
- errors: failure kinds and their messages
"""

from blueprint_builder.validators.engine import (
    apply_check_to_all,
    apply_check_to_pairs,
    check_blueprint,
    validate,
)
from blueprint_builder.validators.errors import (
    ElevationError,
    HeightError,
    RangeError,
    SlabError,
    ValidationError,
)

__all__ = [
    "apply_check_to_all",
    "apply_check_to_pairs",
    "check_blueprint",
    "validate",
    "ElevationError",
    "HeightError",
    "RangeError",
    "SlabError",
    "ValidationError",
]
