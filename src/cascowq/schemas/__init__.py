"""Schema definitions for the Casco Bay water-quality pipeline.

This package defines the contract layer - what "valid data" looks like.
Nothing here should do work, only define structure.

Schemas:
- qualifiers: Qualifier code vocabulary and per-channel rules
- observations: Cleaned observation table (value / _cens / _flag triples)
- extinction: Light extinction coefficient table
- validate: Validation helpers
"""

from cascowq.schemas.extinction import (
    EXTINCTION_FIELDS,
    MIN_PROFILE_POINTS,
    ExtinctionEstimate,
    validate_extinction,
)
from cascowq.schemas.observations import (
    OBSERVATION_KEY_FIELDS,
    Observation,
    channel_columns,
    validate_clean_observations,
    validate_raw_observations,
)
from cascowq.schemas.qualifiers import (
    CHANNEL_RULES,
    DEFAULT_RULE,
    QualifierRule,
    rule_for,
)
from cascowq.schemas.validate import (
    require_bool,
    require_columns,
    require_false_where_null,
    require_int_range,
    require_no_nulls,
    require_range,
    require_unique,
)

__all__ = [
    # Qualifiers
    "QualifierRule",
    "CHANNEL_RULES",
    "DEFAULT_RULE",
    "rule_for",
    # Observations
    "Observation",
    "OBSERVATION_KEY_FIELDS",
    "channel_columns",
    "validate_raw_observations",
    "validate_clean_observations",
    # Extinction
    "ExtinctionEstimate",
    "EXTINCTION_FIELDS",
    "MIN_PROFILE_POINTS",
    "validate_extinction",
    # Validation helpers
    "require_columns",
    "require_no_nulls",
    "require_unique",
    "require_range",
    "require_int_range",
    "require_bool",
    "require_false_where_null",
]
