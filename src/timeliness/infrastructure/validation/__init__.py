"""Record validation for date, time and datetime attributes.

Components:
- types: ErrorSink protocol, FieldError and the TimelinessErrors collector
- validator: TimelinessValidator and the validates_* factories
- pydantic_adapter: field_validator factory for Pydantic models

Usage:
    >>> from timeliness.infrastructure.validation import (
    ...     TimelinessErrors,
    ...     validates_date,
    ... )
    >>> from timeliness.infrastructure.restrictions import attribute
    >>> validator = validates_date("starts_on", before=attribute("ends_on"))
    >>> errors = TimelinessErrors()
    >>> validator.validate(record, errors)
"""

from timeliness.infrastructure.validation.types import (
    ErrorSink,
    FieldError,
    TimelinessErrors,
)
from timeliness.infrastructure.validation.validator import (
    TimelinessValidator,
    is_blank,
    validates_date,
    validates_datetime,
    validates_time,
    validates_timeliness_of,
)
from timeliness.infrastructure.validation.pydantic_adapter import (
    timeliness_field_validator,
)

__all__ = [
    "ErrorSink",
    "FieldError",
    "TimelinessErrors",
    "TimelinessValidator",
    "is_blank",
    "timeliness_field_validator",
    "validates_date",
    "validates_datetime",
    "validates_time",
    "validates_timeliness_of",
]
