"""유틸리티 모듈."""

from .validation import (
    require_text,
    validate_lat_lon,
    validate_list_limit,
    parse_flag,
)

__all__ = [
    "require_text",
    "validate_lat_lon",
    "validate_list_limit",
    "parse_flag",
]
