"""
Value predicates shared by the rule tables.

All predicates are total: they accept any JSON value (including None
for absent keys) and never raise.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError


_HTTP_URL_ADAPTER: TypeAdapter = TypeAdapter(AnyHttpUrl)


def is_missing(value: Any) -> bool:
    """
    True for absent/null values and strings that are blank after
    stripping. Numeric zero and False are NOT missing.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def has_text(value: Any) -> bool:
    """True for strings with non-whitespace content."""
    return isinstance(value, str) and value.strip() != ""


def is_non_string(value: Any) -> bool:
    """True for present values that are not strings."""
    return value is not None and not isinstance(value, str)


def as_whole_number(value: Any) -> Optional[int]:
    """
    Interpret a JSON number as an integer.

    Integral floats (e.g. 3.0) are accepted. Booleans, fractional and
    non-finite numbers, and non-numbers return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def is_whole_number_in_range(value: Any, bounds: Tuple[int, int]) -> bool:
    number = as_whole_number(value)
    if number is None:
        return False
    low, high = bounds
    return low <= number <= high


def is_http_url(value: Any) -> bool:
    """Syntactic http(s) URL check."""
    if not isinstance(value, str):
        return False
    try:
        _HTTP_URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def is_link(value: Any, *, strict: bool) -> bool:
    """
    Link-likeness check.

    Lenient mode only requires an 'http' prefix; strict mode requires a
    syntactically valid http(s) URL.
    """
    if strict:
        return is_http_url(value)
    return isinstance(value, str) and value.startswith("http")
