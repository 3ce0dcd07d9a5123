"""
Document parsing and whitespace normalization.

Parsing is the only stage that can end a validation run early: no field
access is meaningful on text that did not parse into a JSON object.

Error handling policy:
    Only json decoding errors (ValueError, including the rejection of
    the non-standard NaN/Infinity constants) and RecursionError for
    pathologically nested input are treated as parse failures. Any
    other exception is a logic error and propagates.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from metadata_check.app.config import ValidatorConfig
from metadata_check.app.schemas.document import UNTRIMMED_FIELDS
from metadata_check.app.schemas.parsed_document import ParseResult
from metadata_check.app.schemas.violations import Violation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity/-Infinity by default; strict JSON does not.
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_failure(rule_id: str, message: str) -> ParseResult:
    return ParseResult(
        violations=[
            Violation(
                rule_id=rule_id,
                field="json",
                message=message,
            )
        ],
        document=None,
    )


def _trim(value: Any, key: Optional[str]) -> Any:
    if isinstance(value, str) and key not in UNTRIMMED_FIELDS:
        return value.strip()
    return value


def _empty_like(value: Any) -> Any:
    if isinstance(value, dict):
        return {}
    if isinstance(value, list):
        return []
    return None


def normalize_whitespace(value: Any, *, key: Optional[str] = None) -> Any:
    """
    Strip leading/trailing whitespace from every string at any depth.

    Strings stored under an untrimmed key (the free-form `prompt` text)
    are returned unchanged. Non-string scalars are returned as-is.

    The walk uses an explicit stack, so any nesting depth the JSON
    decoder accepts is normalized without hitting the recursion limit.
    The input is never mutated.
    """
    root = _empty_like(value)
    if root is None:
        return _trim(value, key)

    stack = [(value, root, key)]

    while stack:
        source, target, source_key = stack.pop()

        if isinstance(source, dict):
            children = list(source.items())
        else:
            children = [(source_key, item) for item in source]

        for child_key, child in children:
            copied = _empty_like(child)
            if copied is None:
                copied = _trim(child, child_key)
            else:
                stack.append((child, copied, child_key))

            if isinstance(target, dict):
                target[child_key] = copied
            else:
                target.append(copied)

    return root


# ---------------------------------------------------------------------------
# Public check entry point
# ---------------------------------------------------------------------------

def run_parse_checks(raw_text: str, config: ValidatorConfig) -> ParseResult:
    """
    Parse the raw document text.

    Checks performed (in order):
        JSON-PARSE    Text is not valid JSON
        JSON-OBJECT   Root value is not an object
    """
    try:
        data = json.loads(raw_text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.warning("Document failed to parse as JSON: %s", exc)
        return _parse_failure("JSON-PARSE", "Invalid JSON format")

    if not isinstance(data, dict):
        logger.warning(
            "Document root is %s, expected an object",
            type(data).__name__,
        )
        return _parse_failure("JSON-OBJECT", "JSON document must be an object")

    if config.TRIM_STRING_VALUES:
        data = normalize_whitespace(data)

    return ParseResult(violations=[], document=data)
