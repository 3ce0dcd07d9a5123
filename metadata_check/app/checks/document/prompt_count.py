"""
Expected prompt count checks.

The expected count is supplied by the caller as free text, separately
from the document. It must be a positive whole number.
"""

from __future__ import annotations

import math
from typing import List, Optional

from metadata_check.app.checks.rules import RuleContext
from metadata_check.app.schemas.violations import Violation


def parse_expected_count(raw: Optional[str]) -> Optional[int]:
    """
    Parse the caller-supplied expected prompt count.

    Returns None when the input is blank, not a number, not a whole
    number, or not positive. "3" and "3.0" both parse to 3.
    """
    if raw is None:
        return None

    text = str(raw).strip()
    if not text:
        return None

    # int() and float() also accept digit separators and non-ASCII digits.
    if not text.isascii() or "_" in text:
        return None

    try:
        count = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number) or not number.is_integer():
            return None
        count = int(number)

    if count <= 0:
        return None

    return count


def run_prompt_count_checks(context: RuleContext) -> List[Violation]:
    """
    Checks performed:
        COUNT-INVALID  Expected count is not a positive whole number
    """
    if context.expected_count is not None:
        return []

    return [
        Violation(
            rule_id="COUNT-INVALID",
            field="prompt_count",
            message="Number of prompts must be a positive whole number",
        )
    ]
