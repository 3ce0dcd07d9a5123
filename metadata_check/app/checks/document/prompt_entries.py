"""
Prompt entry checks.

Every violation raised here carries the zero-based index of the entry it
belongs to. Entries are evaluated in document order.

Two independent rules make the issue fields mandatory:
    - any issue field has a value        -> all three must have values
    - level_of_correctness is not 2      -> all three must have values

Both can fire for the same entry. The resulting duplicate violations
are reported as-is.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Tuple

from metadata_check.app.checks.rules import Rule, RuleContext, evaluate_rules
from metadata_check.app.checks.values import (
    has_text,
    is_link,
    is_missing,
    is_whole_number_in_range,
)
from metadata_check.app.schemas.document import (
    CHOICE_RANGE,
    FULLY_CORRECT_LEVEL,
    ISSUE_FIELDS,
    ISSUE_TYPE_VALUES,
    LEVEL_OF_CORRECTNESS_RANGE,
    REQUIRED_ENTRY_FIELDS,
    USECASE_VALUES,
)
from metadata_check.app.schemas.violations import Violation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _rule_token(field: str) -> str:
    return field.upper().replace("_", "-")


def _has_issue_data(entry: Mapping[str, Any]) -> bool:
    return any(has_text(entry.get(field)) for field in ISSUE_FIELDS)


def _requires_issue(entry: Mapping[str, Any]) -> bool:
    return entry.get("level_of_correctness") != FULLY_CORRECT_LEVEL


def _invalid_issue_type(entry: Mapping[str, Any]) -> bool:
    issue_type = entry.get("issue_type")
    return not is_missing(issue_type) and issue_type not in ISSUE_TYPE_VALUES


def _required_rule(field: str) -> Rule:
    return Rule(
        rule_id=f"ENTRY-{_rule_token(field)}-MISSING",
        field=field,
        violated=lambda entry, _: is_missing(entry.get(field)),
        message=f"{field} should not be empty",
    )


def _issue_incomplete_rule(field: str) -> Rule:
    return Rule(
        rule_id=f"ENTRY-{_rule_token(field)}-INCOMPLETE",
        field=field,
        violated=lambda entry, _: (
            _has_issue_data(entry) and is_missing(entry.get(field))
        ),
        message="If any issue field has value, all issue fields must have values",
    )


def _issue_required_rule(field: str) -> Rule:
    return Rule(
        rule_id=f"ENTRY-CORRECTNESS-{_rule_token(field)}-REQUIRED",
        field=field,
        violated=lambda entry, _: (
            _requires_issue(entry) and is_missing(entry.get(field))
        ),
        message=(
            f"{field} is required when level_of_correctness is not "
            f"{FULLY_CORRECT_LEVEL}"
        ),
    )


_ISSUE_TYPE_MESSAGE = f"Issue type should be one of: {', '.join(ISSUE_TYPE_VALUES)}"


# ---------------------------------------------------------------------------
# Rule table (evaluation order is reporting order)
# ---------------------------------------------------------------------------

ENTRY_RULES: Tuple[Rule, ...] = (
    Rule(
        rule_id="ENTRY-HFI-ID-MISMATCH",
        field="hfi_id",
        violated=lambda entry, ctx: entry.get("hfi_id") != ctx.document.get("uuid"),
        message="HFI ID should match the main UUID",
    ),
    *(_required_rule(field) for field in REQUIRED_ENTRY_FIELDS),
    Rule(
        rule_id="ENTRY-CHOICE-RANGE",
        field="choice",
        violated=lambda entry, _: not is_whole_number_in_range(
            entry.get("choice"), CHOICE_RANGE
        ),
        message=(
            "Choice should be a number between "
            f"{CHOICE_RANGE[0]}-{CHOICE_RANGE[1]}"
        ),
    ),
    Rule(
        rule_id="ENTRY-GDRIVE-LINK",
        field="gdrive",
        violated=lambda entry, ctx: (
            not is_missing(entry.get("gdrive"))
            and not is_link(
                entry.get("gdrive"),
                strict=ctx.config.STRICT_URL_VALIDATION,
            )
        ),
        message="Google Drive should be a valid link",
    ),
    Rule(
        rule_id="ENTRY-USECASE-ENUM",
        field="usecase",
        violated=lambda entry, _: entry.get("usecase") not in USECASE_VALUES,
        message=f"Usecase should be one of: {', '.join(USECASE_VALUES)}",
    ),
    *(_issue_incomplete_rule(field) for field in ISSUE_FIELDS),
    Rule(
        rule_id="ENTRY-ISSUE-TYPE-ENUM",
        field="issue_type",
        violated=lambda entry, _: (
            _has_issue_data(entry) and _invalid_issue_type(entry)
        ),
        message=_ISSUE_TYPE_MESSAGE,
    ),
    Rule(
        rule_id="ENTRY-LEVEL-OF-CORRECTNESS-RANGE",
        field="level_of_correctness",
        violated=lambda entry, _: not is_whole_number_in_range(
            entry.get("level_of_correctness"), LEVEL_OF_CORRECTNESS_RANGE
        ),
        message=(
            "Level of correctness should be a number between "
            f"{LEVEL_OF_CORRECTNESS_RANGE[0]} to {LEVEL_OF_CORRECTNESS_RANGE[1]}"
        ),
    ),
    *(_issue_required_rule(field) for field in ISSUE_FIELDS),
    Rule(
        rule_id="ENTRY-CORRECTNESS-ISSUE-TYPE-ENUM",
        field="issue_type",
        violated=lambda entry, _: (
            _requires_issue(entry) and _invalid_issue_type(entry)
        ),
        message=_ISSUE_TYPE_MESSAGE,
    ),
)


# ---------------------------------------------------------------------------
# Public check entry point
# ---------------------------------------------------------------------------

def run_prompt_entry_checks(context: RuleContext) -> List[Violation]:
    """
    Evaluate ENTRY_RULES against every prompt entry.

    Runs only when `prompts` is an array; the shape violation itself is
    reported by the document field checks. An entry that is not an
    object yields a single ENTRY-TYPE violation and is skipped.
    """
    prompts = context.document.get("prompts")
    if not isinstance(prompts, list):
        return []

    violations: List[Violation] = []

    for index, entry in enumerate(prompts):
        if not isinstance(entry, dict):
            violations.append(
                Violation(
                    rule_id="ENTRY-TYPE",
                    field="prompts",
                    message="Prompt entry should be an object",
                    index=index,
                )
            )
            continue

        entry_violations = evaluate_rules(
            ENTRY_RULES, entry, context, index=index
        )
        logger.debug(
            "Prompt entry %d: %d violation(s)", index, len(entry_violations)
        )
        violations.extend(entry_violations)

    return violations
