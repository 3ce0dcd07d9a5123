"""
Memory block checks.

The memory block captures qualitative flags about the assistant's memory
behavior. Flags are optional; when given, they must be a yes/no literal.
Casing is controlled by ACCEPT_CAPITALIZED_MEMORY_FLAGS (lowercase only
by default).
"""

from __future__ import annotations

from typing import Any, FrozenSet, List, Mapping, Tuple

from metadata_check.app.checks.rules import Rule, RuleContext, evaluate_rules
from metadata_check.app.checks.values import is_missing
from metadata_check.app.schemas.document import (
    CAPITALIZED_MEMORY_FLAG_VALUES,
    MEMORY_FLAG_FIELDS,
    MEMORY_FLAG_VALUES,
)
from metadata_check.app.schemas.violations import Violation


def allowed_flag_values(context: RuleContext) -> FrozenSet[str]:
    if context.config.ACCEPT_CAPITALIZED_MEMORY_FLAGS:
        return MEMORY_FLAG_VALUES | CAPITALIZED_MEMORY_FLAG_VALUES
    return MEMORY_FLAG_VALUES


def _invalid_flag(memory: Mapping[str, Any], flag: str, context: RuleContext) -> bool:
    value = memory.get(flag)
    if is_missing(value):
        return False
    return not isinstance(value, str) or value not in allowed_flag_values(context)


def _flag_rule(flag: str) -> Rule:
    return Rule(
        rule_id=f"MEMORY-{flag.upper().replace('_', '-')}-VALUE",
        field=f"memory.{flag}",
        violated=lambda memory, ctx: _invalid_flag(memory, flag, ctx),
        message=f"{flag} should be either 'yes' or 'no'",
    )


MEMORY_RULES: Tuple[Rule, ...] = (
    Rule(
        rule_id="MEMORY-COMMENT-MISSING",
        field="memory.memory_comment",
        violated=lambda memory, _: is_missing(memory.get("memory_comment")),
        message="Memory comment should not be empty",
    ),
    *(_flag_rule(flag) for flag in MEMORY_FLAG_FIELDS),
)


def run_memory_block_checks(context: RuleContext) -> List[Violation]:
    """
    Checks performed (in order):
        MEMORY-MISSING          Memory block absent or null (stops here)
        MEMORY-TYPE             Memory block is not an object (stops here)
        MEMORY-COMMENT-MISSING  memory_comment is empty
        MEMORY-<FLAG>-VALUE     Flag present but not a yes/no literal
    """
    memory = context.document.get("memory")

    if is_missing(memory):
        return [
            Violation(
                rule_id="MEMORY-MISSING",
                field="memory",
                message="Memory object is required",
            )
        ]

    if not isinstance(memory, dict):
        return [
            Violation(
                rule_id="MEMORY-TYPE",
                field="memory",
                message="Memory should be an object",
            )
        ]

    return evaluate_rules(MEMORY_RULES, memory, context)
