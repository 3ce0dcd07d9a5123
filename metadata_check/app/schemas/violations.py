"""
Standardized violation schema.

Defines the canonical structure used to report a single rule failure
found while validating an evaluation metadata document.

This schema is:
- authoritative
- immutable once constructed
- rule-traceable (every violation names the rule that produced it)
- entry-attributable (prompt entry violations carry the entry index)

All violations returned in a ValidationResult MUST conform to this schema.
There are no severity levels: every violation carries equal weight.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic import ConfigDict


# ---------------------------------------------------------------------------
# Canonical Violation Object (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class Violation(BaseModel):
    """
    Canonical rule violation.

    Describes what is wrong, not how to fix it.
    """

    rule_id: str = Field(
        ...,
        description=(
            "Stable identifier of the rule that produced the violation "
            "(e.g., 'ENTRY-CHOICE-RANGE')."
        ),
    )

    field: str = Field(
        ...,
        description=(
            "Offending attribute. Nested attributes use a dotted path "
            "(e.g., 'codebase.url', 'memory.memory_comment')."
        ),
    )

    message: str = Field(
        ...,
        description="Human-readable description of the failure",
    )

    index: Optional[int] = Field(
        None,
        ge=0,
        description=(
            "Zero-based position of the prompt entry the violation is "
            "attributed to. Absent for document-level violations."
        ),
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
