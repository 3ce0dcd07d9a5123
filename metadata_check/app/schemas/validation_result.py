"""
ValidationResult schema.

Defines the result of a single validation run. The result is transient:
it is constructed fresh per call and has no identity beyond it.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, model_validator
from pydantic import ConfigDict

from metadata_check.app.schemas.violations import Violation


GENERAL_GROUP = "general"


class ValidationResult(BaseModel):
    """
    Outcome of validating one document against one expected count.

    `valid` is True exactly when `violations` is empty.
    """

    valid: bool = Field(
        ...,
        description="Whether the document satisfied every applicable rule",
    )

    violations: List[Violation] = Field(
        default_factory=list,
        description="Violations in rule evaluation order",
    )

    checks_executed: List[str] = Field(
        default_factory=list,
        description="Identifiers of the check stages that were executed",
    )

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def enforce_validity_invariant(self):
        if self.valid and self.violations:
            raise ValueError(
                "A result with violations cannot be marked valid"
            )
        if not self.valid and not self.violations:
            raise ValueError(
                "An invalid result must carry at least one violation"
            )
        return self

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_violations(
        cls,
        violations: List[Violation],
        checks_executed: List[str],
    ) -> "ValidationResult":
        return cls(
            valid=not violations,
            violations=list(violations),
            checks_executed=list(checks_executed),
        )

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def grouped(self) -> Dict[str, List[Violation]]:
        """
        Bucket violations for display.

        Unindexed violations land in the reserved "general" bucket,
        indexed ones under "prompts[<index>]". Buckets appear in the
        order their first violation was raised.
        """
        groups: Dict[str, List[Violation]] = {}
        for violation in self.violations:
            key = (
                GENERAL_GROUP
                if violation.index is None
                else f"prompts[{violation.index}]"
            )
            groups.setdefault(key, []).append(violation)
        return groups

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
