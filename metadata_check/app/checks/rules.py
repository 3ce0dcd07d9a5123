"""
Declarative rule table.

Every validation rule is an independent (predicate, message) pair keyed
by a field path. A check module declares its rules as an ordered tuple
and evaluates them with `evaluate_rules`; adding or removing a rule is a
change to that tuple, not to control flow.

Rules never raise on malformed data. Structural guards (is `prompts` an
array, is `memory` an object, is `workflow` valid) live in the check
modules and decide which tables run at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from metadata_check.app.config import ValidatorConfig
from metadata_check.app.schemas.violations import Violation


@dataclass(frozen=True)
class RuleContext:
    """
    Read-only inputs shared by every rule of one validation run.

    `expected_count` is None when the caller-supplied count did not parse.
    """

    config: ValidatorConfig
    document: Mapping[str, Any]
    expected_count: Optional[int]


Predicate = Callable[[Mapping[str, Any], RuleContext], bool]
MessageFactory = Callable[[Mapping[str, Any], RuleContext], str]


@dataclass(frozen=True)
class Rule:
    """
    A single validation rule.

    `violated` receives the subject object the table is evaluated
    against (the document, a prompt entry, or the memory block) and
    returns True when the rule fails.
    """

    rule_id: str
    field: str
    violated: Predicate
    message: Union[str, MessageFactory]

    def evaluate(
        self,
        subject: Mapping[str, Any],
        context: RuleContext,
        *,
        index: Optional[int] = None,
    ) -> Optional[Violation]:
        if not self.violated(subject, context):
            return None

        message = (
            self.message(subject, context)
            if callable(self.message)
            else self.message
        )

        return Violation(
            rule_id=self.rule_id,
            field=self.field,
            message=message,
            index=index,
        )


def evaluate_rules(
    rules: Iterable[Rule],
    subject: Mapping[str, Any],
    context: RuleContext,
    *,
    index: Optional[int] = None,
) -> List[Violation]:
    """
    Evaluate every rule in table order and collect all violations.

    No rule short-circuits another.
    """
    violations: List[Violation] = []

    for rule in rules:
        violation = rule.evaluate(subject, context, index=index)
        if violation is not None:
            violations.append(violation)

    return violations
