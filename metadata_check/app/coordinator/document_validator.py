"""
Document validator orchestrator.

This module runs every validation check against one evaluation metadata
document and aggregates the violations into a single ValidationResult.

EXECUTION ORDER
---------------
1. Parse (and optionally normalize) the raw text. The only hard stop.
2. Expected prompt count.
3. Document-level fields (prompts shape, scalars, workflow/codebase).
4. Prompt entries, in document order.
5. Memory block.

Violations are never short-circuited after parsing: every applicable
rule runs and the full list is returned in evaluation order.

The validator is a pure function of its inputs. It holds only its frozen
configuration, so one instance may serve concurrent callers.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from metadata_check.app.config import ValidatorConfig
from metadata_check.app.schemas.validation_result import ValidationResult
from metadata_check.app.schemas.violations import Violation
from metadata_check.app.checks.rules import RuleContext

from metadata_check.app.checks.document.parsing import run_parse_checks
from metadata_check.app.checks.document.prompt_count import (
    parse_expected_count,
    run_prompt_count_checks,
)
from metadata_check.app.checks.document.document_fields import (
    run_document_field_checks,
)
from metadata_check.app.checks.document.prompt_entries import (
    run_prompt_entry_checks,
)
from metadata_check.app.checks.document.memory_block import (
    run_memory_block_checks,
)

logger = logging.getLogger(__name__)


# Post-parse check contract
DocumentCheck = Callable[[RuleContext], List[Violation]]


class DocumentValidator:
    """
    Evaluation metadata document validator.

    Fully deterministic.
    Stateless between runs.
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self._config = config if config is not None else ValidatorConfig()

        self._checks: List[DocumentCheck] = [
            self._expected_prompt_count,
            self._document_fields,
            self._prompt_entries,
            self._memory_block,
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        raw_text: str,
        expected_count_input: Optional[str],
    ) -> ValidationResult:
        checks_executed: List[str] = ["document_parsing"]

        # --------------------------------------------------------------
        # Parse (HARD GATE)
        # --------------------------------------------------------------
        parse_result = run_parse_checks(raw_text, self._config)

        if not parse_result.parsed:
            return ValidationResult.from_violations(
                parse_result.violations, checks_executed
            )

        context = RuleContext(
            config=self._config,
            document=parse_result.document,
            expected_count=parse_expected_count(expected_count_input),
        )

        # --------------------------------------------------------------
        # Run every remaining check; none of them can stop the run
        # --------------------------------------------------------------
        violations: List[Violation] = []

        for check in self._checks:
            name = check.__name__.lstrip("_")
            checks_executed.append(name)

            check_violations = check(context)
            logger.debug(
                "Check %s produced %d violation(s)",
                name,
                len(check_violations),
            )
            violations.extend(check_violations)

        logger.info(
            "Validation completed: %d violation(s) across %d check(s)",
            len(violations),
            len(checks_executed),
        )

        return ValidationResult.from_violations(violations, checks_executed)

    # ------------------------------------------------------------------
    # Check adapters
    # ------------------------------------------------------------------

    def _expected_prompt_count(self, context: RuleContext) -> List[Violation]:
        return run_prompt_count_checks(context)

    def _document_fields(self, context: RuleContext) -> List[Violation]:
        return run_document_field_checks(context)

    def _prompt_entries(self, context: RuleContext) -> List[Violation]:
        return run_prompt_entry_checks(context)

    def _memory_block(self, context: RuleContext) -> List[Violation]:
        return run_memory_block_checks(context)


def validate(
    raw_text: str,
    expected_count_input: Optional[str],
    config: Optional[ValidatorConfig] = None,
) -> ValidationResult:
    """
    Validate one document against the expected prompt count.

    Convenience wrapper around DocumentValidator for one-off calls.
    """
    return DocumentValidator(config=config).run(raw_text, expected_count_input)
