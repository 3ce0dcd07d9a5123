"""
Document-level field checks.

Covers the `prompts` array shape, the top-level scalar fields, and the
`workflow` / `codebase` pair.

The codebase cross-check is asymmetric: a `new_codebase` workflow
reports a single combined `codebase` violation, while
`existing_codebase` reports `codebase.url` and `codebase.description`
independently.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from metadata_check.app.checks.rules import Rule, RuleContext, evaluate_rules
from metadata_check.app.checks.values import (
    has_text,
    is_http_url,
    is_missing,
    is_non_string,
)
from metadata_check.app.schemas.document import WORKFLOW_VALUES, Workflow
from metadata_check.app.schemas.violations import Violation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rule builders
# ---------------------------------------------------------------------------

def _required_text_rules(rule_prefix: str, field: str, label: str) -> Tuple[Rule, ...]:
    """Missing + wrong-type rules for a required top-level string."""
    return (
        Rule(
            rule_id=f"{rule_prefix}-MISSING",
            field=field,
            violated=lambda doc, _: is_missing(doc.get(field)),
            message=f"{label} should not be empty",
        ),
        Rule(
            rule_id=f"{rule_prefix}-TYPE",
            field=field,
            violated=lambda doc, _: is_non_string(doc.get(field)),
            message=f"{label} should be a string",
        ),
    )


def _codebase_field(doc: Mapping[str, Any], key: str) -> Optional[Any]:
    codebase = doc.get("codebase")
    if not isinstance(codebase, dict):
        return None
    return codebase.get(key)


def _prompts_length_mismatch(doc: Mapping[str, Any], ctx: RuleContext) -> bool:
    prompts = doc.get("prompts")
    return (
        isinstance(prompts, list)
        and ctx.expected_count is not None
        and len(prompts) != ctx.expected_count
    )


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

PROMPTS_SHAPE_RULES: Tuple[Rule, ...] = (
    Rule(
        rule_id="DOC-PROMPTS-TYPE",
        field="prompts",
        violated=lambda doc, _: not isinstance(doc.get("prompts"), list),
        message="Prompts array is missing or not an array",
    ),
    Rule(
        rule_id="DOC-PROMPTS-COUNT",
        field="prompts",
        violated=_prompts_length_mismatch,
        message=lambda doc, ctx: (
            f"Prompts array length ({len(doc['prompts'])}) does not match "
            f"expected count ({ctx.expected_count})"
        ),
    ),
)

SCALAR_RULES: Tuple[Rule, ...] = (
    *_required_text_rules("DOC-UUID", "uuid", "UUID"),
    *_required_text_rules("DOC-JIRA-ID", "jira_id", "JIRA ID"),
    Rule(
        rule_id="DOC-JIRA-ID-PREFIX",
        field="jira_id",
        violated=lambda doc, ctx: (
            has_text(doc.get("jira_id"))
            and not doc["jira_id"].startswith(ctx.config.JIRA_ID_PREFIX)
        ),
        message=lambda _, ctx: (
            f"JIRA ID should start with '{ctx.config.JIRA_ID_PREFIX}'"
        ),
    ),
    *_required_text_rules(
        "DOC-PROGRAMMING-LANGUAGE", "programming_language", "Programming language"
    ),
    Rule(
        rule_id="DOC-MODEL-MISMATCH",
        field="model",
        violated=lambda doc, ctx: doc.get("model") != ctx.config.EXPECTED_MODEL_ID,
        message=lambda _, ctx: (
            f"Model should be exactly: {ctx.config.EXPECTED_MODEL_ID}"
        ),
    ),
    *_required_text_rules("DOC-ROOT-GDRIVE", "root_gdrive", "Root Google Drive"),
    Rule(
        rule_id="DOC-ROOT-GDRIVE-URL",
        field="root_gdrive",
        violated=lambda doc, ctx: (
            ctx.config.STRICT_URL_VALIDATION
            and has_text(doc.get("root_gdrive"))
            and not is_http_url(doc["root_gdrive"])
        ),
        message="Root Google Drive should be a valid URL",
    ),
)

WORKFLOW_RULES: Tuple[Rule, ...] = (
    Rule(
        rule_id="DOC-WORKFLOW-ENUM",
        field="workflow",
        violated=lambda doc, _: doc.get("workflow") not in WORKFLOW_VALUES,
        message=(
            "Workflow should be either "
            + " or ".join(f"'{value}'" for value in WORKFLOW_VALUES)
        ),
    ),
)

CODEBASE_RULES: Dict[str, Tuple[Rule, ...]] = {
    Workflow.NEW_CODEBASE.value: (
        Rule(
            rule_id="DOC-CODEBASE-NOT-EMPTY",
            field="codebase",
            violated=lambda doc, _: (
                _codebase_field(doc, "url") != ""
                or _codebase_field(doc, "description") != ""
            ),
            message=(
                "For new_codebase workflow, codebase url and description "
                "should be empty"
            ),
        ),
    ),
    Workflow.EXISTING_CODEBASE.value: (
        Rule(
            rule_id="DOC-CODEBASE-URL-MISSING",
            field="codebase.url",
            violated=lambda doc, _: not has_text(_codebase_field(doc, "url")),
            message=(
                "For existing_codebase workflow, codebase URL should not "
                "be empty"
            ),
        ),
        Rule(
            rule_id="DOC-CODEBASE-DESCRIPTION-MISSING",
            field="codebase.description",
            violated=lambda doc, _: not has_text(
                _codebase_field(doc, "description")
            ),
            message=(
                "For existing_codebase workflow, codebase description "
                "should not be empty"
            ),
        ),
    ),
}


# ---------------------------------------------------------------------------
# Public check entry point
# ---------------------------------------------------------------------------

def run_document_field_checks(context: RuleContext) -> List[Violation]:
    """
    Run document-level checks in order: prompts shape, scalar fields,
    workflow, then the workflow-specific codebase rules.

    The codebase rules are skipped when the workflow itself is invalid.
    """
    document = context.document
    violations: List[Violation] = []

    violations.extend(evaluate_rules(PROMPTS_SHAPE_RULES, document, context))
    violations.extend(evaluate_rules(SCALAR_RULES, document, context))

    workflow_violations = evaluate_rules(WORKFLOW_RULES, document, context)
    violations.extend(workflow_violations)

    if workflow_violations:
        logger.debug("Skipping codebase rules: workflow is invalid")
    else:
        violations.extend(
            evaluate_rules(
                CODEBASE_RULES[document["workflow"]], document, context
            )
        )

    return violations
