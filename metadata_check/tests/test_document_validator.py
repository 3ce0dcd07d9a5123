"""
End-to-end tests for the DocumentValidator.

Coverage matrix:

  Full-valid document, matching count          → valid, no violations
  Repeated validation                          → identical, order-stable results
  Malformed text                               → exactly one `json` violation
  Non-object root                              → exactly one `json` violation
  Count mismatch                               → `prompts` names actual + expected
  Many independent defects                     → one violation per defect
  Malformed structure (prompts/memory types)   → no exceptions, guarded rules
  Reporting order                              → document, entries, memory
"""

import pytest

from metadata_check.app.config import ValidatorConfig
from metadata_check.app.coordinator.document_validator import (
    DocumentValidator,
    validate,
)
from metadata_check.tests.fixtures.documents import (
    as_text,
    fields_of,
    valid_document,
    valid_memory_block,
    valid_prompt_entry,
    violations_on,
)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

def test_full_valid_document_passes():
    result = validate(as_text(valid_document()), "2")

    assert result.valid is True
    assert result.violations == []
    assert result.checks_executed == [
        "document_parsing",
        "expected_prompt_count",
        "document_fields",
        "prompt_entries",
        "memory_block",
    ]


def test_validation_is_idempotent():
    validator = DocumentValidator()
    document = valid_document(
        uuid="",
        workflow="new_codebase",
        prompts=[valid_prompt_entry(choice=9, usecase="refactor")],
    )

    first = validator.run(as_text(document), "3")
    second = validator.run(as_text(document), "3")

    assert first == second
    assert [v.rule_id for v in first.violations] == [
        v.rule_id for v in second.violations
    ]


# ---------------------------------------------------------------------------
# Parse failure isolation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw_text",
    [
        "",
        "{",
        "{'uuid': 'single quotes'}",
        '{"uuid": "abc",}',
        '{"prompts": [NaN]}',
        '{"choice": Infinity}',
        "uuid: abc\nprompts: []",
    ],
)
def test_malformed_text_yields_single_json_violation(raw_text):
    result = validate(raw_text, "oops")

    assert result.valid is False
    assert len(result.violations) == 1

    violation = result.violations[0]
    assert violation.field == "json"
    assert violation.message == "Invalid JSON format"
    assert violation.index is None
    assert result.checks_executed == ["document_parsing"]


@pytest.mark.parametrize("raw_text", ["[]", "42", '"text"', "null", "true"])
def test_non_object_root_yields_single_json_violation(raw_text):
    result = validate(raw_text, "1")

    assert len(result.violations) == 1
    assert result.violations[0].field == "json"
    assert result.violations[0].rule_id == "JSON-OBJECT"


# ---------------------------------------------------------------------------
# Count mismatch
# ---------------------------------------------------------------------------

def test_count_mismatch_names_actual_and_expected():
    document = valid_document(
        prompts=[valid_prompt_entry(), valid_prompt_entry(), valid_prompt_entry()]
    )

    result = validate(as_text(document), "2")

    assert fields_of(result) == [("prompts", None)]
    message = result.violations[0].message
    assert "(3)" in message
    assert "(2)" in message


def test_invalid_count_skips_length_comparison():
    result = validate(as_text(valid_document()), "abc")

    assert fields_of(result) == [("prompt_count", None)]


# ---------------------------------------------------------------------------
# No false short-circuit
# ---------------------------------------------------------------------------

def test_independent_defects_are_all_reported():
    document = valid_document(
        jira_id="PROJ-1",
        programming_language="  ",
        model="gpt",
        workflow="greenfield",
        prompts=[valid_prompt_entry(choice=8)],
        memory=valid_memory_block(memory_naturality="maybe"),
    )

    result = validate(as_text(document), "0")

    assert fields_of(result) == [
        ("prompt_count", None),
        ("jira_id", None),
        ("programming_language", None),
        ("model", None),
        ("workflow", None),
        ("choice", 0),
        ("memory.memory_naturality", None),
    ]


def test_missing_prompts_and_memory_do_not_raise():
    document = valid_document()
    del document["prompts"]
    del document["memory"]

    result = validate(as_text(document), "1")

    assert violations_on(result.violations, "prompts")
    assert violations_on(result.violations, "memory")
    assert all(v.index is None for v in result.violations)


def test_empty_object_reports_every_document_rule():
    result = validate("{}", "1")

    assert fields_of(result) == [
        ("prompts", None),
        ("uuid", None),
        ("jira_id", None),
        ("programming_language", None),
        ("model", None),
        ("root_gdrive", None),
        ("workflow", None),
        ("memory", None),
    ]


def test_non_object_prompt_entry_is_reported_and_skipped():
    document = valid_document(prompts=["not an entry", valid_prompt_entry()])

    result = validate(as_text(document), "2")

    assert fields_of(result) == [("prompts", 0)]
    assert result.violations[0].rule_id == "ENTRY-TYPE"


# ---------------------------------------------------------------------------
# Reporting order and grouping
# ---------------------------------------------------------------------------

def test_violations_are_ordered_document_entries_memory():
    document = valid_document(
        uuid="abc",
        prompts=[valid_prompt_entry(hfi_id="abc"), valid_prompt_entry(hfi_id="xyz")],
        memory=valid_memory_block(memory_comment=""),
    )
    document["root_gdrive"] = ""

    result = validate(as_text(document), "2")

    assert fields_of(result) == [
        ("root_gdrive", None),
        ("hfi_id", 1),
        ("memory.memory_comment", None),
    ]

    grouped = result.grouped()
    assert list(grouped) == ["general", "prompts[1]"]
    assert [v.field for v in grouped["general"]] == [
        "root_gdrive",
        "memory.memory_comment",
    ]


def test_validator_uses_injected_config():
    config = ValidatorConfig(EXPECTED_MODEL_ID="model-under-test")
    document = valid_document(model="model-under-test")

    result = DocumentValidator(config=config).run(as_text(document), "2")

    assert result.valid is True
