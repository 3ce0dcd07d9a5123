"""
Tests for parsing and whitespace normalization.

Normalization is off by default. When enabled, every string is trimmed
before any rule runs, except prompt text, which is preserved exactly.
"""

from metadata_check.app.checks.document.parsing import (
    normalize_whitespace,
    run_parse_checks,
)
from metadata_check.app.config import ValidatorConfig
from metadata_check.app.coordinator.document_validator import validate
from metadata_check.tests.fixtures.documents import (
    DOCUMENT_UUID,
    as_text,
    valid_document,
    valid_memory_block,
    valid_prompt_entry,
)


TRIMMING = ValidatorConfig(TRIM_STRING_VALUES=True)


def test_parse_returns_document_unchanged_by_default():
    document = valid_document(programming_language="  python  ")

    result = run_parse_checks(as_text(document), ValidatorConfig())

    assert result.parsed
    assert result.violations == []
    assert result.document["programming_language"] == "  python  "


def test_normalization_trims_nested_strings_but_not_prompt_text():
    raw = {
        "uuid": "  abc\t",
        "codebase": {"url": " https://example.com ", "description": "\nrepo "},
        "prompts": [
            {"hfi_id": " abc ", "prompt": "  keep\n  indentation  ", "choice": 3},
        ],
        "tags": [" a ", [" b "]],
        "count": 2,
        "flag": None,
    }

    normalized = normalize_whitespace(raw)

    assert normalized == {
        "uuid": "abc",
        "codebase": {"url": "https://example.com", "description": "repo"},
        "prompts": [
            {"hfi_id": "abc", "prompt": "  keep\n  indentation  ", "choice": 3},
        ],
        "tags": ["a", ["b"]],
        "count": 2,
        "flag": None,
    }


def test_normalization_does_not_mutate_input():
    raw = {"uuid": " abc "}

    normalize_whitespace(raw)

    assert raw == {"uuid": " abc "}


def test_trimming_makes_padded_hfi_id_match_uuid():
    document = valid_document(
        prompts=[valid_prompt_entry(hfi_id=f" {DOCUMENT_UUID} ")]
    )

    untrimmed = validate(as_text(document), "1")
    trimmed = validate(as_text(document), "1", TRIMMING)

    assert [v.field for v in untrimmed.violations] == ["hfi_id"]
    assert trimmed.valid is True


def test_trimming_makes_whitespace_codebase_empty_for_new_codebase():
    document = valid_document(
        workflow="new_codebase",
        codebase={"url": "  ", "description": "\t"},
    )

    untrimmed = validate(as_text(document), "2")
    trimmed = validate(as_text(document), "2", TRIMMING)

    assert [v.field for v in untrimmed.violations] == ["codebase"]
    assert trimmed.valid is True


def test_trimming_leaves_memory_flag_spacing_checked():
    document = valid_document(
        memory=valid_memory_block(memory_naturality=" yes "),
    )

    assert [v.field for v in validate(as_text(document), "2").violations] == [
        "memory.memory_naturality"
    ]
    assert validate(as_text(document), "2", TRIMMING).valid is True


def _nested_lists(depth, leaf):
    value = leaf
    for _ in range(depth):
        value = [value]
    return value


def test_normalization_handles_nesting_deeper_than_recursion_limit():
    normalized = normalize_whitespace({"extra": _nested_lists(5000, "  x  ")})

    value = normalized["extra"]
    for _ in range(5000):
        assert isinstance(value, list) and len(value) == 1
        value = value[0]
    assert value == "x"


def test_deeply_nested_document_validates_the_same_with_trimming():
    document = valid_document(extra=_nested_lists(600, " y "))

    untrimmed = validate(as_text(document), "2")
    trimmed = validate(as_text(document), "2", TRIMMING)

    assert untrimmed.valid is True
    assert trimmed.valid is True
