"""
Evaluation metadata document vocabulary.

Defines the field names, enumerations and fixed constants of the
evaluation metadata document produced by prompt/response review
workflows. The wire names mirror the payload emitted by the document
producer and are part of the contract (including the producer's
spelling of `remembers_enviroment`).
"""

from enum import Enum
from typing import FrozenSet, Tuple


# ---------------------------------------------------------------------------
# Fixed constants
# ---------------------------------------------------------------------------

DEFAULT_EXPECTED_MODEL_ID = (
    "83aa91117c2fac3e25a3757eaa59f29ed3aeaf4dd7d3d384c673086c321e0644"
)

DEFAULT_JIRA_ID_PREFIX = "ANTHS-"

CHOICE_RANGE: Tuple[int, int] = (0, 7)
LEVEL_OF_CORRECTNESS_RANGE: Tuple[int, int] = (-1, 2)

# A fully correct response does not require an issue to be recorded.
FULLY_CORRECT_LEVEL = 2


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class Workflow(str, Enum):
    NEW_CODEBASE = "new_codebase"
    EXISTING_CODEBASE = "existing_codebase"


class Usecase(str, Enum):
    INITIAL_DEVELOPMENT = "initial_development"
    FEATURE_IMPLEMENTATION = "feature_implementation"
    DEBUGGING_FIXES = "debugging_fixes"
    OPTIMIZATION_TESTING = "optimization_testing"


class IssueType(str, Enum):
    MISSING_MEMORY = "missing_memory"
    TECHNICAL_INCONSISTENCY = "technical_inconsistency"
    TOOL = "tool"
    CODE_CORRECTNESS = "code_correctness"
    SETUP = "setup"
    OTHER = "other"


WORKFLOW_VALUES: Tuple[str, ...] = tuple(w.value for w in Workflow)
USECASE_VALUES: Tuple[str, ...] = tuple(u.value for u in Usecase)
ISSUE_TYPE_VALUES: Tuple[str, ...] = tuple(i.value for i in IssueType)


# ---------------------------------------------------------------------------
# Prompt entry fields
# ---------------------------------------------------------------------------

# Order matters: violations are reported in this order.
REQUIRED_ENTRY_FIELDS: Tuple[str, ...] = (
    "hfi_id",
    "prompt",
    "choice",
    "gdrive",
    "usecase",
    "comment",
    "level_of_correctness",
    "level_of_correctness_comment",
    "memory_comment",
)

ISSUE_FIELDS: Tuple[str, ...] = (
    "issue_type",
    "issue_comment",
    "issue_source",
)

# Free-form text preserved byte-for-byte by whitespace normalization.
UNTRIMMED_FIELDS: FrozenSet[str] = frozenset({"prompt"})


# ---------------------------------------------------------------------------
# Memory block fields
# ---------------------------------------------------------------------------

MEMORY_FLAG_FIELDS: Tuple[str, ...] = (
    "memory_naturality",
    "context_accuracy",
    "code_referencing",
    "remembers_debugging_history",
    "maintains_coding_style",
    "remembers_enviroment",
    "avoids_referencing_irrelevant_memory",
    "avoids_storing_irrelevant_memory",
)

MEMORY_FLAG_VALUES: FrozenSet[str] = frozenset({"yes", "no"})
CAPITALIZED_MEMORY_FLAG_VALUES: FrozenSet[str] = frozenset({"Yes", "No"})
