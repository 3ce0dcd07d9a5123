"""
Runtime configuration for the Metadata Check validator.

This module centralizes the fixed rule constants and the behavioral
toggles that differ between deployments of the validator (whitespace
normalization, URL strictness, memory flag casing).

Configuration is read-only at runtime. Defaults reproduce the reference
rule set exactly.
"""

from __future__ import annotations

import os
from pydantic import BaseModel, Field, field_validator

from metadata_check.app.schemas.document import (
    DEFAULT_EXPECTED_MODEL_ID,
    DEFAULT_JIRA_ID_PREFIX,
)


class ValidatorConfig(BaseModel):
    """
    Runtime configuration for the Metadata Check validator.

    Configuration is environment-driven for the service, explicit for
    library callers, and immutable once constructed.
    """

    # ------------------------------------------------------------------
    # Rule constants
    # ------------------------------------------------------------------

    EXPECTED_MODEL_ID: str = Field(
        DEFAULT_EXPECTED_MODEL_ID,
        description=(
            "Opaque model identifier the document's `model` field must "
            "equal exactly (case- and byte-sensitive)."
        ),
    )

    JIRA_ID_PREFIX: str = Field(
        DEFAULT_JIRA_ID_PREFIX,
        description="Literal prefix every `jira_id` must start with",
    )

    # ------------------------------------------------------------------
    # Behavioral toggles
    # ------------------------------------------------------------------

    TRIM_STRING_VALUES: bool = Field(
        False,
        description=(
            "Strip leading/trailing whitespace from every string value "
            "before any rule runs. Prompt text is never trimmed."
        ),
    )

    STRICT_URL_VALIDATION: bool = Field(
        False,
        description=(
            "Require `root_gdrive` and prompt `gdrive` to be syntactically "
            "valid http(s) URLs instead of only starting with 'http'."
        ),
    )

    ACCEPT_CAPITALIZED_MEMORY_FLAGS: bool = Field(
        False,
        description=(
            "Accept 'Yes'/'No' in addition to 'yes'/'no' for memory flags"
        ),
    )

    # ------------------------------------------------------------------
    # Safety and resource limits (service only)
    # ------------------------------------------------------------------

    MAX_DOCUMENT_SIZE_KB: int = Field(
        1024,
        description="Maximum accepted raw document size in kilobytes",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("EXPECTED_MODEL_ID", "JIRA_ID_PREFIX")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Rule constants must not be blank.")
        return v

    @field_validator("MAX_DOCUMENT_SIZE_KB")
    @classmethod
    def size_limit_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(
                f"MAX_DOCUMENT_SIZE_KB must be positive, got {v}."
            )
        return v

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """
        Load configuration from environment variables.

        All values are parsed once at startup and must remain immutable.
        """

        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        return cls(
            EXPECTED_MODEL_ID=os.getenv(
                "METADATA_CHECK_EXPECTED_MODEL_ID", DEFAULT_EXPECTED_MODEL_ID
            ),
            JIRA_ID_PREFIX=os.getenv(
                "METADATA_CHECK_JIRA_ID_PREFIX", DEFAULT_JIRA_ID_PREFIX
            ),
            TRIM_STRING_VALUES=env_bool(
                "METADATA_CHECK_TRIM_STRING_VALUES", False
            ),
            STRICT_URL_VALIDATION=env_bool(
                "METADATA_CHECK_STRICT_URL_VALIDATION", False
            ),
            ACCEPT_CAPITALIZED_MEMORY_FLAGS=env_bool(
                "METADATA_CHECK_ACCEPT_CAPITALIZED_MEMORY_FLAGS", False
            ),
            MAX_DOCUMENT_SIZE_KB=int(
                os.getenv("METADATA_CHECK_MAX_DOCUMENT_SIZE_KB", "1024")
            ),
        )

    model_config = {
        "frozen": True,
    }
