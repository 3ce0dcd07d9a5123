"""
FastAPI entrypoint for the Metadata Check validator.

This module is the caller of the validator: it accepts a raw candidate
document plus the expected prompt count, invokes the DocumentValidator,
and renders the violation list both flat and grouped by prompt entry.

The application is stateless. Validation outcomes, valid or not, are
always returned with HTTP 200; only transport-level problems (oversized
or malformed requests) produce error statuses.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import Response

from metadata_check.app.config import ValidatorConfig
from metadata_check.app.coordinator.document_validator import DocumentValidator
from metadata_check.app.schemas.violations import Violation


# ---------------------------------------------------------------------------
# Presentation helpers (presentation-only)
# ---------------------------------------------------------------------------

def pretty_json(data: Any) -> str:
    """Pretty-print JSON for human-readable output."""
    return json.dumps(
        data,
        ensure_ascii=False,
        indent=2,
        separators=(", ", ": "),
        allow_nan=False,
    )


class PrettyJSONResponse(Response):
    """
    Pretty-printed JSON response for human-readable console output.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return pretty_json(content).encode("utf-8")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------

class ValidationRequest(BaseModel):
    document: str = Field(
        ...,
        description="Raw JSON text of the candidate document",
    )

    expected_count: str = Field(
        ...,
        description="Expected number of prompt entries, as entered by the user",
    )

    model_config = ConfigDict(extra="forbid")


class ValidationResponse(BaseModel):
    valid: bool
    violation_count: int
    violations: List[Violation]
    grouped: Dict[str, List[Violation]] = Field(
        ...,
        description=(
            "Violations keyed by 'general' (document-level) or "
            "'prompts[<index>]'"
        ),
    )


# ---------------------------------------------------------------------------
# Application setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Metadata Check Service",
    description="Deterministic validator for evaluation metadata documents",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Startup / Shutdown
# ---------------------------------------------------------------------------

@app.on_event("startup")
def startup_event() -> None:
    """
    Application startup hook.

    Configuration is loaded once and treated as immutable for the lifetime
    of the process.
    """
    config = ValidatorConfig.from_env()

    app.state.config = config
    app.state.validator = DocumentValidator(config=config)


# ---------------------------------------------------------------------------
# API Routes
# ---------------------------------------------------------------------------

@app.post(
    "/validate",
    response_model=ValidationResponse,
    response_model_exclude_none=True,
    response_class=PrettyJSONResponse,
    summary="Validate an evaluation metadata document",
)
def validate_document(request: ValidationRequest) -> ValidationResponse:
    """
    Validate a candidate document against the expected prompt count.

    Every applicable rule runs; the full violation list is returned.
    """
    # ------------------------------------------------------------------
    # Hard resource safety limits (NOT validation outcomes)
    # ------------------------------------------------------------------
    config: ValidatorConfig = app.state.config
    max_size_bytes = config.MAX_DOCUMENT_SIZE_KB * 1024

    if len(request.document.encode("utf-8", "surrogatepass")) > max_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=(
                f"Document exceeds maximum allowed size of "
                f"{config.MAX_DOCUMENT_SIZE_KB} KB"
            ),
        )

    validator: DocumentValidator = app.state.validator
    result = validator.run(request.document, request.expected_count)

    return ValidationResponse(
        valid=result.valid,
        violation_count=len(result.violations),
        violations=result.violations,
        grouped=result.grouped(),
    )


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------

@app.get(
    "/health",
    summary="Service health check",
)
def health_check() -> JSONResponse:
    """Simple health check endpoint."""
    return JSONResponse(
        content={
            "status": "ok",
            "service": "metadata-check",
        }
    )
