from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from metadata_check.app.schemas.violations import Violation


# ---------------------------------------------------------------------------
# Internal transport object
# ---------------------------------------------------------------------------

class ParseResult(BaseModel):
    """
    Internal transport object for the parse stage of a validation run.

    AUTHORITY
    ---------
    - document:
        The parsed (and, when enabled, whitespace-normalized) root
        object. Present only when parsing succeeded.

    - violations:
        Empty on success. On failure, exactly one `json` violation.

    IMPORTANT
    ---------
    - NOT exposed outside the validator
    - exactly one of `document` and `violations` is populated
    """

    violations: List[Violation]

    document: Optional[dict]

    @property
    def parsed(self) -> bool:
        return self.document is not None

    model_config = ConfigDict(frozen=True)


__all__ = [
    "ParseResult",
]
