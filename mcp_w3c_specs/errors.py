"""Exception types for expected lookup failures and their serialized form."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from .constants import MAX_AVAILABLE_SPECS_DISPLAY


class W3CMCPError(Exception):
    """Base exception for expected application errors."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def payload(self) -> Dict[str, Any]:
        return {"error": self.name, "message": str(self)}


class SpecNotFoundError(W3CMCPError):
    """Raised when an identifier does not resolve to any specification."""

    def __init__(self, shortname: str, suggestions: Optional[Sequence[str]] = None) -> None:
        self.shortname = shortname
        self.suggestions = list(suggestions) if suggestions else None
        if self.suggestions:
            message = (
                f'Specification "{shortname}" not found. '
                f"Did you mean: {', '.join(self.suggestions)}?"
            )
        else:
            message = (
                f'Specification "{shortname}" not found. '
                "Please check the shortname and try again."
            )
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {**super().payload(), "suggestions": self.suggestions}


class WebIDLNotFoundError(W3CMCPError):
    """Raised when no WebIDL blob matches the identifier."""

    def __init__(self, shortname: str, suggestions: Optional[Sequence[str]] = None) -> None:
        self.shortname = shortname
        self.suggestions = list(suggestions) if suggestions else None
        if self.suggestions:
            message = (
                f'WebIDL not found for "{shortname}". '
                f"Specs with WebIDL that might match: {', '.join(self.suggestions)}"
            )
        else:
            message = (
                f'WebIDL not found for "{shortname}". '
                "This specification might not have WebIDL definitions."
            )
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {**super().payload(), "suggestions": self.suggestions}


class WebIDLAmbiguousError(W3CMCPError):
    """Raised when a partial WebIDL lookup matches more than one key."""

    def __init__(self, shortname: str, candidates: Sequence[str]) -> None:
        self.shortname = shortname
        self.candidates = list(candidates)
        super().__init__(
            f'"{shortname}" matches WebIDL for several specifications: '
            f"{', '.join(self.candidates)}. Use one of these exact shortnames."
        )

    def payload(self) -> Dict[str, Any]:
        return {**super().payload(), "candidates": self.candidates}


def _available(specs: Sequence[str]) -> str:
    shown = ", ".join(specs[:MAX_AVAILABLE_SPECS_DISPLAY])
    return shown + ("..." if len(specs) > MAX_AVAILABLE_SPECS_DISPLAY else "")


class CSSNotFoundError(W3CMCPError):
    """Raised when a CSS spec filter matches nothing."""

    def __init__(self, spec: str, available_specs: Optional[Sequence[str]] = None) -> None:
        self.spec = spec
        if available_specs:
            message = f'CSS data not found for "{spec}". Available CSS specs: {_available(available_specs)}'
        else:
            message = f'CSS data not found for "{spec}".'
        super().__init__(message)


class ElementsNotFoundError(W3CMCPError):
    """Raised when an element spec filter names an unknown spec."""

    def __init__(self, spec: str, available_specs: Optional[Sequence[str]] = None) -> None:
        self.spec = spec
        if available_specs:
            message = f'Elements data not found for "{spec}". Available specs: {_available(available_specs)}'
        else:
            message = f'Elements data not found for "{spec}".'
        super().__init__(message)


class InputValidationError(W3CMCPError):
    """Raised when tool arguments fail their schema."""

    def __init__(self, error: ValidationError) -> None:
        self.issues: List[Dict[str, str]] = [
            {
                "field": ".".join(str(p) for p in issue["loc"]) or "(root)",
                "message": issue["msg"],
            }
            for issue in error.errors()
        ]
        summary = "; ".join(f"{i['field']}: {i['message']}" for i in self.issues)
        super().__init__(f"Validation error: {summary}")

    def payload(self) -> Dict[str, Any]:
        return {**super().payload(), "issues": self.issues}


class DatasetLoadError(W3CMCPError):
    """Raised when a bundled collection cannot be read or fails validation."""

    def __init__(self, collection: str, cause: object) -> None:
        self.collection = collection
        super().__init__(f"Failed to load {collection} data: {cause}")


@dataclass(frozen=True)
class ErrorResponse:
    text: str
    error_type: str


def format_error_response(error: BaseException) -> ErrorResponse:
    """Serialize any exception into the text returned to the client."""
    if isinstance(error, ValidationError):
        error = InputValidationError(error)
    if isinstance(error, W3CMCPError):
        return ErrorResponse(
            text=json.dumps(error.payload(), indent=2),
            error_type=error.name,
        )
    return ErrorResponse(text=f"Error: {error}", error_type="Error")
