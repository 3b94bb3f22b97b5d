from __future__ import annotations

from typing import Final

# Typed errors let CLI callers branch on the failure without parsing messages.
# Keep this list minimal and grow it only when a new type is actually emitted.
KNOWN_ERROR_TYPES: Final[set[str]] = {
    "INVALID_ARGUMENT",
    "MALFORMED_OPTIONS",
    "NOT_ACCESSIBLE",
    "UNRECOGNIZED_PHRASE",
    "BACKEND_FAILED",
}


def assert_known_error_type(error_type: str) -> None:
    if error_type not in KNOWN_ERROR_TYPES:
        raise ValueError(f"Unknown error type: {error_type!r}. Add it to axe_bdd.core.error_types.KNOWN_ERROR_TYPES.")
