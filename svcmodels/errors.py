"""Central error taxonomy (codes carried by failure events)."""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # provider setup
    "invalid-directory",
    # request
    "invalid-document-type",
    "unresolved-descriptor",
    # load
    "parse-error",
    "manifest-load-error",
    # config
    "config-invalid",
    "config-out-of-range",
    # infra
    "event-handler-error",
    "provider-internal",
}

_EXCEPTION_CODES = {
    "InvalidDirectoryError": "invalid-directory",
    "InvalidDocumentTypeError": "invalid-document-type",
    "UnresolvedDescriptorError": "unresolved-descriptor",
    "ParseError": "parse-error",
    "ManifestLoadError": "manifest-load-error",
    "ConfigError": "config-invalid",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


def map_exception(e: Exception) -> str:
    for cls in type(e).__mro__:
        code = _EXCEPTION_CODES.get(cls.__name__)
        if code:
            return code
    return "provider-internal"


__all__ = ["validate_error_type", "map_exception"]
