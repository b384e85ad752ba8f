"""Exceptions raised by sdkgen.

Shape problems in the document itself are never errors: unusable paths and
schemas are skipped. Only failures that leave no usable artifact end up here.
"""

from __future__ import annotations

from pathlib import Path


class SdkGenError(Exception):
    """Base exception for all sdkgen errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SpecLoadError(SdkGenError):
    """The OpenAPI document could not be read or parsed.

    Attributes:
        source: The path that failed to load.
        cause: The underlying exception, if any.
    """

    def __init__(self, source: str | Path, cause: Exception | None = None):
        self.source = str(source)
        self.cause = cause
        message = f"Failed to load OpenAPI document from '{self.source}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class OutputWriteError(SdkGenError):
    """A generated file could not be written."""

    def __init__(self, path: str | Path, cause: Exception | None = None):
        self.path = str(path)
        self.cause = cause
        message = f"Failed to write '{self.path}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class SpecReferenceError(SdkGenError):
    """A $ref points at nothing in the document."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Unresolvable reference '{reference}'")
