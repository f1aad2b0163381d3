"""Exceptions raised by certbatch."""

from typing import Optional


class CertificateError(Exception):
    """Base class for all certbatch errors."""


class DecodeError(CertificateError):
    """Template image could not be decoded."""


class InvalidDimensionsError(DecodeError):
    """Template image decoded but has a zero or negative dimension."""

    def __init__(self, width: int, height: int):
        super().__init__(f"Invalid image dimensions: {width}x{height}")
        self.width = width
        self.height = height


class ParseError(CertificateError):
    """Names spreadsheet could not be read or contained no names."""


class PreconditionError(CertificateError):
    """Generation was requested without a template or without names."""


class RenderError(CertificateError):
    """A single certificate failed to render."""

    def __init__(self, name: str, cause: Optional[BaseException] = None):
        message = f"Failed to render certificate for {name!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.name = name
        self.cause = cause


class PackageError(CertificateError):
    """The archive could not be assembled or saved."""


class BatchCancelledError(CertificateError):
    """A running batch was cancelled before it finished."""
