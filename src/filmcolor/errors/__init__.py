"""Custom exception hierarchy for filmcolor."""

from __future__ import annotations


class FilmColorError(Exception):
    """Base class for all custom errors raised by filmcolor."""


# --- layered hierarchy ---

class DomainError(FilmColorError):
    """Base class for domain-level errors."""


class InfrastructureError(FilmColorError):
    """Base class for infrastructure-level errors."""


# --- Domain errors ---

class InvalidImageBufferError(DomainError):
    """Raised when image planes do not describe a ``width * height`` buffer."""


class ParameterDocumentError(DomainError):
    """Raised when a parameter document fails validation."""


# --- Infrastructure errors ---

class ImageReadError(InfrastructureError):
    """Raised when an image file cannot be decoded."""


class ImageWriteError(InfrastructureError):
    """Raised when an image file cannot be encoded or written."""


# --- Settings ---

class SettingsError(FilmColorError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "DomainError",
    "FilmColorError",
    "ImageReadError",
    "ImageWriteError",
    "InfrastructureError",
    "InvalidImageBufferError",
    "ParameterDocumentError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
