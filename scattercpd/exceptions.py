"""
Exceptions for invalid detector inputs.

Numeric degeneracy (short groups, zero variance, zero reference mean) is never
raised; it shows up as zero, NaN or Inf in the result instead.
"""


class ChangeDetectionError(Exception):
    """Base exception for change detection failures."""
    pass


class WindowValidationError(ChangeDetectionError, ValueError):
    """Raised when a window or its scan parameters are malformed."""
    pass


class ConfigurationError(ChangeDetectionError):
    """Raised when configuration is invalid or cannot be mapped."""
    pass
