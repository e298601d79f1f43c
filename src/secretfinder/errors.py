"""Error kinds raised by secretfinder.

ConfigError and ShareFormatError are ValueErrors; DegenerateInputError is
a ZeroDivisionError so callers that already guard field inversion keep
working.
"""


class ConfigError(ValueError):
    """Reconstruction parameters are inconsistent (k, max_bad, share count)."""


class DegenerateInputError(ZeroDivisionError):
    """A Lagrange denominator is not invertible modulo the field.

    Raised when two shares in one interpolation have the same x-coordinate
    modulo the field.
    """


class ShareFormatError(ValueError):
    """A share file does not match either supported layout."""
