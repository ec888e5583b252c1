"""
Exception hierarchy for apaprint.

All exceptions inherit from ApaPrintError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class ApaPrintError(Exception):
    """Base exception for all apaprint errors."""
    pass


class ValidationError(ApaPrintError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Column lengths are incorrect or inconsistent.

    Raised when the columns of a variance table do not all have the
    same number of rows, or a column is not one-dimensional.
    """
    pass


class ConfigurationError(ValidationError):
    """
    A formatting option names something that cannot be honoured.

    Base class for the fail-fast option errors of print_anova().
    """
    pass


class UnsupportedEffectSizeError(ConfigurationError):
    """
    An effect-size code outside the supported set was requested.

    Attributes:
        requested: All effect-size codes that were requested
        supported: The codes that are supported
    """

    def __init__(
        self,
        message: str,
        requested: tuple[str, ...] = (),
        supported: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.requested = requested
        self.supported = supported


class MissingFactorError(ConfigurationError):
    """
    An observed factor does not occur in any term of the table.

    Attributes:
        missing: The observed factor name that was not found
        terms: Term names that were searched
    """

    def __init__(
        self,
        message: str,
        missing: str,
        terms: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.missing = missing
        self.terms = terms
