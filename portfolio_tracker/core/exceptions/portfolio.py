"""
Custom exception hierarchy for the portfolio tracker.

This module defines domain-specific exceptions for better error handling.
"""


class PortfolioException(Exception):
    """Base exception for all portfolio-related errors."""

    pass


class ValidationError(PortfolioException):
    """Raised when input validation fails."""

    pass


class XirrValidationError(ValidationError):
    """Raised when a cash-flow set cannot have an internal rate of return."""

    def __init__(self, reason: str, flow_count: int):
        self.reason = reason
        self.flow_count = flow_count
        super().__init__(f"Invalid cash flows for XIRR ({flow_count} flows): {reason}")


class CalculationError(PortfolioException):
    """Raised when mathematical calculations fail."""

    pass


class ConvergenceError(CalculationError):
    """Raised when a root finder cannot bracket or converge to a root."""

    def __init__(self, message: str, iterations: int = 0):
        self.iterations = iterations
        super().__init__(message)


class DataError(PortfolioException):
    """Raised when data access or processing fails."""

    pass


class DocumentFormatError(DataError):
    """Raised when a portfolio document cannot be parsed."""

    pass


class RateFetchError(DataError):
    """Raised when an FX rate series cannot be retrieved."""

    def __init__(self, base_iso: str, target_iso: str, reason: str):
        self.base_iso = base_iso
        self.target_iso = target_iso
        self.reason = reason
        super().__init__(f"Failed to fetch {target_iso}/{base_iso} rates: {reason}")


class ConfigurationError(PortfolioException):
    """Raised when configuration is invalid."""

    pass
