"""
Centralized exception hierarchy for domain-specific errors.

The statistics engine never raises; these exceptions belong to the
collaborators around it so that callers can classify failures without
inspecting messages.
"""


class FuelLogError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ExternalServiceError(FuelLogError):
    """Exception raised when the fill API or another service call fails."""


FuelLogException = FuelLogError
ExternalServiceException = ExternalServiceError
