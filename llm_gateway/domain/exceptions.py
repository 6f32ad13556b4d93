from __future__ import annotations


class BusinessValidationError(Exception):
    """Raised when a domain/business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GatewayError(Exception):
    """Base error for faults raised inside the gateway call pipeline."""


class ConfigNotFoundError(GatewayError):
    """Raised when no configuration matches the requested name exactly."""

    def __init__(self, name: str):
        super().__init__(f"Configuration '{name}' not found")
        self.name = name


class TransportError(GatewayError):
    """Raised on connection, TLS, timeout or I/O failure talking to the provider."""
