"""Base exception for all keysafe errors."""


class KeysafeError(Exception):
    """Root of the keysafe exception hierarchy."""
