"""Project-native typed exceptions for reachability probe failures."""

from __future__ import annotations


class ProbeError(Exception):
    """Base exception for adapter-level probe failures.

    Attributes:
        url: Probed address.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class ProbeConnectionError(ProbeError, ConnectionError):
    """Transport-level connectivity failure while probing an address."""


class ProbeTimeoutError(ProbeError, TimeoutError):
    """Probe did not complete within its bounded timeout."""
