"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol


class ReachabilityProberPort(Protocol):
    """Port definition for probing whether an application address answers."""

    def adapter_source_name(self) -> str:
        """Return prober identifier for diagnostics.

        Returns:
            str: Human-readable prober identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    async def adapter_probe(self, url: str, headers: dict[str, str]) -> int:
        """Probe one address and return the response status code.

        Args:
            url: Absolute `http://` or `https://` address.
            headers: Request headers sent with the probe.

        Returns:
            int: HTTP status code returned by the target.

        Raises:
            ProbeTimeoutError: Raised when the probe exceeds its bounded timeout.
            ProbeConnectionError: Raised when the transport fails.
        """

    async def adapter_close(self) -> None:
        """Release transport resources held by the prober.

        Returns:
            None: Closes resources as side effect.

        Raises:
            RuntimeError: Raised when resources cannot be released.
        """
