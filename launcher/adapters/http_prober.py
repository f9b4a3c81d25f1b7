"""HTTP reachability prober backed by an asynchronous httpx client."""

from __future__ import annotations

import logging
from typing import Final

import httpx

from .interfaces import ReachabilityProberPort
from .probe_errors import ProbeConnectionError, ProbeTimeoutError

logger = logging.getLogger(__name__)


class HttpxReachabilityProber(ReachabilityProberPort):
    """Prober issuing one bounded GET per probe through a shared `httpx.AsyncClient`."""

    _SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize httpx prober.

        Args:
            timeout_seconds: Upper bound for connect, read and total probe time.
            client: Optional preconfigured client; one is created when omitted.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when timeout is not positive.
        """

        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self._timeout_seconds = timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds), follow_redirects=False)

    def adapter_source_name(self) -> str:
        """Return stable prober label.

        Returns:
            str: Source identifier.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return "httpx_reachability_prober"

    async def adapter_probe(self, url: str, headers: dict[str, str]) -> int:
        """Issue one GET and return its status code.

        Args:
            url: Absolute `http://` or `https://` address.
            headers: Request headers sent with the probe.

        Returns:
            int: Response status code.

        Raises:
            ValueError: Raised when the URL is blank or uses an unsupported scheme.
            ProbeTimeoutError: Raised when the request times out.
            ProbeConnectionError: Raised for any other transport failure.
        """

        normalized_url = url.strip()
        if not normalized_url:
            raise ValueError("url must not be blank")
        if httpx.URL(normalized_url).scheme not in self._SUPPORTED_SCHEMES:
            raise ValueError(f"unsupported probe scheme for url={normalized_url}")

        try:
            response = await self._client.get(
                normalized_url,
                headers=headers,
                timeout=self._timeout_seconds,
            )
        except httpx.TimeoutException as error:
            raise ProbeTimeoutError(f"probe timed out after {self._timeout_seconds}s", url=normalized_url) from error
        except httpx.TransportError as error:
            raise ProbeConnectionError(f"probe transport failed: {error}", url=normalized_url) from error

        logger.debug("Probe %s returned HTTP %s", normalized_url, response.status_code)
        return int(response.status_code)

    async def adapter_close(self) -> None:
        """Close the underlying client when this prober created it."""

        if self._owns_client:
            await self._client.aclose()
