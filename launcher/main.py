"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service,
or performs one reachability probe from the command line.
"""

import argparse
import asyncio
import logging

import uvicorn

from launcher.adapters import HttpxReachabilityProber, ProbeError
from launcher.bootstrap import bootstrap_create_application
from launcher.config import LauncherSettings, config_load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 1 when a `probe` command fails.
    """

    argument_parser = argparse.ArgumentParser(description="Household application launcher runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "probe"),
        help="Runtime command: `api` starts server, `probe` checks one application URL once",
        type=str,
    )
    argument_parser.add_argument(
        "url",
        nargs="?",
        type=str,
        help="Application URL for `probe`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    main_configure_logging(settings.log_level)

    if parsed_arguments.command == "probe":
        if not parsed_arguments.url:
            argument_parser.error("probe requires a URL")
        status_code = asyncio.run(main_probe_url(parsed_arguments.url, settings))
        if status_code is None or not 200 <= status_code < 400:
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
        log_level=settings.log_level.lower(),
    )


def main_configure_logging(log_level: str) -> None:
    """Configure root logging once for the process."""

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def main_probe_url(url: str, settings: LauncherSettings) -> int | None:
    """Probe one URL with the configured timeout and User-Agent.

    Args:
        url: Absolute http(s) address.
        settings: Validated runtime settings.

    Returns:
        int | None: Response status code, or None when the probe failed at transport level.

    Raises:
        ValueError: Raised when the URL scheme is not http or https.
    """

    prober = HttpxReachabilityProber(timeout_seconds=settings.probe_timeout_seconds)
    try:
        status_code = await prober.adapter_probe(url, {"User-Agent": settings.probe_user_agent})
    except ProbeError as error:
        logger.error("Probe of %s failed: %s", url, error)
        return None
    finally:
        await prober.adapter_close()

    print(f"{url} -> HTTP {status_code}")
    return status_code


if __name__ == "__main__":
    main()
