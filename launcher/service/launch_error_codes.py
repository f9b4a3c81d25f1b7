"""Canonical launch error-code semantics for result routing and user messaging."""

from __future__ import annotations

from enum import Enum
from typing import Final


class LaunchErrorCode(str, Enum):
    """Known launcher failure codes surfaced on launch results."""

    INVALID_STATE = "INVALID_STATE"
    URL_NOT_ACCESSIBLE = "URL_NOT_ACCESSIBLE"
    URL_VALIDATION_FAILED = "URL_VALIDATION_FAILED"
    HEALTH_CHECK_FAILED = "HEALTH_CHECK_FAILED"
    PROCESS_CRASHED = "PROCESS_CRASHED"
    INDEX_NOT_FOUND = "INDEX_NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_ACCESS_DENIED = "FILE_ACCESS_DENIED"
    FILE_SYSTEM_ERROR = "FILE_SYSTEM_ERROR"
    INVALID_FILE_CONTENT = "INVALID_FILE_CONTENT"
    SYMBOLIC_LINK_ERROR = "SYMBOLIC_LINK_ERROR"
    APP_NOT_FOUND = "APP_NOT_FOUND"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    UNSUPPORTED_SCHEME = "UNSUPPORTED_SCHEME"
    LAUNCH_FAILED = "LAUNCH_FAILED"
    STOP_FAILED = "STOP_FAILED"


class SymbolicLinkErrorKind(str, Enum):
    """Sub-kinds of symbolic-link resolution failures."""

    CIRCULAR_REFERENCE = "circular_reference"
    BROKEN_LINK = "broken_link"
    EXCESSIVE_RECURSION = "excessive_recursion"
    UNEXPECTED_ERROR = "unexpected_error"


LAUNCH_ERROR_DEFAULT_MESSAGES: Final[dict[str, str]] = {
    LaunchErrorCode.INVALID_STATE.value: "This application is not ready to be launched yet.",
    LaunchErrorCode.URL_NOT_ACCESSIBLE.value: "The application server did not respond successfully. Please try again later.",
    LaunchErrorCode.URL_VALIDATION_FAILED.value: "The application could not be reached. Please check your connection and try again.",
    LaunchErrorCode.HEALTH_CHECK_FAILED.value: "The application stopped responding. Restart it to continue.",
    LaunchErrorCode.PROCESS_CRASHED.value: "The application stopped unexpectedly. Restart it to continue.",
    LaunchErrorCode.INDEX_NOT_FOUND.value: "The application's start page could not be found.",
    LaunchErrorCode.FILE_NOT_FOUND.value: "An application file is missing.",
    LaunchErrorCode.FILE_ACCESS_DENIED.value: "An application file could not be opened because access was denied.",
    LaunchErrorCode.FILE_SYSTEM_ERROR.value: "An application file could not be read.",
    LaunchErrorCode.INVALID_FILE_CONTENT.value: "An application file is damaged or has the wrong format.",
    LaunchErrorCode.SYMBOLIC_LINK_ERROR.value: "An application file link is broken.",
    LaunchErrorCode.APP_NOT_FOUND.value: "The application could not be found on this device.",
    LaunchErrorCode.UNSUPPORTED_TYPE.value: "This kind of application is not supported yet.",
    LaunchErrorCode.UNSUPPORTED_SCHEME.value: "The application address is not supported.",
    LaunchErrorCode.LAUNCH_FAILED.value: "The application could not be launched.",
    LaunchErrorCode.STOP_FAILED.value: "The application could not be stopped cleanly.",
}

LAUNCH_RECOVERABLE_CODES: Final[frozenset[str]] = frozenset(
    {
        LaunchErrorCode.URL_NOT_ACCESSIBLE.value,
        LaunchErrorCode.URL_VALIDATION_FAILED.value,
        LaunchErrorCode.HEALTH_CHECK_FAILED.value,
        LaunchErrorCode.PROCESS_CRASHED.value,
    }
)

LAUNCH_FILE_CODES: Final[frozenset[str]] = frozenset(
    {
        LaunchErrorCode.INDEX_NOT_FOUND.value,
        LaunchErrorCode.FILE_NOT_FOUND.value,
        LaunchErrorCode.FILE_ACCESS_DENIED.value,
        LaunchErrorCode.FILE_SYSTEM_ERROR.value,
        LaunchErrorCode.INVALID_FILE_CONTENT.value,
        LaunchErrorCode.SYMBOLIC_LINK_ERROR.value,
    }
)


def launch_error_default_message(error_code: str, fallback_message: str) -> str:
    """Return canonical user-facing message for an error code.

    Args:
        error_code: Launcher error code.
        fallback_message: Fallback message when code is unknown.

    Returns:
        str: Canonical message for known code, else provided fallback message.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return LAUNCH_ERROR_DEFAULT_MESSAGES.get(error_code, fallback_message)


def launch_error_is_recoverable(error_code: str) -> bool:
    """Return whether retrying or restarting may resolve the failure.

    Args:
        error_code: Launcher error code.

    Returns:
        bool: True for transient network and health failures.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return error_code in LAUNCH_RECOVERABLE_CODES
