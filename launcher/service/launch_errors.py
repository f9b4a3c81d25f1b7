"""Project-native typed exceptions describing why a launch failed.

Every variant carries the same structured payload (searched paths, per-path
access errors, underlying cause, free-form context) so one detailed-report
renderer and one user-message renderer serve the whole taxonomy.
"""

from __future__ import annotations

from typing import Any

from .launch_error_codes import LaunchErrorCode, SymbolicLinkErrorKind, launch_error_default_message


class LaunchError(Exception):
    """Base exception for launcher failures.

    Attributes:
        error_code: Taxonomy code surfaced on launch results.
        message: Diagnostic message for logs and detailed reports.
        searched_paths: Locations examined before failing.
        access_errors: Per-path access failures collected while searching.
        cause: Underlying exception or explanation.
        context: Additional structured diagnostics.
    """

    def __init__(
        self,
        message: str,
        error_code: str = LaunchErrorCode.LAUNCH_FAILED.value,
        searched_paths: list[str] | None = None,
        access_errors: list[str] | None = None,
        cause: object | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.searched_paths = list(searched_paths or [])
        self.access_errors = list(access_errors or [])
        self.cause = cause
        self.context = dict(context or {})

    @property
    def has_search_context(self) -> bool:
        return bool(self.searched_paths)

    @property
    def has_access_errors(self) -> bool:
        return bool(self.access_errors)

    def error_user_message(self) -> str:
        """Return the concise message shown on user-facing surfaces.

        Returns:
            str: Canonical message for the code, else the first line of the diagnostic message.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return launch_error_default_message(self.error_code, self.message.splitlines()[0] if self.message else "")

    def error_detailed_report(self) -> str:
        """Render every diagnostic field as a numbered, multi-line report.

        Returns:
            str: Report including searched paths, access errors, context and cause.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        report_lines = [
            f"{type(self).__name__} Details:",
            f"Code: {self.error_code}",
            f"Message: {self.message}",
        ]
        if self.has_search_context:
            report_lines.append("")
            report_lines.append(f"Searched Paths ({len(self.searched_paths)}):")
            report_lines.extend(f"  {index}. {path}" for index, path in enumerate(self.searched_paths, start=1))
        if self.has_access_errors:
            report_lines.append("")
            report_lines.append(f"Access Errors ({len(self.access_errors)}):")
            report_lines.extend(f"  {index}. {error}" for index, error in enumerate(self.access_errors, start=1))
        if self.context:
            report_lines.append("")
            report_lines.append("Additional Context:")
            report_lines.extend(f"  {key}: {value}" for key, value in self.context.items())
        if self.cause is not None:
            report_lines.append("")
            report_lines.append("Underlying Cause:")
            report_lines.append(f"  {self.cause}")
        return "\n".join(report_lines)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.error_code}): {self.message}"


class InvalidStateError(LaunchError):
    """Application status is outside the launchable set."""

    def __init__(self, application_id: str, status: str):
        super().__init__(
            f"Application cannot be launched in current state: {status}",
            LaunchErrorCode.INVALID_STATE.value,
            context={"application_id": application_id, "status": status},
        )


class UrlNotAccessibleError(LaunchError):
    """Reachability probe answered with a non-success status code."""

    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"Application URL returned status {status_code}: {url}\n\n"
            "The application server may be down or the URL may be incorrect.",
            LaunchErrorCode.URL_NOT_ACCESSIBLE.value,
            context={"url": url, "status_code": status_code, "validation_type": "http_health_check"},
        )
        self.status_code = status_code


class UrlValidationError(LaunchError):
    """Reachability probe failed at the transport level or timed out."""

    def __init__(self, url: str, cause: object):
        super().__init__(
            f"Failed to validate application URL: {cause}\n\n"
            "This may be due to network connectivity issues or the server not listening.",
            LaunchErrorCode.URL_VALIDATION_FAILED.value,
            cause=cause,
            context={"url": url, "error_type": type(cause).__name__},
        )


class HealthCheckFailedError(LaunchError):
    """A running process failed its periodic reachability probe."""

    def __init__(self, application_id: str, cause: object):
        super().__init__(
            f"Health check failed for {application_id}: {cause}",
            LaunchErrorCode.HEALTH_CHECK_FAILED.value,
            cause=cause,
            context={"application_id": application_id},
        )


class ApplicationNotFoundError(LaunchError):
    """No deployed directory or address could be resolved for an application."""

    def __init__(self, application_id: str, apps_directory: str | None = None):
        super().__init__(
            f"Application directory not found for {application_id}",
            LaunchErrorCode.APP_NOT_FOUND.value,
            context={"application_id": application_id, "apps_directory": apps_directory},
        )


class UnsupportedApplicationTypeError(LaunchError):
    """Launch configuration names an application type that cannot be started."""

    def __init__(self, application_type: str):
        super().__init__(
            f"{application_type} applications are not yet supported",
            LaunchErrorCode.UNSUPPORTED_TYPE.value,
            context={"application_type": application_type},
        )


class UnsupportedSchemeError(LaunchError):
    """Target address uses a scheme other than file, http or https."""

    def __init__(self, url: str, scheme: str):
        super().__init__(
            f"Unsupported URL scheme: {scheme}\n\n"
            "Only file://, http://, and https:// URLs are supported for application launching.",
            LaunchErrorCode.UNSUPPORTED_SCHEME.value,
            context={"url": url, "scheme": scheme, "supported_schemes": ["file", "http", "https"]},
        )


class IndexNotFoundError(LaunchError):
    """Every candidate start-page location was exhausted."""

    def __init__(self, application_id: str, searched_paths: list[str], access_errors: list[str] | None = None):
        message_lines = [f"Application index.html not found for {application_id}.", "Searched locations:"]
        message_lines.extend(f"- {path}" for path in searched_paths)
        if access_errors:
            message_lines.append("")
            message_lines.append("Access errors encountered:")
            message_lines.extend(f"- {error}" for error in access_errors)
        message_lines.append("")
        message_lines.append("Please ensure your application has an index.html file in one of these locations.")
        super().__init__(
            "\n".join(message_lines),
            LaunchErrorCode.INDEX_NOT_FOUND.value,
            searched_paths=searched_paths,
            access_errors=access_errors,
            context={
                "application_id": application_id,
                "search_count": len(searched_paths),
                "access_error_count": len(access_errors or []),
            },
        )


class FileNotFoundLaunchError(LaunchError):
    """A specific application file does not exist."""

    def __init__(self, file_path: str, url: str | None = None):
        super().__init__(
            f"Application file does not exist: {file_path}",
            LaunchErrorCode.FILE_NOT_FOUND.value,
            context={"file_path": file_path, "url": url},
        )


class FileAccessDeniedError(LaunchError):
    """Permission error on a specific path."""

    def __init__(self, file_path: str, cause: object | None = None):
        super().__init__(
            f"Cannot access file due to permission restrictions: {file_path}\n\n"
            "Please check that the application has read permissions for this file "
            "and that the file is not locked by another process.",
            LaunchErrorCode.FILE_ACCESS_DENIED.value,
            cause=cause,
            context={"file_path": file_path, "error_type": "permission_denied"},
        )


class FileSystemLaunchError(LaunchError):
    """Operating-system failure other than permission denial while reading a file."""

    def __init__(self, file_path: str, cause: OSError):
        super().__init__(
            f"File system error accessing {file_path}: {cause.strerror or cause}",
            LaunchErrorCode.FILE_SYSTEM_ERROR.value,
            cause=cause,
            context={"file_path": file_path, "os_error_code": cause.errno},
        )


class InvalidFileContentError(LaunchError):
    """File exists but its content failed a type or format check."""

    def __init__(self, file_path: str, expected_type: str, cause: object | None = None):
        super().__init__(
            f"File exists but does not contain valid {expected_type} content: {file_path}\n\n"
            f"Please ensure the file contains properly formatted {expected_type} data.",
            LaunchErrorCode.INVALID_FILE_CONTENT.value,
            cause=cause,
            context={"file_path": file_path, "expected_type": expected_type, "error_type": "invalid_content"},
        )


class SymbolicLinkError(LaunchError):
    """Symbolic link could not be resolved to a usable target."""

    _KIND_MESSAGES = {
        SymbolicLinkErrorKind.CIRCULAR_REFERENCE: (
            "Circular symbolic link reference detected: {path}\n\n"
            "The symbolic link chain contains a loop that prevents resolution."
        ),
        SymbolicLinkErrorKind.BROKEN_LINK: (
            "Symbolic link points to non-existent target: {path}\n\n"
            "The symbolic link target does not exist or is inaccessible."
        ),
        SymbolicLinkErrorKind.EXCESSIVE_RECURSION: (
            "Symbolic link chain too deep: {path}\n\n"
            "The symbolic link chain exceeds the maximum resolution depth."
        ),
        SymbolicLinkErrorKind.UNEXPECTED_ERROR: (
            "Failed to resolve symbolic link: {path}\n\n"
            "An error occurred while following the symbolic link."
        ),
    }

    def __init__(
        self,
        file_path: str,
        kind: SymbolicLinkErrorKind,
        cause: object | None = None,
        context: dict[str, Any] | None = None,
    ):
        link_context = {"file_path": file_path, "error_type": kind.value, "category": "symbolic_link"}
        link_context.update(context or {})
        super().__init__(
            self._KIND_MESSAGES[kind].format(path=file_path),
            LaunchErrorCode.SYMBOLIC_LINK_ERROR.value,
            cause=cause,
            context=link_context,
        )
        self.kind = kind
