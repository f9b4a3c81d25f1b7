"""Discovery and validation of locally deployed application start pages.

Applications generated on this device live in sub-directories of the apps
directory, each identified by a `manifest.json` carrying its `id`. The start
page is the first valid `index.html` among a fixed list of candidate
locations; symbolic links are followed with loop and depth protection.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final
from urllib.parse import urlparse
from urllib.request import url2pathname

from launcher.domain import ApplicationLaunchConfig, ApplicationType, UserApplication

from .launch_error_codes import LaunchErrorCode, SymbolicLinkErrorKind
from .launch_errors import (
    ApplicationNotFoundError,
    FileAccessDeniedError,
    FileNotFoundLaunchError,
    FileSystemLaunchError,
    IndexNotFoundError,
    InvalidFileContentError,
    LaunchError,
    SymbolicLinkError,
)

logger = logging.getLogger(__name__)

INDEX_SEARCH_PATHS: Final[tuple[str, ...]] = (
    "index.html",
    "src/index.html",
    "public/index.html",
    "dist/index.html",
    "build/index.html",
)
MAX_SYMBOLIC_LINK_DEPTH: Final[int] = 10
_MANIFEST_FILE_NAME: Final[str] = "manifest.json"


@dataclass
class IndexSearchResult:
    """Outcome of one start-page search.

    Attributes:
        found_path: Resolved path of the first valid start page, if any.
        searched_paths: Every location examined, including resolved link targets.
        access_errors: Per-path failures other than plain absence.
    """

    found_path: Path | None = None
    searched_paths: list[str] = field(default_factory=list)
    access_errors: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.found_path is not None


class LocalIndexLocator:
    """Resolve launch configurations for applications deployed under a local directory."""

    def __init__(self, apps_directory: Path):
        """Initialize locator.

        Args:
            apps_directory: Directory whose sub-directories hold deployed applications.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when apps_directory is None.
        """

        if apps_directory is None:
            raise ValueError("apps_directory must not be None")
        self._apps_directory = Path(apps_directory)

    @property
    def apps_directory(self) -> Path:
        return self._apps_directory

    def locator_build_launch_config(self, application: UserApplication) -> ApplicationLaunchConfig:
        """Build a `file://` launch configuration for a locally deployed application.

        Args:
            application: Catalogued application.

        Returns:
            ApplicationLaunchConfig: Web configuration pointing at the resolved start page.

        Raises:
            ApplicationNotFoundError: Raised when no manifest matches the application id.
            IndexNotFoundError: Raised when no valid start page exists.
        """

        application_directory = self.locator_find_application_directory(application.application_id)
        search_result = self.locator_find_index(application_directory)
        if search_result.found_path is None:
            raise IndexNotFoundError(
                application_id=application.application_id,
                searched_paths=search_result.searched_paths,
                access_errors=search_result.access_errors or None,
            )

        logger.info("Using start page %s for %s", search_result.found_path, application.application_id)
        return ApplicationLaunchConfig(
            application_type=ApplicationType.WEB,
            url=search_result.found_path.absolute().as_uri(),
            window_title=application.title,
            show_navigation_controls=False,
        )

    def locator_find_application_directory(self, application_id: str) -> Path:
        """Return the sub-directory whose manifest declares `application_id`.

        Args:
            application_id: Application identifier.

        Returns:
            Path: Application directory.

        Raises:
            ApplicationNotFoundError: Raised when no directory matches.
        """

        try:
            candidate_directories = sorted(entry for entry in self._apps_directory.iterdir() if entry.is_dir())
        except OSError as error:
            logger.warning("Apps directory %s is not readable: %s", self._apps_directory, error)
            raise ApplicationNotFoundError(application_id, str(self._apps_directory)) from error

        for candidate_directory in candidate_directories:
            manifest_path = candidate_directory / _MANIFEST_FILE_NAME
            if not manifest_path.is_file():
                continue
            try:
                manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                logger.debug("Skipping unreadable manifest %s", manifest_path)
                continue
            if isinstance(manifest, dict) and manifest.get("id") == application_id:
                return candidate_directory

        raise ApplicationNotFoundError(application_id, str(self._apps_directory))

    def locator_find_index(self, application_directory: Path) -> IndexSearchResult:
        """Search candidate locations in priority order for a valid start page.

        Args:
            application_directory: Application root directory.

        Returns:
            IndexSearchResult: Found path (or None) plus all diagnostics.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        search_result = IndexSearchResult()
        search_started = time.monotonic()

        for attempt_number, relative_path in enumerate(INDEX_SEARCH_PATHS, start=1):
            candidate_path = application_directory / relative_path
            search_result.searched_paths.append(str(candidate_path))

            containing_directory = candidate_path.parent
            if not containing_directory.exists():
                continue
            if not _local_directory_is_accessible(containing_directory):
                search_result.access_errors.append(
                    f"{candidate_path}: Directory inaccessible: {containing_directory}"
                )
                continue

            try:
                resolved_path = local_resolve_symbolic_links(candidate_path)
                if resolved_path != candidate_path:
                    logger.debug("Symbolic link detected: %s -> %s", candidate_path, resolved_path)
                    search_result.searched_paths.append(f"{resolved_path} (resolved from {candidate_path})")
                local_validate_index_file(resolved_path)
            except FileNotFoundLaunchError:
                continue
            except LaunchError as error:
                search_result.access_errors.append(f"{candidate_path}: {_local_describe_search_error(error)}")
                continue

            logger.debug(
                "Found start page %s after %d attempts in %.1fms",
                resolved_path,
                attempt_number,
                (time.monotonic() - search_started) * 1000,
            )
            search_result.found_path = resolved_path
            return search_result

        logger.info(
            "No valid index.html under %s after %d locations (%d access errors)",
            application_directory,
            len(search_result.searched_paths),
            len(search_result.access_errors),
        )
        return search_result


def local_resolve_symbolic_links(file_path: Path) -> Path:
    """Follow a chain of symbolic links to its final target.

    Args:
        file_path: Candidate path, possibly a symbolic link.

    Returns:
        Path: The input when it is not a link, else the final existing target.

    Raises:
        SymbolicLinkError: Raised for loops, chains deeper than the limit,
            broken targets, and unreadable links.
    """

    if not file_path.is_symlink():
        return file_path

    resolved_path = _local_resolve_link_chain(file_path, visited_paths=set(), depth=0)
    if not resolved_path.exists():
        raise SymbolicLinkError(
            str(file_path),
            SymbolicLinkErrorKind.BROKEN_LINK,
            context={"resolved_path": str(resolved_path)},
        )
    return resolved_path


def local_validate_index_file(file_path: Path) -> None:
    """Check that a start page exists, is readable, and looks like HTML.

    Args:
        file_path: Start page path (already resolved).

    Returns:
        None: Returns normally when the file is usable.

    Raises:
        FileNotFoundLaunchError: Raised when the file does not exist.
        FileAccessDeniedError: Raised on permission errors.
        FileSystemLaunchError: Raised on other operating-system errors.
        InvalidFileContentError: Raised when the file is empty or not HTML.
    """

    content = local_read_text_file(file_path)
    if not content.strip():
        raise InvalidFileContentError(str(file_path), "HTML", cause="File is empty")

    lowered_content = content.lower()
    if "<html" not in lowered_content and "<!doctype" not in lowered_content:
        raise InvalidFileContentError(str(file_path), "HTML", cause="Missing HTML or DOCTYPE declaration")


def local_read_text_file(file_path: Path) -> str:
    """Read a UTF-8 text file, mapping failures onto the launch taxonomy.

    Args:
        file_path: File to read.

    Returns:
        str: File content.

    Raises:
        FileNotFoundLaunchError: Raised when the file does not exist.
        FileAccessDeniedError: Raised on permission errors.
        FileSystemLaunchError: Raised on other operating-system errors.
        InvalidFileContentError: Raised when the content is not valid UTF-8.
    """

    if not file_path.is_file():
        raise FileNotFoundLaunchError(str(file_path))
    try:
        return file_path.read_text(encoding="utf-8")
    except PermissionError as error:
        raise FileAccessDeniedError(str(file_path), cause=error) from error
    except UnicodeDecodeError as error:
        raise InvalidFileContentError(str(file_path), "UTF-8 text", cause=error) from error
    except OSError as error:
        raise FileSystemLaunchError(str(file_path), error) from error


def local_validate_file_url(url: str) -> Path:
    """Check that a `file://` launch target exists and can be opened.

    Args:
        url: Absolute `file://` address.

    Returns:
        Path: Resolved local file path.

    Raises:
        SymbolicLinkError: Raised when the target is an unusable symbolic link.
        FileNotFoundLaunchError: Raised when the file does not exist.
        FileAccessDeniedError: Raised on permission errors.
        FileSystemLaunchError: Raised on other operating-system errors.
    """

    file_path = local_resolve_symbolic_links(local_path_from_file_url(url))
    if not file_path.is_file():
        raise FileNotFoundLaunchError(str(file_path), url=url)
    try:
        with file_path.open("rb"):
            pass
    except PermissionError as error:
        raise FileAccessDeniedError(str(file_path), cause=error) from error
    except OSError as error:
        raise FileSystemLaunchError(str(file_path), error) from error
    return file_path


def local_path_from_file_url(url: str) -> Path:
    """Convert a `file://` URL into a local filesystem path."""

    return Path(url2pathname(urlparse(url).path))


def _local_resolve_link_chain(current_path: Path, visited_paths: set[str], depth: int) -> Path:
    if depth > MAX_SYMBOLIC_LINK_DEPTH:
        raise SymbolicLinkError(
            str(current_path),
            SymbolicLinkErrorKind.EXCESSIVE_RECURSION,
            context={"depth": depth},
        )

    normalized_path = os.path.normpath(str(current_path))
    if normalized_path in visited_paths:
        raise SymbolicLinkError(
            str(current_path),
            SymbolicLinkErrorKind.CIRCULAR_REFERENCE,
            context={"visited_paths": sorted(visited_paths)},
        )
    visited_paths.add(normalized_path)

    try:
        link_target = Path(os.readlink(current_path))
    except OSError as error:
        raise SymbolicLinkError(
            str(current_path),
            SymbolicLinkErrorKind.UNEXPECTED_ERROR,
            cause=error,
            context={"depth": depth, "os_error_code": error.errno},
        ) from error

    resolved_target = link_target if link_target.is_absolute() else current_path.parent / link_target
    if resolved_target.is_symlink():
        return _local_resolve_link_chain(resolved_target, visited_paths, depth + 1)
    return resolved_target


def _local_directory_is_accessible(directory: Path) -> bool:
    try:
        with os.scandir(directory):
            pass
    except OSError:
        return False
    return True


def _local_describe_search_error(error: LaunchError) -> str:
    if error.error_code in (LaunchErrorCode.FILE_ACCESS_DENIED.value, LaunchErrorCode.FILE_SYSTEM_ERROR.value):
        return f"Permission/access error: {error.message}"
    if error.error_code == LaunchErrorCode.INVALID_FILE_CONTENT.value:
        return f"Invalid content: {error.message}"
    if error.error_code == LaunchErrorCode.SYMBOLIC_LINK_ERROR.value:
        return f"Symbolic link error: {error.message}"
    return f"Unexpected error: {error.message}"
