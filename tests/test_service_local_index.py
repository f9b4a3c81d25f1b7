"""Regression tests for local start-page discovery and symbolic-link resolution."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from launcher.domain import ApplicationStatus, UserApplication
from launcher.service import (
    ApplicationNotFoundError,
    FileNotFoundLaunchError,
    IndexNotFoundError,
    InvalidFileContentError,
    LocalIndexLocator,
    SymbolicLinkError,
    SymbolicLinkErrorKind,
    local_resolve_symbolic_links,
    local_validate_file_url,
    local_validate_index_file,
)

_VALID_HTML = "<!DOCTYPE html><html><body>Recipes</body></html>"


def _create_application(apps_directory: Path, folder_name: str, application_id: str) -> Path:
    """Create an application folder carrying a manifest.

    Args:
        apps_directory: Root apps directory.
        folder_name: Sub-directory name.
        application_id: Identifier stored in manifest.json.

    Returns:
        Path: Created application directory.

    Raises:
        OSError: Raised when the filesystem rejects the write.
    """

    application_directory = apps_directory / folder_name
    application_directory.mkdir(parents=True)
    (application_directory / "manifest.json").write_text(json.dumps({"id": application_id}), encoding="utf-8")
    return application_directory


def _build_application(application_id: str = "recipes") -> UserApplication:
    return UserApplication(application_id=application_id, title="Recipes", status=ApplicationStatus.READY)


def test_service_local_index_builds_file_config_from_manifest_directory(tmp_path: Path) -> None:
    """Resolve the app folder by manifest id and point the config at its start page.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate launch config construction.

    Raises:
        AssertionError: Raised when the config targets the wrong file.
    """

    _create_application(tmp_path, "other-app", "chores")
    application_directory = _create_application(tmp_path, "generated-1234", "recipes")
    (application_directory / "index.html").write_text(_VALID_HTML, encoding="utf-8")

    launch_config = LocalIndexLocator(tmp_path).locator_build_launch_config(_build_application())

    assert launch_config.url == (application_directory / "index.html").absolute().as_uri()
    assert launch_config.window_title == "Recipes"
    assert launch_config.show_navigation_controls is False


def test_service_local_index_prefers_search_order_and_skips_invalid_candidates(tmp_path: Path) -> None:
    """Skip empty and non-HTML candidates and record them as access errors.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate search priority and diagnostics.

    Raises:
        AssertionError: Raised when the wrong candidate is chosen.
    """

    application_directory = _create_application(tmp_path, "recipes", "recipes")
    (application_directory / "index.html").write_text("   ", encoding="utf-8")
    (application_directory / "src").mkdir()
    (application_directory / "src" / "index.html").write_text("plain text", encoding="utf-8")
    (application_directory / "dist").mkdir()
    (application_directory / "dist" / "index.html").write_text(_VALID_HTML, encoding="utf-8")
    (application_directory / "build").mkdir()
    (application_directory / "build" / "index.html").write_text(_VALID_HTML, encoding="utf-8")

    search_result = LocalIndexLocator(tmp_path).locator_find_index(application_directory)

    assert search_result.found_path == application_directory / "dist" / "index.html"
    assert len(search_result.access_errors) == 2
    assert all("Invalid content" in error for error in search_result.access_errors)
    assert search_result.searched_paths[-1].endswith(os.path.join("dist", "index.html"))


def test_service_local_index_raises_index_not_found_with_all_searched_paths(tmp_path: Path) -> None:
    _create_application(tmp_path, "recipes", "recipes")

    with pytest.raises(IndexNotFoundError) as error_info:
        LocalIndexLocator(tmp_path).locator_build_launch_config(_build_application())

    assert len(error_info.value.searched_paths) == 5
    assert error_info.value.error_code == "INDEX_NOT_FOUND"
    assert error_info.value.has_access_errors is False


def test_service_local_index_raises_app_not_found_for_unknown_id(tmp_path: Path) -> None:
    """Raise APP_NOT_FOUND when no manifest matches or the apps directory is missing."""

    _create_application(tmp_path, "chores", "chores")
    (tmp_path / "broken").mkdir()
    (tmp_path / "broken" / "manifest.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ApplicationNotFoundError):
        LocalIndexLocator(tmp_path).locator_find_application_directory("recipes")
    with pytest.raises(ApplicationNotFoundError):
        LocalIndexLocator(tmp_path / "missing").locator_find_application_directory("recipes")


def test_service_local_index_follows_symbolic_link_chain(tmp_path: Path) -> None:
    """Resolve a relative link chain to its final target and report it as searched.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate link resolution.

    Raises:
        AssertionError: Raised when the chain resolves incorrectly.
    """

    application_directory = _create_application(tmp_path, "recipes", "recipes")
    (application_directory / "real.html").write_text(_VALID_HTML, encoding="utf-8")
    (application_directory / "hop.html").symlink_to("real.html")
    (application_directory / "index.html").symlink_to("hop.html")

    search_result = LocalIndexLocator(tmp_path).locator_find_index(application_directory)

    assert search_result.found_path == application_directory / "real.html"
    assert any("resolved from" in searched_path for searched_path in search_result.searched_paths)


def test_service_local_index_detects_circular_links(tmp_path: Path) -> None:
    first_link = tmp_path / "a.html"
    second_link = tmp_path / "b.html"
    first_link.symlink_to("b.html")
    second_link.symlink_to("a.html")

    with pytest.raises(SymbolicLinkError) as error_info:
        local_resolve_symbolic_links(first_link)

    assert error_info.value.kind is SymbolicLinkErrorKind.CIRCULAR_REFERENCE


def test_service_local_index_detects_broken_links(tmp_path: Path) -> None:
    dangling_link = tmp_path / "index.html"
    dangling_link.symlink_to("missing.html")

    with pytest.raises(SymbolicLinkError) as error_info:
        local_resolve_symbolic_links(dangling_link)

    assert error_info.value.kind is SymbolicLinkErrorKind.BROKEN_LINK


def test_service_local_index_rejects_excessively_deep_link_chains(tmp_path: Path) -> None:
    """Stop following chains longer than the maximum resolution depth."""

    (tmp_path / "target.html").write_text(_VALID_HTML, encoding="utf-8")
    previous_name = "target.html"
    for link_index in range(12):
        link_name = f"link{link_index}.html"
        (tmp_path / link_name).symlink_to(previous_name)
        previous_name = link_name

    with pytest.raises(SymbolicLinkError) as error_info:
        local_resolve_symbolic_links(tmp_path / previous_name)

    assert error_info.value.kind is SymbolicLinkErrorKind.EXCESSIVE_RECURSION


def test_service_local_index_returns_plain_files_unchanged(tmp_path: Path) -> None:
    plain_file = tmp_path / "index.html"
    plain_file.write_text(_VALID_HTML, encoding="utf-8")

    assert local_resolve_symbolic_links(plain_file) == plain_file


def test_service_local_index_validates_html_content(tmp_path: Path) -> None:
    """Accept documents with an html tag or doctype and reject everything else."""

    lowercase_html = tmp_path / "lower.html"
    lowercase_html.write_text("<html><body></body></html>", encoding="utf-8")
    empty_file = tmp_path / "empty.html"
    empty_file.write_text("", encoding="utf-8")
    binary_file = tmp_path / "binary.html"
    binary_file.write_bytes(b"\xff\xfe\x00garbage")

    local_validate_index_file(lowercase_html)
    with pytest.raises(InvalidFileContentError, match="HTML"):
        local_validate_index_file(empty_file)
    with pytest.raises(InvalidFileContentError):
        local_validate_index_file(binary_file)
    with pytest.raises(FileNotFoundLaunchError):
        local_validate_index_file(tmp_path / "absent.html")


def test_service_local_index_validates_file_urls(tmp_path: Path) -> None:
    start_page = tmp_path / "index.html"
    start_page.write_text(_VALID_HTML, encoding="utf-8")

    assert local_validate_file_url(start_page.as_uri()) == start_page
    with pytest.raises(FileNotFoundLaunchError) as error_info:
        local_validate_file_url((tmp_path / "absent.html").as_uri())
    assert error_info.value.error_code == "FILE_NOT_FOUND"
