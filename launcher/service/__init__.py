"""Service layer package for application launch supervision."""

from .event_stream import LaunchEventStream, LaunchEventSubscription
from .health_monitor import HealthCheckScheduler
from .interfaces import ApplicationLauncherPort
from .launch_error_codes import (
	LAUNCH_ERROR_DEFAULT_MESSAGES,
	LAUNCH_FILE_CODES,
	LAUNCH_RECOVERABLE_CODES,
	LaunchErrorCode,
	SymbolicLinkErrorKind,
	launch_error_default_message,
	launch_error_is_recoverable,
)
from .launch_errors import (
	ApplicationNotFoundError,
	FileAccessDeniedError,
	FileNotFoundLaunchError,
	FileSystemLaunchError,
	HealthCheckFailedError,
	IndexNotFoundError,
	InvalidFileContentError,
	InvalidStateError,
	LaunchError,
	SymbolicLinkError,
	UnsupportedApplicationTypeError,
	UnsupportedSchemeError,
	UrlNotAccessibleError,
	UrlValidationError,
)
from .launcher_service import DEFAULT_PROBE_USER_AGENT, ApplicationLauncherService, LauncherDisposedError
from .local_index import (
	INDEX_SEARCH_PATHS,
	MAX_SYMBOLIC_LINK_DEPTH,
	IndexSearchResult,
	LocalIndexLocator,
	local_resolve_symbolic_links,
	local_validate_file_url,
	local_validate_index_file,
)
from .window_state_store import WINDOW_STATE_KEY_PREFIX, WindowStateRepository, window_state_store_key

__all__ = [
	"ApplicationLauncherPort",
	"ApplicationLauncherService",
	"ApplicationNotFoundError",
	"DEFAULT_PROBE_USER_AGENT",
	"FileAccessDeniedError",
	"FileNotFoundLaunchError",
	"FileSystemLaunchError",
	"HealthCheckFailedError",
	"HealthCheckScheduler",
	"INDEX_SEARCH_PATHS",
	"IndexNotFoundError",
	"IndexSearchResult",
	"InvalidFileContentError",
	"InvalidStateError",
	"LAUNCH_ERROR_DEFAULT_MESSAGES",
	"LAUNCH_FILE_CODES",
	"LAUNCH_RECOVERABLE_CODES",
	"LaunchError",
	"LaunchErrorCode",
	"LaunchEventStream",
	"LaunchEventSubscription",
	"LauncherDisposedError",
	"LocalIndexLocator",
	"MAX_SYMBOLIC_LINK_DEPTH",
	"SymbolicLinkError",
	"SymbolicLinkErrorKind",
	"UnsupportedApplicationTypeError",
	"UnsupportedSchemeError",
	"UrlNotAccessibleError",
	"UrlValidationError",
	"WINDOW_STATE_KEY_PREFIX",
	"WindowStateRepository",
	"launch_error_default_message",
	"launch_error_is_recoverable",
	"local_resolve_symbolic_links",
	"local_validate_file_url",
	"local_validate_index_file",
	"window_state_store_key",
]
