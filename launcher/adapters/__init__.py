"""Adapter layer package for network reachability boundaries."""

from .http_prober import HttpxReachabilityProber
from .interfaces import ReachabilityProberPort
from .probe_errors import ProbeConnectionError, ProbeError, ProbeTimeoutError

__all__ = [
	"HttpxReachabilityProber",
	"ProbeConnectionError",
	"ProbeError",
	"ProbeTimeoutError",
	"ReachabilityProberPort",
]
