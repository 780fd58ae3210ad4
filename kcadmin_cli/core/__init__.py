"""Core utilities for kcadmin CLI."""

from .config import CONFIG_PATH, DEFAULT_BASE, DEFAULT_REALM, API_MAX_LIMIT, load_config, save_config, get_session
from .errors import KcAdminError, HTTPStatusError, RawBodyError, error_message
from .http import Request, Response, build_request, urllib_transport
from .session import Session
from .utils import format_rows, report_error, mask_token
from .interactive import interactive_select_groups

__all__ = [
    "CONFIG_PATH", "DEFAULT_BASE", "DEFAULT_REALM", "API_MAX_LIMIT",
    "load_config", "save_config", "get_session",
    "KcAdminError", "HTTPStatusError", "RawBodyError", "error_message",
    "Request", "Response", "build_request", "urllib_transport",
    "Session",
    "format_rows", "report_error", "mask_token",
    "interactive_select_groups",
]
