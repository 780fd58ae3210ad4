"""Output and error reporting helpers for kcadmin CLI."""

from __future__ import annotations

import sys
from typing import Any, Dict, List

from .errors import HTTPStatusError, error_message

__all__ = ["format_rows", "report_error", "mask_token"]


def format_rows(rows: List[Dict[str, Any]], fields: List[str]) -> None:
    if not rows:
        print("(no data)")
        return
    widths = [max(len(str(r.get(f, ""))) for r in rows + [dict(zip(fields, fields))]) for f in fields]
    header = " | ".join(f.ljust(w) for f, w in zip(fields, widths))
    sep = "-+-".join("-" * w for w in widths)
    print(header)
    print(sep)
    for r in rows:
        print(" | ".join(str(r.get(f, "")).ljust(w) for f, w in zip(fields, widths)))


def report_error(e: Exception, context: str | None = None) -> None:
    """Print a one-line description of ``e`` to stderr."""
    prefix = f"{context}: " if context else ""
    if isinstance(e, HTTPStatusError):
        message = error_message(e.body)
        if e.status_code == 401:
            print(f"{prefix}Authentication failed: {message}", file=sys.stderr)
        elif e.status_code == 403:
            print(
                f"{prefix}Forbidden: {message} (does the token have manage-users?)",
                file=sys.stderr,
            )
        else:
            print(f"{prefix}[HTTP {e.status_code}] {message}", file=sys.stderr)
        return
    if isinstance(e, OSError):
        reason = getattr(e, "reason", None) or e
        print(f"{prefix}Network error: {reason}", file=sys.stderr)
        return
    print(f"{prefix}Unexpected error: {e!r}", file=sys.stderr)


def mask_token(token: str) -> str:
    if len(token) <= 12:
        return "*" * len(token)
    return f"{token[:6]}...{token[-4:]}"
