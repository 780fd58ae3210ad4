"""Configuration helpers for kcadmin CLI."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Tuple

from .session import Session

CONFIG_PATH = Path(os.path.expanduser("~")) / ".kcadmin.json"
# Used when no base URL is configured
DEFAULT_BASE = "http://localhost:8080"
DEFAULT_REALM = "master"
# Upper bound for the ``max`` query parameter when paging
API_MAX_LIMIT = 100


def load_config() -> Dict[str, Any]:
    """Load configuration from disk and environment."""
    cfg: Dict[str, Any] = {}
    if CONFIG_PATH.exists():
        try:
            cfg = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        except ValueError:
            print(f"Ignoring unreadable config {CONFIG_PATH}", file=sys.stderr)
            cfg = {}
    if os.getenv("KCADMIN_BASE_URL"):
        cfg["base_url"] = os.getenv("KCADMIN_BASE_URL")
    if os.getenv("KCADMIN_TOKEN"):
        cfg["token"] = os.getenv("KCADMIN_TOKEN")
    if os.getenv("KCADMIN_REALM"):
        cfg["realm"] = os.getenv("KCADMIN_REALM")
    return cfg


def save_config(base_url: str | None, token: str | None, realm: str | None = None) -> None:
    """Persist configuration to CONFIG_PATH."""
    cfg = {}
    if CONFIG_PATH.exists():
        try:
            cfg = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        except ValueError:
            cfg = {}
    if base_url is not None:
        cfg["base_url"] = base_url.rstrip("/")
    if token is not None:
        cfg["token"] = token
    if realm is not None:
        cfg["realm"] = realm
    CONFIG_PATH.write_text(json.dumps(cfg, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Saved config to {CONFIG_PATH}")


def get_session() -> Tuple[Session, str]:
    """Return the configured session and default realm or exit if no token."""
    cfg = load_config()
    base = cfg.get("base_url") or DEFAULT_BASE
    token = cfg.get("token")
    if not token:
        print("Missing token. Run: kcadmin auth set --token <JWT>", file=sys.stderr)
        sys.exit(2)
    return Session(base, token), cfg.get("realm") or DEFAULT_REALM
