"""Command handlers for kcadmin CLI."""

from .auth import cmd_auth_set, cmd_auth_info
from .groups import (
    cmd_groups_list,
    cmd_groups_count,
    cmd_groups_add,
    cmd_groups_remove,
)

__all__ = [
    "cmd_auth_set",
    "cmd_auth_info",
    "cmd_groups_list",
    "cmd_groups_count",
    "cmd_groups_add",
    "cmd_groups_remove",
]
