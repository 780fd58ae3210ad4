"""Command line entry point for kcadmin CLI."""

from __future__ import annotations

import argparse
import logging
import sys

from kcadmin_cli.core import DEFAULT_BASE, DEFAULT_REALM
from kcadmin_cli.commands import (
    cmd_auth_set,
    cmd_auth_info,
    cmd_groups_list,
    cmd_groups_count,
    cmd_groups_add,
    cmd_groups_remove,
)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="kcadmin", description="Identity server group membership CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")
    sub = parser.add_subparsers(dest="cmd")

    # auth
    p_auth = sub.add_parser("auth", help="Authentication")
    sub_auth = p_auth.add_subparsers(dest="auth_cmd")

    p_auth_set = sub_auth.add_parser("set", help="Save base URL, token and realm to ~/.kcadmin.json")
    p_auth_set.add_argument("--base-url", help=f"Server base URL (default: {DEFAULT_BASE})")
    p_auth_set.add_argument("--token", help="Bearer access token (JWT)")
    p_auth_set.add_argument("--realm", help=f"Default realm (default: {DEFAULT_REALM})")
    p_auth_set.set_defaults(func=cmd_auth_set)

    p_auth_info = sub_auth.add_parser("info", help="Show configured server, realm and token")
    p_auth_info.set_defaults(func=cmd_auth_info)

    # groups
    p_groups = sub.add_parser("groups", help="Manage a user's group memberships")
    sub_groups = p_groups.add_subparsers(dest="groups_cmd")

    p_g_list = sub_groups.add_parser("list", help="List groups the user belongs to")
    p_g_list.add_argument("user", help="User id")
    p_g_list.add_argument("--realm", help="Realm name (default: configured realm)")
    p_g_list.add_argument("--json", action="store_true", help="Print raw JSON")
    p_g_list.add_argument("--all", action="store_true", help="Fetch every page")
    p_g_list.set_defaults(func=cmd_groups_list)

    p_g_count = sub_groups.add_parser("count", help="Count groups the user belongs to")
    p_g_count.add_argument("user", help="User id")
    p_g_count.add_argument("--realm", help="Realm name (default: configured realm)")
    p_g_count.set_defaults(func=cmd_groups_count)

    p_g_add = sub_groups.add_parser("add", help="Add user to group(s)")
    p_g_add.add_argument("user", help="User id")
    p_g_add.add_argument("groups", nargs="+", help="Group ids")
    p_g_add.add_argument("--realm", help="Realm name (default: configured realm)")
    p_g_add.add_argument("--workers", type=int, default=4, help="Parallel workers")
    p_g_add.set_defaults(func=cmd_groups_add)

    p_g_remove = sub_groups.add_parser("remove", help="Remove user from group(s)")
    p_g_remove.add_argument("user", help="User id")
    p_g_remove.add_argument("groups", nargs="*", help="Group ids (omit to pick interactively)")
    p_g_remove.add_argument("--realm", help="Realm name (default: configured realm)")
    p_g_remove.add_argument("--workers", type=int, default=4, help="Parallel workers")
    p_g_remove.set_defaults(func=cmd_groups_remove)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.cmd:
        parser.print_help()
        return 0
    if args.cmd == "auth" and not getattr(args, "auth_cmd", None):
        p_auth.print_help()
        return 0
    if args.cmd == "groups" and not getattr(args, "groups_cmd", None):
        p_groups.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
