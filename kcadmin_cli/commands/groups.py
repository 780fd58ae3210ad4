"""Group membership commands for kcadmin CLI."""

from __future__ import annotations

import json
import sys

from ..client import GroupMembershipClient
from ..core import (
    KcAdminError,
    format_rows,
    get_session,
    interactive_select_groups,
    report_error,
)


def _client_and_realm(args):
    session, realm = get_session()
    return GroupMembershipClient(session), getattr(args, "realm", None) or realm


def cmd_groups_list(args) -> None:
    client, realm = _client_and_realm(args)
    try:
        if args.all:
            groups = client.find_all(realm, args.user)
        else:
            groups = client.find(realm, args.user)
    except (KcAdminError, OSError) as e:
        report_error(e)
        sys.exit(2)
    if isinstance(groups, (bytes, bytearray)):
        text = groups.decode("utf-8", errors="replace")
        print(f"Unexpected non-JSON response: {text}", file=sys.stderr)
        sys.exit(2)
    if args.json:
        print(json.dumps(groups, ensure_ascii=False, indent=2))
        return
    rows = [g if isinstance(g, dict) else {"name": g} for g in groups or []]
    format_rows(rows, ["id", "name", "path"])


def cmd_groups_count(args) -> None:
    client, realm = _client_and_realm(args)
    try:
        print(client.count(realm, args.user))
    except (KcAdminError, OSError) as e:
        report_error(e)
        sys.exit(2)


def _report_batch(results, verb: str, preposition: str, user: str) -> None:
    had_error = False
    for gid, err in results:
        if err is None:
            print(f"{verb} {user} {preposition} {gid}")
        else:
            had_error = True
            report_error(err, context=f"failed {gid}")
    if had_error:
        sys.exit(1)


def cmd_groups_add(args) -> None:
    """Add a user to one or more groups.

    One request is sent per group so a failure for a single group does not
    prevent processing the remaining ones.
    """
    client, realm = _client_and_realm(args)
    results = client.add_many(
        realm,
        args.user,
        args.groups,
        workers=args.workers,
        progress=len(args.groups) > 1,
    )
    _report_batch(results, "added", "to", args.user)


def cmd_groups_remove(args) -> None:
    client, realm = _client_and_realm(args)
    group_ids = list(args.groups or [])
    if not group_ids:
        try:
            current = client.find(realm, args.user)
        except (KcAdminError, OSError) as e:
            report_error(e)
            sys.exit(2)
        if not current:
            print(f"{args.user} is not a member of any group")
            return
        group_ids = interactive_select_groups(current)
    results = client.remove_many(
        realm,
        args.user,
        group_ids,
        workers=args.workers,
        progress=len(group_ids) > 1,
    )
    _report_batch(results, "removed", "from", args.user)
