"""Authentication related commands."""

from __future__ import annotations

from ..core import get_session, mask_token, save_config


def cmd_auth_set(args):
    save_config(args.base_url, args.token, args.realm)


def cmd_auth_info(_args):
    session, realm = get_session()
    print(f"Base URL: {session.base_url}")
    print(f"Realm:    {realm}")
    print(f"Token:    {mask_token(session.access_token)}")
