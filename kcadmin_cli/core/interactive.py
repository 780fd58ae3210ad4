"""Interactive helpers using InquirerPy."""

from __future__ import annotations

import sys
from typing import List

from InquirerPy import inquirer


def _execute(prompt):
    """Execute a prompt and handle ``Ctrl-C`` gracefully."""
    try:
        return prompt.execute()
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        sys.exit(1)


def interactive_select_groups(groups: List[dict]) -> List[str]:
    """Let the user tick groups from ``groups`` and return their IDs.

    Labels use the group ``path`` when the server sends one (``/parent/child``)
    and fall back to ``name``.
    """

    choices = []
    for g in groups:
        label = g.get("path") or g.get("name") or "(unnamed)"
        choices.append({"name": f"{label}  [{g.get('id')}]", "value": g.get("id")})
    choices.sort(key=lambda x: x["name"].lower())

    prompt = inquirer.checkbox(
        message="Select groups (Space to toggle, Enter to confirm):",
        choices=choices,
        instruction="Up/Down, Space: toggle, Ctrl+S search, Enter",
        transformer=lambda res: f"{len(res)} selected",
        height="90%",
        validate=lambda ans: (len(ans) > 0) or "Select at least one group",
        keybindings={
            "toggle": [{"key": "space"}],
            "search": [{"key": "c-s"}],
            "search-next": [{"key": "enter"}],
        },
    )
    result = _execute(prompt)
    return list(result or [])
