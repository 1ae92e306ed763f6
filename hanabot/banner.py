"""Start-up banner with the notice board text."""

from __future__ import annotations

BANNER = (
    "* OneBot + hanabot\n"
    "* Version 1.6.0-beta1 - 2022-11-15 11:13:42 +0800 CST"
)


def render_banner(kanban: str) -> str:
    """The banner printed at start-up, with the given notice board text."""
    return (
        "\n======================[hanabot]======================"
        f"\n{BANNER}\n"
        "----------------------[hanabot-公告栏]----------------------"
        f"\n{kanban}\n"
        "============================================================\n\n"
    )