"""Recognise links to videos, dynamics, articles and live rooms."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

__all__ = ["LinkKind", "LinkMatch", "find_short_link", "match_link"]

SHORT_LINK_RE = re.compile(r"((b23|acg).tv|bili2233.cn)/[0-9a-zA-Z]+")
VIDEO_RE = re.compile(r"bilibili.com\\?/video\\?/(?:av(\d+)|([bB][vV][0-9a-zA-Z]+))")
DYNAMIC_RE = re.compile(r"(t.bilibili.com|m.bilibili.com\\?/dynamic)\\?/(\d+)")
ARTICLE_RE = re.compile(r"bilibili.com\\?/read\\?/(?:cv|mobile\\?/)(\d+)")
LIVE_ROOM_RE = re.compile(r"live.bilibili.com\\?/(\d+)")


class LinkKind(enum.Enum):
    VIDEO = "video"
    DYNAMIC = "dynamic"
    ARTICLE = "article"
    LIVE = "live"


@dataclass(frozen=True)
class LinkMatch:
    """The kind of content a link points at and its id."""

    kind: LinkKind
    id: str


def find_short_link(text: str) -> str | None:
    """The first short link in the text, or None."""
    match = SHORT_LINK_RE.search(text)
    return match.group(0) if match else None


def match_link(text: str) -> LinkMatch | None:
    """The first kind of link found, checked as video, dynamic, article, live."""
    match = VIDEO_RE.search(text)
    if match:
        return LinkMatch(LinkKind.VIDEO, match.group(1) or match.group(2))
    match = DYNAMIC_RE.search(text)
    if match:
        return LinkMatch(LinkKind.DYNAMIC, match.group(2))
    match = ARTICLE_RE.search(text)
    if match:
        return LinkMatch(LinkKind.ARTICLE, match.group(1))
    match = LIVE_ROOM_RE.search(text)
    if match:
        return LinkMatch(LinkKind.LIVE, match.group(1))
    return None