from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Iterable, Optional

import markdown

from .utils import SiteError

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
DEFAULT_EXTENSIONS = ["fenced_code", "tables"]


@dataclass(frozen=True)
class PostSummary:
    title: str
    date: dt.date
    slug: str
    link: str


def strip_md(name: str) -> str:
    return name[:-3] if name.endswith(".md") else name


def derive_title(stem: str) -> str:
    words = strip_md(stem).replace("-", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def parse_post_date(value: str) -> Optional[dt.date]:
    if not DATE_RE.fullmatch(value):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return None


def parse_post(filename: str) -> Optional[PostSummary]:
    """Read the publish date and slug out of a ``YYYY-MM-DD-slug.md`` name.

    Anything that does not have that shape, or whose date is not a real
    calendar day, is simply not a post and yields ``None``.
    """
    parts = filename.split("-", 3)
    if len(parts) != 4:
        return None
    date = parse_post_date("-".join(parts[:3]))
    if date is None:
        return None
    slug = strip_md(parts[3])
    return PostSummary(
        title=derive_title(slug),
        date=date,
        slug=slug,
        link=f"/posts/{strip_md(filename)}.html",
    )


def sort_posts(posts: Iterable[PostSummary], order: str) -> list[PostSummary]:
    posts = list(posts)
    if order == "walk":
        return posts
    # newest first; slug breaks ties so same-day posts keep a stable order
    posts.sort(key=lambda post: post.slug)
    posts.sort(key=lambda post: post.date, reverse=True)
    return posts


def make_converter(extensions: Optional[list[str]] = None) -> markdown.Markdown:
    names = list(DEFAULT_EXTENSIONS if extensions is None else extensions)
    try:
        return markdown.Markdown(extensions=names)
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        raise SiteError(f"Cannot load markdown extensions {', '.join(names)}: {exc}") from exc


def convert_markdown(source: bytes, md: Optional[markdown.Markdown] = None) -> str:
    # undecodable bytes become U+FFFD so the page is still produced
    text = source.decode("utf-8", errors="replace").lstrip("\ufeff")
    if md is None:
        md = make_converter()
    try:
        return md.convert(text)
    finally:
        md.reset()
