from __future__ import annotations

from pathlib import Path

from jinja2 import Template

from .content import PostSummary
from .render import render_index, render_page, write_text

INDEX_TITLE = "Home"


def build_page(template: Template, dest_path: Path, title: str, content: str) -> Path:
    write_text(dest_path, render_page(template, title, content))
    return dest_path


def build_index(template: Template, output_dir: Path, posts: list[PostSummary]) -> Path:
    dest_path = output_dir / "index.html"
    write_text(dest_path, render_index(template, INDEX_TITLE, posts))
    return dest_path
