from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, select_autoescape
from markupsafe import Markup

from .content import PostSummary
from .utils import SiteError

POST_TEMPLATE = "post.html"
INDEX_TEMPLATE = "index.html"


class Templates(NamedTuple):
    post: Template
    index: Template


def load_templates(templates_dir: Path) -> Templates:
    if not templates_dir.is_dir():
        raise SiteError(f"Templates directory not found: {templates_dir}")
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "htm", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    loaded = []
    for name in (POST_TEMPLATE, INDEX_TEMPLATE):
        try:
            loaded.append(env.get_template(name))
        except TemplateError as exc:
            raise SiteError(f"Cannot load template {templates_dir / name}: {exc}") from exc
    return Templates(*loaded)


def render_page(template: Template, title: str, content: str) -> str:
    # converter output is trusted markup; only the title gets escaped
    return template.render(title=title, content=Markup(content))


def render_index(template: Template, title: str, posts: list[PostSummary]) -> str:
    return template.render(title=title, posts=posts)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
