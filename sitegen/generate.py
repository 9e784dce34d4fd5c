from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import TemplateError

from .config import Settings
from .content import PostSummary, convert_markdown, derive_title, make_converter, parse_post, sort_posts
from .pages import build_index, build_page
from .render import load_templates
from .utils import SiteError

POSTS_DIR = "posts"
SKIPPED_NAMES = {"index.md"}


@dataclass
class BuildReport:
    pages: list[Path] = field(default_factory=list)
    posts: list[PostSummary] = field(default_factory=list)
    errors: list[tuple[Path, str]] = field(default_factory=list)
    index_path: Path | None = None


def collect_markdown(content_dir: Path) -> list[Path]:
    if not content_dir.is_dir():
        raise SiteError(f"Content directory not found: {content_dir}")
    files = [path for path in content_dir.rglob("*.md") if path.is_file()]
    return sorted(files, key=lambda p: p.as_posix())


def is_post(path: Path, content_dir: Path) -> bool:
    parts = path.relative_to(content_dir).parts
    return len(parts) > 1 and parts[0] == POSTS_DIR


def destination_for(path: Path, content_dir: Path, output_dir: Path) -> Path:
    name = f"{path.stem}.html"
    if is_post(path, content_dir):
        return output_dir / POSTS_DIR / name
    return output_dir / name


def generate_site(settings: Settings) -> BuildReport:
    content_dir = settings.content_dir
    output_dir = settings.output_dir

    templates = load_templates(settings.templates_dir)
    converter = make_converter(settings.markdown_extensions)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_dir.joinpath(POSTS_DIR).mkdir(exist_ok=True)

    report = BuildReport()

    def skip(path: Path, message: str) -> None:
        print(message, file=sys.stderr)
        report.errors.append((path, message))

    posts = []
    for md_file in collect_markdown(content_dir):
        if md_file.name in SKIPPED_NAMES:
            continue
        try:
            source = md_file.read_bytes()
        except OSError as exc:
            skip(md_file, f"Error reading {md_file}: {exc}")
            continue
        try:
            content = convert_markdown(source, converter)
        except Exception as exc:
            skip(md_file, f"Error converting {md_file}: {exc}")
            continue

        dest_path = destination_for(md_file, content_dir, output_dir)
        try:
            build_page(templates.post, dest_path, derive_title(md_file.stem), content)
        except TemplateError as exc:
            skip(md_file, f"Error executing template for {dest_path}: {exc}")
            continue
        except OSError as exc:
            skip(md_file, f"Error writing {dest_path}: {exc}")
            continue
        report.pages.append(dest_path)
        print(f"Converted {md_file} to {dest_path}")

        if is_post(md_file, content_dir):
            post = parse_post(md_file.name)
            if post is not None:
                posts.append(post)

    report.posts = sort_posts(posts, settings.index_order)
    try:
        report.index_path = build_index(templates.index, output_dir, report.posts)
    except (TemplateError, OSError) as exc:
        raise SiteError(f"Cannot generate {output_dir / 'index.html'}: {exc}") from exc
    print(f"Generated {report.index_path}")
    return report
