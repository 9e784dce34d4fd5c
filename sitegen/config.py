from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import yaml

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

from .content import DEFAULT_EXTENSIONS
from .utils import SiteError, parse_int, parse_list

INDEX_ORDERS = ("date", "walk")
DEFAULT_PORT = 8080


@dataclass
class Settings:
    content_dir: Path = Path("blog")
    output_dir: Path = Path("dist")
    templates_dir: Path = Path("templates")
    host: str = ""
    port: int = DEFAULT_PORT
    index_order: str = "date"
    markdown_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SiteError(f"Cannot read config file {path}: {exc}") from exc
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            raise SiteError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SiteError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SiteError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SiteError(f"Config file must be a mapping: {path}")
    return data


def build_settings(args: object) -> Settings:
    order = str(getattr(args, "index_order", "date") or "date").strip().lower()
    if order not in INDEX_ORDERS:
        raise SiteError(f"Unknown index order {order!r}, expected one of: {', '.join(INDEX_ORDERS)}")
    extensions = getattr(args, "markdown_extensions", None)
    return Settings(
        content_dir=Path(getattr(args, "content", "blog")),
        output_dir=Path(getattr(args, "output", "dist")),
        templates_dir=Path(getattr(args, "templates", "templates")),
        host=str(getattr(args, "host", "") or ""),
        port=parse_int(getattr(args, "port", DEFAULT_PORT), DEFAULT_PORT),
        index_order=order,
        markdown_extensions=list(DEFAULT_EXTENSIONS) if extensions is None else parse_list(extensions),
    )
