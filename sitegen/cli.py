from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional

from .config import DEFAULT_PORT, INDEX_ORDERS, build_settings, load_config
from .content import DEFAULT_EXTENSIONS
from .generate import generate_site
from .server import serve
from .utils import SiteError, parse_int

COMMANDS = {
    "generate": "Convert markdown files to html",
    "serve": "Serve the html files in the output directory",
}


def print_usage() -> None:
    print("Usage: sitegen [options] <command>")
    print("Commands:")
    width = max(len(name) for name in COMMANDS)
    for name, description in COMMANDS.items():
        print(f"  {name.ljust(width)} - {description}")


def build_parser(config: dict, config_path: str) -> argparse.ArgumentParser:
    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    parser = argparse.ArgumentParser(prog="sitegen", description="Markdown to HTML static site generator.")
    parser.add_argument("command", nargs="?", help="generate or serve.")
    parser.add_argument("--config", default=config_path, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--content", default=cfg_str("content", "blog"), help="Directory containing Markdown files.")
    parser.add_argument("--output", default=cfg_str("output", "dist"), help="Output directory for the site.")
    parser.add_argument("--templates", default=cfg_str("templates", "templates"), help="Directory holding post.html and index.html.")
    parser.add_argument("--host", default=cfg_str("host", ""), help="Address to bind when serving (default: all interfaces).")
    parser.add_argument(
        "--port",
        default=parse_int(cfg_value("port", DEFAULT_PORT), DEFAULT_PORT),
        type=int,
        help="Port to listen on when serving.",
    )
    parser.add_argument(
        "--index-order",
        default=cfg_str("index_order", "date"),
        choices=INDEX_ORDERS,
        help="Order of posts on the index page: newest first, or walk order.",
    )
    parser.set_defaults(markdown_extensions=cfg_value("markdown_extensions", DEFAULT_EXTENSIONS))
    return parser


def run_generate(args: argparse.Namespace) -> None:
    settings = build_settings(args)
    start = time.perf_counter()
    report = generate_site(settings)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    if report.errors:
        print(f"Skipped {len(report.errors)} file(s) with errors.", file=sys.stderr)


def run_serve(args: argparse.Namespace) -> None:
    serve(build_settings(args))


def main(argv: Optional[list[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    try:
        pre_args, _ = pre_parser.parse_known_args(argv)
        config = load_config(Path(pre_args.config))
        args = build_parser(config, pre_args.config).parse_args(argv)

        if args.command is None:
            print_usage()
            return
        if args.command not in COMMANDS:
            print(f"Unknown command: {args.command}")
            print_usage()
            return

        if args.command == "generate":
            run_generate(args)
        else:
            run_serve(args)
    except SiteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
