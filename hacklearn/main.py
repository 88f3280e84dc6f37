#!/usr/bin/env python3
"""
hacklearn command-line entry point.

Drives the site without a browser: open a page by path, search, ask the
assistant, render markup, buy a project, post a comment. Every command
prints JSON to stdout and exits with status 1 when the result is an
error envelope.

State (purchases, comments) lives in an in-memory store, so it lasts
for a single invocation only.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from hacklearn.config import Config, ConfigManager
from hacklearn.content.dataset import get_project, load_dataset
from hacklearn.core.logging_config import LogLevel, configure_from_dict, get_logger, setup_logging
from hacklearn.exceptions import BaseAPIError, format_error_response
from hacklearn.render.markup import render
from hacklearn.search.assistant import respond
from hacklearn.search.index import first_destination
from hacklearn.site import views
from hacklearn.site.handlers import process_request
from hacklearn.site.router import RouteRegistry, SiteRouter
from hacklearn.site.views import SiteContext

logger = get_logger("hacklearn.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hacklearn",
        description="Browse, search and render the Ethical Hacking Learning content.",
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Configuration file; defaults are used when it is missing (default: %(default)s).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    p_open = sub.add_parser("open", help="Render the page at PATH, e.g. /material/xss")
    p_open.add_argument("path")

    p_search = sub.add_parser("search", help="Search topic and project titles")
    p_search.add_argument("query")
    p_search.add_argument("--all", action="store_true", help="Full results instead of suggestions")

    p_ask = sub.add_parser("ask", help="Ask the keyword assistant")
    p_ask.add_argument("text")

    p_render = sub.add_parser("render", help="Render a markup file ('-' for stdin) to HTML")
    p_render.add_argument("file")

    p_buy = sub.add_parser("buy", help="Simulate buying a project and show its page")
    p_buy.add_argument("topic_slug")
    p_buy.add_argument("project_slug")

    p_comment = sub.add_parser("comment", help="Post a comment and show the about page")
    p_comment.add_argument("name")
    p_comment.add_argument("text")

    sub.add_parser("routes", help="List the page table")
    return parser


def load_settings(config_path: str) -> Config:
    """Load ``config_path`` or fall back to defaults when it does not exist."""
    if not Path(config_path).exists():
        return Config()
    return ConfigManager().load_config(config_path)


def run(args: argparse.Namespace) -> Dict[str, Any]:
    config = load_settings(args.config)
    if args.verbose:
        setup_logging(LogLevel.DEBUG, format_json=config.logging.format_json, split_streams=False)
    else:
        configure_from_dict({**config.logging.model_dump(), "split_streams": False})

    ctx = SiteContext(dataset=load_dataset(config.content.dataset_path), config=config)

    if args.command == "open":
        return process_request(SiteRouter(ctx), {"path": args.path})
    if args.command == "search":
        if args.all:
            results = views.search_results_view(ctx, args.query)
            return {"ok": True, "results": results}
        return {
            "ok": True,
            "suggestions": views.suggestions(ctx, args.query),
            "destination": first_destination(ctx.index, args.query, limit=config.search.suggestion_limit),
        }
    if args.command == "ask":
        reply = respond(args.text, ctx.dataset)
        return {"ok": True, "reply": reply, "html": render(reply)}
    if args.command == "render":
        text = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
        return {"ok": True, "html": render(text)}
    if args.command == "buy":
        listing = get_project(ctx.dataset, args.topic_slug, args.project_slug)
        receipt = ctx.ledger.purchase(listing)
        page = views.project_details(ctx, args.topic_slug, args.project_slug)
        return {"ok": True, "receipt": receipt.message, "view": page}
    if args.command == "comment":
        ctx.comments.post(args.name, args.text)
        return {"ok": True, "view": views.about(ctx)}
    if args.command == "routes":
        return {"ok": True, "routes": RouteRegistry().list_routes()}
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        result = run(args)
    except BaseAPIError as exc:
        logger.error("Command failed", extra={"command": args.command, "error_code": exc.error_code})
        result = {"ok": False, "error": format_error_response(exc).to_dict()}
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Command input unreadable", extra={"command": args.command, "error_type": type(exc).__name__})
        result = {"ok": False, "error": format_error_response(exc).to_dict()}

    print(json.dumps(result, ensure_ascii=False, indent=2, default=str))
    return 0 if result.get("ok") else 1


if __name__ == "__main__":
    sys.exit(main())
