"""Command-line entry point for fetching featured images of syndicated posts."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterable, Sequence

from .config import DEFAULT_META_KEY, DEFAULT_TIMEOUT, ResolverConfig, WordPressSiteConfig
from .resolver import ImageResolver
from .wordpress import WordPressPlatform

logger = logging.getLogger("fwp_featured.cli")

COMMANDS = ("resolve", "attach")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("resolve", *argv)


def _add_site_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--site",
        default=os.getenv("FWP_SITE_URL"),
        help="Base URL of the destination WordPress site (env: FWP_SITE_URL)",
    )
    parser.add_argument(
        "--user",
        default=os.getenv("FWP_USER"),
        help="WordPress user owning the application password (env: FWP_USER)",
    )
    parser.add_argument(
        "--app-password",
        default=os.getenv("FWP_APP_PASSWORD"),
        help="WordPress application password (env: FWP_APP_PASSWORD)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Timeout in seconds for every outbound request",
    )
    parser.add_argument(
        "--meta-key",
        default=DEFAULT_META_KEY,
        help="Post meta key holding the origin URL",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Set featured images on syndicated WordPress posts from their origin sites.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Look up each post's origin article and attach its featured image"
    )
    resolve_parser.add_argument("post_ids", nargs="+", type=int, help="Destination post IDs")
    _add_site_arguments(resolve_parser)

    attach_parser = subparsers.add_parser(
        "attach", help="Download an image URL and set it as a post's featured image"
    )
    attach_parser.add_argument("post_id", type=int, help="Destination post ID")
    attach_parser.add_argument("image_url", help="Image to download")
    _add_site_arguments(attach_parser)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, COMMANDS))
    args = parser.parse_args(argv)
    missing = [
        flag
        for flag, value in (
            ("--site", args.site),
            ("--user", args.user),
            ("--app-password", args.app_password),
        )
        if not value
    ]
    if missing:
        parser.error(f"missing required site settings: {', '.join(missing)}")
    return args


def build_resolver(args: argparse.Namespace) -> ImageResolver:
    site = WordPressSiteConfig(
        base_url=args.site,
        user=args.user,
        app_password=args.app_password,
        timeout=args.timeout,
        meta_key=args.meta_key,
    )
    config = ResolverConfig(timeout=args.timeout, meta_key=args.meta_key)
    return ImageResolver(WordPressPlatform(site), config=config)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    resolver = build_resolver(args)
    if args.command == "resolve":
        for post_id in args.post_ids:
            logger.debug("Resolving featured image for post %s", post_id)
            resolver.resolve(post_id)
    else:
        resolver.attach(args.post_id, args.image_url)


if __name__ == "__main__":
    main()
