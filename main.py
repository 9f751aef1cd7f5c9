"""CLI entry point for the job link fetcher."""

import argparse
import asyncio
import logging
import sys

from joblinks.browser.session import BrowserSession
from joblinks.core.config import Settings
from joblinks.pipeline.orchestrator import export_results_json, run_all_searches
from joblinks.platforms.linkedin.adapter import LinkedInAdapter
from joblinks.platforms.linkedin.searcher import build_url


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job link fetcher - search LinkedIn and stream matching job links",
    )
    subparsers = parser.add_subparsers(dest="command")

    search_parser = subparsers.add_parser("search", help="Run job searches")
    _add_search_arguments(search_parser)

    # Top-level flags mirror `search`, which is the default command.
    _add_search_arguments(parser, hidden=True)

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "search"
    return args


def _add_search_arguments(parser: argparse.ArgumentParser, *, hidden: bool = False) -> None:
    def _help(text: str) -> str:
        return argparse.SUPPRESS if hidden else text

    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help=_help("Path to settings YAML file (default: config/settings.yaml)"),
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help=_help("Stop each search after this many matching links"),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help=_help("Show the search URLs without launching a browser"),
    )
    parser.add_argument(
        "--export",
        choices=["json"],
        help=_help("Print collected links in the given format (json)"),
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help=_help("Enable verbose (DEBUG) logging"),
    )


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def dry_run(settings: Settings) -> None:
    """Print what would be searched without opening a browser."""
    print(f"[DRY RUN] {len(settings.searches)} searches configured")
    for criteria in settings.searches:
        print(f"[DRY RUN] '{criteria.keywords}' in '{criteria.location}' "
              f"({criteria.match_mode.value} mode)")
        print(f"  URL (before geoId resolution): {build_url(criteria)}")
        print(f"  Title include: {criteria.title_include_pattern!r}")
        print(f"  Title exclude: {criteria.title_exclude_pattern!r}")
        print(f"  Description: {criteria.description_pattern!r}")
        print(f"  Languages: {criteria.allowed_description_languages}")
    print(f"[DRY RUN] Page size {settings.traversal.page_size}, "
          f"{settings.traversal.page_delay_s:.1f}s between pages")


async def run(settings: Settings, limit: int | None, export_format: str | None) -> None:
    """Run every configured search with a real browser."""
    async with BrowserSession(settings.browser) as session:
        adapter = LinkedInAdapter(session.page, settings.traversal)
        results = await run_all_searches(settings, adapter, limit)

    total = sum(len(r.links) for r in results)
    print(f"\nSearch complete: {total} matching links.")
    for r in results:
        status = f" (aborted: {r.error})" if r.error else ""
        print(f"  '{r.keywords}': {len(r.links)} links, {r.stats.items_seen} items seen, "
              f"{r.stats.extraction_failures} skipped{status}")
        if export_format is None:
            for link, title, company in r.links:
                print(f"    {title} @ {company}: {link}")

    if export_format == "json" and results:
        print(f"\n{export_results_json(results)}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.limit is not None and args.limit < 1:
        print("Error: --limit must be at least 1", file=sys.stderr)
        sys.exit(1)

    if args.dry_run:
        dry_run(settings)
    else:
        asyncio.run(run(settings, args.limit, args.export))


if __name__ == "__main__":
    main()
