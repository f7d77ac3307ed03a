"""
Command-line interface for tubecast.

Usage:
    tubecast fetch                    # Download channel metadata and media URLs
    tubecast build                    # Generate the feed from downloaded files
    tubecast build --output feed.xml  # Write the feed somewhere else
    tubecast run                      # fetch + build
    tubecast run --output-json        # JSON output for CI integration
    tubecast inspect data/feed.xml    # Summarize a generated feed
"""

import argparse
import sys
from pathlib import Path

from tubecast.config import get_config
from tubecast.exceptions import DownloaderError, TubecastError
from tubecast.logging_config import setup_logging


def _fail(message: str) -> None:
    print(f"ERROR: {message}")
    sys.exit(1)


def cmd_fetch(args, config):
    """Download channel metadata and media URLs with yt-dlp."""
    from tubecast.ingestion.downloader import download_channel

    metadata_path, media_urls_path = download_channel(config)
    print(f"Channel metadata: {metadata_path}")
    print(f"Media URLs: {media_urls_path}")


def cmd_build(args, config):
    """Generate the feed from previously downloaded files."""
    from tubecast.pipeline import generate_feed

    metadata_path = args.metadata or config.metadata_path
    media_urls_path = args.media_urls or config.media_urls_path
    feed_path = args.output or config.feed_path

    channel = generate_feed(metadata_path, media_urls_path, feed_path)
    print(f"Wrote {len(channel.entries)} items for '{channel.title}' to {feed_path}")


def cmd_run(args, config):
    """Fetch inputs and generate the feed."""
    from tubecast.pipeline import run

    result = run(config, fetch=True)

    if args.output_json:
        print(result.to_json())
        return

    print(f"Wrote {result.entry_count} items for '{result.channel_title}' to {result.feed_path}")
    if result.missing_audio_count:
        print(f"WARNING: {result.missing_audio_count} item(s) have no media URL")


def cmd_inspect(args, config):
    """Summarize a generated feed."""
    from tubecast.feed.reader import read_feed

    summary = read_feed(args.feed)

    if args.output_json:
        print(summary.to_json())
        return

    print(f"Feed: {summary.title} ({len(summary.items)} items)")
    print(f"Link: {summary.link}")
    for warning in summary.warnings:
        print(f"WARNING: {warning}")
    for i, item in enumerate(summary.items, 1):
        published = item.published[:10] if item.published else "unknown"
        audio = "yes" if item.audio_url else "MISSING"
        print(f"{i}. {item.title}")
        print(f"   GUID: {item.guid}, Published: {published}, Duration: {item.duration or 'unknown'}, Audio: {audio}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="tubecast",
        description="tubecast -- republish a video channel's audio as a podcast feed",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log debug output to the console",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # fetch
    sub_fetch = subparsers.add_parser("fetch", help="Download channel metadata and media URLs")
    sub_fetch.set_defaults(func=cmd_fetch)

    # build
    sub_build = subparsers.add_parser("build", help="Generate the feed from downloaded files")
    sub_build.add_argument("--metadata", type=Path, default=None, help="Channel metadata JSON document")
    sub_build.add_argument("--media-urls", type=Path, default=None, help="id,url media URL table")
    sub_build.add_argument("--output", type=Path, default=None, help="Output feed path")
    sub_build.set_defaults(func=cmd_build)

    # run
    sub_run = subparsers.add_parser("run", help="Fetch inputs and generate the feed")
    sub_run.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output result as JSON (for CI/automation)",
    )
    sub_run.set_defaults(func=cmd_run)

    # inspect
    sub_inspect = subparsers.add_parser("inspect", help="Summarize a generated feed")
    sub_inspect.add_argument("feed", type=Path, help="Feed file to read")
    sub_inspect.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output result as JSON (for CI/automation)",
    )
    sub_inspect.set_defaults(func=cmd_inspect)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    config = get_config()
    config.ensure_directories()
    setup_logging(config.resolved_log_dir, config.log_retention_days, verbose=args.verbose)

    try:
        args.func(args, config)
    except DownloaderError as exc:
        if exc.stderr:
            print(exc.stderr, file=sys.stderr)
        _fail(str(exc))
    except (TubecastError, OSError) as exc:
        _fail(str(exc))


if __name__ == "__main__":
    main()
