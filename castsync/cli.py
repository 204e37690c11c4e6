# Copyright 2025 thestill.me
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import click

# This module can be executed in two ways:
# 1. Package mode (recommended): `castsync` command (defined in pyproject.toml entry point)
# 2. Module mode (development): `python -m castsync.cli` (uses __main__ guard at bottom)
from .logging import configure_structlog
from .models.sync import SyncState
from .services import FeedSyncService
from .utils.config import load_config
from .utils.exceptions import CastsyncError

STATE_ICONS = {
    SyncState.INSERTED: "✓",
    SyncState.WOULD_INSERT: "+",
    SyncState.SKIPPED: "-",
    SyncState.FAILED: "✗",
    SyncState.ABORTED: "!",
}


class CLIContext:
    """Container for CLI dependency injection with type safety."""

    def __init__(self, config, sync_service: FeedSyncService):
        self.config = config
        self.sync_service = sync_service


@click.group()
@click.option("--config", "-c", help="Path to .env file")
@click.pass_context
def main(ctx, config):
    """castsync - Sync podcast feed episodes into the item database"""
    configure_structlog()

    try:
        config_obj = load_config(config)
    except CastsyncError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        ctx.exit(1)

    ctx.obj = CLIContext(config=config_obj, sync_service=FeedSyncService(config_obj))


@main.command()
@click.option("--feed-url", "-f", "feed_urls", multiple=True, help="Feed URL to sync (repeatable, overrides FEED_URLS)")
@click.option("--dry-run", "-d", is_flag=True, help="Show which episodes would be added without writing")
@click.pass_context
def sync(ctx, feed_urls, dry_run):
    """Sync the latest episodes of each feed into the database"""
    service = ctx.obj.sync_service

    try:
        summary = service.sync_all(list(feed_urls), dry_run=dry_run)
    except CastsyncError as e:
        click.echo(f"❌ {e}", err=True)
        ctx.exit(1)

    for result in summary.results:
        click.echo(f"\n📻 {result.channel_title or result.feed_url}")
        if not result.outcomes:
            click.echo("  No items to parse")
            continue
        for outcome in result.outcomes:
            line = f"  {STATE_ICONS[outcome.state]} {outcome.title} ({outcome.filename}, {outcome.formatted_date})"
            if outcome.error:
                line += f" - {outcome.error}"
            click.echo(line)
        click.echo(f"  Inserted: {result.inserted}, skipped: {result.skipped}, failed: {result.failed}")

    for failure in summary.failures:
        click.echo(f"\n❌ {failure.feed_url}: {failure.error}", err=True)

    if dry_run:
        click.echo("\n(Run without --dry-run to write new episodes)")

    if not summary.ok:
        ctx.exit(1)


@main.command()
@click.argument("feed_url")
@click.option("--limit", "-n", type=int, help="Override the batch size")
@click.pass_context
def preview(ctx, feed_url, limit):
    """Show how a feed normalizes, without touching the database"""
    service = ctx.obj.sync_service
    if limit:
        service.config.batch_size = limit

    try:
        prepared = service.prepare(feed_url)
    except CastsyncError as e:
        click.echo(f"❌ {e}", err=True)
        ctx.exit(1)

    click.echo(f"📻 {prepared.channel_title} ({prepared.dialect.kind} dialect)")
    click.echo(f"   {len(prepared.episodes)} item(s) in feed, {len(prepared.batch)} selected")
    for episode in prepared.batch:
        duration = episode.duration_seconds if episode.duration_seconds is not None else "?"
        click.echo(f"\n  • {episode.title}")
        click.echo(f"    {episode.formatted_date}  {duration}s  {episode.author}")
        click.echo(f"    {episode.url} [{episode.filename}.{episode.url_type}]")


if __name__ == "__main__":
    main()
