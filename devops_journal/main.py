"""
Main application entry point for DevOps Journal.

This module provides the CLI commands for generating daily journals from
Azure DevOps work items, pull requests and calendar events.
"""

import asyncio
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click

from devops_journal.core.logging import setup_logging, get_logger
from devops_journal.settings import get_settings, reload_settings
from devops_journal.journal.service import JournalIntegrator
from devops_journal.journal.store import EntryStore


PREVIEW_LENGTH = 500

settings = get_settings()
logger = get_logger(__name__)


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _store() -> EntryStore:
    return EntryStore(
        settings.journal.directory,
        file_prefix=settings.journal.file_prefix,
        export_html=settings.journal.export_html,
        logger=logger
    )


@click.group()
@click.version_option(version=settings.version)
@click.option('--config', '-c', type=click.Path(exists=True, path_type=Path), help='Configuration file path')
@click.option('--debug', '-d', is_flag=True, help='Enable debug mode')
def cli(config: Optional[Path], debug: bool):
    """DevOps Journal - daily work journal from Azure DevOps and your calendar."""
    global settings
    if config:
        settings = reload_settings(yaml_path=config)

    if debug:
        settings.debug = True
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging, "devops_journal")

    if config:
        logger.info(f"Using configuration file: {config}")
    if debug:
        logger.info("Debug mode enabled")


@cli.command()
@click.option('--date', '-d', 'target_date', type=click.DateTime(formats=['%Y-%m-%d']),
              help='Entry date (default: today, UTC)')
@click.option('--sample', is_flag=True, help='Use built-in sample data instead of the MCP servers')
def generate(target_date: Optional[datetime], sample: bool):
    """Generate an enhanced journal entry with all integrations."""
    asyncio.run(generate_comprehensive_journal(_as_date(target_date), sample))


@cli.command()
@click.option('--date', '-d', 'target_date', type=click.DateTime(formats=['%Y-%m-%d']),
              help='Entry date (default: today, UTC)')
@click.option('--sample', is_flag=True, help='Use built-in sample data instead of the MCP servers')
def daily(target_date: Optional[datetime], sample: bool):
    """Generate a basic journal entry from work items only."""
    asyncio.run(generate_basic_journal(_as_date(target_date), sample))


@cli.command()
def insights():
    """Show journal statistics."""
    # Insights only read the store, so sample sources avoid launching MCP servers
    _echo_insights(JournalIntegrator(settings, use_sample=True).get_journal_insights())


@cli.command(name="list")
@click.option('--limit', '-n', type=int, default=None, help='Show only the most recent N entries')
def list_entries(limit: Optional[int]):
    """List stored journal entries, most recent first."""
    entry_dates = _store().list_entries()

    if not entry_dates:
        click.echo(f"📭 No journal entries in {settings.journal.directory}")
        return

    click.echo(f"📁 {len(entry_dates)} journal entries:")
    for entry_date in entry_dates[:limit]:
        click.echo(f"  • {entry_date.isoformat()}")


@cli.command()
@click.argument('entry_date', type=click.DateTime(formats=['%Y-%m-%d']))
def show(entry_date: datetime):
    """Show a stored journal entry."""
    entry = _store().load_entry(entry_date.date())

    if entry is None:
        click.echo(f"❌ No journal entry for {entry_date.date()}")
        sys.exit(1)

    click.echo(f"📖 {entry.date} ({entry.day_of_week}) - mood: {entry.mood.value}")
    click.echo(f"  • In progress: {len(entry.work_items.in_progress)}")
    click.echo(f"  • Open: {len(entry.work_items.open)}")
    click.echo(f"  • Pending: {len(entry.work_items.pending)}")
    click.echo(f"  • Pull requests: {len(entry.pull_requests)}")
    click.echo(f"  • Meetings: {len(entry.meetings)}")
    if entry.notes:
        click.echo(f"\n📝 Notes:\n{entry.notes}")


@cli.command()
def status():
    """Show configuration and integration status."""
    integrator = JournalIntegrator(settings)
    info = integrator.sources.get_integration_info()

    click.echo("\n📊 System Status:")
    click.echo(f"  • Application: {settings.name} v{settings.version}")
    click.echo(f"  • Debug mode: {'Enabled' if settings.debug else 'Disabled'}")
    click.echo(f"  • Journal directory: {settings.journal.directory.absolute()}")
    click.echo(f"  • HTML export: {'Enabled' if settings.journal.export_html else 'Disabled'}")

    click.echo("\n🔧 Integration Status:")
    click.echo(f"  • Data source: {'✅ MCP servers' if info['type'] == 'mcp' else '⚠️  Sample data'}")
    click.echo(f"    - Projects: {', '.join(info['projects'])}")
    click.echo(f"    - PAT: {'✅' if info['pat_configured'] else '❌'}")
    click.echo(f"  • Teams calendar: {'✅ Enabled' if info['teams_enabled'] else '❌ Disabled'}")


def _echo_insights(journal_insights) -> None:
    click.echo("\n📈 Journal Insights:")
    click.echo(f"   📊 Total entries: {journal_insights.total_entries}")
    click.echo(f"   🔥 Current streak: {journal_insights.streak_days} days")
    click.echo(f"   📅 Recent entries: {', '.join(d.isoformat() for d in journal_insights.recent_entries)}")
    stats = journal_insights.weekly_stats
    click.echo(f"   📋 Avg work items: {stats.avg_work_items:.1f}")
    click.echo(f"   🤝 Avg meetings: {stats.avg_meetings:.1f}")
    click.echo(f"   😊 Common mood: {stats.common_mood.value}")


async def generate_comprehensive_journal(target_date: Optional[date], use_sample: bool):
    """Generate an enhanced journal entry."""
    click.echo("🗓️  Generating comprehensive daily journal with MCP integrations...")

    integrator = JournalIntegrator(settings, use_sample=use_sample)
    file_path = await integrator.generate_comprehensive_journal(target_date)

    click.echo(f"\n✅ Enhanced journal entry saved to: {file_path}")
    _echo_insights(integrator.get_journal_insights())


async def generate_basic_journal(target_date: Optional[date], use_sample: bool):
    """Generate a basic journal entry and preview it."""
    click.echo("🗓️  Generating daily journal entry...")

    integrator = JournalIntegrator(settings, use_sample=use_sample)
    file_path = await integrator.generate_basic_journal(target_date)
    entry_dates = integrator.store.list_entries()

    click.echo(f"✅ Journal entry saved to: {file_path}")
    click.echo(f"📁 All entries: {len(entry_dates)} total entries")
    click.echo(f"📝 Recent entries: {', '.join(d.isoformat() for d in entry_dates[:5])}")

    content = file_path.read_text(encoding="utf-8")
    click.echo("\n📖 Preview of today's journal entry:")
    click.echo("=====================================")
    click.echo(content[:PREVIEW_LENGTH] + "...")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\n👋 Goodbye!")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Application error: {e}")
        click.echo(f"❌ Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
