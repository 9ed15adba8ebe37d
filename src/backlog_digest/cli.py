"""CLI entry point for backlog-digest.

Without flags the process stays up and posts the report on the configured
daily schedule. `--test` runs the report once right away and exits.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from backlog_digest.board import BoardClient
from backlog_digest.config import ConfigError, DigestConfig, load_config
from backlog_digest.logging import setup_logging
from backlog_digest.orchestrator import ReportOrchestrator
from backlog_digest.scheduler import ReportScheduler
from backlog_digest.webhook import WebhookPublisher


def build_orchestrator(config: DigestConfig) -> ReportOrchestrator:
    """Wire the report job from a loaded configuration."""
    board = BoardClient(
        key=config.trello_key,
        token=config.trello_token,
        base_url=config.trello_base_url,
    )
    publisher = WebhookPublisher(config.webhook_url)
    return ReportOrchestrator(board=board, publisher=publisher, board_id=config.board_id)


@click.command()
@click.version_option(package_name="backlog-digest")
@click.option(
    "--test",
    "run_now",
    is_flag=True,
    help="Run the report once immediately and exit",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML config file (environment variables fill the rest)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for log files (default: logs/)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
def main(run_now: bool, config_path: Path | None, log_dir: Path | None, verbose: bool) -> None:
    """Post the Trello backlog to Discord every day."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(
        log_dir=log_dir,
        level="DEBUG" if verbose else None,
        timezone=config.timezone,
    )

    orchestrator = build_orchestrator(config)
    try:
        if run_now:
            orchestrator.run()
            click.echo("Test run complete.")
            return

        scheduler = ReportScheduler(
            orchestrator.run,
            cron=config.cron,
            timezone=config.timezone,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            scheduler.shutdown()
    finally:
        orchestrator.board.close()
        orchestrator.publisher.close()


if __name__ == "__main__":
    main()
