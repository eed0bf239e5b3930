"""wordtally today / history — read-only views of saved totals."""

from __future__ import annotations

from datetime import timedelta

import click


@click.command()
@click.pass_context
def today(ctx: click.Context) -> None:
    """Show how many words you've added today."""
    from wordtally.core.cli.common import load_config, run_service

    config = load_config(ctx)
    click.echo(run_service(config, lambda service: service.status_text(), save=False))


@click.command()
@click.option("--days", type=click.IntRange(min=1), default=None, help="Only show the last N days.")
@click.pass_context
def history(ctx: click.Context, days: int | None) -> None:
    """List daily totals, oldest first."""
    from wordtally.core.cli.common import load_config, run_service
    from wordtally.tracker.history import history_series, summarize

    config = load_config(ctx)

    def _collect(service):
        start = service.clock.today() - timedelta(days=days - 1) if days else None
        return history_series(service.session.history.to_dict(), start=start)

    series = run_service(config, _collect, save=False)
    if not series:
        click.echo("No history yet.")
        return

    width = max(len(str(point.count)) for point in series)
    for point in series:
        click.echo(f"{point.date.isoformat()}  {point.count:>{width}}")

    summary = summarize(series)
    click.echo("")
    click.echo(f"Total: {summary.total_words} words over {summary.active_days} active day(s)")
    if summary.best_day:
        click.echo(f"Best day: {summary.best_day.date.isoformat()} ({summary.best_day.count} words)")
    click.echo(f"Current streak: {summary.current_streak} day(s)")
