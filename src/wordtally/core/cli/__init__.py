"""wordtally CLI — entry point for watch, record, today and history commands."""

import click

from wordtally import __version__


@click.group()
@click.version_option(version=__version__, package_name="wordtally")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML or JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Where tracking data is kept.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, log_level: str | None) -> None:
    """wordtally — how many words you add each day."""
    ctx.ensure_object(dict)
    ctx.obj.update(config_file=config_file, data_dir=data_dir, log_level=log_level)


# Register subcommands
from .record_cmd import record
from .stats_cmd import history, today
from .watch_cmd import watch

main.add_command(watch)
main.add_command(record)
main.add_command(today)
main.add_command(history)
