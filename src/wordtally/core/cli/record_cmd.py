"""wordtally record — one-shot observation of files."""

from __future__ import annotations

import click


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.pass_context
def record(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Count FILES (or documents under directories) now and save today's total.

    The first time a document is seen on a given day its count becomes that
    day's baseline; later records measure growth from there.
    """
    from wordtally.core.cli.common import load_config, run_service
    from wordtally.tracker.watcher import iter_documents, read_text

    config = load_config(ctx)
    documents = iter_documents(paths, extensions=config.get_list("watch.extensions", [".md", ".txt"]))
    if not documents:
        click.echo("No trackable documents found.")
        return

    def _observe(service) -> int:
        for path in documents:
            text = read_text(path)
            if text is not None:
                service.observe_now(str(path), text)
        return service.current_total

    total = run_service(config, _observe)
    click.echo(f"Recorded {len(documents)} document(s): {total} words today")
