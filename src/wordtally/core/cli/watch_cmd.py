"""wordtally watch — track edits to files until interrupted."""

from __future__ import annotations

import asyncio

import click
from loguru import logger


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.pass_context
def watch(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Track words added to files under PATHS as you edit them.

    Every tracked document is counted once at startup so today's baseline is
    set before you start typing. Press Ctrl+C to stop; state is saved on exit.
    """
    from wordtally.core.cli.common import load_config

    config = load_config(ctx)
    click.echo("Watching for edits. Press Ctrl+C to stop.\n")
    try:
        asyncio.run(_watch(config, paths))
    except KeyboardInterrupt:
        pass


async def _watch(config, paths: tuple[str, ...]) -> None:
    from wordtally.tracker.service import TrackerService
    from wordtally.tracker.watcher import iter_documents, read_text, watch_paths

    extensions = config.get_list("watch.extensions", [".md", ".txt"])
    service = TrackerService(config)
    await service.start(on_status=click.echo)

    for path in iter_documents(paths, extensions=extensions):
        text = read_text(path)
        if text is not None:
            service.observe_now(str(path), text)

    observer = watch_paths(
        paths,
        on_edit=service.submit_edit_threadsafe,
        extensions=extensions,
        recursive=config.get_bool("watch.recursive", True),
    )
    try:
        await asyncio.Event().wait()
    finally:
        logger.debug("Stopping watch")
        observer.stop()
        await asyncio.to_thread(observer.join)
        await service.stop()
        click.echo(f"\n{service.status_text()}")
