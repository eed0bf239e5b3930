"""File-system edit notifications via watchdog.

Stands in for an editor's change events: whenever a tracked file is created or
modified on disk, its full current text is read and handed to a callback as
``(path, text)``. Callbacks run on the watchdog observer thread.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from loguru import logger
from watchdog.events import FileCreatedEvent, FileModifiedEvent, FileMovedEvent, FileSystemEventHandler
from watchdog.observers import Observer

EditCallback = Callable[[str, str], None]

DEFAULT_EXTENSIONS = (".md", ".txt")


def read_text(path: Path) -> str | None:
    """Full text of ``path``, or None if it can't be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Cannot read {path}: {e}")
        return None


class DocumentEditHandler(FileSystemEventHandler):
    """Forwards the text of relevant files after each create/modify/move-in.

    Args:
        on_edit: Receives ``(path, text)``.
        extensions: File suffixes to track (case-insensitive).
        root: Watched directory. Hidden-path filtering applies below it only.
        only: If given, forward just this file.
    """

    def __init__(
        self,
        on_edit: EditCallback,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        root: str | Path | None = None,
        only: str | Path | None = None,
    ):
        super().__init__()
        self.on_edit = on_edit
        self.extensions = {ext.lower() for ext in extensions}
        self.root = Path(root).resolve() if root else None
        self.only = Path(only).resolve() if only else None

    def is_relevant(self, path: str | Path) -> bool:
        p = Path(path)
        if p.is_absolute():
            p = p.resolve()
        if self.only is not None and p != self.only:
            return False
        if self.root is not None and p.is_absolute():
            try:
                p = p.relative_to(self.root)
            except ValueError:
                return False
        # Skip hidden files and directories (editor swap files, .git, ...)
        if any(part.startswith(".") for part in p.parts if part not in (".", "..")):
            return False
        return p.suffix.lower() in self.extensions

    def _forward(self, path: str) -> None:
        if not self.is_relevant(path):
            return
        resolved = Path(path).resolve()
        text = read_text(resolved)
        if text is not None:
            self.on_edit(str(resolved), text)

    def on_created(self, event: FileCreatedEvent) -> None:
        if not event.is_directory:
            self._forward(event.src_path)

    def on_modified(self, event: FileModifiedEvent) -> None:
        if not event.is_directory:
            self._forward(event.src_path)

    def on_moved(self, event: FileMovedEvent) -> None:
        # Editors that save via rename-over-original show up as a move onto the target
        if not event.is_directory:
            self._forward(event.dest_path)


def iter_documents(paths: Iterable[str | Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[Path]:
    """Expand files and directories into the tracked documents they contain."""
    found: list[Path] = []
    for raw in paths:
        target = Path(raw).expanduser().resolve()
        if target.is_file():
            handler = DocumentEditHandler(_ignore, extensions, root=target.parent, only=target)
            if handler.is_relevant(target):
                found.append(target)
            continue
        handler = DocumentEditHandler(_ignore, extensions, root=target)
        found.extend(c for c in sorted(target.rglob("*")) if c.is_file() and handler.is_relevant(c))
    return found


def _ignore(path: str, text: str) -> None:
    pass


def watch_paths(
    paths: Iterable[str | Path],
    on_edit: EditCallback,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    recursive: bool = True,
) -> Observer:
    """
    Start watching files/directories for edits.

    Args:
        paths: Files or directories to watch. Files are watched via their parent directory.
        on_edit: Callback for ``(path, text)`` notifications (called on the observer thread).
        extensions: File suffixes to track.
        recursive: Whether to watch subdirectories.

    Returns:
        The started observer; call ``observer.stop()`` and ``observer.join()`` to stop watching.
    """
    extensions = tuple(extensions)
    observer = Observer()
    for raw in paths:
        target = Path(raw).expanduser().resolve()
        if target.is_dir():
            handler = DocumentEditHandler(on_edit, extensions, root=target)
            observer.schedule(handler, str(target), recursive=recursive)
        else:
            handler = DocumentEditHandler(on_edit, extensions, root=target.parent, only=target)
            observer.schedule(handler, str(target.parent), recursive=False)
        logger.info(f"Watching {target}")
    observer.start()
    return observer
