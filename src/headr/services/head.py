"""HeadService — the per-source truncation loop.

Two distinct failure paths, never unified:

* Open failure: reported as ``head: <name>: <reason>`` on stderr, the
  source is skipped, and the run continues.
* Read failure after a successful open: raised as
  :class:`SourceReadError`, which terminates the run with exit status 1.
"""

from __future__ import annotations

import io
import logging
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING, BinaryIO, TypeVar

import click
import structlog

from headr.domain.limits import STDIN_NAME, ByteLimit, HeadRequest
from headr.services.result import RunReport, SourceOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SourceReadError(click.ClickException):
    """A source failed while being read after it was opened."""

    exit_code = 1

    def __init__(self, name: str, cause: OSError) -> None:
        super().__init__(f"{name}: {error_text(cause)}")
        self.name = name


def error_text(exc: OSError) -> str:
    """Return the OS description of *exc* (e.g. ``No such file or directory``)."""
    return exc.strerror or str(exc)


def open_source(name: str) -> AbstractContextManager[BinaryIO]:
    """Open *name* for buffered binary reading.

    ``"-"`` maps to standard input, which is wrapped so that leaving the
    context never closes it.

    Raises:
        OSError: The named file could not be opened.
    """
    if name == STDIN_NAME:
        return nullcontext(click.get_binary_stream("stdin"))
    return open(name, "rb")


def _read(name: str, read: Callable[..., T], *args: int) -> T:
    try:
        return read(*args)
    except OSError as exc:
        raise SourceReadError(name, exc) from exc


def write_lines(name: str, stream: BinaryIO, count: int) -> int:
    """Copy up to *count* lines from *stream* to stdout, byte for byte.

    Each line keeps its trailing newline if it had one. Returns the
    number of lines written.
    """
    written = 0
    while written < count:
        line = _read(name, stream.readline)
        if not line:
            break
        click.echo(line, nl=False)
        written += 1
    return written


def write_bytes(name: str, stream: BinaryIO, count: int) -> int:
    """Copy up to *count* bytes from *stream* to stdout, decoded lossily.

    The source is read in chunks of at most ``io.DEFAULT_BUFFER_SIZE``, so
    memory use follows the data actually read, not *count*. Invalid UTF-8
    sequences become U+FFFD. No newline is appended. Returns the number of
    bytes read from the source.
    """
    chunks: list[bytes] = []
    remaining = count
    while remaining > 0:
        chunk = _read(name, stream.read, min(remaining, io.DEFAULT_BUFFER_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    text = data.decode("utf-8", errors="replace")
    # Bytes bypass click's ANSI stripping.
    click.echo(text.encode("utf-8"), nl=False)
    return len(data)


class HeadService:
    """Run the head loop over every input of a :class:`HeadRequest`.

    Log records emitted while an input is processed carry its name as the
    ``source`` context field.

    Usage::

        report = HeadService(HeadRequest(files=("a.txt", "b.txt"))).run()
    """

    def __init__(self, request: HeadRequest) -> None:
        self._request = request

    def run(self) -> RunReport:
        """Process every input in order and return the run report.

        Raises:
            SourceReadError: A source failed after it was opened.
        """
        outcomes: list[SourceOutcome] = []
        first = True
        for name in self._request.files:
            with structlog.contextvars.bound_contextvars(source=name):
                outcomes.append(self._process(name, separate=not first))
            # Failed opens count too.
            first = False
        return RunReport(mode=self._request.limit.kind, sources=outcomes)

    def _process(self, name: str, *, separate: bool) -> SourceOutcome:
        try:
            source = open_source(name)
        except OSError as exc:
            reason = error_text(exc)
            click.echo(f"head: {name}: {reason}", err=True)
            logger.debug("Skipping: %s", reason)
            return SourceOutcome(name=name, opened=False, error=reason)

        with source as stream:
            if separate:
                click.echo()
            if self._request.multiple:
                click.echo(f"==> {name} <==")
            emitted = self._copy(name, stream)

        logger.debug("Wrote %d %s", emitted, self._request.limit.kind)
        return SourceOutcome(name=name, opened=True, emitted=emitted)

    def _copy(self, name: str, stream: BinaryIO) -> int:
        limit = self._request.limit
        if isinstance(limit, ByteLimit):
            return write_bytes(name, stream, limit.count)
        return write_lines(name, stream, limit.count)
