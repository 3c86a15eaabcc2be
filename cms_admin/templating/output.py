"""
Active output stream.

Markup written in "echo" mode goes to the stream the host has made active for
the current request. Outside of a capture block that is sys.stdout.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TextIO

output_stream_var: ContextVar[TextIO | None] = ContextVar("output_stream", default=None)


def get_output_stream() -> TextIO:
    """Return the active output stream for this context."""
    stream = output_stream_var.get()
    return stream if stream is not None else sys.stdout


def echo(markup: str) -> None:
    get_output_stream().write(markup)


@contextmanager
def capture_output(stream: TextIO | None = None) -> Iterator[TextIO]:
    """
    Redirect echoed markup into ``stream`` (a new StringIO by default).

    Example:
        with capture_output() as buffer:
            hooks.do_action(HOOK_REGISTER_FORM)
        html = buffer.getvalue()
    """
    target = stream if stream is not None else io.StringIO()
    token = output_stream_var.set(target)
    try:
        yield target
    finally:
        output_stream_var.reset(token)
