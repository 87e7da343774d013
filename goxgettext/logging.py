"""Logging configuration for go-xgettext.

Logs to stderr so diagnostics never mix with a catalog written to stdout.
Provides tqdm progress bars when stderr is a terminal.
"""

import logging
import os
import sys
import time
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any, TypeVar

from tqdm import tqdm

# Progress bars are disabled when:
# - GO_XGETTEXT_DISABLE_PROGRESS=1 is set
# - stderr is not a TTY (CI, pipes, build systems)
_DISABLE_PROGRESS = (
    os.getenv("GO_XGETTEXT_DISABLE_PROGRESS", "").lower() in ("1", "true", "yes")
    or not sys.stderr.isatty()
)

logger = logging.getLogger("goxgettext")
logger.setLevel(logging.INFO)

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "[go-xgettext] %(levelname)s: %(message)s",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class TimingContext:
    """Context object that captures elapsed time from an operation.

    Attributes:
        elapsed: Elapsed time in seconds (set after context exits).
    """

    def __init__(self) -> None:
        self.elapsed: float = 0.0
        self._start: float = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        self.elapsed = time.perf_counter() - self._start


@contextmanager
def log_operation(
    operation: str,
    details: dict[str, Any] | None = None,
) -> Generator[TimingContext, None, None]:
    """Context manager for logging operation start/end with timing.

    Everything is logged at DEBUG so a normal run stays quiet. Failures are
    re-raised for the caller to report.

    Args:
        operation: Name of the operation.
        details: Optional details dict to include in start message.

    Yields:
        TimingContext object with elapsed time after context exits.
    """
    details_str = ""
    if details:
        details_str = " " + " ".join(f"{k}={v}" for k, v in details.items())

    logger.debug("Starting %s%s", operation, details_str)

    ctx = TimingContext()
    ctx.start()

    try:
        yield ctx
    except Exception as e:
        ctx.stop()
        logger.debug("%s failed after %.2fs: %s", operation, ctx.elapsed, e)
        raise
    else:
        ctx.stop()
        logger.debug("Completed %s in %.2fs", operation, ctx.elapsed)


T = TypeVar("T")


def progress_bar(
    iterable: Iterable[T],
    desc: str | None = None,
    total: int | None = None,
    unit: str = "it",
) -> Iterable[T]:
    """Wrap an iterable with a progress bar.

    Progress is shown on stderr and only when stderr is a terminal.

    Args:
        iterable: The iterable to wrap.
        desc: Description shown before the progress bar.
        total: Total number of items (required for generators).
        unit: Unit name for the items (e.g., "files").

    Returns:
        Wrapped iterable that shows progress.
    """
    if _DISABLE_PROGRESS:
        return iterable

    return tqdm(
        iterable,
        desc=f"  {desc}" if desc else None,
        total=total,
        unit=unit,
        file=sys.stderr,
        ncols=80,
        leave=False,  # Clean up after completion
        bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}, {rate_fmt}]",
    )


def set_verbosity(verbose: int) -> None:
    """Raise the package log level for -v / -vv style flags.

    Args:
        verbose: 0 keeps INFO, anything higher enables DEBUG.
    """
    level = logging.DEBUG if verbose > 0 else logging.INFO
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)
