"""Entry point that prints the summary after a reify finishes."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from rich.console import Console

from .config import RenderConfig
from .formatter import format_summary
from .models import ResultBundle

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]


class ConsoleSink:
    """Sink that prints each block to a rich console, without markup."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def __call__(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def reify_output(
    bundle: ResultBundle,
    config: RenderConfig,
    sink: Sink,
    now: Optional[float] = None,
) -> None:
    """Print the summary for ``bundle`` through ``sink``.

    The sink is called once with the whole block, or not at all when the
    configured log level is silent.
    """
    if config.silent:
        logger.debug("Log level is %s; skipping reify summary", config.loglevel)
        return

    now = time.time() if now is None else now
    elapsed_ms = (now - config.started) * 1000
    sink(format_summary(bundle, config, elapsed_ms))
