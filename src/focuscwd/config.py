"""Runtime settings for focuscwd."""

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from focuscwd.search import DEFAULT_DENYLIST, TieBreak

DEBUG_LOG_FORMAT = "# %(message)s"


@dataclass(slots=True, frozen=True)
class Settings:
    """Settings for one invocation."""

    debug: bool = False
    denylist: tuple[str, ...] = DEFAULT_DENYLIST
    tie_break: TieBreak = TieBreak.LAST
    display: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        """
        Build settings from the environment.

        Any non-empty DEBUG enables the diagnostic trace. DISPLAY selects the
        X server; unset or empty falls back to the X library default.
        """
        return cls(
            debug=bool(environ.get("DEBUG")),
            display=environ.get("DISPLAY") or None,
        )


def configure_logging(debug: bool) -> None:
    """Send log records to stderr, verbose only when debugging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=DEBUG_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
