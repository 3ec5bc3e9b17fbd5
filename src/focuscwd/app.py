"""focuscwd - print the working directory of the focused terminal."""

import logging
import sys
from collections.abc import Callable, Iterable

from focuscwd.config import Settings, configure_logging
from focuscwd.errors import FocusCwdError, ResolutionError
from focuscwd.models import ProcessRecord
from focuscwd.search import DeepestDescendantFinder, ProcessFilter, ProcessIndex
from focuscwd.snapshot import capture_all
from focuscwd.window import resolve_focused_window_pid

logger = logging.getLogger(__name__)


def find_focused_cwd(
    settings: Settings,
    resolve_pid: Callable[[str | None], int] = resolve_focused_window_pid,
    capture: Callable[[], Iterable[ProcessRecord]] = capture_all,
) -> str:
    """
    Resolve the working directory of the deepest process under the focused window.

    Args:
        settings: Denylist, tie-break and display to use.
        resolve_pid: Returns the PID owning the focused window.
        capture: Returns a snapshot of the process table.

    Raises:
        FocusCwdError: Any step failed; the message names the step.
    """
    root_pid = resolve_pid(settings.display)
    logger.debug("PID: %d", root_pid)

    index = ProcessIndex.build(capture())

    root = index.get(root_pid)
    if root.working_directory is None:
        raise ResolutionError(f"cannot read working directory of window process {root_pid}")

    finder = DeepestDescendantFinder(ProcessFilter(settings.denylist), settings.tie_break)
    result = finder.find(index, root_pid)
    logger.debug("Depth: %d  PID: %d", result.depth, result.pid)

    cwd = index.by_pid[result.pid].working_directory
    if cwd is None:
        raise ResolutionError(f"cannot read working directory of process {result.pid}")
    return cwd


def main() -> None:
    """Entry point for focuscwd."""
    settings = Settings.from_env()
    configure_logging(settings.debug)
    try:
        cwd = find_focused_cwd(settings)
    except FocusCwdError as err:
        sys.exit(f"Error: {err}")
    print(cwd)


if __name__ == "__main__":
    main()
