"""Deepest-descendant search over a captured process tree."""

import logging
import shlex
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath

from focuscwd.errors import ProcessNotFoundError
from focuscwd.models import ProcessRecord, SearchResult

logger = logging.getLogger(__name__)

# gopls is often the deepest child of an editor and sits in its telemetry
# cache directory. "" and "." come from unresolved or degenerate exe paths.
DEFAULT_DENYLIST: tuple[str, ...] = ("gopls", "", ".")


class TieBreak(Enum):
    """Which candidate wins when sibling subtrees report the same depth."""

    LAST = "last"
    FIRST = "first"


@dataclass(slots=True)
class ProcessIndex:
    """Snapshot records indexed by PID and by parent PID."""

    by_pid: dict[int, ProcessRecord] = field(default_factory=dict)
    by_parent: dict[int, list[ProcessRecord]] = field(default_factory=dict)

    @classmethod
    def build(cls, records: Iterable[ProcessRecord]) -> "ProcessIndex":
        """
        Index a snapshot.

        Duplicate PIDs resolve last-write-wins in by_pid; children keep
        snapshot enumeration order.
        """
        index = cls()
        for record in records:
            index.by_pid[record.pid] = record
            if record.parent_pid is not None:
                index.by_parent.setdefault(record.parent_pid, []).append(record)
        return index

    def get(self, pid: int) -> ProcessRecord:
        """Return the record for ``pid`` or raise ProcessNotFoundError."""
        try:
            return self.by_pid[pid]
        except KeyError:
            raise ProcessNotFoundError(pid) from None

    def children(self, pid: int) -> list[ProcessRecord]:
        return self.by_parent.get(pid, [])


def executable_basename(record: ProcessRecord) -> str:
    """Trailing path component of the executable, "" when unresolved."""
    if not record.executable:
        return ""
    return PurePosixPath(record.executable).name


class ProcessFilter:
    """Rejects processes whose executable basename is denylisted."""

    def __init__(self, denylist: Iterable[str] = DEFAULT_DENYLIST) -> None:
        self._denylist = frozenset(denylist)

    @property
    def denylist(self) -> frozenset[str]:
        return self._denylist

    def is_allowed(self, record: ProcessRecord) -> bool:
        return executable_basename(record) not in self._denylist


class DeepestDescendantFinder:
    """
    Depth-first search for the deepest allowed descendant of a process.

    The filter is applied only when comparing candidates returned by child
    subtrees. A leaf always reports itself, so a denylisted root without
    children is its own answer. Depth accumulates through disallowed
    subtrees; only the selected PID is filtered.
    """

    def __init__(
        self,
        process_filter: ProcessFilter | None = None,
        tie_break: TieBreak = TieBreak.LAST,
    ) -> None:
        """
        Initialize the finder.

        Args:
            process_filter: Decides which processes may be returned.
                Defaults to a filter over DEFAULT_DENYLIST.
            tie_break: LAST keeps the last-enumerated candidate among equal
                depths, FIRST keeps the first.
        """
        self._filter = process_filter or ProcessFilter()
        self._tie_break = tie_break

    def find(self, index: ProcessIndex, root_pid: int) -> SearchResult:
        """
        Search the tree rooted at ``root_pid``.

        Raises:
            ProcessNotFoundError: If ``root_pid`` is not in the index.
        """
        index.get(root_pid)
        pid, depth = self._search(index, root_pid, 0)
        return SearchResult(pid=pid, depth=depth)

    def _search(self, index: ProcessIndex, pid: int, level: int) -> tuple[int, int]:
        record = index.by_pid[pid]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                '%s%d %s %s "%s" "%s"',
                "    " * level,
                pid,
                self._filter.is_allowed(record),
                record.executable,
                shlex.join(record.command_line),
                record.working_directory,
            )

        children = index.children(pid)
        if not children:
            return pid, 0

        best_pid, best_depth = pid, 0
        for child in children:
            desc_pid, desc_depth = self._search(index, child.pid, level + 1)
            if not self._beats(desc_depth, best_depth, best_pid != pid):
                continue
            if self._filter.is_allowed(index.by_pid[desc_pid]):
                best_pid, best_depth = desc_pid, desc_depth

        return best_pid, best_depth + 1

    def _beats(self, depth: int, best_depth: int, have_candidate: bool) -> bool:
        if self._tie_break is TieBreak.LAST or not have_candidate:
            return depth >= best_depth
        return depth > best_depth
