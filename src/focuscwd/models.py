"""Data models for focuscwd."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable view of one process, captured at snapshot time.

    A field that could not be resolved (permission denied, process exited
    mid-capture) is ``None``.
    """

    pid: int
    parent_pid: int | None
    executable: str | None
    command_line: tuple[str, ...]
    working_directory: str | None


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Outcome of a deepest-descendant search."""

    pid: int
    depth: int  # edges counted from the search root, 0 = nothing below
