"""Shared builders for process tree tests."""

from focuscwd.models import ProcessRecord

_DEFAULT_EXE = object()


def proc(pid: int, parent_pid: int | None, exe=_DEFAULT_EXE, cwd: str | None = "/") -> ProcessRecord:
    """Build a ProcessRecord; the executable defaults to /usr/bin/proc<pid>."""
    if exe is _DEFAULT_EXE:
        exe = f"/usr/bin/proc{pid}"
    return ProcessRecord(
        pid=pid,
        parent_pid=parent_pid,
        executable=exe,
        command_line=(exe, f"--id={pid}") if exe else (),
        working_directory=cwd,
    )
