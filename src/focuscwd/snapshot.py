"""Process table capture for focuscwd."""

import logging

import psutil

from focuscwd.errors import SnapshotError
from focuscwd.models import ProcessRecord

logger = logging.getLogger(__name__)

# Attributes fetched for every process in a single pass
SNAPSHOT_ATTRS = ["pid", "ppid", "exe", "cmdline", "cwd"]


def capture_all() -> list[ProcessRecord]:
    """
    Capture every process visible to the caller.

    psutil.process_iter(attrs=...) reads every field in one pass. With
    ad_value=None a field that raises AccessDenied or ZombieProcess is
    recorded as None instead of dropping the whole process. Processes that exit mid-iteration are skipped.

    Returns:
        Records in process table enumeration order.

    Raises:
        SnapshotError: If the process table itself cannot be enumerated.
    """
    records: list[ProcessRecord] = []

    try:
        for proc in psutil.process_iter(attrs=SNAPSHOT_ATTRS, ad_value=None):
            try:
                records.append(_to_record(proc.info))
            except psutil.NoSuchProcess:
                # Died between listing and reading
                continue
    except (psutil.Error, OSError) as err:
        raise SnapshotError(f"failed to enumerate processes: {err}") from err

    logger.debug("Captured %d processes", len(records))
    return records


def _to_record(info: dict) -> ProcessRecord:
    """Convert a psutil info dict into a ProcessRecord."""
    cmdline = info.get("cmdline") or []
    return ProcessRecord(
        pid=info["pid"],
        parent_pid=info.get("ppid"),
        executable=info.get("exe"),
        command_line=tuple(cmdline),
        working_directory=info.get("cwd") or None,
    )
