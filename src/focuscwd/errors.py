"""Exceptions raised by focuscwd."""


class FocusCwdError(Exception):
    """Base class for every failure the CLI reports to the user."""


class DisplayConnectionError(FocusCwdError):
    """The X server could not be reached or a request to it failed."""


class NoFocusError(FocusCwdError):
    """No window has input focus, or the focus is the root window."""


class PropertyMissingError(FocusCwdError):
    """The focused window does not expose a usable _NET_WM_PID."""


class SnapshotError(FocusCwdError):
    """The process table could not be enumerated."""


class ProcessNotFoundError(FocusCwdError):
    """A PID is not part of the captured snapshot."""

    def __init__(self, pid: int) -> None:
        super().__init__(f"process {pid} not found in snapshot")
        self.pid = pid


class ResolutionError(FocusCwdError):
    """A required per-process value (cwd, executable) could not be read."""
