"""Focused window lookup over the X11 protocol."""

import logging

from Xlib import X, Xatom, display, error

from focuscwd.errors import DisplayConnectionError, NoFocusError, PropertyMissingError

logger = logging.getLogger(__name__)

PID_PROPERTY = "_NET_WM_PID"


def resolve_focused_window_pid(display_name: str | None = None) -> int:
    """
    Return the PID owning the window that currently has input focus.

    Args:
        display_name: X display to connect to. None uses $DISPLAY.

    Raises:
        DisplayConnectionError: If the X server cannot be reached or a
            request fails.
        NoFocusError: If nothing is focused or the root window is.
        PropertyMissingError: If the window has no _NET_WM_PID value.
    """
    try:
        conn = display.Display(display_name)
    except (error.DisplayError, OSError) as err:
        raise DisplayConnectionError(f"failed to connect to X server: {err}") from err

    try:
        return _read_focused_pid(conn)
    except (error.XError, error.ConnectionClosedError) as err:
        raise DisplayConnectionError(f"X request failed: {err}") from err
    finally:
        conn.close()


def _read_focused_pid(conn: display.Display) -> int:
    root = conn.screen().root
    focus = conn.get_input_focus().focus

    # Focus is either a window resource or one of the X.NONE / X.PointerRoot ids
    focus_id = getattr(focus, "id", focus)
    if focus_id in (X.NONE, X.PointerRoot) or focus_id == root.id:
        raise NoFocusError("no window is focused")

    atom = conn.intern_atom(PID_PROPERTY)
    prop = focus.get_full_property(atom, Xatom.CARDINAL)
    if prop is None or len(prop.value) == 0:
        raise PropertyMissingError(f"{PID_PROPERTY} property not set on window {focus_id:#x}")

    pid = int(prop.value[0])
    logger.debug("Window %#x belongs to PID %d", focus_id, pid)
    return pid
