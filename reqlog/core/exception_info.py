"""Diagnostic snapshot of an exception for error-level log records."""

from __future__ import annotations

import dataclasses
import os
import platform
import sys
import traceback
from datetime import datetime
from typing import Any

from structlog.tracebacks import extract

from reqlog.core.constants import DEFAULT_ERROR_LEVEL


def get_process_info() -> dict[str, Any]:
    info: dict[str, Any] = {
        "pid": os.getpid(),
        "cwd": os.getcwd(),
        "executable": sys.executable,
        "version": platform.python_version(),
        "argv": list(sys.argv),
    }
    if hasattr(os, "getuid"):
        info["uid"] = os.getuid()
        info["gid"] = os.getgid()
    return info


def get_os_info() -> dict[str, Any]:
    info: dict[str, Any] = {"platform": platform.platform()}
    if hasattr(os, "getloadavg"):
        info["loadavg"] = list(os.getloadavg())
    return info


def get_trace(exc: BaseException) -> list[dict[str, Any]]:
    """Return the frames of every exception in the chain."""
    trace = extract(type(exc), exc, exc.__traceback__, show_locals=False)
    return [
        dataclasses.asdict(frame)
        for stack in trace.stacks
        for frame in stack.frames
    ]


def get_all_info(exc: BaseException) -> dict[str, Any]:
    """Collect everything known about ``exc`` and the current process."""
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    message = str(exc) or "(no error message)"
    return {
        "error": repr(exc),
        "name": type(exc).__name__,
        "level": DEFAULT_ERROR_LEVEL,
        "message": f"uncaughtException: {message}\n{stack or '  No stack trace'}",
        "stack": stack,
        "exception": True,
        "date": datetime.now().astimezone().isoformat(),
        "process": get_process_info(),
        "os": get_os_info(),
        "trace": get_trace(exc),
    }
