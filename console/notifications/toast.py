"""
TRANSIENT TOAST NOTIFICATIONS

Purpose:
- User-visible success/error messages for dashboard actions
- Failures degrade to "keep prior state, show a toast"
- Session-level, in-memory only

Author: TruePortMe Admin Console
"""

import time
from datetime import datetime
from typing import Dict, List, Optional

TOAST_KINDS = ("success", "error", "info")

# In-memory toast store (session-level)
_toast_store: List[Dict] = []


def emit_toast(kind: str, message: str, metadata: Optional[Dict] = None) -> Dict:
    """
    Queue a toast.

    Args:
        kind: success, error or info
        message: Text shown to the user
        metadata: Additional context (e.g. the failing resource)
    """
    if kind not in TOAST_KINDS:
        kind = "info"

    toast = {
        "id": f"TOAST-{time.time_ns()}",
        "kind": kind,
        "message": message,
        "timestamp": datetime.now().isoformat(),
        "read": False,
        "metadata": metadata or {},
    }
    _toast_store.append(toast)
    return toast


def get_toasts(unread_only: bool = False) -> List[Dict]:
    """Toasts, newest first."""
    toasts = [t for t in _toast_store if not (unread_only and t["read"])]
    toasts.reverse()
    return toasts


def mark_all_read() -> None:
    for toast in _toast_store:
        toast["read"] = True


def clear_toasts() -> None:
    _toast_store.clear()


def error_message(exc: BaseException, fallback: str) -> str:
    """Backend message when the API supplied one, else the fallback."""
    message = getattr(exc, "message", None)
    return message or fallback
