"""Shared server connection for cPanel modules."""

import threading


class ConnectionRegistry:
    """Holds the most recently configured server handle.

    Modules that are created without an explicit server pick up the
    handle stored here, so one connection can serve all of them.
    """

    def __init__(self, server=None):
        self._server = server
        self._lock = threading.Lock()

    def get(self):
        """Return the cached server handle, or None if none was set."""
        with self._lock:
            return self._server

    def set(self, server):
        """Replace the cached server handle."""
        with self._lock:
            self._server = server

    def clear(self):
        with self._lock:
            self._server = None


# Used by CpanelBase when no registry is passed in
default_registry = ConnectionRegistry()
