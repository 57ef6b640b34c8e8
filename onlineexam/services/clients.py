"""
In-memory registry of connected Socket.IO clients.
"""
import threading


class ClientRegistry:
    """Tracks the sids of currently connected sockets."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sids = []

    def add(self, sid):
        with self._lock:
            if sid not in self._sids:
                self._sids.append(sid)

    def discard(self, sid):
        with self._lock:
            if sid in self._sids:
                self._sids.remove(sid)

    def snapshot(self):
        with self._lock:
            return list(self._sids)

    def __len__(self):
        with self._lock:
            return len(self._sids)
