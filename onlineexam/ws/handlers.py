"""
Socket.IO event handlers.
"""
import logging
import time

from flask import request

logger = logging.getLogger(__name__)

TAB_EVENT = "tab-event"


def now_ms():
    return int(time.time() * 1000)


def register_socket_handlers(socketio, clients):
    """Register all Socket.IO event handlers."""

    @socketio.on("connect")
    def on_connect(auth=None):
        clients.add(request.sid)
        logger.info("[WS] client connected sid=%s", request.sid)

    @socketio.on("disconnect")
    def on_disconnect(*args):
        clients.discard(request.sid)
        logger.info("[WS] client disconnected sid=%s", request.sid)

    @socketio.on(TAB_EVENT)
    def on_tab_event(data=None):
        # Best-effort fan-out to every connected client, sender included
        payload = dict(data) if isinstance(data, dict) else {}
        payload["sid"] = request.sid
        payload["at"] = now_ms()
        socketio.emit(TAB_EVENT, payload)
