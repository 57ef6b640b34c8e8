"""
OnlineExam API - application wiring.

create_app() builds the Flask app around an already connected database,
create_socketio() binds the real-time relay to it, bootstrap() runs the
startup sequence and serve() binds the port, used by run.py.
"""
import logging
import sys

import eventlet
import eventlet.wsgi
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from onlineexam import mongo_adapter
from onlineexam.api.routes import register_routes
from onlineexam.config import MAX_BODY_BYTES
from onlineexam.services.clients import ClientRegistry
from onlineexam.ws.handlers import register_socket_handlers

logger = logging.getLogger(__name__)


def create_app(settings, database, clients=None):
    """Flask app with CORS, body limits, routes and the injected database."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["MAX_CONTENT_LENGTH"] = MAX_BODY_BYTES

    app.extensions["mongo"] = database
    app.extensions["clients"] = clients if clients is not None else ClientRegistry()

    # Only the configured frontend may call us, cookies included
    CORS(app, origins=[settings.client_origin], supports_credentials=True)

    register_routes(app, enable_monitor=settings.enable_monitor)
    return app


def create_socketio(app, settings):
    """Socket.IO server sharing the app's listener."""
    socketio = SocketIO(
        app,
        cors_allowed_origins=settings.client_origin,
        cors_credentials=True,
        async_mode=settings.async_mode,
        max_http_buffer_size=MAX_BODY_BYTES,
    )
    register_socket_handlers(socketio, app.extensions["clients"])
    return socketio


def bootstrap(settings):
    """
    Connect to the database and build the HTTP + Socket.IO server.
    Exits the process with status 1 if no database can be provisioned.
    """
    try:
        database = mongo_adapter.connect(settings.mongo_uri, settings.mongo_db)
    except Exception as e:
        logger.error("[MONGO] startup error: %s", e)
        sys.exit(1)

    app = create_app(settings, database, ClientRegistry())
    socketio = create_socketio(app, settings)
    return app, socketio


def serve(app, settings):
    """
    Bind the listening port, then report readiness and serve forever.
    Exits with status 1 if the port cannot be bound.
    """
    try:
        sock = eventlet.listen((settings.host, settings.port))
    except OSError as e:
        logger.error("[BOOT] cannot listen on port %s: %s", settings.port, e)
        sys.exit(1)

    logger.info("[BOOT] API running on port %s", settings.port)
    eventlet.wsgi.server(sock, app)
