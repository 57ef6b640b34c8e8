"""
OnlineExam API - server entrypoint.

Usage:
  python -m onlineexam.run
"""
import eventlet
eventlet.monkey_patch()

import logging

from onlineexam.app import bootstrap, serve
from onlineexam.config import load_settings, log_settings


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log_settings(settings)

    # The Socket.IO server wraps app.wsgi_app, so serving the app serves both
    app, _socketio = bootstrap(settings)
    serve(app, settings)


# Main entry point
if __name__ == "__main__":
    main()
