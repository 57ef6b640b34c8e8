"""
Monitor routes: who is currently connected to the proctoring channel.
"""
from flask import Blueprint, current_app, jsonify

from onlineexam.api.auth import login_required

monitor_bp = Blueprint("monitor", __name__)


@monitor_bp.get("/clients")
@login_required(role="teacher")
def clients():
    sids = current_app.extensions["clients"].snapshot()
    return jsonify({"ok": True, "count": len(sids), "clients": sids})
