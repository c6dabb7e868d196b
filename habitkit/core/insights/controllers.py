"""Insights API endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from habitkit.core.errors import ValidationError
from habitkit.extensions import get_insights

insights_api_bp = Blueprint("insights_api", __name__)


@insights_api_bp.get("/notifications")
def list_notifications():
    limit = request.args.get("limit", type=int)
    if limit is not None and limit < 1:
        raise ValidationError("limit must be at least 1")
    return jsonify({"ok": True, "notifications": get_insights().notifications(limit=limit)})
