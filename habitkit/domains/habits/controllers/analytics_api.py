"""Account summary and cross-habit analytics endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from habitkit.domains.habits.schemas.habit_schemas import AccountSummaryResponse
from habitkit.extensions import get_insights, get_registry

analytics_api_bp = Blueprint("analytics_api", __name__)


@analytics_api_bp.get("/summary")
def account_summary():
    registry = get_registry()
    with registry.snapshot():
        resp = AccountSummaryResponse(
            name=registry.account.name,
            join_date=registry.account.join_date,
            **registry.account_summary().to_dict(),
        )
    return jsonify({"ok": True, "account": resp.model_dump(mode="json")})


@analytics_api_bp.get("/overview")
def overview():
    report = get_registry().report()
    return jsonify(
        {
            "ok": True,
            "report": report.to_dict(),
            "insights": get_insights().summarize(report),
        }
    )
