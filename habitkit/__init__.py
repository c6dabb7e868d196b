"""habitkit application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask

from habitkit.config import config_by_name
from habitkit.core.clock import Clock
from habitkit.core.errors import HabitError, InvariantViolation, NotFoundError, ValidationError
from habitkit.extensions import init_extensions

ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    InvariantViolation: 500,
}


def create_app(config_name: Optional[str] = None, clock: Optional[Clock] = None) -> Flask:
    """Create and configure the habitkit Flask application.

    ``clock`` replaces the system clock, which keeps streak and analytics
    results deterministic in tests.
    """
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()

    app = Flask(__name__)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)
    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))
    logging.getLogger("habitkit").setLevel(app.logger.level)

    init_extensions(app, clock=clock)
    _register_blueprints(app)
    _register_error_handlers(app)

    if app.config.get("SEED_DEMO_DATA"):
        from habitkit.scripts.seed_demo import seed_demo_habits

        seed_demo_habits(app.extensions["habit_registry"], seed=app.config.get("DEMO_SEED"))

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from habitkit.scripts.seed_demo import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from habitkit.core.insights.controllers import insights_api_bp
    from habitkit.domains.habits.controllers.analytics_api import analytics_api_bp
    from habitkit.domains.habits.controllers.habit_api import habit_api_bp

    app.register_blueprint(habit_api_bp, url_prefix="/api/habits")
    app.register_blueprint(analytics_api_bp, url_prefix="/api/analytics")
    app.register_blueprint(insights_api_bp, url_prefix="/api/insights")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HabitError)
    def _habit_error(exc: HabitError):
        status = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 400)
        if status >= 500:
            app.logger.exception("Invariant violated: %s", exc)
        body = {"ok": False, "error": exc.code, "message": str(exc)}
        if exc.details is not None:
            body["details"] = exc.details
        return body, status

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500
