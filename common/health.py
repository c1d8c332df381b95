"""
common.health
~~~~~~~~~~~~~
GET /health/ – lightweight liveness + readiness probe.

Returns:
    200  {"status": "ok", "db": "ok", "config_store": "ok"}
    503  {"status": "degraded", ...}  – DB unreachable or config unreadable
"""
import structlog
from django.db import OperationalError, connection
from django.http import JsonResponse

from apps.config_store.services.config_tree import load_config_tree
from common.exceptions import ConfigStoreUnavailableError

logger = structlog.get_logger(__name__)


def health_check(request):
    """Return service health including database and config store status."""
    db_status = "ok"
    config_status = "ok"

    try:
        connection.ensure_connection()
    except OperationalError as exc:
        db_status = f"error: {exc}"
        logger.error("health_check_db_failure", error=str(exc))

    try:
        load_config_tree()
    except ConfigStoreUnavailableError as exc:
        config_status = f"error: {exc}"

    healthy = db_status == "ok" and config_status == "ok"
    payload = {
        "status": "ok" if healthy else "degraded",
        "db": db_status,
        "config_store": config_status,
    }
    return JsonResponse(payload, status=200 if healthy else 503)
