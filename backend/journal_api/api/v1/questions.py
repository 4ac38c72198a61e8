"""Scheduled question delivery."""

from __future__ import annotations

from flask import Blueprint

from journal_api.api.deps import (
    build_delivery_service,
    current_user_id,
    json_response,
    require_auth,
    timing,
)
from journal_api.schemas import DeliveryCheckSchema

bp = Blueprint("questions", __name__, url_prefix="/questions")

delivery_schema = DeliveryCheckSchema()


@bp.get("/for-me")
@require_auth
@timing
def for_me():
    """
    Return a new prompt when one is due for the caller.

    The check is also the delivery: a positive answer records the delivery
    time, so an immediate second call answers ``has_new_message: false``.
    """

    outcome = build_delivery_service().check_delivery(current_user_id())
    return json_response(delivery_schema.dump(outcome))
