# journal_api/services/delivery/service.py
from __future__ import annotations

import logging

from journal_api.services._shared.clock import Clock, as_utc, utc_now
from journal_api.services._shared.ports import ContentSelector, UserSettingsStore
from journal_api.services.delivery.dto import ContentOut, DeliveryOut
from journal_api.services.delivery.engine import DeliveryEligibilityEngine

log = logging.getLogger(__name__)

DEFAULT_CATEGORY = "SCHEDULED_MESSAGE"


class DeliveryService:
    """
    Decide and perform the delivery of a scheduled prompt for one user.

    The engine answers "is a message due"; this service loads the policy,
    picks the content and persists the new delivery timestamp. The timestamp
    only advances when content was actually handed out.

    :param settings: Notification policy store.
    :param content: Content selector.
    :param engine: Eligibility engine.
    :param clock: Source of "now".
    :param category: Content category scheduled prompts are drawn from.
    """

    def __init__(
        self,
        *,
        settings: UserSettingsStore,
        content: ContentSelector,
        engine: DeliveryEligibilityEngine,
        clock: Clock = utc_now,
        category: str = DEFAULT_CATEGORY,
    ) -> None:
        self.settings = settings
        self.content = content
        self.engine = engine
        self.clock = clock
        self.category = category

    def check_delivery(self, user_id: str) -> DeliveryOut:
        """
        Return the prompt to show ``user_id`` now, if any.

        :param user_id: Authenticated user.
        :returns: Delivery outcome.
        :raises UserNotFoundError: Propagated from the settings store.
        """
        policy = self.settings.load(user_id)
        now = as_utc(self.clock())
        decision = self.engine.decide(policy, now)
        if not decision.deliver or decision.new_last_delivered_at is None:
            log.debug(
                "delivery.skipped",
                extra={"user_id": user_id, "reason": decision.reason, "mode": policy.interval_mode},
            )
            return DeliveryOut.nothing()

        item = self.content.pick_active(self.category)
        if item is None:
            log.warning(
                "delivery.no_content",
                extra={"user_id": user_id, "reason": self.category},
            )
            return DeliveryOut.nothing()

        # only the timestamp is written; settings edited since load() survive
        if not self.settings.record_delivery(user_id, decision.new_last_delivered_at):
            log.info(
                "delivery.superseded",
                extra={"user_id": user_id, "reason": "already_recorded"},
            )
            return DeliveryOut.nothing()
        log.info("delivery.delivered", extra={"user_id": user_id, "reason": decision.reason})
        return DeliveryOut(
            has_new_message=True,
            content=ContentOut(id=item.id, text=item.text, category=item.category),
        )
