from __future__ import annotations

import logging

from sqlalchemy import text

from identity_api.application.ports.subscriptions_port import SubscriptionsPort
from identity_api.infrastructure.db.errors import translate_storage_errors


logger = logging.getLogger(__name__)


class SqlSubscriptionsRepository(SubscriptionsPort):
    """Read-only access to the ``subscriber -> channel`` edge table."""

    def __init__(self, engine):
        self._engine = engine

    def count_subscribers(self, *, channel_id: str) -> int:
        sql = """
            SELECT count(*)
            FROM public.subscriptions
            WHERE channel_id = :channel_id
        """
        with translate_storage_errors("count_subscribers"), self._engine.connect() as conn:
            count = conn.execute(text(sql), {"channel_id": channel_id}).scalar_one()
        logger.debug("subscriptions_repository: count_subscribers channel_id=%s count=%s", channel_id, count)
        return int(count)

    def count_subscriptions(self, *, subscriber_id: str) -> int:
        sql = """
            SELECT count(*)
            FROM public.subscriptions
            WHERE subscriber_id = :subscriber_id
        """
        with translate_storage_errors("count_subscriptions"), self._engine.connect() as conn:
            count = conn.execute(text(sql), {"subscriber_id": subscriber_id}).scalar_one()
        logger.debug(
            "subscriptions_repository: count_subscriptions subscriber_id=%s count=%s",
            subscriber_id,
            count,
        )
        return int(count)

    def is_subscribed(self, *, subscriber_id: str, channel_id: str) -> bool:
        sql = """
            SELECT EXISTS (
                SELECT 1
                FROM public.subscriptions
                WHERE subscriber_id = :subscriber_id
                  AND channel_id = :channel_id
            )
        """
        with translate_storage_errors("is_subscribed"), self._engine.connect() as conn:
            exists = conn.execute(
                text(sql),
                {
                    "subscriber_id": subscriber_id,
                    "channel_id": channel_id,
                },
            ).scalar_one()
        return bool(exists)
