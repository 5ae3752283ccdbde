from __future__ import annotations

from typing import Protocol


class SubscriptionsPort(Protocol):
    def count_subscribers(self, *, channel_id: str) -> int:
        ...

    def count_subscriptions(self, *, subscriber_id: str) -> int:
        ...

    def is_subscribed(self, *, subscriber_id: str, channel_id: str) -> bool:
        ...
