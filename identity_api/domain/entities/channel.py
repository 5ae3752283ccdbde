from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelProfile:
    full_name: str
    username: str
    email: str
    avatar: str
    cover_image: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool
