from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GetChannelProfileInput:
    username: str | None
    viewer_id: str | None
