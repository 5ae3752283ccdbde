from __future__ import annotations

import pytest

from identity_api.application.dto.channel import GetChannelProfileInput
from identity_api.application.use_cases.get_channel_profile import GetChannelProfileUseCase
from identity_api.domain.exceptions import NotFoundError, ValidationError


@pytest.fixture
def use_case(user_store, make_subscriptions):
    for user_id, username in [
        ("chan", "channel"),
        ("s1", "sub-one"),
        ("s2", "sub-two"),
        ("s3", "sub-three"),
        ("other", "other"),
        ("lurker", "lurker"),
    ]:
        user_store.add_user(user_id=user_id, username=username, email=f"{username}@example.com")
    subscriptions = make_subscriptions(
        edges=[
            ("s1", "chan"),
            ("s2", "chan"),
            ("s3", "chan"),
            ("chan", "other"),
            ("lurker", "other"),
        ]
    )
    return GetChannelProfileUseCase(user_store=user_store, subscriptions_port=subscriptions)


def test_counts_incoming_and_outgoing_edges(use_case):
    profile = use_case.execute(GetChannelProfileInput(username="Channel", viewer_id=None))

    assert profile.subscribers_count == 3
    assert profile.subscribed_to_count == 1
    assert profile.is_subscribed is False
    assert profile.username == "channel"
    assert not hasattr(profile, "password_hash")
    assert not hasattr(profile, "refresh_token")


@pytest.mark.parametrize(
    "viewer_id, expected",
    [("s1", True), ("s3", True), ("lurker", False), ("other", False), ("chan", False)],
)
def test_is_subscribed_only_for_subscriber_viewers(use_case, viewer_id, expected):
    profile = use_case.execute(GetChannelProfileInput(username="channel", viewer_id=viewer_id))

    assert profile.is_subscribed is expected


def test_unknown_channel_is_not_found(use_case):
    with pytest.raises(NotFoundError):
        use_case.execute(GetChannelProfileInput(username="nobody", viewer_id=None))


@pytest.mark.parametrize("username", [None, "", "  "])
def test_blank_username_is_rejected(use_case, username):
    with pytest.raises(ValidationError):
        use_case.execute(GetChannelProfileInput(username=username, viewer_id=None))
