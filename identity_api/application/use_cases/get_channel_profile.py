from __future__ import annotations

from identity_api.application.dto.channel import GetChannelProfileInput
from identity_api.application.ports.subscriptions_port import SubscriptionsPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.entities.channel import ChannelProfile
from identity_api.domain.exceptions import NotFoundError, ValidationError

from .auth_common import is_blank, normalize_username


class GetChannelProfileUseCase:
    def __init__(self, *, user_store: UserStorePort, subscriptions_port: SubscriptionsPort):
        self._user_store = user_store
        self._subscriptions_port = subscriptions_port

    def execute(self, command: GetChannelProfileInput) -> ChannelProfile:
        if is_blank(command.username):
            raise ValidationError("username is missing.")

        channel = self._user_store.get_public_user_by_username(username=normalize_username(command.username))
        if channel is None:
            raise NotFoundError("Channel does not exist.")

        # Two indexed counts and one point lookup; the edge set is never loaded.
        subscribers_count = self._subscriptions_port.count_subscribers(channel_id=channel.id)
        subscribed_to_count = self._subscriptions_port.count_subscriptions(subscriber_id=channel.id)
        is_subscribed = False
        if command.viewer_id:
            is_subscribed = self._subscriptions_port.is_subscribed(
                subscriber_id=command.viewer_id,
                channel_id=channel.id,
            )

        return ChannelProfile(
            full_name=channel.full_name,
            username=channel.username,
            email=channel.email,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            subscribers_count=subscribers_count,
            subscribed_to_count=subscribed_to_count,
            is_subscribed=is_subscribed,
        )
