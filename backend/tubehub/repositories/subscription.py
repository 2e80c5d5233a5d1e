"""Subscription repository: subscriber counts and membership checks."""

from __future__ import annotations

from sqlalchemy import func, select

from tubehub.models.subscription import Subscription
from tubehub.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Read helpers over the subscriber → channel edges.

    Counts are two independent ``COUNT`` queries rather than one aggregate.
    """

    model = Subscription

    def count_subscribers(self, channel_id: int) -> int:
        """Number of accounts subscribed to ``channel_id``."""
        stmt = select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        return int(self.session.execute(stmt).scalar_one())

    def count_subscribed_to(self, subscriber_id: int) -> int:
        """Number of channels ``subscriber_id`` is subscribed to."""
        stmt = select(func.count(Subscription.id)).where(
            Subscription.subscriber_id == subscriber_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def is_subscribed(self, subscriber_id: int, channel_id: int) -> bool:
        stmt = select(Subscription.id).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return self.session.execute(stmt.limit(1)).first() is not None
