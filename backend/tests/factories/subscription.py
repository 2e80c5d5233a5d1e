"""Factory Boy definition for :class:`tubehub.models.subscription.Subscription`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from tubehub.models.subscription import Subscription


class SubscriptionFactory(BaseFactory):
    """Subscriber -> channel edge; pass ``subscriber_id``/``channel_id`` to reuse accounts."""

    class Meta:
        model = Subscription

    id = None
    subscriber_id = factory.LazyFunction(lambda: UserFactory().id)
    channel_id = factory.LazyFunction(lambda: UserFactory().id)
