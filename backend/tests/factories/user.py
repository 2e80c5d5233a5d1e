"""Factory Boy definition for :class:`tubehub.models.user.User`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tubehub.models.user import User

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`tubehub.models.user.User` instances.

    Notes
    -----
    - ``avatar_public_id`` is the object key that ``avatar_url`` ends with.
    - ``refresh_token`` starts empty; tests issue tokens through services.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.Faker("name")
    avatar_public_id = factory.Sequence(lambda n: f"avatars/avatar{n:04d}.png")
    avatar_url = factory.LazyAttribute(
        lambda o: f"https://media.test/{o.avatar_public_id}"
    )
    cover_image_url = ""
    cover_image_public_id = None
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        value = extracted or DEFAULT_PASSWORD
        obj.password = value
