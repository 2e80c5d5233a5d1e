"""Factory Boy definition for :class:`tubehub.models.video.Video`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from tubehub.models.video import Video


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    video_url = factory.Sequence(lambda n: f"https://media.test/videos/video{n}.mp4")
    thumbnail_url = factory.Sequence(lambda n: f"https://media.test/thumbnails/thumb{n}.jpg")
    duration = factory.Faker("pyfloat", min_value=1, max_value=3600)
    views = factory.Faker("pyint", min_value=0, max_value=10_000)
    is_published = True
