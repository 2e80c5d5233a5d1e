from tubehub.models.subscription import Subscription
from tubehub.models.user import User
from tubehub.models.video import Video
from tubehub.models.watch_history import WatchHistoryEntry

__all__ = [
    "Subscription",
    "User",
    "Video",
    "WatchHistoryEntry",
]
