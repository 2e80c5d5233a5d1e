# tubehub/infra/redis/redis_refresh_token_store.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import redis  # type: ignore[import-untyped]

from tubehub.services._shared.ports import RefreshTokenStore, RotationResult

# Value stored after logout; distinguishes "revoked" from "never issued"
_REVOKED = ""


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed store: one string key per account holding its current token.

    :param r: A Redis client (already connected).
    :param ttl: Key lifetime; defaults to no expiry. Set it to the refresh
        token lifetime so abandoned sessions disappear on their own.
    """

    r: redis.Redis
    ttl: timedelta | None = None

    @staticmethod
    def _k(account_id: int) -> str:
        return f"rt:acct:{int(account_id)}"

    @staticmethod
    def _s(value: bytes | str | None) -> str | None:
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes | bytearray) else str(value)

    def register(self, account_id: int, token: str) -> None:
        self.r.set(self._k(account_id), token, ex=self.ttl)

    def rotate(self, account_id: int, old: str, new: str) -> RotationResult:
        """
        Compare-and-set with WATCH/MULTI/EXEC.

        A concurrent write to the key between the read and ``EXEC`` aborts
        the transaction; the loop then re-reads and re-classifies.
        """
        key = self._k(account_id)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    current = self._s(p.get(key))
                    if current is None:
                        p.unwatch()
                        return RotationResult.NOT_FOUND
                    if current == _REVOKED:
                        p.unwatch()
                        return RotationResult.REVOKED
                    if current != old:
                        p.unwatch()
                        return RotationResult.REUSED

                    p.multi()
                    p.set(key, new, ex=self.ttl)
                    p.execute()
                return RotationResult.OK
            except redis.WatchError:
                continue

    def mark_revoked(self, account_id: int) -> bool:
        # Only touch existing keys and keep their remaining lifetime
        return bool(self.r.set(self._k(account_id), _REVOKED, xx=True, keepttl=True))

    def get(self, account_id: int) -> str | None:
        value = self._s(self.r.get(self._k(account_id)))
        return value or None
