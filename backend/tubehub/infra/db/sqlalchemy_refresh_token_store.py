# tubehub/infra/db/sqlalchemy_refresh_token_store.py
from __future__ import annotations

from dataclasses import dataclass

from tubehub.services._shared.ports import RefreshTokenStore, RotationResult
from tubehub.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


@dataclass(slots=True)
class SQLAlchemyRefreshTokenStore(RefreshTokenStore):
    """
    Refresh token kept in ``users.refresh_token``.

    Each call runs in its own read-write Unit of Work. ``rotate`` is one
    conditional ``UPDATE ... WHERE id = :id AND refresh_token = :old``; the
    row count decides the outcome, so two concurrent rotations of the same
    token cannot both succeed.
    """

    def register(self, account_id: int, token: str) -> None:
        with SQLAlchemyUnitOfWork() as uow:
            if not uow.users.set_refresh_token(int(account_id), token):
                raise LookupError(f"User {account_id} not found.")

    def rotate(self, account_id: int, old: str, new: str) -> RotationResult:
        with SQLAlchemyUnitOfWork() as uow:
            if uow.users.swap_refresh_token(int(account_id), old, new):
                return RotationResult.OK
            # Classify the miss; the row is no longer compared against ``old``
            if not uow.users.user_exists(int(account_id)):
                return RotationResult.NOT_FOUND
            if uow.users.get_refresh_token(int(account_id)) is None:
                return RotationResult.REVOKED
            return RotationResult.REUSED

    def mark_revoked(self, account_id: int) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.users.set_refresh_token(int(account_id), None)

    def get(self, account_id: int) -> str | None:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.users.get_refresh_token(int(account_id))
