# tubehub/services/_shared/base.py
from __future__ import annotations

from tubehub.services._shared.errors import ServiceError
from tubehub.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide read-only and read-write units of work.
    * Offer shared input helpers.
    * Keep services orchestration-only: no Flask, no HTTP.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Isolation level for this scope; ``None`` defers to
            ``DB_READ_ISOLATION_LEVEL`` and, when that is unset, to the driver.
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def require_fields(*values: str | None, message: str = "All fields are required") -> None:
        """
        Reject when any value is missing or blank after trimming.

        :raises ServiceError: With ``message``.
        """
        if any(v is None or not str(v).strip() for v in values):
            raise ServiceError(message)
