"""Units of work: transaction boundaries that hand out session-bound repositories.

Services open :class:`SQLAlchemyUnitOfWork` for writes and
:class:`SQLAlchemyReadOnlyUnitOfWork` for reads; both satisfy :class:`UnitOfWork`.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
    "SQLAlchemyUnitOfWork",
]
