"""factory_boy base wired to the per-test transactional session."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the session the ``_factories_session`` fixture provides."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the current test session.

        :raises RuntimeError: When a factory runs outside the ``session`` fixture.
        """
        if cls._session is None:
            raise RuntimeError("No factory session: request the 'session' fixture first.")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Flushes on create so ids exist; tests ``session.commit()`` before calling services."""

    class Meta:
        abstract = True
        # Resolved on every create, so each test gets its own session
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
