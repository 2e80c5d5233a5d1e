"""Concurrency tests for the compare-and-set contract of refresh rotation."""

from __future__ import annotations

from tests.helpers.utils import run_concurrently
from tubehub.services._shared.ports import InMemoryRefreshTokenStore, RotationResult


def test_concurrent_rotations_have_exactly_one_winner():
    store = InMemoryRefreshTokenStore()
    store.register(1, "presented")

    results = run_concurrently(lambda n: store.rotate(1, "presented", f"new-{n}"), workers=8)

    assert results.count(RotationResult.OK) == 1
    assert results.count(RotationResult.REUSED) == 7
    assert store.get(1).startswith("new-")


def test_known_accounts_start_revoked():
    store = InMemoryRefreshTokenStore(known_accounts={3})

    assert store.rotate(3, "x", "y") is RotationResult.REVOKED
    assert store.rotate(4, "x", "y") is RotationResult.NOT_FOUND
    assert store.mark_revoked(3) is True
    assert store.mark_revoked(4) is False
