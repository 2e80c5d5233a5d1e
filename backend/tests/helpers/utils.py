"""Tiny helpers shared across test modules."""

from __future__ import annotations

import io
import threading
from collections.abc import Callable

from tubehub.services._shared.ports import UploadedFile


def make_upload(
    filename: str = "picture.png", data: bytes = b"\x89PNG-bytes", content_type: str = "image/png"
) -> UploadedFile:
    """Build an :class:`UploadedFile` over an in-memory stream."""
    return UploadedFile(filename=filename, stream=io.BytesIO(data), content_type=content_type)


def cookie_header(response, name: str) -> str | None:
    """Return the raw ``Set-Cookie`` header for cookie ``name``, if present."""
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def cookie_value(response, name: str) -> str | None:
    header = cookie_header(response, name)
    if header is None:
        return None
    return header.split(";", 1)[0].split("=", 1)[1]


def login(client, username: str, password: str):
    """Log in through the API; the client keeps the session cookies."""
    response = client.post("/api/v1/auth/login", json={"userName": username, "password": password})
    assert response.status_code == 200, response.get_json()
    return response


def run_concurrently(task: Callable[[int], object], workers: int) -> list:
    """Run ``task(n)`` on ``workers`` threads released together by a barrier.

    Returns the outcomes in completion order. A task that raises drops out of
    the list, so callers should account for every worker in their asserts.
    """
    barrier = threading.Barrier(workers)
    outcomes: list = []
    lock = threading.Lock()

    def attempt(n: int) -> None:
        barrier.wait()
        outcome = task(n)
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=attempt, args=(n,)) for n in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return outcomes
