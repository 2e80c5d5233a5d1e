from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import BinaryIO, Protocol
from urllib.parse import urlparse
from uuid import uuid4


class MediaStoreError(Exception):
    """Raised when the remote media host rejects or fails an operation."""


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """
    One file received in an upload slot.

    :param filename: Client-provided file name (used for the extension only).
    :param stream: Readable binary stream positioned at the start.
    :param content_type: MIME type reported by the client.
    """

    filename: str
    stream: BinaryIO
    content_type: str | None = None

    @property
    def extension(self) -> str:
        return PurePosixPath(self.filename or "").suffix.lower()


@dataclass(frozen=True, slots=True)
class MediaAsset:
    """Durable reference to an uploaded asset; ``public_id`` is the host's object key."""

    url: str
    public_id: str


def public_id_from_url(url: str | None) -> str | None:
    """Derive an asset identifier from its URL: last path segment without extension.

    ``https://host/media/avatars/abc123.jpg`` gives ``abc123``.
    """
    if not url:
        return None
    segment = PurePosixPath(urlparse(url).path).name
    if not segment:
        return None
    return PurePosixPath(segment).stem or None


class MediaStore(Protocol):
    """Port for the remote media host."""

    def upload(self, file: UploadedFile, *, folder: str) -> MediaAsset:
        """
        Store ``file`` under ``folder``.

        :raises MediaStoreError: If the host rejects the upload.
        """
        ...

    def delete(self, public_id: str) -> bool:
        """
        Delete the asset whose object key is ``public_id``. A bare file stem
        (a legacy id derived from a URL) is also accepted.

        :returns: ``True`` if something was deleted.
        :raises MediaStoreError: If the host fails.
        """
        ...


class InMemoryMediaStore(MediaStore):
    """Keeps uploaded bytes in a dict keyed by public id; records deletions for assertions."""

    def __init__(self, base_url: str = "https://media.local") -> None:
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False
        self._lock = threading.Lock()

    def upload(self, file: UploadedFile, *, folder: str) -> MediaAsset:
        if self.fail_uploads:
            raise MediaStoreError("upload rejected")
        data = file.stream.read()
        if not data:
            raise MediaStoreError("empty file")
        key = f"{folder.strip('/')}/{uuid4().hex}{file.extension}"
        with self._lock:
            self.objects[key] = data
        return MediaAsset(url=f"{self.base_url}/{key}", public_id=key)

    def delete(self, public_id: str) -> bool:
        with self._lock:
            self.deleted.append(public_id)
            if public_id in self.objects:
                keys = [public_id]
            else:
                keys = [k for k in self.objects if PurePosixPath(k).stem == public_id]
            for key in keys:
                del self.objects[key]
        return bool(keys)
