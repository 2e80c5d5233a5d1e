# tubehub/infra/storage/s3_media_store.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any
from uuid import uuid4

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from tubehub.services._shared.ports import (
    InMemoryMediaStore,
    MediaAsset,
    MediaStore,
    MediaStoreError,
    UploadedFile,
)

log = logging.getLogger(__name__)


class S3MediaStore(MediaStore):
    """
    Media store backed by any S3-compatible host (AWS S3, MinIO).

    Objects are written as ``<key_prefix>/<folder>/<hex><ext>`` and that key
    is the asset's public id. Public URLs are built from
    ``public_base_url`` when set, otherwise from the endpoint and bucket.
    """

    def __init__(
        self,
        *,
        bucket: str,
        client: Any | None = None,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        region: str = "us-east-1",
        key_prefix: str = "media",
        public_base_url: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.region = region
        self.key_prefix = key_prefix.strip("/")
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
            config=Config(signature_version="s3v4"),
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> S3MediaStore:
        return cls(
            bucket=config["S3_BUCKET_NAME"],
            endpoint_url=config.get("S3_ENDPOINT_URL"),
            access_key_id=config.get("S3_ACCESS_KEY_ID"),
            secret_access_key=config.get("S3_SECRET_ACCESS_KEY"),
            region=config.get("S3_REGION") or "us-east-1",
            key_prefix=config.get("MEDIA_KEY_PREFIX") or "media",
            public_base_url=config.get("MEDIA_PUBLIC_BASE_URL"),
        )

    # ------------------------------------------------------------------ #

    def _key(self, folder: str, name: str, extension: str) -> str:
        parts = [self.key_prefix, folder.strip("/"), f"{name}{extension}"]
        return "/".join(p for p in parts if p)

    def _url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, file: UploadedFile, *, folder: str) -> MediaAsset:
        key = self._key(folder, uuid4().hex, file.extension)
        extra: dict[str, Any] = {}
        if file.content_type:
            extra["ContentType"] = file.content_type
        try:
            self._client.put_object(Bucket=self.bucket, Key=key, Body=file.stream.read(), **extra)
        except (ClientError, BotoCoreError) as exc:
            log.warning("Media upload failed: key=%s", key, exc_info=True)
            raise MediaStoreError("upload failed") from exc
        return MediaAsset(url=self._url(key), public_id=key)

    def delete(self, public_id: str) -> bool:
        """
        Delete the object whose key is ``public_id``.

        A bare file stem (rows stored before ids carried the full key) is
        resolved by listing the key prefix.
        """
        try:
            if "/" in public_id:
                keys = [public_id]
            else:
                keys = self._keys_for_stem(public_id)
            for key in keys:
                self._client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise MediaStoreError("delete failed") from exc
        return bool(keys)

    def _keys_for_stem(self, stem: str) -> list[str]:
        prefix = f"{self.key_prefix}/" if self.key_prefix else ""
        paginator = self._client.get_paginator("list_objects_v2")
        return [
            obj["Key"]
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix)
            for obj in page.get("Contents", [])
            if PurePosixPath(obj["Key"]).stem == stem
        ]


def build_media_store(config: Mapping[str, Any]) -> MediaStore:
    """Return the media store selected by ``MEDIA_BACKEND``."""
    backend = str(config.get("MEDIA_BACKEND", "s3")).strip().lower()
    if backend == "memory":
        return InMemoryMediaStore(base_url=config.get("MEDIA_PUBLIC_BASE_URL") or "https://media.local")
    if backend == "s3":
        return S3MediaStore.from_config(config)
    raise RuntimeError(f"Unknown MEDIA_BACKEND {backend!r}")
