from __future__ import annotations
import os
import shutil
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse


class StorageBackend(ABC):
    """Storage abstraction for filesystems and cloud buckets."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def makedirs(self, path: str, exist_ok: bool = True) -> None:
        raise NotImplementedError()

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        raise NotImplementedError()

    @abstractmethod
    def write_file(self, path: str, data: bytes) -> None:
        raise NotImplementedError()

    @abstractmethod
    def delete(self, path: str, recursive: bool = False) -> bool:
        """Delete a file or directory; returns False when nothing was there."""
        raise NotImplementedError()


class LocalStorageBackend(StorageBackend):
    """Filesystem-backed storage backend."""

    @staticmethod
    def _local(path: str) -> str:
        return path[len("file://"):] if path.startswith("file://") else path

    def exists(self, path: str) -> bool:
        return os.path.exists(self._local(path))

    def makedirs(self, path: str, exist_ok: bool = True) -> None:
        if not path:
            return
        os.makedirs(self._local(path), exist_ok=exist_ok)

    def read_file(self, path: str) -> bytes:
        with open(self._local(path), "rb") as f:
            return f.read()

    def write_file(self, path: str, data: bytes) -> None:
        path = self._local(path)
        dirpath = os.path.dirname(path)
        if dirpath:
            os.makedirs(dirpath, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

    def delete(self, path: str, recursive: bool = False) -> bool:
        path = self._local(path)
        if not os.path.lexists(path):
            return False
        if os.path.isdir(path) and not os.path.islink(path):
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
        else:
            os.remove(path)
        return True


class S3StorageBackend(StorageBackend):
    """Minimal S3 backend for model artifacts and job outputs."""

    def __init__(
        self,
        bucket: str,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        try:
            import boto3
        except ImportError as exc:
            raise ImportError("boto3 required for S3 storage backend") from exc

        client_kwargs: Dict[str, Any] = {}
        if region:
            client_kwargs["region_name"] = region
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url

        self.bucket = bucket
        self.s3_client = boto3.client("s3", **client_kwargs)

    def _normalize_path(self, path: str) -> str:
        if path.startswith("s3://"):
            _, path = split_s3_uri(path)
        return path.replace("\\", "/").strip("/")

    def exists(self, path: str) -> bool:
        if not path:
            return False
        from botocore.exceptions import ClientError
        key = self._normalize_path(path)
        try:
            self.s3_client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code") if hasattr(exc, "response") else None
            if code not in ("404", "NoSuchKey"):
                raise
        # a "directory" exists when at least one key lives under it
        resp = self.s3_client.list_objects_v2(Bucket=self.bucket, Prefix=key + "/", MaxKeys=1)
        return resp.get("KeyCount", 0) > 0

    def makedirs(self, path: str, exist_ok: bool = True) -> None:
        # S3 is flat; directories are logical. No action required.
        return

    def read_file(self, path: str) -> bytes:
        key = self._normalize_path(path)
        response = self.s3_client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read()

    def write_file(self, path: str, data: bytes) -> None:
        key = self._normalize_path(path)
        self.s3_client.put_object(Bucket=self.bucket, Key=key, Body=data)

    def delete(self, path: str, recursive: bool = False) -> bool:
        key = self._normalize_path(path)
        if not recursive:
            if not self.exists(path):
                return False
            self.s3_client.delete_object(Bucket=self.bucket, Key=key)
            return True
        deleted = False
        paginator = self.s3_client.get_paginator("list_objects_v2")
        for prefix in (key, key + "/"):
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                objs = [{"Key": o["Key"]} for o in page.get("Contents", [])
                        if o["Key"] == key or o["Key"].startswith(key + "/")]
                if objs:
                    self.s3_client.delete_objects(Bucket=self.bucket, Delete={"Objects": objs})
                    deleted = True
        return deleted


def split_s3_uri(uri: str) -> Tuple[str, str]:
    parsed = urlparse(uri)
    if parsed.scheme != "s3" or not parsed.netloc:
        raise ValueError(f"Not an S3 uri: {uri}")
    return parsed.netloc, parsed.path.lstrip("/")


def get_storage_backend(storage_config: Optional[Dict[str, Any]]) -> StorageBackend:
    """Create a storage backend from configuration."""
    if not storage_config:
        return LocalStorageBackend()
    storage_type = storage_config.get("type", "local").lower()
    if storage_type == "local":
        return LocalStorageBackend()
    if storage_type == "s3":
        bucket = storage_config.get("bucket")
        if not bucket:
            raise ValueError("S3 storage requires a 'bucket' value")
        return S3StorageBackend(
            bucket=bucket,
            region=storage_config.get("region"),
            endpoint_url=storage_config.get("endpoint_url"),
        )
    raise ValueError(f"Unknown storage type: {storage_type}")


def get_storage_backend_for(path: str, options: Optional[Dict[str, Any]] = None) -> StorageBackend:
    """Backend able to handle `path` (s3:// uris or local paths).

    `options` is the job's `storage` section; `region` and `endpoint_url`
    apply to S3 clients.
    """
    if path.startswith("s3://"):
        bucket, _ = split_s3_uri(path)
        opts = options or {}
        return get_storage_backend({
            "type": "s3",
            "bucket": bucket,
            "region": opts.get("region"),
            "endpoint_url": opts.get("endpoint_url"),
        })
    return get_storage_backend(None)
