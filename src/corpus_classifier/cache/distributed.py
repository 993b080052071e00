"""Model artifact distribution.

The driver publishes each cache file once; every worker materializes its own
read-only replica in a local directory before handling any record.

Layout on a worker:
  <cache_dir>/<path of the configured uri>

so a replica path always ends with the configured model path, which is what
the model locator matches on.

In ray_data mode the published handle is a Ray ObjectRef (`ray.put` on the
driver, `ray.get` on the worker). `put`/`fetch` are injectable so the cache can
be driven without a cluster.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
import os
import logging
import tempfile

from .locator import uri_path
from ..storage.base import get_storage_backend_for

log = logging.getLogger("corpus_classifier.cache")

def default_cache_dir() -> str:
    return os.path.join(tempfile.gettempdir(), "corpus_classifier", "cache")

@dataclass(frozen=True)
class CacheFile:
    uri: str
    ref: Any
    size: int

def _ray_put(data: bytes) -> Any:
    import ray
    return ray.put(data)

def _ray_get(ref: Any) -> bytes:
    import ray
    return ray.get(ref)

class DistributedCache:
    def __init__(
        self,
        cache_dir: Optional[str] = None,
        *,
        put: Optional[Callable[[bytes], Any]] = None,
        fetch: Optional[Callable[[Any], bytes]] = None,
        storage_options: Optional[Dict[str, Any]] = None,
    ):
        self.cache_dir = cache_dir or default_cache_dir()
        self.storage_options = storage_options
        self._put = put or _ray_put
        self._fetch = fetch or _ray_get
        self._local: Optional[List[str]] = None

    # driver side

    def add_cache_file(self, uri: str) -> CacheFile:
        """Read the artifact once and publish it to the workers."""
        backend = get_storage_backend_for(uri, self.storage_options)
        if not backend.exists(uri):
            raise FileNotFoundError(f"Cache file not found: {uri}")
        data = backend.read_file(uri)
        log.info(f"Publishing cache file {uri} ({len(data):,} bytes)")
        return CacheFile(uri=uri, ref=self._put(data), size=len(data))

    # worker side

    def local_path_for(self, uri: str) -> str:
        return os.path.join(self.cache_dir, uri_path(uri).lstrip("/\\"))

    def localize(self, cache_files: Sequence[CacheFile]) -> List[str]:
        """Materialize every cache file locally; returns replica paths in order."""
        local: List[str] = []
        for cf in cache_files:
            path = self.local_path_for(cf.uri)
            if os.path.exists(path) and os.path.getsize(path) == cf.size:
                # another worker on this node got there first
                log.debug(f"Cache file already present: {path}")
            else:
                os.makedirs(os.path.dirname(path), exist_ok=True)
                data = self._fetch(cf.ref)
                tmp = f"{path}.{os.getpid()}.tmp"
                with open(tmp, "wb") as f:
                    f.write(data)
                os.replace(tmp, path)
                log.info(f"Localized cache file {cf.uri} -> {path}")
            local.append(path)
        self._local = local
        return local

    def local_cache_files(self) -> Optional[List[str]]:
        """Replicas localized on this worker, or None when nothing was distributed."""
        return list(self._local) if self._local is not None else None
