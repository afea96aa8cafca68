import os
import os.path
from typing import Any

import requests
from cachecontrol import CacheControl  # type: ignore
from cachecontrol.caches import FileCache  # type: ignore


def cache_path():
    if "JAVAMETA_CACHE_DIR" in os.environ:
        return os.environ["JAVAMETA_CACHE_DIR"]
    return "cache"


def default_session():
    forever_cache = FileCache(os.path.join(cache_path(), "http_cache"), forever=True)
    sess = CacheControl(requests.Session(), forever_cache)

    sess.headers.update({"User-Agent": "JavaMeta/1.0"})

    return sess


def fetch_json(sess: requests.Session, url: str) -> Any:
    r = sess.get(url)
    r.raise_for_status()
    return r.json()


def is_url(source: str):
    return source.startswith("http://") or source.startswith("https://")
