"""Loader fetching translation documents over HTTP."""

import logging
from typing import Any, Dict

import requests

from .interface import Loader, TranslationLoadError, ensure_object

log = logging.getLogger("sitelang.loaders.http")


class HttpLoader(Loader):
    """Fetches ``<base_url>/<code>.json``, e.g. the /languages route of the web app
    or any static host. An optional bearer token is sent with every request."""

    def __init__(self, base_url: str, token: str = "", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers["Authorization"] = "Bearer " + token

    def describe(self, code: str) -> str:
        return f"{self.base_url}/{code}.json"

    def fetch(self, code: str) -> Dict[str, Any]:
        url = self.describe(code)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise TranslationLoadError(code, str(e)) from e
        except ValueError as e:
            raise TranslationLoadError(code, f"invalid JSON from {url}: {e}") from e
        log.debug("Fetched %s", url)
        return ensure_object(code, data)
