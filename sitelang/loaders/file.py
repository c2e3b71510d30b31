"""Loader reading translation documents from a local directory."""

import json
import logging
import os
import re
from typing import Any, Dict

from .interface import Loader, TranslationLoadError, ensure_object

log = logging.getLogger("sitelang.loaders.file")

_CODE_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class FileLoader(Loader):
    """Reads ``<languages_dir>/<code>.json``."""

    def __init__(self, languages_dir: str):
        self.languages_dir = languages_dir

    def describe(self, code: str) -> str:
        return os.path.join(self.languages_dir, f"{code}.json")

    def fetch(self, code: str) -> Dict[str, Any]:
        if not code or not _CODE_RE.match(code):
            raise TranslationLoadError(code, "invalid language code")
        path = self.describe(code)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise TranslationLoadError(code, f"{path} not found")
        except (OSError, ValueError) as e:
            raise TranslationLoadError(code, str(e)) from e
        log.debug("Read %s", path)
        return ensure_object(code, data)
