"""Language catalog - discovers translation documents and their display metadata."""

import json
import logging
import os

from .table import TranslationTable

log = logging.getLogger("sitelang.catalog")


def discover_languages(languages_dir):
    """Scan ``languages_dir`` for ``*.json`` documents.

    Returns {code: {"name": ..., "flag": ...}} in sorted code order. Name and
    flag come from the document's optional ``_meta`` block. Unreadable files
    are skipped with a warning.
    """
    languages = {}
    if not languages_dir or not os.path.isdir(languages_dir):
        log.warning("Languages directory not found: %s", languages_dir)
        return languages
    for fname in sorted(os.listdir(languages_dir)):
        if not fname.endswith(".json"):
            continue
        code = fname[:-5]  # "en.json" -> "en"
        try:
            with open(os.path.join(languages_dir, fname), "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Skipping %s: %s", fname, e)
            continue
        meta = TranslationTable(data).meta() if isinstance(data, dict) else {}
        languages[code] = {
            "name": meta.get("language_name", code),
            "flag": meta.get("flag", ""),
        }
    return languages


def describe_supported(supported, languages_dir):
    """Display info for each supported code; codes without a document keep their code as name."""
    found = discover_languages(languages_dir)
    return {code: found.get(code, {"name": code, "flag": ""}) for code in supported}
