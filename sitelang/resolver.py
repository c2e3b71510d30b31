"""Language resolution from URL, persisted preference and browser locale."""

import logging
import re
from typing import Iterable, List, Optional

log = logging.getLogger("sitelang.resolver")

PREFERENCE_KEY = "preferred-language"

_FRAGMENT_RE = re.compile(r"(?:^|&)lang=([a-z]{2})")


def primary_subtag(locale: Optional[str]) -> str:
    """Truncate a locale to its primary subtag: 'es-MX' -> 'es', 'pt_BR' -> 'pt'."""
    if not locale:
        return ""
    raw = str(locale).strip().lower()
    for sep in ("-", "_"):
        if sep in raw:
            raw = raw.split(sep, 1)[0]
    return raw.strip()


def locale_from_accept_language(header: Optional[str]) -> str:
    """Return the most preferred tag of an Accept-Language header.

    Respects q= weights; ties keep header order. Returns '' for an
    empty or unparsable header.
    """
    if not header:
        return ""
    weighted = []
    for index, part in enumerate(p.strip() for p in header.split(",")):
        if not part:
            continue
        tag, q = part, 1.0
        if ";" in part:
            tag, params = part.split(";", 1)
            tag = tag.strip()
            for param in params.split(";"):
                name, _, value = param.strip().partition("=")
                if name == "q":
                    try:
                        q = float(value)
                    except ValueError:
                        q = 0.0
        if tag and tag != "*" and q > 0:
            weighted.append((-q, index, tag))
    if not weighted:
        return ""
    weighted.sort()
    return weighted[0][2]


class LanguageResolver:
    """Picks the active language code. First match wins:

    1. ``lang=<code>`` marker in the URL fragment
    2. ``lang`` query parameter
    3. persisted preference
    4. first URL path segment
    5. browser locale, primary subtag only

    Every candidate must be in the supported set; otherwise the default wins.
    """

    def __init__(self, supported: Iterable[str], default: str = "en"):
        self.supported: List[str] = list(supported)
        self.default = default
        if default not in self.supported:
            self.supported.insert(0, default)

    def is_supported(self, code: Optional[str]) -> bool:
        return bool(code) and code in self.supported

    def from_fragment(self, fragment: Optional[str]) -> Optional[str]:
        if not fragment:
            return None
        match = _FRAGMENT_RE.search(fragment.lstrip("#"))
        if match and self.is_supported(match.group(1)):
            return match.group(1)
        return None

    def from_query(self, code: Optional[str]) -> Optional[str]:
        return code if self.is_supported(code) else None

    def from_preferences(self, preferences) -> Optional[str]:
        if preferences is None:
            return None
        saved = preferences.get(PREFERENCE_KEY)
        return saved if self.is_supported(saved) else None

    def from_path(self, path: Optional[str]) -> Optional[str]:
        segments = [s for s in (path or "").split("/") if s]
        if segments and self.is_supported(segments[0]):
            return segments[0]
        return None

    def from_locale(self, locale: Optional[str]) -> Optional[str]:
        code = primary_subtag(locale)
        return code if self.is_supported(code) else None

    def resolve_parts(self, fragment=None, query_lang=None, preferences=None, path=None, locale=None):
        """Resolve from already-extracted inputs. Never raises."""
        candidates = (
            ("fragment", lambda: self.from_fragment(fragment)),
            ("query", lambda: self.from_query(query_lang)),
            ("preference", lambda: self.from_preferences(preferences)),
            ("path", lambda: self.from_path(path)),
            ("locale", lambda: self.from_locale(locale)),
        )
        for source, pick in candidates:
            code = pick()
            if code:
                log.debug("Language %s resolved from %s", code, source)
                return code
        log.debug("No language match, using default %s", self.default)
        return self.default

    def resolve(self, location, preferences=None, browser_locale=None) -> str:
        """Resolve against a page Location, a preference store and a locale string."""
        return self.resolve_parts(
            fragment=location.fragment if location else None,
            query_lang=location.query_param("lang") if location else None,
            preferences=preferences,
            path=location.path if location else None,
            locale=browser_locale,
        )
