"""Translation engine: loads a language table and applies it to a page document."""

import logging
import re
from collections.abc import Mapping

from .loaders.loader import loader_from_config
from .resolver import PREFERENCE_KEY, LanguageResolver
from .table import TranslationTable

log = logging.getLogger("sitelang.engine")

UNINITIALIZED = "uninitialized"
READY = "ready"

# Marker attributes
ATTR_KEY = "data-translate"
ATTR_FALLBACK = "data-translate-fallback"
ATTR_HTML = "data-translate-html"
ATTR_TEMPLATE = "data-translate-template"
ATTR_VAR_PREFIX = "data-var-"
ATTR_INLINE = "data-translate-inline"
ATTR_ORIGINAL = "data-original-content"

LANGUAGE_SELECTORS = ("#language-select", "#mobile-language-select", "select[data-language-select]")

_MARKER_RE = re.compile(r"\{\{([^}]+)\}\}")


def template_variables(element):
    """Collect data-var-<name> attributes into {name: value}."""
    return {
        name[len(ATTR_VAR_PREFIX):]: value
        for name, value in element.attrs.items()
        if name.startswith(ATTR_VAR_PREFIX)
    }


class TranslationEngine:
    """Holds the active language and its table, and rewrites documents.

    The host constructs one engine, awaits ``initialize()`` once its document
    is ready and passes the instance to whatever needs translated text.
    ``load``/``switch``/``initialize`` must not overlap on one instance:
    callers await each call before issuing the next. Pending fetches are
    never cancelled.
    """

    def __init__(self, loader, document=None, location=None, preferences=None,
                 supported=("en", "es"), default="en", browser_locale=None):
        self.loader = loader
        self.document = document
        self.location = location
        self.preferences = preferences
        self.browser_locale = browser_locale
        self.resolver = LanguageResolver(supported, default)
        self.current_language = self.resolver.default
        self.table = TranslationTable.empty()
        self.status = UNINITIALIZED

    @classmethod
    def from_config(cls, config_mgr, **kwargs):
        """Build an engine with the loader and language set from configuration."""
        loader = loader_from_config(config_mgr)
        if loader is None:
            raise RuntimeError("No usable translation loader configured")
        return cls(
            loader,
            supported=config_mgr.get_supported_languages(),
            default=config_mgr.get_default_language(),
            **kwargs,
        )

    @property
    def default_language(self):
        return self.resolver.default

    @property
    def translations(self):
        """The raw table of the active language."""
        return self.table.as_dict()

    # -- lifecycle --------------------------------------------------------

    async def initialize(self):
        """Resolve the language, load its table and translate the document."""
        code = self.resolver.resolve(self.location, self.preferences, self.browser_locale)
        log.info("Initial language: %s", code)
        self.current_language = code
        await self.load(code)
        self._refresh_document()
        return self.current_language

    async def load(self, code):
        """Fetch and adopt the table for ``code``.

        On failure the default language is tried once and adopted as current.
        If that fails too the table is left empty; lookups then return their
        fallbacks. Never raises.
        """
        candidates = [code] if code == self.default_language else [code, self.default_language]
        for candidate in candidates:
            try:
                data = await self.loader.load(candidate)
            except Exception as e:
                if candidate != self.default_language:
                    log.warning("Error loading translations for %s: %s. Falling back to %s",
                                candidate, e, self.default_language)
                else:
                    log.error("Error loading default translations (%s): %s", candidate, e)
                continue
            self.table = TranslationTable(data)
            self.current_language = candidate
            self.status = READY
            log.info("Loaded %d top-level keys for %s", len(self.table), candidate)
            return candidate

        self.table = TranslationTable.empty()
        self.current_language = self.default_language
        self.status = UNINITIALIZED
        return self.current_language

    async def switch(self, code):
        """Change language, retranslate, persist the choice and rewrite the URL.

        Switching to the current language does nothing. Returns True when a
        switch happened.
        """
        if code == self.current_language:
            return False
        if not self.resolver.is_supported(code):
            log.warning("Ignoring switch to unsupported language: %s", code)
            return False

        log.info("Switching language %s -> %s", self.current_language, code)
        self.current_language = code
        await self.load(code)
        self._refresh_document()

        if self.preferences is not None:
            self.preferences.set(PREFERENCE_KEY, code)
        if self.location is not None:
            self.location.push_state(self.location.with_query_param("lang", code))
        return True

    def _refresh_document(self):
        if self.document is None:
            return
        self.document.set_language(self.current_language)
        self.apply_to_document()

    # -- lookup -----------------------------------------------------------

    def lookup(self, key, fallback=""):
        """Text at dotted ``key``; ``fallback`` (or the key itself) when missing."""
        if not key or not isinstance(key, str):
            return fallback
        result = self.table.resolve(key)
        if result.found:
            return result.value
        return fallback or key

    def interpolate(self, key, variables=None, fallback=""):
        """``lookup`` then replace every {{name}} present in ``variables``."""
        text = self.lookup(key, fallback)
        if not isinstance(variables, Mapping):
            return text
        for name, value in variables.items():
            text = text.replace("{{%s}}" % name, str(value))
        return text

    # -- documents --------------------------------------------------------

    def apply_to_document(self, document=None):
        """Translate every marked element. Returns the number of elements written."""
        doc = document if document is not None else self.document
        if doc is None:
            log.debug("No document attached, nothing to translate")
            return 0

        self._update_language_selectors(doc)

        # Inline containers first: their cache must hold untranslated children,
        # which the key and template passes below then translate.
        written = self._translate_inline_markers(doc)
        for element in doc.select(f"[{ATTR_KEY}]"):
            text = self.lookup(element.get(ATTR_KEY), element.get(ATTR_FALLBACK) or "")
            if doc.is_text_input(element):
                element["placeholder"] = text
            else:
                self._write(doc, element, text, element.has_attr(ATTR_HTML))
            written += 1

        for element in doc.select(f"[{ATTR_TEMPLATE}]"):
            text = self.interpolate(element.get(ATTR_TEMPLATE), template_variables(element))
            self._write(doc, element, text, element.has_attr(ATTR_HTML))
            written += 1

        log.debug("Translated %d element(s) into %s", written, self.current_language)
        return written

    def _translate_inline_markers(self, doc):
        written = 0
        for element in doc.select(f"[{ATTR_INLINE}]"):
            # Always substitute from the first-seen markup so repeated scans stay stable
            if element.has_attr(ATTR_ORIGINAL):
                original = element[ATTR_ORIGINAL]
            else:
                original = doc.inner_html(element)
                element[ATTR_ORIGINAL] = original

            if "{{" not in original or "}}" not in original:
                continue
            translated = _MARKER_RE.sub(
                lambda m: self.lookup(m.group(1).strip(), m.group(0)), original
            )
            doc.write_html(element, translated)
            written += 1
        return written

    def _update_language_selectors(self, doc):
        for selector in LANGUAGE_SELECTORS:
            for select in doc.select(selector):
                doc.select_option(select, self.current_language)

    @staticmethod
    def _write(doc, element, text, use_html):
        if use_html:
            doc.write_html(element, text)
        else:
            doc.write_text(element, text)

    def translate_element(self, selector, key, fallback="", use_html=False, document=None):
        """Write the text for ``key`` into the first element matching ``selector``.

        Returns False when nothing matches.
        """
        doc = document if document is not None else self.document
        if doc is None:
            return False
        element = doc.select_one(selector)
        if element is None:
            log.debug("No element for selector %s", selector)
            return False
        self._write(doc, element, self.lookup(key, fallback), use_html)
        return True

    def translate_elements(self, items, document=None):
        """Batch form of translate_element.

        Each item is a mapping with selector/key and optional fallback/use_html,
        or a (selector, key[, fallback[, use_html]]) tuple. Returns how many
        elements were written.
        """
        written = 0
        for item in items:
            if isinstance(item, Mapping):
                selector = item["selector"]
                key = item["key"]
                fallback = item.get("fallback", "")
                use_html = item.get("use_html", False)
            else:
                selector, key, *rest = item
                fallback = rest[0] if len(rest) > 0 else ""
                use_html = rest[1] if len(rest) > 1 else False
            if self.translate_element(selector, key, fallback, use_html, document=document):
                written += 1
        return written
