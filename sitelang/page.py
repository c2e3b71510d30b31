"""Page environment: the current URL and the parsed HTML document."""

import logging
from urllib.parse import parse_qs, quote_plus, unquote_plus, urlsplit, urlunsplit

from bs4 import BeautifulSoup

log = logging.getLogger("sitelang.page")

PARSER = "html.parser"


class Location:
    """Current page URL plus the list of URLs pushed without a reload."""

    def __init__(self, url="/"):
        self.url = url
        self.history = []

    @property
    def _parts(self):
        return urlsplit(self.url)

    @property
    def fragment(self):
        return self._parts.fragment

    @property
    def path(self):
        return self._parts.path

    def query_param(self, name):
        """First value of a query parameter, or None."""
        values = parse_qs(self._parts.query, keep_blank_values=True).get(name)
        return values[0] if values else None

    def with_query_param(self, name, value):
        """Return the URL with ``name`` set to ``value``.

        Only the ``name`` pair changes: the first occurrence is replaced in
        place, later duplicates are dropped, and every other pair is kept
        exactly as written. Appended at the end if absent.
        """
        parts = self._parts
        pair = f"{quote_plus(name)}={quote_plus(value)}"
        pairs = []
        replaced = False
        for chunk in parts.query.split("&") if parts.query else []:
            if unquote_plus(chunk.split("=", 1)[0]) == name:
                if not replaced:
                    pairs.append(pair)
                    replaced = True
                continue
            pairs.append(chunk)
        if not replaced:
            pairs.append(pair)
        return urlunsplit(parts._replace(query="&".join(pairs)))

    def push_state(self, url):
        self.history.append(url)
        self.url = url
        log.debug("Pushed URL %s", url)


class Document:
    """Thin mutable wrapper over a BeautifulSoup tree."""

    def __init__(self, markup=""):
        self.soup = BeautifulSoup(markup, PARSER)

    def __str__(self):
        return str(self.soup)

    @property
    def language(self):
        html = self.soup.find("html")
        return html.get("lang") if html else None

    def set_language(self, code):
        """Set <html lang>. Fragments without an <html> element are left alone."""
        html = self.soup.find("html")
        if html is None:
            log.debug("No <html> element, skipping lang attribute")
            return
        html["lang"] = code

    def select(self, selector):
        return self.soup.select(selector)

    def select_one(self, selector):
        return self.soup.select_one(selector)

    @staticmethod
    def inner_html(element):
        return element.decode_contents()

    @staticmethod
    def write_text(element, text):
        element.string = text

    @staticmethod
    def write_html(element, markup):
        """Replace an element's children with parsed markup."""
        fragment = BeautifulSoup(markup, PARSER)
        element.clear()
        for node in list(fragment.contents):
            element.append(node.extract())

    @staticmethod
    def is_text_input(element):
        return element.name == "input" and element.get("type", "text").lower() == "text"

    @staticmethod
    def select_option(select, value):
        """Mark the <option> with ``value`` as selected. Returns True if one matched."""
        matched = False
        for option in select.find_all("option"):
            if option.get("value") == value:
                option["selected"] = "selected"
                matched = True
            elif option.has_attr("selected"):
                del option["selected"]
        return matched
