"""Translation table: nested key -> string tree with explicit lookup results."""

from typing import Any, Dict, NamedTuple, Optional, Union

# A node is either a leaf string or a nested mapping of nodes. Other JSON
# values may sit in a loaded document but never resolve as leaves.
Node = Union[str, Dict[str, Any]]


class LookupResult(NamedTuple):
    """Outcome of walking a dotted key path."""
    found: bool
    value: Optional[str] = None


MISSING = LookupResult(False)


class TranslationTable:
    """Immutable view over one language's translation document."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(data) if data else {}

    @classmethod
    def empty(cls) -> "TranslationTable":
        return cls()

    def __len__(self) -> int:
        return len(self._data)

    def as_dict(self) -> Dict[str, Any]:
        return self._data

    def meta(self) -> Dict[str, Any]:
        """Return the optional ``_meta`` block (language name, flag)."""
        meta = self._data.get("_meta")
        return meta if isinstance(meta, dict) else {}

    def resolve(self, key: str) -> LookupResult:
        """Walk ``key`` split on dots.

        Returns ``LookupResult(True, text)`` only when every segment exists
        and the terminal node is a string.
        """
        if not key or not isinstance(key, str):
            return MISSING
        node: Any = self._data
        for segment in key.split("."):
            if not isinstance(node, dict) or segment not in node:
                return MISSING
            node = node[segment]
        if isinstance(node, str):
            return LookupResult(True, node)
        return MISSING
