"""Abstract loader interface for translation document sources.

All loaders must implement this interface so the translation engine can
fetch tables without knowing where they live.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict


class TranslationLoadError(Exception):
    """A translation document could not be fetched or parsed."""

    def __init__(self, code, reason):
        super().__init__(f"{code}: {reason}")
        self.code = code
        self.reason = reason


class Loader(ABC):
    """Abstract base class for translation loaders.

    Each loader is responsible for:
    1. Locating the document for a language code (``<code>.json``)
    2. Fetching and decoding it into a dict

    ``fetch`` is blocking; ``load`` runs it off the event loop.
    """

    @abstractmethod
    def fetch(self, code: str) -> Dict[str, Any]:
        """Fetch the translation document for ``code``.

        Args:
            code: Language code (e.g., "es")

        Returns:
            The decoded JSON object

        Raises:
            TranslationLoadError: On missing document, transport or parse errors
        """
        pass

    def describe(self, code: str) -> str:
        """Human-readable location of the document, used in log messages."""
        return f"{code}.json"

    async def load(self, code: str) -> Dict[str, Any]:
        """Fetch without blocking the event loop."""
        return await asyncio.to_thread(self.fetch, code)


def ensure_object(code, data):
    """Validate the decoded top-level value of a translation document."""
    if not isinstance(data, dict):
        raise TranslationLoadError(code, f"expected a JSON object, got {type(data).__name__}")
    return data
