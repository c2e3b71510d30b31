#!/usr/bin/env python3
"""Preview how a page reads in a given language.

Usage:
    python3 localize_page.py <html-file> [lang]

Example:
    python3 localize_page.py site/index.html es
"""

import asyncio
import logging
import os
import sys

# Add the package to path
sys.path.insert(0, os.path.dirname(__file__))

logging.basicConfig(
    level=logging.DEBUG if os.environ.get("DEBUG") else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from sitelang.config import ConfigManager
from sitelang.main import localize_markup
from sitelang.storage import PreferenceStorage


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 localize_page.py <html-file> [lang]")
        print("Example: python3 localize_page.py site/index.html es")
        sys.exit(1)

    path = sys.argv[1]
    lang = sys.argv[2] if len(sys.argv) > 2 else None

    data_dir = os.environ.get("DATA_DIR", "./data")
    config_mgr = ConfigManager(data_dir)
    preferences = PreferenceStorage(os.path.join(data_dir, "preferences.db"))
    with open(path, "r", encoding="utf-8") as f:
        markup = f.read()

    code, output = asyncio.run(
        localize_markup(
            config_mgr, markup, lang=lang, preferences=preferences,
            browser_locale=os.environ.get("LANG"),
        )
    )
    if lang and code != lang:
        print(f"Warning: {lang} unavailable, showing {code}", file=sys.stderr)
    print(output)


if __name__ == "__main__":
    main()
