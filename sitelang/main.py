"""Main entrypoint: serves the site and its translation documents."""

import logging
import os

from . import web
from .config import ConfigManager
from .engine import TranslationEngine
from .page import Document, Location

# Enable debug logging if DEBUG env var is set
log_level = logging.DEBUG if os.environ.get("DEBUG") else logging.INFO
logging.basicConfig(
    level=log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("sitelang.main")


async def localize_markup(config_mgr, markup, lang=None, url="/", preferences=None, browser_locale=None):
    """Translate one HTML document the way a visitor's page would be.

    The language is resolved from ``url``/``preferences``/``browser_locale``
    unless ``lang`` forces a switch. Returns (active code, translated markup).
    """
    document = Document(markup)
    engine = TranslationEngine.from_config(
        config_mgr,
        document=document,
        location=Location(url),
        preferences=preferences,
        browser_locale=browser_locale,
    )
    await engine.initialize()
    if lang:
        await engine.switch(lang)
    return engine.current_language, str(document)


def main():
    data_dir = os.environ.get("DATA_DIR", "/data")
    config_mgr = ConfigManager(data_dir)

    log.info("sitelang starting")
    log.info("Languages: %s (default: %s, loader: %s)",
             ", ".join(config_mgr.get_supported_languages()),
             config_mgr.get_default_language(),
             config_mgr.get("loader"))

    web.init_config(config_mgr)

    if not config_mgr.get("site_dir"):
        log.info("No site_dir configured, serving translation documents and APIs only")

    web_port = config_mgr.get("web_port", 8765)
    log.info("Web server starting on port %d", web_port)

    from waitress import serve
    try:
        serve(web.app, host="0.0.0.0", port=web_port, threads=4, _quiet=True)
    except KeyboardInterrupt:
        log.info("Shutting down")


if __name__ == "__main__":
    main()
