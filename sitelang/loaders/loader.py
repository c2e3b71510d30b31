"""Loader registry - instantiates translation loaders by name."""

import importlib
import logging
from typing import Optional

from .interface import Loader

log = logging.getLogger("sitelang.loaders.loader")

# Registry of available loaders
AVAILABLE_LOADERS = {
    "file": "sitelang.loaders.file.FileLoader",
    "http": "sitelang.loaders.http.HttpLoader",
}


def load_loader(name: str, **kwargs) -> Optional[Loader]:
    """Load and instantiate a loader by name.

    Args:
        name: Loader name ("file" or "http")
        **kwargs: Constructor arguments for the loader class

    Returns:
        Instantiated Loader object or None if the loader is unknown or fails to build

    Example:
        loader = load_loader("file", languages_dir="site/languages")
        table = loader.fetch("es")
    """
    if not name:
        log.error("No loader specified")
        return None

    loader_path = AVAILABLE_LOADERS.get(name.lower())
    if not loader_path:
        log.error("Unknown loader: %s. Available: %s",
                  name, ", ".join(AVAILABLE_LOADERS.keys()))
        return None

    try:
        module_path, class_name = loader_path.rsplit(".", 1)
        module = importlib.import_module(module_path)
        loader_class = getattr(module, class_name)
        loader = loader_class(**kwargs)
        log.info("Loaded translation loader: %s (%s)", name, loader_path)
        return loader
    except Exception as e:
        log.error("Failed to load loader %s: %s", name, e)
        return None


def loader_from_config(config_mgr) -> Optional[Loader]:
    """Build the loader selected by the ``loader`` config key."""
    if config_mgr.is_remote():
        return load_loader(
            "http",
            base_url=config_mgr.get("translations_url"),
            token=config_mgr.get("translations_token"),
            timeout=config_mgr.get("request_timeout"),
        )
    return load_loader(config_mgr.get("loader"), languages_dir=config_mgr.get("languages_dir"))


def get_available_loaders():
    """Get list of available loader names."""
    return list(AVAILABLE_LOADERS.keys())
