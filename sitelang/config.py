"""Configuration management with persistent config.json + env var overrides."""

import json
import logging
import os
import stat

from cryptography.fernet import Fernet

log = logging.getLogger("sitelang.config")

PACKAGE_LANGUAGES_DIR = os.path.join(os.path.dirname(__file__), "languages")

SECRET_KEYS = {"translations_token"}
PASSWORD_MASK = "\u2022\u2022\u2022\u2022\u2022\u2022\u2022\u2022"

DEFAULTS = {
    "supported_languages": ["en", "es"],
    "default_language": "en",
    "loader": "file",
    "languages_dir": PACKAGE_LANGUAGES_DIR,
    "translations_url": "",
    "translations_token": "",
    "request_timeout": 10,
    "web_port": 8765,
    "site_dir": "",
}

ENV_MAP = {
    "supported_languages": "SUPPORTED_LANGUAGES",
    "default_language": "DEFAULT_LANGUAGE",
    "loader": "TRANSLATION_LOADER",
    "languages_dir": "LANGUAGES_DIR",
    "translations_url": "TRANSLATIONS_URL",
    "translations_token": "TRANSLATIONS_TOKEN",
    "request_timeout": "REQUEST_TIMEOUT",
    "web_port": "WEB_PORT",
    "site_dir": "SITE_DIR",
    "data_dir": "DATA_DIR",
}

INT_KEYS = {"request_timeout", "web_port"}
LIST_KEYS = {"supported_languages"}

# Keys where an empty string should fall back to the DEFAULTS value
_NON_EMPTY_KEYS = {"default_language", "loader", "languages_dir"}


def _split_list(value):
    """'en, es,,de' -> ['en', 'es', 'de']"""
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(",")
    return [str(item).strip().lower() for item in items if str(item).strip()]


class ConfigManager:
    """Loads config from config.json, env vars override file values.
    The translations token is encrypted at rest using Fernet."""

    def __init__(self, data_dir="/data"):
        self.data_dir = data_dir
        self.config_path = os.path.join(data_dir, "config.json")
        self._key_path = os.path.join(data_dir, ".config_key")
        self._file_config = {}
        self._fernet = self._init_fernet()
        self._load()

    def _init_fernet(self):
        """Load or generate encryption key."""
        os.makedirs(self.data_dir, exist_ok=True)
        if os.path.exists(self._key_path):
            with open(self._key_path, "rb") as f:
                key = f.read().strip()
        else:
            key = Fernet.generate_key()
            with open(self._key_path, "wb") as f:
                f.write(key)
            try:
                os.chmod(self._key_path, stat.S_IRUSR | stat.S_IWUSR)
            except OSError:
                pass
            log.info("Generated new encryption key")
        return Fernet(key)

    def _encrypt(self, value):
        if not value:
            return ""
        return self._fernet.encrypt(value.encode()).decode()

    def _decrypt(self, value):
        """Decrypt a string value. Returns plaintext on failure (hand-edited config)."""
        if not value:
            return ""
        try:
            return self._fernet.decrypt(value.encode()).decode()
        except Exception:
            return value

    def _load(self):
        """Load config.json if it exists."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, "r") as f:
                    self._file_config = json.load(f)
                log.info("Loaded config from %s", self.config_path)
            except Exception as e:
                log.warning("Failed to load config.json: %s", e)
                self._file_config = {}
        else:
            log.info("No config.json found, using defaults/env")

    def reload(self):
        self._file_config = {}
        self._load()

    def get(self, key, default=None):
        """Get config value: env var > config.json > default.
        Secret keys from config.json are decrypted transparently."""
        # Env vars are never encrypted
        env_name = ENV_MAP.get(key)
        if env_name:
            env_val = os.environ.get(env_name)
            if env_val is not None and env_val != "":
                if key in INT_KEYS:
                    return int(env_val)
                if key in LIST_KEYS:
                    return _split_list(env_val)
                return env_val

        if key in self._file_config:
            val = self._file_config[key]
            # Keys that must not be empty: fall through to defaults
            if key in _NON_EMPTY_KEYS and not val:
                return DEFAULTS[key]
            if key in INT_KEYS and not isinstance(val, int):
                if val == "" or val is None:
                    return default if default is not None else 0
                return int(val)
            if key in LIST_KEYS:
                return _split_list(val) or list(DEFAULTS[key])
            if key in SECRET_KEYS:
                return self._decrypt(val)
            return val

        if default is not None:
            return default
        val = DEFAULTS.get(key)
        if isinstance(val, list):
            return list(val)
        return val

    def save(self, data):
        """Save config values to config.json. Secrets are encrypted."""
        os.makedirs(os.path.dirname(self.config_path), exist_ok=True)

        # Don't overwrite secrets with the mask placeholder
        for key in SECRET_KEYS:
            if key in data and data[key] == PASSWORD_MASK:
                del data[key]

        for key in SECRET_KEYS:
            if key in data and data[key]:
                data[key] = self._encrypt(data[key])

        for key in _NON_EMPTY_KEYS:
            if key in data and not data[key]:
                data[key] = DEFAULTS[key]

        for key in LIST_KEYS:
            if key in data:
                data[key] = _split_list(data[key])

        self._file_config.update(data)

        for key in INT_KEYS:
            if key in self._file_config:
                try:
                    self._file_config[key] = int(self._file_config[key])
                except (ValueError, TypeError):
                    pass

        with open(self.config_path, "w") as f:
            json.dump(self._file_config, f, indent=2)
        try:
            os.chmod(self.config_path, stat.S_IRUSR | stat.S_IWUSR)
        except OSError:
            pass
        log.info("Config saved to %s", self.config_path)

    def get_default_language(self):
        return str(self.get("default_language")).strip().lower()

    def get_supported_languages(self):
        """Supported codes in configured order; the default is always included."""
        supported = self.get("supported_languages")
        default = self.get_default_language()
        if default not in supported:
            supported = [default] + supported
        return supported

    def is_remote(self):
        """True if translations are fetched over HTTP."""
        return self.get("loader") == "http"

    def get_all(self, mask_secrets=False):
        """Return all config values as dict.
        If mask_secrets=True, secret fields show a mask instead of real values."""
        result = {}
        for key in DEFAULTS:
            val = self.get(key)
            if mask_secrets and key in SECRET_KEYS and val:
                result[key] = PASSWORD_MASK
            else:
                result[key] = val
        result["data_dir"] = os.environ.get("DATA_DIR", self.data_dir)
        return result
