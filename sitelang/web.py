"""Flask app serving the site, its translation documents and language APIs."""

import json
import logging
import os
import re

from flask import Flask, abort, jsonify, request, send_from_directory

from .catalog import describe_supported
from .config import ConfigManager
from .resolver import PREFERENCE_KEY, LanguageResolver, locale_from_accept_language

log = logging.getLogger("sitelang.web")

app = Flask(__name__)

COOKIE_MAX_AGE = 365 * 24 * 3600

_CODE_RE = re.compile(r"^[a-z]{2,3}(?:-[A-Za-z0-9]{2,8})?$")

_config_manager = None


def init_config(config_manager):
    """Set the config manager used by all routes."""
    global _config_manager
    _config_manager = config_manager


def _config():
    if _config_manager is None:
        init_config(ConfigManager(os.environ.get("DATA_DIR", "/data")))
    return _config_manager


def _resolver():
    cfg = _config()
    return LanguageResolver(cfg.get_supported_languages(), cfg.get_default_language())


def _json_error(message, status):
    return jsonify({"success": False, "error": message}), status


@app.route("/languages/<code>.json")
def language_document(code):
    """Serve one translation document, the path the HTTP loader fetches."""
    cfg = _config()
    if not _CODE_RE.match(code) or code not in cfg.get_supported_languages():
        return _json_error(f"Unsupported language: {code}", 404)
    path = os.path.join(cfg.get("languages_dir"), f"{code}.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return _json_error(f"No translations for {code}", 404)
    except ValueError as e:
        log.error("Invalid translation document %s: %s", path, e)
        return _json_error(f"Invalid translations for {code}", 500)
    return jsonify(data)


@app.route("/api/languages")
def api_languages():
    cfg = _config()
    supported = cfg.get_supported_languages()
    return jsonify({
        "default": cfg.get_default_language(),
        "supported": supported,
        "languages": describe_supported(supported, cfg.get("languages_dir")),
    })


@app.route("/api/resolve")
def api_resolve():
    """Resolve the visitor's language.

    Browsers never send URL fragments, so the page passes its fragment and
    path as the ``fragment`` and ``path`` query arguments.
    """
    lang = _resolver().resolve_parts(
        fragment=request.args.get("fragment"),
        query_lang=request.args.get("lang"),
        preferences=request.cookies,
        path=request.args.get("path", ""),
        locale=locale_from_accept_language(request.headers.get("Accept-Language")),
    )
    return jsonify({"lang": lang})


@app.route("/api/language", methods=["POST"])
def api_language():
    """Persist the visitor's explicit choice in a cookie."""
    data = request.get_json(silent=True)
    lang = data.get("lang") if isinstance(data, dict) else None
    if not _resolver().is_supported(lang):
        return _json_error(f"Unsupported language: {lang}", 400)
    resp = jsonify({"success": True, "lang": lang})
    resp.set_cookie(PREFERENCE_KEY, lang, max_age=COOKIE_MAX_AGE, samesite="Lax")
    log.info("Language preference set: %s", lang)
    return resp


@app.route("/health")
def health():
    return {"status": "ok", "languages": len(_config().get_supported_languages())}


@app.route("/", defaults={"path": "index.html"})
@app.route("/<path:path>")
def site(path):
    """Serve static site files unchanged; translation happens in the page."""
    site_dir = _config().get("site_dir")
    if not site_dir:
        abort(404)
    if path.endswith("/"):
        path += "index.html"
    return send_from_directory(os.path.abspath(site_dir), path)


@app.after_request
def add_security_headers(response):
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response
