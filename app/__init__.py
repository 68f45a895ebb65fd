"""Application factory for the ScanCal calculation service."""

from __future__ import annotations

import importlib
import os
from pathlib import Path

import yaml
from flask import Flask
from werkzeug.exceptions import HTTPException

from common.errors import ensure_app_error
from common.logging import get_logger, install_request_logging
from common.responses import fail, ok

from . import config as config_module
from .blueprints import iter_plugin_packages, register_plugin_blueprints

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"


def _config_path() -> Path:
    override = os.environ.get("SCANCAL_CONFIG")
    return Path(override) if override else CONFIG_PATH


def _load_yaml_config() -> dict:
    path = _config_path()
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _load_manifests(plugin_settings: dict) -> list[dict[str, str]]:
    manifests: list[dict[str, str]] = []
    for dotted in iter_plugin_packages():
        module = importlib.import_module(dotted)
        manifest = getattr(module, "manifest", None)
        if not manifest:
            continue
        entry = dict(manifest)
        blueprint = entry.get("blueprint")
        plugin_config = plugin_settings.get(blueprint, {}) if blueprint else {}
        for key in ("summary", "docs"):
            if plugin_config.get(key):
                entry[key] = plugin_config[key]
        if blueprint:
            entry["api"] = f"/api/{blueprint}"
        manifests.append(entry)
    manifests.sort(key=lambda item: item["title"].lower())
    return manifests


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)

    yaml_config = _load_yaml_config()
    site_settings = yaml_config.get("site", {}) or {}
    plugin_settings = yaml_config.get("plugins", {}) or {}

    app.config["SITE_SETTINGS"] = site_settings
    if "max_content_length_mb" in site_settings:
        try:
            max_bytes = int(float(site_settings["max_content_length_mb"]) * 1024 * 1024)
            app.config["MAX_CONTENT_LENGTH"] = max_bytes
        except (TypeError, ValueError):
            pass
    app.config["PLUGIN_SETTINGS"] = plugin_settings

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj:
            app.config.from_object(config_obj)

    logger = get_logger()
    install_request_logging(app)
    registered = register_plugin_blueprints(app)
    app.config["PLUGIN_MANIFESTS"] = _load_manifests(plugin_settings)
    logger.info("registered blueprints: %s", ", ".join(registered) or "none")

    @app.after_request
    def apply_response_headers(response):
        """Attach strict security headers to every outgoing response."""

        configured = app.config.get("RESPONSE_HEADERS", {})
        for header, value in configured.items():
            if header not in response.headers:
                response.headers[header] = value
        return response

    @app.get("/")
    def home():
        return ok(
            {
                "site": app.config.get("SITE_SETTINGS", {}),
                "plugins": app.config.get("PLUGIN_MANIFESTS", []),
            }
        )

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return fail(ensure_app_error(error, fallback_code="http_error"))

    @app.errorhandler(Exception)
    def unhandled_error(error: Exception):
        logger.error("unhandled error", exc_info=error)
        return fail(ensure_app_error(error, fallback_code="internal_error"))

    return app


__all__ = ["create_app"]
