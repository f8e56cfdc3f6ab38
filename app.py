# app.py — Flask + stockage JSON (sketches / dossiers) + instantané pour la galerie publique
from __future__ import annotations
import os
from typing import Any

from dotenv import load_dotenv
from flask import Flask, jsonify

import auth
from errors import GalleryError
from extensions import records


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default) in ("1", "true", "True")


def _choose_data_dir(app: Flask) -> str:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        return env_dir
    return os.path.join(app.instance_path, "data")


def _load_config(app: Flask, test_config: dict[str, Any] | None) -> None:
    cfg = app.config
    cfg["SECRET_KEY"] = os.getenv("SECRET_KEY", "supersecret")
    cfg["APP_ENV"] = os.getenv("APP_ENV", "development")
    cfg["DATA_DIR"] = _choose_data_dir(app)
    cfg["LEGACY_CONFIG_PATH"] = os.getenv("LEGACY_CONFIG_PATH") or None
    cfg["ADMIN_USER"] = os.getenv("ADMIN_USER", "")
    cfg["ADMIN_PASS"] = os.getenv("ADMIN_PASS", "")
    cfg["SUPER_ADMIN_USER"] = os.getenv("SUPER_ADMIN_USER", "")
    cfg["SUPER_ADMIN_PASS"] = os.getenv("SUPER_ADMIN_PASS", "")
    cfg["AUTH_MAX_FAILS"] = int(os.getenv("AUTH_MAX_FAILS", "8"))
    cfg["AUTH_LOCK_SECONDS"] = int(os.getenv("AUTH_LOCK_SECONDS", str(15 * 60)))
    if test_config:
        cfg.update(test_config)

    # chemins dérivés de DATA_DIR sauf si fournis explicitement
    data_dir = cfg["DATA_DIR"]
    for key, env, filename in (("SKETCHES_PATH", "SKETCHES_PATH", "sketches.json"),
                               ("FOLDERS_PATH", "FOLDERS_PATH", "folders.json"),
                               ("SNAPSHOT_PATH", "SNAPSHOT_PATH", "config.json")):
        if not cfg.get(key):
            cfg[key] = os.getenv(env) or os.path.join(data_dir, filename)


def create_app(test_config: dict[str, Any] | None = None) -> Flask:
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    _load_config(app, test_config)
    os.makedirs(app.config["DATA_DIR"], exist_ok=True)

    app.logger.info("Data -> %s", app.config["DATA_DIR"])
    app.logger.info("Admin auth: %s, super admin: %s",
                    "on" if app.config["ADMIN_USER"] and app.config["ADMIN_PASS"] else "off",
                    "on" if app.config["SUPER_ADMIN_USER"] and app.config["SUPER_ADMIN_PASS"] else "off")

    store = records.init_app(app)
    auth.init_app(app)

    # Au démarrage, l'instantané doit refléter les fichiers JSON
    try:
        store.regenerate()
    except OSError as e:
        app.logger.warning("Snapshot regeneration on boot failed: %s", e)

    @app.after_request
    def _security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "SAMEORIGIN"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if app.config["APP_ENV"] == "production":
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return resp

    @app.errorhandler(GalleryError)
    def _gallery_error(e: GalleryError):
        return jsonify(e.to_dict()), e.status

    @app.errorhandler(OSError)
    def _storage_error(e: OSError):
        app.logger.exception("Storage failure: %s", e)
        return jsonify({"ok": False, "error": "storage_failure"}), 500

    # Blueprints API
    from api.sketches import sketches_bp
    from api.folders import folders_bp
    app.register_blueprint(sketches_bp, url_prefix="/api/sketches")
    app.register_blueprint(folders_bp,  url_prefix="/api/folders")

    # Instantané lu par la galerie publique
    @app.route("/api/config")
    def snapshot():
        data = store.projector.load()
        if data is None:
            data = store.projector.build(store.read_sketches(), store.read_folders())
        return jsonify(data)

    # Debug stockage
    @app.route("/__data")
    def __data():
        return {"sketch_count": len(store.read_sketches()),
                "folder_count": len(store.read_folders()),
                "snapshot": os.path.exists(store.projector.path)}, 200

    return app


if __name__ == "__main__":
    debug = _env_bool("FLASK_DEBUG")
    port = int(os.getenv("PORT", "5000"))
    create_app().run(host="0.0.0.0", port=port, debug=debug)
