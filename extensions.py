# extensions.py — objets partagés, branchés sur l'app via init_app (comme db/migrate)
from __future__ import annotations
from pathlib import Path

from flask import Flask, current_app

from projector import ConfigProjector
from store import RecordStore


class Records:
    # un RecordStore par app Flask, rangé dans app.extensions
    def init_app(self, app: Flask) -> RecordStore:
        cfg = app.config
        legacy = cfg.get("LEGACY_CONFIG_PATH")
        store = RecordStore(
            sketches_path=Path(cfg["SKETCHES_PATH"]),
            folders_path=Path(cfg["FOLDERS_PATH"]),
            projector=ConfigProjector(Path(cfg["SNAPSHOT_PATH"])),
            legacy_config_path=Path(legacy) if legacy else None,
        )
        app.extensions["records"] = store
        return store

    @property
    def store(self) -> RecordStore:
        return current_app.extensions["records"]


records = Records()
