import base64
from pathlib import Path

import pytest

from app import create_app


def basic(user: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


SUPER = basic("root", "s3cret")


def make_app(tmp_path: Path, **overrides):
    config = {
        "TESTING": True,
        "DATA_DIR": str(tmp_path),
        "SKETCHES_PATH": str(tmp_path / "sketches.json"),
        "FOLDERS_PATH": str(tmp_path / "folders.json"),
        "SNAPSHOT_PATH": str(tmp_path / "config.json"),
        "LEGACY_CONFIG_PATH": None,
        "ADMIN_USER": "",
        "ADMIN_PASS": "",
        "SUPER_ADMIN_USER": "root",
        "SUPER_ADMIN_PASS": "s3cret",
        "APP_ENV": "development",
    }
    config.update(overrides)
    return create_app(config)


@pytest.fixture
def app(tmp_path: Path):
    return make_app(tmp_path)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def weeks(client):
    for payload in (
        {"id": "week1", "name": "Week 1 - Introduction", "isDefault": True},
        {"id": "week2", "name": "Week 2 - Abstraction"},
    ):
        r = client.post("/api/folders", json=payload, headers=SUPER)
        assert r.status_code == 201
    return ["week1", "week2"]


def sketch_payload(**overrides):
    payload = {
        "author": "Elif Erpulat",
        "title": "Frog",
        "description": "Week 1 abstraction assignment in p5.js",
        "url": "https://openprocessing.org/sketch/2376645",
        "width": 600,
        "height": 600,
        "week": "week2",
    }
    payload.update(overrides)
    return payload
