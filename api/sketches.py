# api/sketches.py — CRUD des sketches (clé publique = slug dérivé titre + auteur)
from __future__ import annotations
from dataclasses import replace
from typing import Any

from flask import Blueprint, jsonify, request

from embed_urls import normalize_url
from errors import ConflictError, NotFoundError
from extensions import records
from models import Folder, Sketch, SketchId
from validators import (
    AUTHOR_MAX, DESCRIPTION_MAX, TITLE_MAX,
    require_dimension, require_folder_id, require_text, require_url,
)

sketches_bp = Blueprint("sketches", __name__)


def _payload() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _clean_fields(data: dict[str, Any], partial: bool = False) -> dict[str, Any]:
    """[Sketch] Nettoie + valide ; en PATCH (partial) seules les clés présentes."""
    def wanted(key: str) -> bool:
        return key in data or not partial

    out: dict[str, Any] = {}
    if wanted("author"):
        out["author"] = require_text("author", data.get("author"), AUTHOR_MAX)
    if wanted("title"):
        out["title"] = require_text("title", data.get("title"), TITLE_MAX)
    if wanted("description"):
        out["description"] = require_text("description", data.get("description"), DESCRIPTION_MAX,
                                          allow_empty=True)
    if wanted("url"):
        out["url"] = normalize_url(require_url("url", data.get("url")))
    if wanted("width"):
        out["width"] = require_dimension("width", data.get("width"))
    if wanted("height"):
        out["height"] = require_dimension("height", data.get("height"))
    if wanted("week"):
        out["week"] = require_folder_id("week", data.get("week"))
    return out


def _check_week(week: str, folders: list[Folder]) -> None:
    if not any(f.id == week for f in folders):
        raise ConflictError(f"Week/folder '{week}' does not exist")


def _slug_taken(sketches: list[Sketch], slug: SketchId, skip: int | None = None) -> bool:
    # O(n) : les slugs ne sont jamais stockés, on les recalcule à chaque fois
    return any(i != skip and s.slug == slug for i, s in enumerate(sketches))


def _index_of(sketches: list[Sketch], slug: SketchId) -> int:
    for i, s in enumerate(sketches):
        if s.slug == slug:
            return i
    raise NotFoundError("Sketch not found")


# ─── LIST ────────────────────────────────────────────────────────────────────
@sketches_bp.get("")
def list_sketches():
    return jsonify([s.to_public() for s in records.store.read_sketches()])


# ─── CREATE ──────────────────────────────────────────────────────────────────
@sketches_bp.post("")
def create_sketch():
    store = records.store
    fields = _clean_fields(_payload())
    _check_week(fields["week"], store.read_folders())

    sketch = Sketch(**fields)
    sketches = store.read_sketches()
    if _slug_taken(sketches, sketch.slug):
        raise ConflictError("A sketch with same title/author already exists")

    sketches.append(sketch)
    store.write_sketches(sketches)
    return jsonify(sketch.to_public()), 201


# ─── UPDATE ──────────────────────────────────────────────────────────────────
@sketches_bp.patch("/<slug>")
def update_sketch(slug: str):
    store = records.store
    key = SketchId.parse(slug)
    sketches = store.read_sketches()
    idx = _index_of(sketches, key)

    changes = _clean_fields(_payload(), partial=True)
    if "week" in changes:
        _check_week(changes["week"], store.read_folders())

    updated = replace(sketches[idx], **changes)
    # renommer titre/auteur change le slug : il ne doit pas en écraser un autre
    if updated.slug != key and _slug_taken(sketches, updated.slug, skip=idx):
        raise ConflictError("A sketch with same title/author already exists")

    sketches[idx] = updated
    store.write_sketches(sketches)
    return jsonify(updated.to_public())


# ─── SUPPRESSION ─────────────────────────────────────────────────────────────
@sketches_bp.delete("/<slug>")
def delete_sketch(slug: str):
    store = records.store
    key = SketchId.parse(slug)
    sketches = store.read_sketches()
    kept = [s for s in sketches if s.slug != key]
    if len(kept) == len(sketches):
        raise NotFoundError("Sketch not found")
    store.write_sketches(kept)
    return jsonify({"ok": True})
