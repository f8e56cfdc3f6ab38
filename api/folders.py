# api/folders.py — semaines / dossiers (id immuable, un seul dossier par défaut)
from __future__ import annotations

from flask import Blueprint, jsonify, request

from errors import ConflictError, NotFoundError, ReferentialError
from extensions import records
from models import Folder
from validators import require_folder_id, require_folder_name

folders_bp = Blueprint("folders", __name__)


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _find(folders: list[Folder], folder_id: str) -> int:
    for i, f in enumerate(folders):
        if f.id == folder_id:
            return i
    raise NotFoundError("Folder not found")


def _make_default(folders: list[Folder], folder_id: str) -> None:
    for f in folders:
        f.is_default = f.id == folder_id


@folders_bp.get("")
def list_folders():
    return jsonify([f.to_dict() for f in records.store.read_folders()])


@folders_bp.post("")
def create_folder():
    data = _payload()
    folder_id = require_folder_id("id", data.get("id"))
    name = require_folder_name("name", data.get("name"))

    store = records.store
    folders = store.read_folders()
    if any(f.id == folder_id for f in folders):
        raise ConflictError("Folder with this id already exists")

    folder = Folder(id=folder_id, name=name, is_default=bool(data.get("isDefault")))
    folders.append(folder)
    if folder.is_default:
        _make_default(folders, folder.id)
    store.write_folders(folders)
    return jsonify({"ok": True, "folder": folder.to_dict()}), 201


@folders_bp.put("/<folder_id>")
def update_folder(folder_id: str):
    # l'id n'est jamais modifiable : un "id" dans le corps est ignoré
    data = _payload()
    name = require_folder_name("name", data.get("name"))

    store = records.store
    folders = store.read_folders()
    folder = folders[_find(folders, folder_id)]
    folder.name = name
    if "isDefault" in data:
        if data.get("isDefault"):
            _make_default(folders, folder.id)
        else:
            folder.is_default = False
    store.write_folders(folders)
    return jsonify({"ok": True, "folder": folder.to_dict()})


@folders_bp.delete("/<folder_id>")
def delete_folder(folder_id: str):
    store = records.store
    folders = store.read_folders()
    idx = _find(folders, folder_id)

    in_use = sum(1 for s in store.read_sketches() if s.week == folder_id)
    if in_use:
        raise ReferentialError(folder_id, in_use)

    folders.pop(idx)
    # plus de dossier par défaut → le premier restant le devient
    if folders and not any(f.is_default for f in folders):
        folders[0].is_default = True
    store.write_folders(folders)
    return jsonify({"ok": True})
