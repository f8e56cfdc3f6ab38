# fileio.py — lecture/écriture JSON sur disque (remplacement atomique du fichier)
from __future__ import annotations
import json
import os
from pathlib import Path
from typing import Any


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_text_atomic(path: Path, content: str) -> None:
    # tmp à côté de la cible puis os.replace() : on lit l'ancien ou le nouveau fichier, jamais un mélange
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


def write_json(path: Path, data: Any) -> None:
    write_text_atomic(path, dump_json(data))


def read_json(path: Path) -> Any:
    # lève FileNotFoundError / json.JSONDecodeError ; l'appelant choisit le repli
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
