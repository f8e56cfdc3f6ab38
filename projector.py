# projector.py — instantané JSON lu par la galerie publique (régénéré à chaque mutation)
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from embed_urls import normalize_url
from fileio import dump_json, read_json, write_text_atomic
from models import Folder, Sketch

log = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class ConfigProjector:
    # instantané JSON autonome lu par la page publique (ou GET /api/config)
    # mêmes enregistrements → mêmes octets

    def __init__(self, path: Path):
        self.path = Path(path)

    def build(self, sketches: Iterable[Sketch], folders: Iterable[Folder]) -> dict[str, Any]:
        items = []
        for s in sketches:
            # déjà normalisée à l'écriture ; réappliquée pour les anciens enregistrements
            row = {**s.to_dict(), "url": normalize_url(s.url)}
            row["slug"] = str(s.slug)
            items.append(row)
        return {
            "version": SNAPSHOT_VERSION,
            "sketches": items,
            "folders": [f.to_dict() for f in folders],
        }

    def render(self, sketches: Iterable[Sketch], folders: Iterable[Folder]) -> str:
        return dump_json(self.build(sketches, folders))

    def regenerate(self, sketches: Iterable[Sketch], folders: Iterable[Folder]) -> str:
        content = self.render(sketches, folders)
        write_text_atomic(self.path, content)
        log.debug("snapshot regenerated -> %s", self.path)
        return content

    def load(self) -> dict[str, Any] | None:
        try:
            data = read_json(self.path)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as e:
            log.error("Failed to read snapshot %s: %s", self.path, e)
            return None
        return data if isinstance(data, dict) else None
