# ============================================
# store.py — "base de données" JSON (sketches.json + folders.json)
# Rôle : lecture/écriture des enregistrements ; chaque écriture régénère l'instantané
# ============================================
from __future__ import annotations
import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable

from fileio import read_json, write_json
from models import Folder, Sketch
from projector import ConfigProjector

log = logging.getLogger(__name__)

_LEGACY_ARRAY_RE = r"const\s+{name}\s*=\s*(\[[\s\S]*?\]);"
_BARE_KEY_RE = re.compile(r"^(\s*)([A-Za-z_$][\w$]*)\s*:", re.M)
_TRAILING_COMMA_RE = re.compile(r",(\s*[\]}])")


def _js_array_literal(source: str, name: str) -> list[Any] | None:
    # `const <name> = [...]` d'un config.js généré (clés sans guillemets, chaînes JSON)
    m = re.search(_LEGACY_ARRAY_RE.format(name=re.escape(name)), source)
    if not m:
        return None
    literal = _BARE_KEY_RE.sub(r'\1"\2":', m.group(1))
    literal = _TRAILING_COMMA_RE.sub(r"\1", literal)
    data = json.loads(literal)
    if not isinstance(data, list):
        raise ValueError(f"{name} is not an array")
    return data


def _sketches_from_rows(rows: Iterable[Any], rejected: list[Any] | None = None) -> list[Sketch]:
    out = []
    for row in rows:
        if not isinstance(row, dict):
            log.warning("Skipping non-object sketch row: %r", row)
            if rejected is not None:
                rejected.append(row)
            continue
        try:
            out.append(Sketch.from_dict(row))
        except (TypeError, ValueError, OverflowError) as e:
            log.warning("Skipping malformed sketch row %r: %s", row.get("title"), e)
            if rejected is not None:
                rejected.append(row)
    return out


def _folders_from_rows(rows: Iterable[Any]) -> list[Folder]:
    return [Folder.from_dict(r) for r in rows if isinstance(r, dict)]


def parse_legacy_config(source: str) -> tuple[list[Sketch], list[Folder]]:
    sketches = _js_array_literal(source, "sketchesData")
    if sketches is None:
        raise ValueError("sketchesData literal not found")
    folders = _js_array_literal(source, "foldersData") or []
    return _sketches_from_rows(sketches), _folders_from_rows(folders)


class RecordStore:
    def __init__(self, sketches_path: Path, folders_path: Path, projector: ConfigProjector,
                 legacy_config_path: Path | None = None):
        self.sketches_path = Path(sketches_path)
        self.folders_path = Path(folders_path)
        self.projector = projector
        self.legacy_config_path = Path(legacy_config_path) if legacy_config_path else None
        # lignes illisibles de sketches.json, mises de côté avant qu'une écriture ne les écrase
        self.rejected_path = self.sketches_path.with_name(self.sketches_path.stem + ".rejected.json")

    # ─── Sketches ────────────────────────────────────────────────────────────
    def read_sketches(self) -> list[Sketch]:
        if self.sketches_path.exists():
            try:
                rows = read_json(self.sketches_path)
                if not isinstance(rows, list):
                    raise ValueError("top-level value is not an array")
            except (OSError, ValueError) as e:
                log.error("Failed to read %s: %s", self.sketches_path, e)
            else:
                rejected: list[Any] = []
                sketches = _sketches_from_rows(rows, rejected)
                if rejected:
                    self._keep_rejected(rejected)
                return sketches
        return self._bootstrap_sketches()

    def write_sketches(self, sketches: Iterable[Sketch]) -> None:
        sketches = list(sketches)
        write_json(self.sketches_path, [s.to_dict() for s in sketches])
        self.projector.regenerate(sketches, self.read_folders())

    def _keep_rejected(self, rows: list[Any]) -> None:
        kept: Any = []
        if self.rejected_path.exists():
            try:
                kept = read_json(self.rejected_path)
            except (OSError, ValueError) as e:
                log.error("Failed to read %s: %s", self.rejected_path, e)
                return
            if not isinstance(kept, list):
                log.error("Not overwriting %s: top-level value is not an array", self.rejected_path)
                return
        new = [r for r in rows if r not in kept]
        if new:
            write_json(self.rejected_path, kept + new)
            log.warning("Kept %d unreadable sketch row(s) in %s", len(new), self.rejected_path)

    def _bootstrap_sketches(self) -> list[Sketch]:
        # migration unique : pas encore de sketches.json → ancien config.js, sinon l'instantané
        if self.legacy_config_path and self.legacy_config_path.exists():
            try:
                source = self.legacy_config_path.read_text(encoding="utf-8")
                sketches, _ = parse_legacy_config(source)
                log.info("Bootstrapped %d sketches from %s", len(sketches), self.legacy_config_path)
                return sketches
            except (OSError, ValueError) as e:
                log.error("Failed to bootstrap from %s: %s", self.legacy_config_path, e)
        snapshot = self.projector.load()
        if snapshot and isinstance(snapshot.get("sketches"), list):
            return _sketches_from_rows(snapshot["sketches"])
        return []

    # ─── Folders ─────────────────────────────────────────────────────────────
    def read_folders(self) -> list[Folder]:
        if not self.folders_path.exists():
            return []
        try:
            rows = read_json(self.folders_path)
            if not isinstance(rows, list):
                raise ValueError("top-level value is not an array")
        except (OSError, ValueError) as e:
            log.error("Failed to read %s: %s", self.folders_path, e)
            return []
        return _folders_from_rows(rows)

    def write_folders(self, folders: Iterable[Folder]) -> None:
        folders = list(folders)
        write_json(self.folders_path, [f.to_dict() for f in folders])
        self.projector.regenerate(self.read_sketches(), folders)

    def regenerate(self) -> str:
        return self.projector.regenerate(self.read_sketches(), self.read_folders())
