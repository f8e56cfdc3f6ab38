# tools/migrate_legacy_config.py
# Usage (depuis la racine du projet) :
#   LEGACY_CONFIG_PATH=src/config.js python -m tools.migrate_legacy_config [--force]
# Lit les tableaux sketchesData / foldersData d'un ancien config.js généré
# et écrit sketches.json + folders.json (+ l'instantané JSON).
import os, sys
from pathlib import Path

from embed_urls import normalize_url
from projector import ConfigProjector
from store import RecordStore, parse_legacy_config

LEGACY = os.environ.get("LEGACY_CONFIG_PATH", "src/config.js")
DATA_DIR = Path(os.environ.get("DATA_DIR", "instance/data"))
FORCE = "--force" in sys.argv[1:]

src = Path(LEGACY)
if not src.exists():
    print(f"ERROR: {src} not found (set LEGACY_CONFIG_PATH)")
    sys.exit(1)

store = RecordStore(
    sketches_path=Path(os.environ.get("SKETCHES_PATH") or DATA_DIR / "sketches.json"),
    folders_path=Path(os.environ.get("FOLDERS_PATH") or DATA_DIR / "folders.json"),
    projector=ConfigProjector(Path(os.environ.get("SNAPSHOT_PATH") or DATA_DIR / "config.json")),
)

if not FORCE and (store.sketches_path.exists() or store.folders_path.exists()):
    print(f"ERROR: data already present in {DATA_DIR} (use --force to overwrite)")
    sys.exit(1)

try:
    sketches, folders = parse_legacy_config(src.read_text(encoding="utf-8"))
except ValueError as e:
    print(f"ERROR: cannot parse {src}: {e}")
    sys.exit(1)

seen = {}
for s in sketches:
    s.url = normalize_url(s.url)
    if s.slug in seen:
        print(f"WARNING: duplicate slug '{s.slug}' ({seen[s.slug]!r} / {s.title!r})")
    seen[s.slug] = s.title

unknown = {s.week for s in sketches} - {f.id for f in folders}
for week in sorted(unknown):
    print(f"WARNING: week '{week}' referenced by sketches but missing from foldersData")

store.write_folders(folders)
store.write_sketches(sketches)
print(f"→ {len(folders)} folders, {len(sketches)} sketches")
print("Done ->", DATA_DIR)
