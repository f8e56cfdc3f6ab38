# embed_urls.py — liens p5.js / OpenProcessing → variante intégrable (iframe)
from __future__ import annotations
import re
from urllib.parse import urlsplit, urlunsplit

_P5_EDIT_RE = re.compile(r"^(/[^/]+)/(sketches|edit)/")
_OP_SKETCH_RE = re.compile(r"/sketch/[^/]+")


def _split_absolute(url: str):
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"not an absolute url: {url!r}")
    return parts


def normalize_p5_url(raw_url):
    # editor.p5js.org/<user>/sketches/<id> → /<user>/full/<id> (la vue éditeur refuse l'iframe)
    try:
        url = str(raw_url)
        lower = url.lower()
        if "p5js" not in lower or "editor" not in lower:
            return raw_url
        parts = _split_absolute(url)
        host = (parts.hostname or "").lower()
        if not host.startswith("editor.") or "p5js.org" not in host:
            return raw_url
        # seul le segment qui suit le user compte (un user peut s'appeler "full" ou "edit")
        path = _P5_EDIT_RE.sub(r"\1/full/", parts.path, count=1)
        if path == parts.path:
            return raw_url
        return urlunsplit(parts._replace(path=path))
    except (TypeError, ValueError):
        return raw_url


def normalize_openprocessing_url(raw_url):
    # openprocessing.org/sketch/<id> → /sketch/<id>/embed
    try:
        url = str(raw_url)
        if "openprocessing" not in url.lower():
            return raw_url
        parts = _split_absolute(url)
        if "openprocessing" not in (parts.hostname or "").lower():
            return raw_url
        path = parts.path.rstrip("/")
        if not _OP_SKETCH_RE.search(path) or path.endswith("/embed"):
            return raw_url
        return urlunsplit(parts._replace(path=path + "/embed"))
    except (TypeError, ValueError):
        return raw_url


def normalize_url(raw_url):
    # ordre fixe : p5 puis OpenProcessing
    return normalize_openprocessing_url(normalize_p5_url(raw_url))
