# slugs.py — identifiants publics des sketches (titre + nom de famille)
from __future__ import annotations
import re
import unicodedata

_COMBINING_RE = re.compile(r"[\u0300-\u036f]")
_TITLE_DROP_RE = re.compile(r"[^a-z0-9\s-]")
_TOKEN_DROP_RE = re.compile(r"[^a-z0-9-]")
_SPACES_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


def normalize_ascii(value: str) -> str:
    # retire les diacritiques ; İ/ı turcs ne se décomposent pas en ASCII → table à la main
    value = _COMBINING_RE.sub("", unicodedata.normalize("NFD", value or ""))
    return value.replace("İ", "I").replace("ı", "i")


def slugify(title: str) -> str:
    s = normalize_ascii(title).lower().strip()
    s = _TITLE_DROP_RE.sub("", s)
    s = _SPACES_RE.sub("-", s)
    s = _HYPHENS_RE.sub("-", s)
    return s.strip("-")


def last_name(author: str) -> str:
    tokens = normalize_ascii(author).strip().split()
    if not tokens:
        return ""
    # sinon apostrophes et autres fuiraient dans le slug
    return _TOKEN_DROP_RE.sub("", tokens[-1].lower())


def derive_slug(title: str, author: str) -> str:
    # derive_slug("Frog", "Elif Erpulat") → "frog-erpulat"
    return f"{slugify(title)}-{last_name(author)}"
