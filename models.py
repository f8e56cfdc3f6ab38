# ============================================
# models.py — Enregistrements (Sketch, Folder) + identité dérivée
# Rôle : schéma des fichiers JSON ; le slug n'est jamais stocké
# ============================================
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from slugs import derive_slug


def _dimension(value: Any) -> int:
    # pas de troncature silencieuse : 600.5 est une ligne invalide, pas 600
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"not a dimension: {value!r}")
    num = float(value)
    if not num.is_integer():
        raise ValueError(f"not an integer dimension: {value!r}")
    return int(num)


@dataclass(frozen=True)
class SketchId:
    # identifiant public, toujours dérivé de (title, author) ; une chaîne brute passe par parse()
    value: str

    @classmethod
    def of(cls, title: str, author: str) -> "SketchId":
        return cls(derive_slug(title, author))

    @classmethod
    def parse(cls, raw: str) -> "SketchId":
        return cls((raw or "").strip().lower())

    def __str__(self) -> str:
        return self.value


@dataclass
class Sketch:
    author: str
    title: str
    description: str
    url: str
    width: int
    height: int
    week: str

    @property
    def slug(self) -> SketchId:
        return SketchId.of(self.title, self.author)

    def to_dict(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "width": self.width,
            "height": self.height,
            "week": self.week,
        }

    def to_public(self) -> dict[str, Any]:
        return {**self.to_dict(), "slug": str(self.slug)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sketch":
        return cls(
            author=str(data.get("author") or ""),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            url=str(data.get("url") or ""),
            width=_dimension(data.get("width")),
            height=_dimension(data.get("height")),
            week=str(data.get("week") or ""),
        )


@dataclass
class Folder:
    id: str
    name: str
    is_default: bool = field(default=False)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "isDefault": bool(self.is_default)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Folder":
        return cls(id=str(data.get("id") or ""),
                   name=str(data.get("name") or ""),
                   is_default=bool(data.get("isDefault", False)))
