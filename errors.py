# errors.py — erreurs métier → réponses JSON (voir app.py: errorhandler)
from __future__ import annotations
from typing import Any


class GalleryError(Exception):
    status = 500
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.code, "message": self.message}


class ValidationError(GalleryError):
    status = 400
    code = "validation_error"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "field": self.field}


class ConflictError(GalleryError):
    status = 409
    code = "conflict"


class NotFoundError(GalleryError):
    status = 404
    code = "not_found"


class ReferentialError(GalleryError):
    # dossier encore référencé par des sketches
    status = 400
    code = "folder_in_use"

    def __init__(self, folder_id: str, sketch_count: int):
        super().__init__(f"Cannot delete folder: {sketch_count} sketch(es) are using it")
        self.folder_id = folder_id
        self.sketch_count = sketch_count

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "folderId": self.folder_id, "sketchCount": self.sketch_count}
