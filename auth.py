# auth.py — Basic Auth admin / super-admin + verrouillage après échecs répétés
from __future__ import annotations
import base64
import binascii
import hmac
import time
from dataclasses import dataclass
from typing import Callable

from flask import Flask, Response, current_app, jsonify, request

PUBLIC_READS = {"/api/sketches", "/api/folders", "/api/config"}
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


@dataclass
class _Attempts:
    count: int = 0
    last_failure: float = 0.0
    locked_until: float = 0.0


class LoginLockout:
    # échecs Basic Auth par adresse client : max_fails échecs dans lock_seconds → verrou de lock_seconds
    # entrées purgées à chaque accès (verrou terminé ou dernier échec hors fenêtre)

    def __init__(self, max_fails: int = 8, lock_seconds: float = 900,
                 clock: Callable[[], float] = time.monotonic):
        self.max_fails = max_fails
        self.lock_seconds = lock_seconds
        self.clock = clock
        self._attempts: dict[str, _Attempts] = {}

    def _expired(self, rec: _Attempts, now: float) -> bool:
        if rec.locked_until:
            return rec.locked_until <= now
        return rec.last_failure + self.lock_seconds <= now

    def evict(self) -> None:
        now = self.clock()
        for key in [k for k, rec in self._attempts.items() if self._expired(rec, now)]:
            del self._attempts[key]

    def is_locked(self, key: str) -> bool:
        self.evict()
        rec = self._attempts.get(key)
        return bool(rec and rec.locked_until > self.clock())

    def register_failure(self, key: str) -> bool:
        """Compte un échec ; True si le client est désormais verrouillé."""
        self.evict()
        now = self.clock()
        rec = self._attempts.setdefault(key, _Attempts())
        rec.count += 1
        rec.last_failure = now
        if rec.count >= self.max_fails:
            rec.locked_until = now + self.lock_seconds
        return rec.locked_until > now

    def clear(self, key: str) -> None:
        self._attempts.pop(key, None)

    def __len__(self) -> int:
        return len(self._attempts)


def _is_basic(header: str) -> bool:
    return (header or "")[:6].lower() == "basic "


def parse_basic_auth(header: str) -> tuple[str, str] | None:
    if not _is_basic(header):
        return None
    try:
        raw = base64.b64decode(header[6:].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, sep, pw = raw.partition(":")
    return (user, pw) if sep else None


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def _challenge(realm: str, status: int, message: str) -> Response:
    resp = jsonify({"ok": False, "error": message})
    resp.status_code = status
    resp.headers["WWW-Authenticate"] = f'Basic realm="{realm}"'
    return resp


def _is_folder_path(path: str) -> bool:
    return path == "/api/folders" or path.startswith("/api/folders/")


def _check_super_admin():
    cfg = current_app.config
    user, pw = cfg.get("SUPER_ADMIN_USER") or "", cfg.get("SUPER_ADMIN_PASS") or ""
    if not (user and pw):
        return jsonify({"ok": False, "error": "Super admin not configured"}), 403
    creds = parse_basic_auth(request.headers.get("Authorization", ""))
    if creds is None:
        return _challenge("Super Admin", 401, "Super admin authentication required")
    if _same(creds[0], user) and _same(creds[1], pw):
        return None
    return _challenge("Super Admin", 401, "Invalid super admin credentials")


def _check_admin(lockout: LoginLockout):
    cfg = current_app.config
    user, pw = cfg.get("ADMIN_USER") or "", cfg.get("ADMIN_PASS") or ""
    if not (user and pw):
        return None

    ip = request.remote_addr or "unknown"
    header = request.headers.get("Authorization", "")
    creds = parse_basic_auth(header)
    # des identifiants valides passent même si l'IP est verrouillée
    if creds and _same(creds[0], user) and _same(creds[1], pw):
        lockout.clear(ip)
        return None
    if lockout.is_locked(ip):
        return _challenge("Admin", 429, "Too many failed attempts. Try again later.")
    if not _is_basic(header):
        return _challenge("Admin", 401, "Authentication required")
    if lockout.register_failure(ip):
        current_app.logger.warning("Admin lockout for %s", ip)
        return _challenge("Admin", 429, "Too many failed attempts. Try again later.")
    return _challenge("Admin", 401, "Invalid credentials")


def init_app(app: Flask) -> LoginLockout:
    lockout = LoginLockout(max_fails=int(app.config.get("AUTH_MAX_FAILS", 8)),
                           lock_seconds=float(app.config.get("AUTH_LOCK_SECONDS", 900)))
    app.extensions["login_lockout"] = lockout

    @app.before_request
    def _auth_guard():
        path = request.path
        if not path.startswith("/api/"):
            return None
        if request.method in SAFE_METHODS and path in PUBLIC_READS:
            return None
        if _is_folder_path(path):
            return _check_super_admin()
        return _check_admin(lockout)

    return lockout
