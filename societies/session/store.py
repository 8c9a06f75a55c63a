"""
Game Store - Persistence for session documents and player win counts.

The store:
- Keeps one JSON document per session, keyed by session id
- Versions every document; save() is compare-and-swap on the version
- Runs multi-document writes (win count + session delete) atomically
- Pushes the public snapshot to subscribers after every committed write
- Keeps a win count per player name for the leaderboard

Two implementations share the locking, versioning and notification logic:
- InMemoryGameStore: process-local, for tests and single-node dev servers
- JsonFileGameStore: one file per document under a data directory
"""

from __future__ import annotations
import json
import logging
import os
import re
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

from ..engine_core.errors import ConflictError, NotFoundError, ValidationError
from ..engine_core.state import GameState

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[dict[str, Any] | None], None]

LEADERBOARD_SIZE = 10

_STAT_ID_FORBIDDEN = re.compile(r"[./#\[\]$]")
_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def sanitize_stat_id(player_name: str) -> str:
    """
    Turn a display name into a stat document key.

    Characters that are unsafe in keys and paths become underscores.
    A name with nothing left gets a unique fallback key.
    """
    stat_id = _STAT_ID_FORBIDDEN.sub("_", player_name or "").strip()
    if not stat_id:
        return f"default_player_stat_{int(time.time() * 1000)}"
    return stat_id


@dataclass
class LeaderboardEntry:
    player_name: str
    wins: int

    def to_dict(self) -> dict[str, Any]:
        return {"player_name": self.player_name, "wins": self.wins}


class StoreTransaction:
    """
    Staged writes applied together by GameStore.transaction().

    Reads see the transaction's own staged writes. Nothing reaches the
    backing store unless the transaction function returns normally.
    """

    def __init__(self, store: GameStore):
        self._store = store
        self._sessions: dict[str, dict[str, Any] | None] = {}  # None marks a delete
        self._stats: dict[str, dict[str, Any]] = {}

    def load(self, session_id: str) -> GameState:
        if session_id in self._sessions:
            doc = self._sessions[session_id]
        else:
            doc = self._store._read_session(session_id)
        if doc is None:
            raise NotFoundError("Game session not found")
        return GameState.from_dict(doc)

    def create(self, state: GameState) -> GameState:
        if self._sessions.get(state.session_id) or self._store._read_session(state.session_id):
            raise ConflictError(f"Session {state.session_id} already exists")
        created = state.clone()
        created.version = 1
        self._sessions[state.session_id] = created.to_dict()
        return created

    def save(self, state: GameState, expected_version: int) -> GameState:
        current = self.load(state.session_id)
        if current.version != expected_version:
            raise ConflictError(
                "Session was modified concurrently",
                details={"expected_version": expected_version, "actual_version": current.version},
            )
        saved = state.clone()
        saved.version = expected_version + 1
        self._sessions[state.session_id] = saved.to_dict()
        return saved

    def delete(self, session_id: str):
        self._sessions[session_id] = None

    def get_stat(self, player_name: str) -> int:
        stat_id = sanitize_stat_id(player_name)
        doc = self._stats.get(stat_id) or self._store._read_stat(stat_id)
        return int(doc.get("wins", 0)) if doc else 0

    def put_stat(self, player_name: str, wins: int):
        """Set the win count. A name already stored under the same key is kept."""
        stat_id = sanitize_stat_id(player_name)
        existing = self._stats.get(stat_id) or self._store._read_stat(stat_id)
        stored_name = existing.get("player_name") if existing else None
        self._stats[stat_id] = {"player_name": stored_name or player_name, "wins": wins}

    def _commit(self) -> list[tuple[str, dict[str, Any] | None]]:
        """
        Write everything staged. Returns the session notifications to send.

        Session removals go last, so a failed write leaves every staged
        session in place and the caller can retry.
        """
        for stat_id, doc in self._stats.items():
            self._store._write_stat(stat_id, doc)

        notifications = []
        removed = []
        for session_id, doc in self._sessions.items():
            if doc is None:
                removed.append(session_id)
            else:
                self._store._write_session(session_id, doc)
                notifications.append((session_id, GameState.from_dict(doc).to_public_dict()))
        for session_id in removed:
            self._store._remove_session(session_id)
            notifications.append((session_id, None))
        return notifications


class GameStore(ABC):
    """
    Versioned session documents plus player win counts.

    Subclasses provide the raw document reads and writes; this class
    serializes them under one re-entrant lock.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._listeners: dict[str, list[Listener]] = {}

    # =========================================================================
    # Raw document access (subclasses)
    # =========================================================================

    @abstractmethod
    def _read_session(self, session_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def _write_session(self, session_id: str, doc: dict[str, Any]):
        ...

    @abstractmethod
    def _remove_session(self, session_id: str):
        ...

    @abstractmethod
    def _read_stat(self, stat_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def _write_stat(self, stat_id: str, doc: dict[str, Any]):
        ...

    @abstractmethod
    def _all_stats(self) -> list[dict[str, Any]]:
        ...

    # =========================================================================
    # Sessions
    # =========================================================================

    def load(self, session_id: str) -> GameState:
        """Load a session. Raises NotFoundError if it does not exist."""
        with self._lock:
            doc = self._read_session(session_id)
        if doc is None:
            raise NotFoundError("Game session not found")
        return GameState.from_dict(doc)

    def exists(self, session_id: str) -> bool:
        with self._lock:
            return self._read_session(session_id) is not None

    def create(self, state: GameState) -> GameState:
        """Store a brand-new session at version 1."""
        return self.transaction(lambda txn: txn.create(state))

    def save(self, state: GameState, expected_version: int) -> GameState:
        """
        Compare-and-swap write.

        Raises ConflictError if the stored version is not expected_version.
        Returns the saved state with its new version.
        """
        return self.transaction(lambda txn: txn.save(state, expected_version))

    def delete(self, session_id: str):
        self.transaction(lambda txn: txn.delete(session_id))

    def transaction(self, fn: Callable[[StoreTransaction], T]) -> T:
        """
        Run fn with a transaction under the store lock.

        Staged writes commit only if fn returns; any exception discards them.
        Subscribers are notified after the lock is released.
        """
        with self._lock:
            txn = StoreTransaction(self)
            result = fn(txn)
            notifications = txn._commit()
        for session_id, snapshot in notifications:
            self._notify(session_id, snapshot)
        return result

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, session_id: str, callback: Listener) -> Callable[[], None]:
        """
        Call callback with the public snapshot after every write to the session.

        The snapshot is None when the session is deleted.
        Returns a function that removes the subscription.
        """
        with self._lock:
            self._listeners.setdefault(session_id, []).append(callback)

        def unsubscribe():
            with self._lock:
                listeners = self._listeners.get(session_id, [])
                if callback in listeners:
                    listeners.remove(callback)
                if not listeners:
                    self._listeners.pop(session_id, None)

        return unsubscribe

    def _notify(self, session_id: str, snapshot: dict[str, Any] | None):
        with self._lock:
            listeners = list(self._listeners.get(session_id, []))
        for callback in listeners:
            try:
                callback(snapshot)
            except Exception:
                logger.warning(
                    "Session listener failed",
                    extra={"session_id": session_id},
                    exc_info=True,
                )

    # =========================================================================
    # Player stats
    # =========================================================================

    def increment_wins(self, player_name: str) -> int:
        """Add one win for player_name. Returns the new total."""
        if not player_name or not player_name.strip():
            raise ValidationError("Player name is required")

        def _increment(txn: StoreTransaction) -> int:
            wins = txn.get_stat(player_name) + 1
            txn.put_stat(player_name, wins)
            return wins

        return self.transaction(_increment)

    def get_wins(self, player_name: str) -> int:
        with self._lock:
            doc = self._read_stat(sanitize_stat_id(player_name))
        return int(doc.get("wins", 0)) if doc else 0

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
        """Top players by wins, ties broken by name."""
        with self._lock:
            docs = self._all_stats()
        entries = [
            LeaderboardEntry(player_name=doc.get("player_name", ""), wins=int(doc.get("wins", 0)))
            for doc in docs
        ]
        entries.sort(key=lambda e: (-e.wins, e.player_name))
        return entries[:limit]


class InMemoryGameStore(GameStore):
    """
    Process-local store.

    Documents are held as plain dicts so every load returns a fresh
    object, the same as reading from disk.
    """

    def __init__(self):
        super().__init__()
        self._sessions: dict[str, dict[str, Any]] = {}
        self._stats: dict[str, dict[str, Any]] = {}

    def _read_session(self, session_id: str) -> dict[str, Any] | None:
        doc = self._sessions.get(session_id)
        return json.loads(json.dumps(doc)) if doc is not None else None

    def _write_session(self, session_id: str, doc: dict[str, Any]):
        self._sessions[session_id] = json.loads(json.dumps(doc))

    def _remove_session(self, session_id: str):
        self._sessions.pop(session_id, None)

    def _read_stat(self, stat_id: str) -> dict[str, Any] | None:
        doc = self._stats.get(stat_id)
        return dict(doc) if doc is not None else None

    def _write_stat(self, stat_id: str, doc: dict[str, Any]):
        self._stats[stat_id] = dict(doc)

    def _all_stats(self) -> list[dict[str, Any]]:
        return [dict(doc) for doc in self._stats.values()]

    @property
    def session_count(self) -> int:
        return len(self._sessions)


class JsonFileGameStore(GameStore):
    """
    File-based store.

    Layout:
        <root>/sessions/<session_id>.json
        <root>/player_stats/<stat_id>.json

    Writes go to a temporary file first and are moved into place with
    os.replace, so readers never see a half-written document.
    """

    def __init__(self, root: str | Path | None = None):
        super().__init__()
        if root is None:
            root = Path.home() / ".societies" / "data"
        self.root = Path(root).expanduser()
        self.sessions_dir = self.root / "sessions"
        self.stats_dir = self.root / "player_stats"

        # Ensure data directories exist
        self.sessions_dir.mkdir(parents=True, exist_ok=True)
        self.stats_dir.mkdir(parents=True, exist_ok=True)

    def _session_path(self, session_id: str) -> Path | None:
        if not _SESSION_ID_PATTERN.match(session_id or ""):
            return None
        return self.sessions_dir / f"{session_id}.json"

    def _stat_path(self, stat_id: str) -> Path:
        return self.stats_dir / f"{stat_id}.json"

    def _read(self, path: Path | None) -> dict[str, Any] | None:
        if path is None or not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, path: Path, doc: dict[str, Any]):
        tmp_path = path.with_name(path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2)
        os.replace(tmp_path, path)

    def _read_session(self, session_id: str) -> dict[str, Any] | None:
        return self._read(self._session_path(session_id))

    def _write_session(self, session_id: str, doc: dict[str, Any]):
        path = self._session_path(session_id)
        if path is None:
            raise ValidationError(f"Invalid session id: {session_id}")
        self._write(path, doc)

    def _remove_session(self, session_id: str):
        path = self._session_path(session_id)
        if path is not None and path.exists():
            path.unlink()

    def _read_stat(self, stat_id: str) -> dict[str, Any] | None:
        return self._read(self._stat_path(stat_id))

    def _write_stat(self, stat_id: str, doc: dict[str, Any]):
        self._write(self._stat_path(stat_id), doc)

    def _all_stats(self) -> list[dict[str, Any]]:
        docs = []
        for path in sorted(self.stats_dir.glob("*.json")):
            doc = self._read(path)
            if doc:
                docs.append(doc)
        return docs
