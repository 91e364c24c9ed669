"""Local history of fetched snapshots and generated READMEs.

Entries are keyed by ``owner/repo`` and kept in a single JSON file. A
missing or unreadable file behaves like an empty history.
"""

import logging
import time
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from readme_generator import models

logger = logging.getLogger(__name__)

RepoHistory = dict[str, models.RepoHistoryEntry]

_history_adapter = TypeAdapter(RepoHistory)


def now_ms() -> int:
    return int(time.time() * 1000)


class HistoryStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> RepoHistory:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        try:
            return _history_adapter.validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring unreadable history file {self.path}: {exc.error_count()} errors")
            return {}

    def _save(self, history: RepoHistory) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Swap in a fully written file so a crash never leaves half a history behind
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_bytes(_history_adapter.dump_json(history, indent=2))
        tmp_path.replace(self.path)

    def upsert_snapshot(
        self,
        snapshot: models.RepoSnapshot,
        url: str | None = None,
        fetched_at: int | None = None,
    ) -> models.RepoHistoryEntry:
        history = self.load()
        existing = history.get(snapshot.repo)
        entry = models.RepoHistoryEntry(
            repo=snapshot.repo,
            url=url,
            snapshot=models.StoredSnapshot(
                **snapshot.model_dump(exclude={"url", "fetched_at"}),
                url=url,
                fetched_at=fetched_at if fetched_at is not None else now_ms(),
            ),
            generations=existing.generations if existing else [],
            updated_at=now_ms(),
        )
        history[snapshot.repo] = entry
        self._save(history)
        return entry

    def add_generation(self, repo: str, generation: models.ReadmeGeneration) -> models.RepoHistoryEntry | None:
        history = self.load()
        entry = history.get(repo)
        if entry is None:
            return None
        entry.generations.insert(0, generation)
        entry.updated_at = now_ms()
        self._save(history)
        return entry

    def get_entry(self, repo: str) -> models.RepoHistoryEntry | None:
        return self.load().get(repo)

    def list_entries(self) -> list[models.RepoHistoryEntry]:
        return sorted(self.load().values(), key=lambda e: e.updated_at, reverse=True)

    def remove_entry(self, repo: str) -> bool:
        history = self.load()
        if history.pop(repo, None) is None:
            return False
        self._save(history)
        return True

    def clear(self) -> None:
        self._save({})

    def save_edited_readme(self, repo: str, readme: str) -> models.RepoHistoryEntry | None:
        history = self.load()
        entry = history.get(repo)
        if entry is None:
            return None
        entry.edited_readme = readme
        entry.updated_at = now_ms()
        self._save(history)
        return entry

    def get_edited_readme(self, repo: str) -> str | None:
        entry = self.get_entry(repo)
        return entry.edited_readme if entry else None
