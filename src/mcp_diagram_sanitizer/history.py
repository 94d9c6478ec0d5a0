# src/mcp_diagram_sanitizer/history.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import ValidationError

from .engine.driver import ensure_graph_diagrams
from .errors import HistoryStoreError
from .models.history import ProjectHistoryEntry, PrototypeArtifact

log = logging.getLogger("mcp.diagram.history")

SUMMARY_LIMIT = 180


def summarize_overview(overview: str) -> str:
    text = overview or ""
    return text if len(text) <= SUMMARY_LIMIT else f"{text[: SUMMARY_LIMIT - 3]}..."


def _guarded(entry: ProjectHistoryEntry) -> ProjectHistoryEntry:
    if entry.analysis_result is None:
        return entry
    return entry.model_copy(update={"analysis_result": ensure_graph_diagrams(entry.analysis_result)})


class HistoryStore:
    """
    Newest-first list of analyzed projects kept in one JSON file.
    Diagrams are re-guaranteed on every load, so entries written by older
    versions still render.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_raw(self) -> List[Any]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("history.read.failed", extra={"path": str(self.path), "error": str(e)})
            return []
        return data if isinstance(data, list) else []

    def _persist(self, entries: Sequence[ProjectHistoryEntry]) -> None:
        payload = [e.model_dump(by_alias=True) for e in entries]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            log.error("history.write.failed", extra={"path": str(self.path), "error": str(e)})
            raise HistoryStoreError("Unable to persist project history.", data={"path": str(self.path)}) from e
        log.info("history.write.ok", extra={"path": str(self.path), "entries": len(payload)})

    def load(self) -> List[ProjectHistoryEntry]:
        entries: List[ProjectHistoryEntry] = []
        for raw in self._read_raw():
            try:
                entry = ProjectHistoryEntry.model_validate(raw)
            except ValidationError as e:
                log.warning("history.entry.invalid", extra={"errors": e.error_count()})
                continue
            entries.append(_guarded(entry))
        return entries

    def add(self, entry: ProjectHistoryEntry) -> List[ProjectHistoryEntry]:
        entry = _guarded(entry)
        updated = [entry] + [h for h in self.load() if h.id != entry.id]
        self._persist(updated)
        return updated

    def delete(self, entry_id: str) -> List[ProjectHistoryEntry]:
        updated = [h for h in self.load() if h.id != entry_id]
        self._persist(updated)
        return updated

    def clear(self) -> List[ProjectHistoryEntry]:
        self._persist([])
        return []

    def update_prototypes(self, entry_id: str, prototypes: Sequence[PrototypeArtifact]) -> List[ProjectHistoryEntry]:
        updated = [
            h.model_copy(update={"prototypes": list(prototypes)}) if h.id == entry_id else h
            for h in self.load()
        ]
        self._persist(updated)
        return updated
