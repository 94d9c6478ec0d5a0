from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import TypeAdapter, ValidationError

from ..errors import HistoryStoreError, InvalidRequestError
from ..history import HistoryStore, summarize_overview
from ..models.history import ProjectHistoryEntry, PrototypeArtifact
from ..settings import Settings

log = logging.getLogger("mcp.diagram.tools.history")

_PROTOTYPES = TypeAdapter(List[PrototypeArtifact])

def _dump(entries: List[ProjectHistoryEntry]) -> List[Dict[str, Any]]:
    return [e.model_dump(by_alias=True) for e in entries]

def _invalid(event: str, e: ValidationError) -> Dict[str, Any]:
    log.exception(event)
    err = InvalidRequestError(f"invalid_request: {e}", data={"errors": e.error_count()})
    return err.to_tool_result(entries=[])

def _write(op: str, action: Callable[[], List[ProjectHistoryEntry]]) -> Dict[str, Any]:
    try:
        entries = action()
    except HistoryStoreError as e:
        log.error("tool.history.write_failed", extra={"op": op, "error": e.message, **e.data})
        return e.to_tool_result(entries=[])
    log.info("tool.history", extra={"op": op, "entries": len(entries)})
    return {"entries": _dump(entries)}

def load_history(store: HistoryStore) -> Dict[str, Any]:
    entries = store.load()
    log.info("tool.history", extra={"op": "load", "entries": len(entries)})
    return {"entries": _dump(entries)}

def add_history_entry(store: HistoryStore, entry: Dict[str, Any]) -> Dict[str, Any]:
    """Validate, guarantee diagrams and prepend; an existing entry with the same id is replaced."""
    try:
        parsed = ProjectHistoryEntry.model_validate(entry)
    except ValidationError as e:
        return _invalid("tool.history.add.invalid", e)
    if not parsed.summary and parsed.analysis_result is not None:
        parsed = parsed.model_copy(update={"summary": summarize_overview(parsed.analysis_result.overview)})
    return _write("add", lambda: store.add(parsed))

def delete_history_entry(store: HistoryStore, entry_id: str) -> Dict[str, Any]:
    return _write("delete", lambda: store.delete(entry_id))

def clear_history(store: HistoryStore) -> Dict[str, Any]:
    return _write("clear", store.clear)

def update_history_prototypes(
    store: HistoryStore,
    entry_id: str,
    prototypes: List[Dict[str, Any]],
) -> Dict[str, Any]:
    try:
        parsed = _PROTOTYPES.validate_python(prototypes or [])
    except ValidationError as e:
        return _invalid("tool.history.prototypes.invalid", e)
    return _write("update_prototypes", lambda: store.update_prototypes(entry_id, parsed))

def register_history_tools(mcp: FastMCP, store: Optional[HistoryStore] = None) -> None:
    store = store or HistoryStore(Settings.from_env().history_path)
    log.info("tool.register", extra={"tools": "history.*", "path": str(store.path)})

    @mcp.tool(name="history.load", title="Load Project History")
    def history_load() -> Dict[str, Any]:
        """Newest-first entries; diagrams are re-guaranteed on load."""
        return load_history(store)

    @mcp.tool(name="history.add", title="Add Project To History")
    def history_add(entry: Dict[str, Any]) -> Dict[str, Any]:
        """
        - entry: history record (camelCase keys: id, projectName, fileName, analysisResult, ...)
        """
        return add_history_entry(store, entry)

    @mcp.tool(name="history.delete", title="Delete Project From History")
    def history_delete(entry_id: str) -> Dict[str, Any]:
        return delete_history_entry(store, entry_id)

    @mcp.tool(name="history.clear", title="Clear Project History")
    def history_clear() -> Dict[str, Any]:
        return clear_history(store)

    @mcp.tool(name="history.update_prototypes", title="Attach Prototypes To History Entry")
    def history_update_prototypes(entry_id: str, prototypes: List[Dict[str, Any]]) -> Dict[str, Any]:
        return update_history_prototypes(store, entry_id, prototypes)
