# -*- coding: utf-8 -*-
"""Named-project library.

A directory-backed list of saved projects kept in one JSON index file:
``[{id, name, savedAt, loadCount, data}, ...]`` newest first. Saving a
project whose name already exists replaces that entry.
"""

from __future__ import annotations

import json
import logging
import uuid
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from core.keys import ProjectKeys as K
from storage.migrations import upgrade_project_dict
from storage.schema import PROJECT_VERSION

log = logging.getLogger(__name__)

INDEX_FILENAME = "saved_projects.json"
UNTITLED = "Untitled Project"


class ProjectLibrary:
    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    @property
    def index_path(self) -> Path:
        return self.base_path / INDEX_FILENAME

    def _read(self) -> List[Dict[str, Any]]:
        if not self.index_path.exists():
            return []
        try:
            data = json.loads(self.index_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            log.warning("Saved project index unreadable; treating as empty: %s", self.index_path, exc_info=True)
            return []
        return [e for e in data if isinstance(e, dict)] if isinstance(data, list) else []

    def _write(self, entries: List[Dict[str, Any]]) -> None:
        self.index_path.write_text(json.dumps(entries, indent=2, ensure_ascii=False), encoding="utf-8")

    def list(self) -> List[Dict[str, Any]]:
        """Entry summaries (without the snapshot), newest first."""
        entries = sorted(self._read(), key=lambda e: str(e.get("savedAt") or ""), reverse=True)
        return [{k: v for k, v in e.items() if k != "data"} for e in entries]

    def save(self, data: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
        meta = data.get(K.METADATA) if isinstance(data.get(K.METADATA), dict) else {}
        name = str(meta.get(K.PROJECT_NAME) or "").strip() or UNTITLED
        entries = [e for e in self._read() if e.get("name") != name]
        entry = {
            "id": f"proj_{uuid.uuid4().hex[:12]}",
            "name": name,
            "savedAt": (now or datetime.now(timezone.utc)).isoformat().replace("+00:00", "Z"),
            "loadCount": len(data.get(K.LOADS) or []),
            "data": deepcopy(data),
        }
        entries.insert(0, entry)
        self._write(entries)
        log.info("Saved named project %r (%d loads)", name, entry["loadCount"])
        return {k: v for k, v in entry.items() if k != "data"}

    def load(self, entry_id: str) -> Optional[Dict[str, Any]]:
        for e in self._read():
            if e.get("id") == entry_id:
                return upgrade_project_dict(e.get("data") or {}, to_version=PROJECT_VERSION)
        return None

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        for e in self.list():
            if e.get("name") == name:
                return e
        return None

    def delete(self, entry_id: str) -> bool:
        entries = self._read()
        kept = [e for e in entries if e.get("id") != entry_id]
        if len(kept) == len(entries):
            return False
        self._write(kept)
        return True
