# app/database.py
import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any, List, Optional

from .core import find_index
from .errors import PersistenceError

logger = logging.getLogger(__name__)

# This file holds the collection storage: the JSON file helpers and the
# repositories the endpoint logic works against.


# ---------------------------
# JSON file helpers
# ---------------------------
def read_collection(path) -> List[Dict[str, Any]]:
    """
    Read the whole collection file. Any failure (missing file, bad JSON,
    I/O error, non-list document) yields an empty collection, never an error.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("collection file %s not found, treating as empty", path)
        return []
    except (OSError, ValueError) as e:
        logger.warning("could not read collection file %s (%s), treating as empty", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("collection file %s does not hold a JSON array, treating as empty", path)
        return []
    return data


def write_collection(path, records: List[Dict[str, Any]]) -> None:
    target = Path(path)
    try:
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(payload, encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        logger.error("could not write collection file %s: %s", path, e)
        raise PersistenceError(f"could not write {target.name}: {e}") from e


# ---------------------------
# Repositories
# ---------------------------
class CollectionRepository(ABC):
    """
    A collection of records keyed by integer "id".

    load() hands out a fresh working copy of every record and save() replaces
    the whole collection. The other operations are one read-modify-write each;
    nothing serializes concurrent writers.
    """

    def __init__(self, name: str = "record"):
        self.name = name

    @abstractmethod
    def load(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def save(self, records: List[Dict[str, Any]]) -> None:
        ...

    def list(self) -> List[Dict[str, Any]]:
        return self.load()

    def get(self, record_id: Optional[int]) -> Optional[Dict[str, Any]]:
        records = self.load()
        idx = find_index(records, record_id)
        return records[idx] if idx != -1 else None

    def upsert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        records = self.load()
        idx = find_index(records, record.get("id"))
        if idx == -1:
            records.append(record)
        else:
            records[idx] = record
        self.save(records)
        return record

    def delete(self, record_id: Optional[int]) -> Optional[Dict[str, Any]]:
        records = self.load()
        idx = find_index(records, record_id)
        if idx == -1:
            return None
        removed = records.pop(idx)
        self.save(records)
        return removed


class JsonFileRepository(CollectionRepository):
    def __init__(self, path, name: str = "record"):
        super().__init__(name)
        self.path = path

    def load(self) -> List[Dict[str, Any]]:
        return read_collection(self.path)

    def save(self, records: List[Dict[str, Any]]) -> None:
        write_collection(self.path, records)

    def __repr__(self):
        return f"JsonFileRepository({str(self.path)!r})"


class InMemoryRepository(CollectionRepository):
    def __init__(self, records: Optional[List[Dict[str, Any]]] = None, name: str = "record"):
        super().__init__(name)
        self._records: List[Dict[str, Any]] = copy.deepcopy(records or [])

    def load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)

    def save(self, records: List[Dict[str, Any]]) -> None:
        self._records = copy.deepcopy(records)
