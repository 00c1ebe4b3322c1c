# retech/client/storage.py
import json
import os
from typing import Any


class JsonStorage:
    """Device-local key/value storage, one JSON document per name."""

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.directory, f"{name}.json")

    def get(self, name: str) -> Any:
        path = self._path(name)
        if not os.path.exists(path):
            return None
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)

    def set(self, name: str, value: Any) -> None:
        path = self._path(name)
        tmp = f"{path}.tmp"
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(value, fh)
        os.replace(tmp, path)

    def remove(self, name: str) -> None:
        path = self._path(name)
        if os.path.exists(path):
            os.remove(path)
