"""
File Layer
Durable per-key JSON files: <root>/<key>.json containing {"data": ...}
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from cache_cascade.defaults import DEFAULT_FILE_EXTENSION
from cache_cascade.exceptions import CorruptFileException
from cache_cascade.support.storage import Storage


class FileLayer:
    """
    Persists one envelope file per logical key

    The layer is never visitor-isolated. Keys are used as file names as-is;
    callers are responsible for passing filesystem-safe keys.
    """

    def __init__(self, root: Union[str, Path], extension: str = DEFAULT_FILE_EXTENSION):
        self.root = Path(root)
        self.extension = extension

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{self.extension}"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def read(self, key: str) -> Any:
        """
        Read the data stored for key

        Raises:
            FileNotFoundError: If no file exists for key
            CorruptFileException: If the file isn't a {"data": ...} JSON envelope
        """
        path = self.path_for(key)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                envelope = json.load(f)
        except ValueError as e:
            raise CorruptFileException(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(envelope, dict) or 'data' not in envelope:
            raise CorruptFileException(f"Missing data envelope in {path}")

        return envelope['data']

    def write(self, key: str, data: Any) -> Path:
        """
        Write data for key, creating the storage directory if needed

        Raises TypeError for values JSON cannot represent (Decimal, set, ...).
        """
        Storage.ensure_directory(self.root)
        path = self.path_for(key)

        # Serialize first so a bad value never truncates an existing file
        payload = json.dumps({'data': data}, indent=2, ensure_ascii=False)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(payload)

        return path

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if path.is_file():
            path.unlink()
            return True
        return False

    def clear(self) -> int:
        """Delete every file in the storage directory"""
        if not self.root.is_dir():
            return 0

        deleted = 0
        for path in self.root.iterdir():
            if path.is_file():
                path.unlink()
                deleted += 1
        return deleted

    def files(self) -> List[Path]:
        if not self.root.is_dir():
            return []
        return sorted(path for path in self.root.iterdir() if path.is_file())

    def keys(self) -> List[str]:
        """Logical keys with a stored file"""
        return [
            path.name[:-len(self.extension)]
            for path in self.files()
            if path.name.endswith(self.extension)
        ]

    def size(self, key: str) -> Optional[int]:
        path = self.path_for(key)
        return path.stat().st_size if path.is_file() else None

    def modified_at(self, key: str) -> Optional[datetime]:
        path = self.path_for(key)
        return datetime.fromtimestamp(path.stat().st_mtime) if path.is_file() else None

    def total_size(self) -> int:
        return sum(path.stat().st_size for path in self.files())
