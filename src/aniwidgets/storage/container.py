"""File-based shared container of small JSON documents and binary blobs."""

import json
import logging
import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import Any

from ..errors import DecodeFailure, IOFailure, NotFoundError

logger = logging.getLogger(__name__)


class SharedContainer:
    """
    Process-shared storage area addressed by logical POSIX paths.

    Every call goes to disk; nothing is cached in memory because a peer
    process may have rewritten a document since the last read. Writes replace
    the whole file atomically (temporary file in the same directory, then
    ``os.replace``), so readers never observe a half-written document.
    """

    def __init__(self, root: str | Path):
        """
        Initialize the container.

        Args:
            root: Directory holding the container; created lazily on first write
        """
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        """Map a logical path onto the filesystem, rejecting escapes."""
        logical = PurePosixPath(path)
        if logical.is_absolute() or ".." in logical.parts or not logical.parts:
            raise ValueError(f"Invalid container path: {path!r}")
        return self.root.joinpath(*logical.parts)

    def read(self, path: str) -> bytes:
        """
        Read a blob.

        Raises:
            NotFoundError: If nothing is stored at ``path``
            IOFailure: On permission or disk errors
        """
        file_path = self.resolve(path)
        try:
            data = file_path.read_bytes()
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            raise NotFoundError(path)
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            raise IOFailure(path, e)
        logger.debug("Read %s (%d bytes)", path, len(data))
        return data

    def write(self, path: str, data: bytes) -> None:
        """
        Atomically overwrite a blob, creating parent directories as needed.

        Raises:
            IOFailure: On permission or disk errors
        """
        file_path = self.resolve(path)
        tmp_name = None
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, file_path)
        except OSError as e:
            if tmp_name is not None:
                _discard(tmp_name)
            logger.error("Failed to write %s: %s", path, e)
            raise IOFailure(path, e)
        logger.debug("Wrote %s (%d bytes)", path, len(data))

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def delete(self, path: str) -> None:
        """
        Delete a blob; deleting a missing one is not an error.

        Raises:
            IOFailure: On permission or disk errors
        """
        try:
            self.resolve(path).unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to delete %s: %s", path, e)
            raise IOFailure(path, e)

    def list_files(self, prefix: str, suffix: str | None = None) -> list[str]:
        """
        List the logical paths of files directly under ``prefix``.

        Temporary files of in-progress writes are skipped. A missing
        directory yields an empty list.
        """
        directory = self.resolve(prefix)
        try:
            names = sorted(entry.name for entry in directory.iterdir() if entry.is_file())
        except (FileNotFoundError, NotADirectoryError):
            return []
        except OSError as e:
            raise IOFailure(prefix, e)
        prefix_path = PurePosixPath(prefix)
        return [
            str(prefix_path / name)
            for name in names
            if not name.startswith(".") and (suffix is None or name.endswith(suffix))
        ]

    def list_dirs(self, prefix: str) -> list[str]:
        """List the names of sub-directories directly under ``prefix``."""
        directory = self.resolve(prefix)
        try:
            return sorted(entry.name for entry in directory.iterdir() if entry.is_dir())
        except (FileNotFoundError, NotADirectoryError):
            return []
        except OSError as e:
            raise IOFailure(prefix, e)

    def remove_tree(self, prefix: str) -> None:
        """Delete a directory and everything below it."""
        directory = self.resolve(prefix)
        if not directory.exists():
            return
        try:
            for entry in sorted(directory.rglob("*"), reverse=True):
                if entry.is_dir():
                    entry.rmdir()
                else:
                    entry.unlink()
            directory.rmdir()
        except OSError as e:
            raise IOFailure(prefix, e)

    def size(self, prefix: str = "") -> int:
        """Total bytes of the files below ``prefix`` (the whole container if empty)."""
        directory = self.resolve(prefix) if prefix else self.root
        if not directory.exists():
            return 0
        total = 0
        for entry in directory.rglob("*"):
            try:
                if entry.is_file():
                    total += entry.stat().st_size
            except OSError:
                continue
        return total

    def read_json(self, path: str) -> Any:
        """
        Read and decode a JSON document.

        Raises:
            NotFoundError: If the document does not exist
            DecodeFailure: If the document is not valid UTF-8 JSON
            IOFailure: On permission or disk errors
        """
        data = self.read(path)
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Corrupt JSON document %s: %s", path, e)
            raise DecodeFailure(path, str(e))

    def write_json(self, path: str, document: Any) -> None:
        """Encode ``document`` as pretty-printed JSON and overwrite ``path``."""
        encoded = json.dumps(document, indent=2, sort_keys=True).encode("utf-8")
        self.write(path, encoded + b"\n")


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except OSError:
        pass
