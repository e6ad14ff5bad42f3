"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import hashlib
import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .environment import PersistenceError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FingerprintRecord:
    """
    Associates a Markdown source with a digest of the content last published from it.

    :param source_ref: Location the Markdown source has been fetched from.
    :param content_hash: MD5 hash computed from the Markdown source.
    """

    source_ref: str
    content_hash: str

    def to_line(self) -> str:
        return f"{self.source_ref},{self.content_hash}\n"

    @classmethod
    def from_line(cls, line: str) -> "FingerprintRecord | None":
        # a URL may contain a comma but a hexadecimal digest never does
        source_ref, sep, content_hash = line.rstrip("\r\n").rpartition(",")
        if not sep or not source_ref or not content_hash:
            return None
        return cls(source_ref, content_hash)


def content_digest(content: str) -> str:
    "Computes a content hash that is stable across runs."

    return hashlib.md5(content.encode("utf-8")).hexdigest()


class ChangeTracker:
    """
    Persists content fingerprints between runs to decide whether a Markdown source has to be republished.

    Fingerprints recorded during a run are held in memory until `flush` writes all of them at once.
    """

    path: Path
    _hashes: dict[str, str]

    def __init__(self, path: Path) -> None:
        self.path = path
        self._hashes = {}

    def load(self) -> dict[str, str]:
        """
        Reads fingerprints from the store, replacing any in-memory state.

        A missing store is treated as empty.

        :returns: A copy of the mapping from source reference to content hash.
        :raises PersistenceError: Raised when the store exists but cannot be read.
        """

        hashes: dict[str, str] = {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for number, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    record = FingerprintRecord.from_line(line)
                    if record is None:
                        LOGGER.warning("Ignoring malformed line %d in fingerprint file: %s", number, self.path)
                        continue
                    hashes[record.source_ref] = record.content_hash
        except FileNotFoundError:
            LOGGER.info("No fingerprint file found, all documents are treated as changed: %s", self.path)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"unable to read fingerprint file {self.path}: {e}") from e
        else:
            LOGGER.info("Loaded %d fingerprint(s) from: %s", len(hashes), self.path)

        self._hashes = hashes
        return dict(hashes)

    def has_changed(self, source_ref: str, content: str) -> bool:
        "True if no fingerprint has been recorded for the source, or the content differs from what has been recorded."

        return self._hashes.get(source_ref) != content_digest(content)

    def record(self, source_ref: str, content: str) -> None:
        "Updates the in-memory fingerprint of a source. Call `flush` to persist."

        self._hashes[source_ref] = content_digest(content)

    def flush(self) -> None:
        """
        Replaces the contents of the store with all in-memory fingerprints.

        Fingerprints are written to a temporary file in the same directory, which then replaces the store in a
        single rename. Either all records are written or the store is left as it was. The store keeps its
        permissions, and a new store gets the permissions of any other newly created file.

        :raises PersistenceError: Raised when the store cannot be written.
        """

        try:
            fd, temp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        except OSError as e:
            raise PersistenceError(f"unable to create temporary file for {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                for source_ref, content_hash in self._hashes.items():
                    f.write(FingerprintRecord(source_ref, content_hash).to_line())
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_name, self._file_mode())
            os.replace(temp_name, self.path)
        except OSError as e:
            try:
                os.remove(temp_name)
            except FileNotFoundError:
                pass
            raise PersistenceError(f"unable to write fingerprint file {self.path}: {e}") from e

        LOGGER.info("Saved %d fingerprint(s) to: %s", len(self._hashes), self.path)

    def _file_mode(self) -> int:
        "Permission bits of the existing store, or those the process umask gives a new file."

        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask
