"""Defines the FileStorageResource for world-specific bitstream storage."""

from pathlib import Path

from dam_license.functions import file_storage


class FileStorageResource:
    """
    Bitstream content storage bound to one world's asset storage path.

    It wraps the functional implementation in `dam_license.functions.file_storage`.
    """

    def __init__(self, storage_path: Path):
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def store(self, content: bytes, name: str | None = None) -> tuple[str, str]:
        """Store content; returns its hash and storage suffix."""
        return file_storage.store_bytes(content, self.storage_path, name=name)

    def read(self, content_hash: str) -> bytes:
        """Read content by hash."""
        return file_storage.read_bytes(content_hash, self.storage_path)

    def has(self, content_hash: str) -> bool:
        """Check if content is stored."""
        return file_storage.has_content(content_hash, self.storage_path)

    def delete(self, content_hash: str) -> bool:
        """Delete content by hash."""
        return file_storage.delete_content(content_hash, self.storage_path)
