"""Content-addressable storage (CAS) for bitstream content."""

import hashlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MIN_HASH_LENGTH = 4


def get_storage_suffix(content_hash: str) -> str:
    """
    Return the path of a hash relative to the storage root.

    Example: ``abcdef12...`` -> ``ab/cd/abcdef12...``
    """
    if not content_hash or len(content_hash) < MIN_HASH_LENGTH:
        raise ValueError(f"File hash must be at least {MIN_HASH_LENGTH} characters long for storage path generation.")
    return str(Path(content_hash[:2]) / content_hash[2:4] / content_hash)


def _resolve(storage_path: Path, content_hash: str) -> Path:
    return storage_path / get_storage_suffix(content_hash)


def store_bytes(file_content: bytes, storage_path: Path, name: str | None = None) -> tuple[str, str]:
    """
    Store content under its SHA256 hash.

    Storing the same content twice writes it only once.

    Args:
        file_content: The binary content to store.
        storage_path: The root path for the asset storage.
        name: A display name used for logging only.

    Returns:
        A tuple of the SHA256 hex digest and the storage suffix (e.g. "ab/cd/abcd...").

    """
    content_hash = hashlib.sha256(file_content).hexdigest()
    target_path = _resolve(storage_path, content_hash)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    if not target_path.exists():
        temp_path = target_path.with_suffix(".tmp")
        try:
            temp_path.write_bytes(file_content)
            temp_path.replace(target_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.info("Stored %s to %s", name or content_hash, target_path)
    else:
        logger.debug("Content %s (hash: %s) already exists at %s", name or content_hash, content_hash, target_path)

    return content_hash, get_storage_suffix(content_hash)


def read_bytes(content_hash: str, storage_path: Path) -> bytes:
    """
    Read stored content back.

    Raises:
        FileNotFoundError: If nothing is stored under the hash.

    """
    target_path = _resolve(storage_path, content_hash)
    if not target_path.is_file():
        raise FileNotFoundError(f"No stored content for hash {content_hash} under {storage_path}")
    return target_path.read_bytes()


def has_content(content_hash: str, storage_path: Path) -> bool:
    """Check if content with the given SHA256 hash is stored."""
    try:
        return _resolve(storage_path, content_hash).is_file()
    except ValueError:
        logger.warning("Invalid content hash format: %s", content_hash)
        return False


def delete_content(content_hash: str, storage_path: Path) -> bool:
    """
    Delete stored content and any directories left empty by it.

    Returns:
        True if the content was deleted, False if it was not stored.

    """
    if not has_content(content_hash, storage_path):
        logger.warning("Content with hash %s not found for deletion.", content_hash)
        return False

    target_path = _resolve(storage_path, content_hash)
    target_path.unlink()
    logger.info("Deleted stored content %s", target_path)

    parent_dir = target_path.parent
    while parent_dir != storage_path and parent_dir.is_relative_to(storage_path):
        try:
            if any(parent_dir.iterdir()):
                break
            parent_dir.rmdir()
        except OSError as e:
            logger.debug("Could not remove directory %s: %s", parent_dir, e)
            break
        logger.debug("Removed empty directory %s", parent_dir)
        parent_dir = parent_dir.parent
    return True
