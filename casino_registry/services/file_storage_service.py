"""
File storage service for attachment uploads.
"""
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from fastapi import UploadFile

from casino_registry.core.logging import get_logger

logger = get_logger(__name__)


class FileStorageService:
    """
    Stores uploaded attachments on local disk under
    ``<base>/<owner-kind>/<owner-id>/<timestamp>_<sanitized-name>``.
    """

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def save_uploaded_file(self, file: UploadFile, owner_kind: str, owner_id: str) -> str:
        """
        Save an uploaded file to the storage system.

        Args:
            file: The uploaded file from FastAPI
            owner_kind: Directory for the owning record type, e.g. ``clients``
            owner_id: Id of the owning record

        Returns:
            The path where the file was saved
        """
        owner_path = self.base_path / owner_kind / owner_id
        owner_path.mkdir(parents=True, exist_ok=True)

        safe_filename = self._sanitize_filename(file.filename or "upload")

        # Timestamp prefix keeps two uploads of the same name apart
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        file_path = owner_path / f"{timestamp}_{safe_filename}"

        try:
            file.file.seek(0)
            with file_path.open("wb") as buffer:
                shutil.copyfileobj(file.file, buffer)
        except OSError as e:
            logger.error(f"Failed to save uploaded file {safe_filename}: {e}")
            raise

        logger.info(f"Saved uploaded file: {file_path}")
        return str(file_path)

    def exists(self, file_path: str) -> bool:
        return Path(file_path).is_file()

    def delete_file(self, file_path: str) -> bool:
        """
        Remove a stored file. Missing files are not an error.

        Returns:
            True if a file was removed
        """
        path = Path(file_path)
        try:
            if path.exists():
                path.unlink()
                logger.info(f"Deleted stored file: {path}")
                return True
        except OSError as e:
            logger.error(f"Failed to delete stored file {path}: {e}")
        return False

    def delete_files(self, file_paths: Iterable[str]) -> int:
        """Remove several stored files, returning how many were removed."""
        return sum(1 for file_path in file_paths if self.delete_file(file_path))

    def _sanitize_filename(self, filename: str) -> str:
        """
        Sanitize a filename to prevent path traversal attacks.

        Args:
            filename: The original filename

        Returns:
            A safe filename
        """
        # Remove any path components
        filename = Path(filename).name

        safe_chars = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
        sanitized = "".join(c if c in safe_chars else "_" for c in filename)

        if "." not in sanitized:
            sanitized = f"{sanitized}.unknown"

        return sanitized
