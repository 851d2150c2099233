"""
Search Result Caching Module

Stores formatted search results on disk under short random identifiers so
they can be listed and retrieved later. Each entry is a folder named by its
identifier holding a metadata sidecar and the raw result text. Entries are
written once and never updated.
"""

import json
import logging
import secrets
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..errors import (
    CacheError,
    CachingDisabledError,
    IDGenerationError,
    InvalidResultIDError,
    ResultNotFoundError,
)
from ..types import QueryListItem, QueryMetadata

METADATA_FILE = "metadata.json"
RESULT_FILE = "result.md"
ID_LENGTH = 10
ID_CHARSET = string.ascii_uppercase + string.digits
MAX_ID_ATTEMPTS = 100
CACHING_DISABLED_MESSAGE = (
    "results caching is not enabled. "
    "Set PERPLEXITY_RESULTS_ROOT_FOLDER environment variable to enable caching"
)

logger = logging.getLogger("perplexity_search.cache")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_valid_id(unique_id: str) -> bool:
    """Check identifier shape: exact length, uppercase letters and digits only."""
    return len(unique_id) == ID_LENGTH and all(c in ID_CHARSET for c in unique_id)


class ResultCache:
    """
    Append-only, folder-per-entry cache for search results
    """

    def __init__(self, root_folder: str | Path | None = None):
        """
        Initialize the result cache

        Args:
            root_folder: Directory holding one sub-folder per cached result.
                Caching is disabled when empty or None.
        """
        self.root_folder = Path(root_folder) if root_folder else None

    def is_enabled(self) -> bool:
        return self.root_folder is not None

    def _require_root(self) -> Path:
        if self.root_folder is None:
            raise CachingDisabledError(CACHING_DISABLED_MESSAGE)
        return self.root_folder

    def generate_id(self) -> str:
        """
        Generate an identifier not yet used under the root folder.

        Raises:
            IDGenerationError: If every attempt collided with an existing entry
        """
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = "".join(secrets.choice(ID_CHARSET) for _ in range(ID_LENGTH))
            if self.root_folder is None or not (self.root_folder / candidate).exists():
                return candidate
        raise IDGenerationError(
            f"failed to generate unique ID after {MAX_ID_ATTEMPTS} attempts"
        )

    def save(
        self,
        query: str,
        search_type: str,
        model: str,
        result: str,
        parameters: dict[str, Any] | None = None,
    ) -> str:
        """
        Save a result and its metadata under a fresh identifier

        Args:
            query: Original query text
            search_type: Operation kind that produced the result
            model: Model name used for the remote call
            result: Formatted result text
            parameters: Snapshot of the call parameters

        Returns:
            The new identifier, or "" when caching is disabled

        Raises:
            CacheError: If the identifier cannot be generated or a write fails
        """
        if self.root_folder is None:
            return ""

        unique_id = self.generate_id()
        result_folder = self.root_folder / unique_id

        try:
            self.root_folder.mkdir(parents=True, exist_ok=True)
            result_folder.mkdir()
        except OSError as e:
            raise CacheError(f"failed to create result folder: {e}") from e

        metadata = QueryMetadata(
            query=query,
            search_type=search_type,
            timestamp=_utcnow().isoformat(),
            model=model,
            parameters=parameters or {},
        )

        # A failure between the two writes leaves a folder that listing skips
        try:
            with (result_folder / METADATA_FILE).open("w", encoding="utf-8") as f:
                json.dump(metadata, f, indent=2, ensure_ascii=False, default=str)
        except (OSError, TypeError, ValueError) as e:
            raise CacheError(f"failed to write metadata file: {e}") from e

        try:
            (result_folder / RESULT_FILE).write_text(result, encoding="utf-8")
        except OSError as e:
            raise CacheError(f"failed to write result file: {e}") from e

        logger.info("Cached %s result %s for: %s", search_type, unique_id, query)
        return unique_id

    def _load_metadata(self, folder: Path) -> QueryMetadata | None:
        """Load an entry's metadata, or None when missing or unparseable"""
        try:
            with (folder / METADATA_FILE).open(encoding="utf-8") as f:
                metadata = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError):
            return None
        if not isinstance(metadata, dict):
            return None
        return metadata  # type: ignore[return-value]

    def list_queries(self) -> list[QueryListItem]:
        """
        List cached entries, most recent first

        Entries whose metadata is missing or unparseable are skipped.
        Returns an empty list when caching is disabled or the root folder
        does not exist yet.
        """
        if self.root_folder is None or not self.root_folder.exists():
            return []

        try:
            folders = [entry for entry in self.root_folder.iterdir() if entry.is_dir()]
        except OSError as e:
            raise CacheError(f"failed to read results directory: {e}") from e

        dated_items: list[tuple[datetime, QueryListItem]] = []
        for folder in folders:
            metadata = self._load_metadata(folder)
            if metadata is None:
                continue

            timestamp = _parse_timestamp(metadata.get("timestamp"))
            if timestamp is None:
                logger.debug("Skipping cache entry with bad timestamp: %s", folder.name)
                continue

            dated_items.append(
                (
                    timestamp,
                    QueryListItem(
                        query=str(metadata.get("query", "")),
                        unique_id=folder.name,
                        datetime=timestamp.isoformat(),
                        search_type=str(metadata.get("search_type", "")),
                    ),
                )
            )

        dated_items.sort(key=lambda item: (item[0], item[1]["unique_id"]), reverse=True)
        return [item for _, item in dated_items]

    def get(self, unique_id: str) -> str:
        """
        Retrieve a cached result by identifier

        Raises:
            CachingDisabledError: If no root folder is configured
            InvalidResultIDError: If the identifier is malformed
            ResultNotFoundError: If no result is stored under the identifier
            CacheError: If the result file cannot be read
        """
        root = self._require_root()

        if not is_valid_id(unique_id):
            raise InvalidResultIDError(
                f"invalid unique ID format: must be {ID_LENGTH} uppercase alphanumeric characters"
            )

        result_path = root / unique_id / RESULT_FILE
        if not result_path.is_file():
            raise ResultNotFoundError(f"result with ID '{unique_id}' not found")

        try:
            return result_path.read_text(encoding="utf-8")
        except OSError as e:
            raise CacheError(f"failed to read result file: {e}") from e
