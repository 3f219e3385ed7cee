"""
File element fetcher implementation.

Reads elements from a JSON array (strings or objects) or from a text file
with one element per line.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from typing_extensions import override

from ..exceptions import ValidationError
from ..interfaces import ElementFetcher
from ..logging_config import get_logger
from ..models import Element

# Keys tried, in order, when JSON objects carry no explicit label key
DEFAULT_LABEL_KEYS = ("title", "name", "label")


class FileElementFetcher(ElementFetcher):
    """
    Element fetcher that reads a single file.

    ``.json`` files must hold a list. String items become the label; object
    items keep the whole object as payload and take their label from
    ``label_key``. Any other file is read as one element per non-blank line,
    skipping lines that start with ``#``.
    """

    def __init__(self, path: Path, label_key: str | None = None):
        """
        Initialize file element fetcher.

        Args:
            path: File containing the elements
            label_key: Object key holding the label (JSON objects only)
        """
        self.path: Path = Path(path)
        self.label_key: str | None = label_key

        self.logger = get_logger("file_fetcher")

        if not self.path.exists():
            raise FileNotFoundError(f"Elements file does not exist: {self.path}")

        if self.path.is_dir():
            raise IsADirectoryError(f"Path is a directory: {self.path}")

        # Cache for loaded elements
        self._cache = list[Element]()
        self._cache_loaded: bool = False

    def _label_for(self, item: dict[str, Any], position: int) -> str:
        """Pick the label of a JSON object item."""
        keys = (self.label_key,) if self.label_key else DEFAULT_LABEL_KEYS
        for key in keys:
            value = item.get(key)
            if value is not None and str(value).strip():
                return str(value).strip()
        raise ValidationError(
            f"Item {position} in {self.path} has no label (tried keys: {', '.join(keys)})"
        )

    def _load_json(self) -> list[Element]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, list):
            raise ValidationError(
                f"{self.path} must contain a JSON list, got {type(data).__name__}"
            )

        elements = list[Element]()
        for position, item in enumerate(data):
            if isinstance(item, str):
                if not item.strip():
                    self.logger.warning(f"Skipping blank item {position} in {self.path}")
                    continue
                elements.append(Element(label=item.strip()))
            elif isinstance(item, dict):
                elements.append(Element(label=self._label_for(item, position), payload=item))
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                elements.append(Element(label=str(item), payload=item))
            else:
                raise ValidationError(
                    f"Unsupported item {position} in {self.path}: {type(item).__name__}"
                )
        return elements

    def _load_lines(self) -> list[Element]:
        elements = list[Element]()
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                elements.append(Element(label=line))
        return elements

    def _load_elements(self) -> None:
        """Load all elements from the file into cache."""
        if self._cache_loaded:
            return

        if self.path.suffix.lower() == ".json":
            self._cache = self._load_json()
        else:
            self._cache = self._load_lines()

        if not self._cache:
            self.logger.warning(f"No elements found in {self.path}")

        self._cache_loaded = True
        self.logger.info(f"Loaded {len(self._cache)} elements from {self.path}")

    @override
    def list_elements(self) -> Sequence[Element]:
        """Return all elements, in file order."""
        self._load_elements()
        return list(self._cache)

    def get_element_count(self) -> int:
        """Get total number of available elements."""
        self._load_elements()
        return len(self._cache)

    def reload_elements(self) -> None:
        """Force reload elements from the file."""
        self._cache.clear()
        self._cache_loaded = False
        self._load_elements()
