"""
Catalog sources the model registry can refresh from.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import yaml
from pydantic import ValidationError

from ..catalog import STATIC_MODELS
from ..models.descriptor import ModelDescriptor
from .errors import CatalogLoadError
from .interface import CatalogSource

logger = logging.getLogger(__name__)


class StaticCatalogSource(CatalogSource):
    """Serves the built-in model catalog."""

    def __init__(self, models: Sequence[ModelDescriptor] = STATIC_MODELS):
        self._models: Tuple[ModelDescriptor, ...] = tuple(models)

    async def fetch(self) -> Sequence[ModelDescriptor]:
        return self._models


class YamlCatalogSource(CatalogSource):
    """
    Loads model descriptors from a YAML file.

    The file holds a top-level ``models`` list; each entry uses either
    camelCase or snake_case keys. The file is re-read on every refresh so
    an operator can edit it without restarting the service.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return f"yaml:{self.path}"

    async def fetch(self) -> Sequence[ModelDescriptor]:
        return await asyncio.to_thread(self._load)

    def _load(self) -> Tuple[ModelDescriptor, ...]:
        if not self.path.exists():
            raise CatalogLoadError(f"Catalog file not found: {self.path}", component=self.name)

        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise CatalogLoadError(f"Failed to read catalog {self.path}: {e}", component=self.name)

        entries: List[Dict[str, Any]] = data.get("models", []) if isinstance(data, dict) else []
        if not entries:
            raise CatalogLoadError(f"Catalog {self.path} contains no models", component=self.name)

        try:
            models = tuple(ModelDescriptor.model_validate(entry) for entry in entries)
        except ValidationError as e:
            raise CatalogLoadError(f"Invalid model entry in {self.path}: {e}", component=self.name)

        logger.debug(f"Loaded {len(models)} models from {self.path}")
        return models
