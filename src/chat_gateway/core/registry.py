"""
Model registry with a time-bounded cache over a catalog source.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..catalog import STATIC_MODELS, SUPPORTED_PROVIDER
from ..models.descriptor import ModelDescriptor
from .catalog import StaticCatalogSource
from .interface import CatalogSource

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class RegistrySnapshot:
    """A complete set of descriptors and the time it was fetched."""
    entries: Tuple[ModelDescriptor, ...]
    fetched_at: float


class ModelRegistry:
    """
    Registry of available model descriptors.

    Holds the last successful fetch from its catalog source for
    ``CACHE_TTL_SECONDS``. The snapshot is only ever replaced by a single
    attribute assignment, so a reader sees either the previous snapshot or
    the new one in full.

    Refresh failures never reach callers: the previous snapshot is served
    if there is one, otherwise the static catalog.
    """

    def __init__(
        self,
        source: Optional[CatalogSource] = None,
        fallback: Sequence[ModelDescriptor] = STATIC_MODELS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the registry.

        Args:
            source: Catalog source to refresh from. Defaults to the static catalog.
            fallback: Descriptors served when no snapshot was ever obtained
            clock: Monotonic time source in seconds
        """
        self._source = source or StaticCatalogSource(fallback)
        self._fallback: Tuple[ModelDescriptor, ...] = tuple(fallback)
        self._clock = clock
        self._snapshot: Optional[RegistrySnapshot] = None

    @property
    def source(self) -> CatalogSource:
        return self._source

    @property
    def is_cached(self) -> bool:
        return self._snapshot is not None

    async def get_all(self) -> Tuple[ModelDescriptor, ...]:
        """
        Get every known model descriptor.

        Returns:
            The cached snapshot while fresh, else the result of a refresh
        """
        now = self._clock()
        snapshot = self._snapshot

        if snapshot is not None and now - snapshot.fetched_at < CACHE_TTL_SECONDS:
            return snapshot.entries

        try:
            entries = tuple(await self._source.fetch())
        except Exception as e:
            if snapshot is not None:
                logger.warning(
                    f"Failed to refresh models from {self._source.name}, "
                    f"serving stale snapshot of {len(snapshot.entries)} models: {e}"
                )
                return snapshot.entries
            logger.warning(
                f"Failed to load models from {self._source.name}, using static catalog: {e}"
            )
            return self._fallback

        self._snapshot = RegistrySnapshot(entries=entries, fetched_at=now)
        logger.debug(f"Refreshed model registry with {len(entries)} models")
        return entries

    async def get_all_with_access_flags(self) -> List[ModelDescriptor]:
        """Get the supported provider's models, each marked accessible."""
        models = await self.get_all()
        return [
            model.with_access(True)
            for model in models
            if model.provider_id == SUPPORTED_PROVIDER
        ]

    async def get_for_provider(self, provider_id: str) -> List[ModelDescriptor]:
        """
        Get the models of one provider family, each marked accessible.

        Args:
            provider_id: Exact provider family identifier

        Returns:
            Matching descriptors in catalog order
        """
        models = await self.get_all()
        return [
            model.with_access(True)
            for model in models
            if model.provider_id == provider_id
        ]

    async def get_for_providers(self, provider_ids: Sequence[str]) -> List[ModelDescriptor]:
        """Concatenate ``get_for_provider`` over each provider, in the given order."""
        results = await asyncio.gather(
            *(self.get_for_provider(provider_id) for provider_id in provider_ids)
        )
        return [model for provider_models in results for model in provider_models]

    def lookup_sync(self, model_id: str) -> Optional[ModelDescriptor]:
        """
        Find a descriptor without suspending or refreshing.

        Consults the cached snapshot if there is one, else the static catalog.
        """
        snapshot = self._snapshot
        models = snapshot.entries if snapshot is not None else self._fallback
        for model in models:
            if model.id == model_id:
                return model
        return None

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next ``get_all`` refreshes."""
        self._snapshot = None
        logger.info("Model registry cache invalidated")
