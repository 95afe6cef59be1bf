"""
Provider family derivation for model identifiers.
"""

from typing import Optional

from ..catalog import STATIC_MODELS, SUPPORTED_PROVIDERS
from .registry import ModelRegistry


def provider_for_model(model_id: Optional[str], registry: Optional[ModelRegistry] = None) -> Optional[str]:
    """
    Derive the provider family serving a model.

    Known models resolve to their descriptor's provider. Unknown ids of the
    form ``<provider>:<name>`` resolve to ``<provider>`` when it is a
    supported family. Anything else resolves to None, which means no
    credential lookup is attempted.

    Args:
        model_id: Model identifier from the chat request
        registry: Registry to consult without suspending

    Returns:
        Provider family or None
    """
    if not model_id:
        return None

    if registry is not None:
        descriptor = registry.lookup_sync(model_id)
    else:
        descriptor = next((m for m in STATIC_MODELS if m.id == model_id), None)

    if descriptor is not None:
        return descriptor.provider_id

    prefix, sep, _ = model_id.partition(":")
    if sep and prefix in SUPPORTED_PROVIDERS:
        return prefix
    return None
