"""
Statically known model catalog.
"""

from .openrouter import OPENROUTER_MODELS, PROVIDER_ID

SUPPORTED_PROVIDER = PROVIDER_ID
SUPPORTED_PROVIDERS = [PROVIDER_ID]
STATIC_MODELS = OPENROUTER_MODELS

__all__ = [
    "OPENROUTER_MODELS",
    "PROVIDER_ID",
    "SUPPORTED_PROVIDER",
    "SUPPORTED_PROVIDERS",
    "STATIC_MODELS",
]
