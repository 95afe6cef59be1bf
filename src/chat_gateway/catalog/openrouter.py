"""
Static catalog of models served through OpenRouter.
"""

from typing import Tuple

from ..models.descriptor import ModelDescriptor

PROVIDER_ID = "openrouter"

OPENROUTER_MODELS: Tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="openrouter:deepseek/deepseek-r1:free",
        name="DeepSeek R1 (free)",
        provider="OpenRouter",
        provider_id=PROVIDER_ID,
        model_family="DeepSeek",
        base_provider_id="deepseek",
        description="Open reasoning model served free of charge through OpenRouter.",
        tags=("reasoning", "open-source", "free"),
        context_window=163840,
        input_cost=0.0,
        output_cost=0.0,
        price_unit="per 1M tokens",
        reasoning=True,
        open_source=True,
        speed="Medium",
        intelligence="High",
        website="https://openrouter.ai",
        api_docs="https://openrouter.ai/docs",
        model_page="https://openrouter.ai/deepseek/deepseek-r1:free",
        released_at="2025-01-20",
        icon="deepseek",
    ),
    ModelDescriptor(
        id="openrouter:anthropic/claude-3.7-sonnet",
        name="Claude 3.7 Sonnet",
        provider="OpenRouter",
        provider_id=PROVIDER_ID,
        model_family="Claude",
        base_provider_id="anthropic",
        description="Anthropic's hybrid reasoning model routed through OpenRouter.",
        tags=("reasoning", "coding", "vision"),
        context_window=200000,
        input_cost=3.0,
        output_cost=15.0,
        price_unit="per 1M tokens",
        vision=True,
        tools=True,
        reasoning=True,
        speed="Fast",
        intelligence="High",
        website="https://openrouter.ai",
        api_docs="https://openrouter.ai/docs",
        model_page="https://openrouter.ai/anthropic/claude-3.7-sonnet",
        released_at="2025-02-24",
        icon="claude",
    ),
    ModelDescriptor(
        id="openrouter:google/gemini-2.5-pro-preview",
        name="Gemini 2.5 Pro (preview)",
        provider="OpenRouter",
        provider_id=PROVIDER_ID,
        model_family="Gemini",
        base_provider_id="google",
        description="Google's long-context multimodal model routed through OpenRouter.",
        tags=("multimodal", "long-context", "reasoning"),
        context_window=1048576,
        input_cost=1.25,
        output_cost=10.0,
        price_unit="per 1M tokens",
        vision=True,
        tools=True,
        audio=True,
        reasoning=True,
        web_search=True,
        speed="Medium",
        intelligence="High",
        website="https://openrouter.ai",
        api_docs="https://openrouter.ai/docs",
        model_page="https://openrouter.ai/google/gemini-2.5-pro-preview",
        released_at="2025-05-06",
        icon="gemini",
    ),
    ModelDescriptor(
        id="openrouter:openai/gpt-4.1",
        name="GPT-4.1",
        provider="OpenRouter",
        provider_id=PROVIDER_ID,
        model_family="GPT-4",
        base_provider_id="openai",
        description="OpenAI's flagship instruction-following model routed through OpenRouter.",
        tags=("coding", "vision", "tools"),
        context_window=1047576,
        input_cost=2.0,
        output_cost=8.0,
        price_unit="per 1M tokens",
        vision=True,
        tools=True,
        speed="Fast",
        intelligence="High",
        website="https://openrouter.ai",
        api_docs="https://openrouter.ai/docs",
        model_page="https://openrouter.ai/openai/gpt-4.1",
        released_at="2025-04-14",
        icon="openai",
    ),
    ModelDescriptor(
        id="openrouter:x-ai/grok-3-mini-beta",
        name="Grok 3 Mini (beta)",
        provider="OpenRouter",
        provider_id=PROVIDER_ID,
        model_family="Grok",
        base_provider_id="xai",
        description="Lightweight xAI reasoning model routed through OpenRouter.",
        tags=("reasoning", "fast"),
        context_window=131072,
        input_cost=0.3,
        output_cost=0.5,
        price_unit="per 1M tokens",
        tools=True,
        reasoning=True,
        speed="Fast",
        intelligence="Medium",
        website="https://openrouter.ai",
        api_docs="https://openrouter.ai/docs",
        model_page="https://openrouter.ai/x-ai/grok-3-mini-beta",
        released_at="2025-04-09",
        icon="xai",
    ),
)
