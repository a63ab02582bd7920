from chat_relay.core.config import Settings
from chat_relay.providers.base import InferenceProvider
from chat_relay.providers.errors import ProviderConfigError
from chat_relay.providers.workers_ai import CLOUDFLARE_API_BASE, WorkersAIProvider


def build_provider(settings: Settings) -> InferenceProvider:
    if settings.provider == "workers-ai":
        return WorkersAIProvider(
            account_id=settings.cloudflare_account_id,
            api_token=settings.cloudflare_api_token,
            gateway_id=settings.gateway_id,
            skip_cache=settings.gateway_skip_cache,
            cache_ttl=settings.gateway_cache_ttl,
            timeout_s=settings.request_timeout_s,
        )

    if settings.provider == "litellm":
        # litellm is slow to import, so only load it when selected
        from chat_relay.providers.litellm_provider import LiteLLMProvider

        api_base = settings.api_base
        if api_base is None and settings.cloudflare_account_id:
            api_base = f"{CLOUDFLARE_API_BASE}/accounts/{settings.cloudflare_account_id}/ai/run/"
        return LiteLLMProvider(api_base=api_base, api_key=settings.cloudflare_api_token)

    raise ProviderConfigError(f"Unknown provider '{settings.provider}'")
