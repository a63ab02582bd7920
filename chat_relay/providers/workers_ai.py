import logging
from typing import Any, Dict, List, Optional

import httpx

from chat_relay.providers.base import ProviderResponse, RunOptions
from chat_relay.providers.errors import ProviderConfigError, ProviderRequestError

logger = logging.getLogger(__name__)

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"
AI_GATEWAY_BASE = "https://gateway.ai.cloudflare.com/v1"


class WorkersAIProvider:
    """
    Calls the Cloudflare Workers AI REST API and hands back the raw upstream
    response. With `raw_response` set the model streams server-sent events,
    which are relayed byte for byte.

    When `gateway_id` is configured the call is routed through AI Gateway,
    which adds response caching controlled by the cf-aig-* headers.
    """

    def __init__(
        self,
        account_id: Optional[str],
        api_token: Optional[str],
        gateway_id: Optional[str] = None,
        skip_cache: bool = False,
        cache_ttl: Optional[int] = None,
        timeout_s: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_id = account_id
        self.api_token = api_token
        self.gateway_id = gateway_id
        self.skip_cache = skip_cache
        self.cache_ttl = cache_ttl
        self.timeout_s = timeout_s
        self._transport = transport

    def build_url(self, model: str) -> str:
        if self.gateway_id:
            return f"{AI_GATEWAY_BASE}/{self.account_id}/{self.gateway_id}/workers-ai/{model}"
        return f"{CLOUDFLARE_API_BASE}/accounts/{self.account_id}/ai/run/{model}"

    def build_headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        if self.gateway_id:
            if self.skip_cache:
                headers["cf-aig-skip-cache"] = "true"
            if self.cache_ttl is not None:
                headers["cf-aig-cache-ttl"] = str(self.cache_ttl)
        return headers

    async def run(
        self, model: str, messages: List[Dict[str, Any]], options: RunOptions
    ) -> ProviderResponse:
        if not self.account_id:
            raise ProviderConfigError("CLOUDFLARE_ACCOUNT_ID environment variable is required. Set it in .env file.")
        if not self.api_token:
            raise ProviderConfigError("CLOUDFLARE_API_TOKEN environment variable is required. Set it in .env file.")

        payload = {
            "messages": messages,
            "max_tokens": options.max_tokens,
            "stream": options.raw_response,
        }
        url = self.build_url(model)
        logger.info(f"Workers AI request: model={model}, messages={len(messages)}, gateway={self.gateway_id}")

        # One client per call; nothing is pooled across requests
        client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_s), transport=self._transport)
        request = client.build_request("POST", url, json=payload, headers=self.build_headers())
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            await client.aclose()
            raise ProviderRequestError(f"Workers AI request failed for model '{model}': {e.__class__.__name__}") from e

        logger.info(f"Workers AI responded with status {response.status_code}")

        async def close() -> None:
            await response.aclose()
            await client.aclose()

        return ProviderResponse(
            status_code=response.status_code,
            headers=list(response.headers.multi_items()),
            body=response.aiter_raw(),
            close=close,
        )
