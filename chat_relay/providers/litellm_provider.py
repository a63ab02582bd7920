import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from litellm import acompletion

from chat_relay.providers.base import ProviderResponse, RunOptions

logger = logging.getLogger(__name__)

# Workers AI model ids start with one of these namespaces
_WORKERS_AI_NAMESPACES = ("@cf/", "@hf/")


def _to_dict(chunk: Any) -> Dict[str, Any]:
    # LiteLLM yields pydantic objects; handles both Pydantic v1 and v2
    if hasattr(chunk, "model_dump"):
        return chunk.model_dump(exclude_none=True)
    if hasattr(chunk, "dict"):
        return chunk.dict(exclude_none=True)
    return dict(chunk)


class LiteLLMProvider:
    """
    Runs the model through LiteLLM and re-encodes the streamed chunks as
    OpenAI-style server-sent events.

    `RunOptions.raw_response` is honoured: when it is off the completion is
    requested without streaming and returned as a single JSON body.
    """

    def __init__(self, api_base: Optional[str] = None, api_key: Optional[str] = None):
        self.api_base = api_base
        self.api_key = api_key

    def prepare_model(self, model: str) -> str:
        """
        Workers AI ids (e.g. '@cf/meta/...') need the 'cloudflare/' provider
        prefix for LiteLLM. Any other model name is passed through as-is.
        """
        if model.startswith(_WORKERS_AI_NAMESPACES):
            return f"cloudflare/{model}"
        return model

    def _completion_kwargs(self, model: str, messages: List[Dict[str, Any]], options: RunOptions) -> Dict[str, Any]:
        completion_kwargs = {
            "model": self.prepare_model(model),
            "messages": messages,
            "max_tokens": options.max_tokens,
            "stream": options.raw_response,
        }
        if self.api_base:
            completion_kwargs["api_base"] = self.api_base
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key
        return completion_kwargs

    async def run(
        self, model: str, messages: List[Dict[str, Any]], options: RunOptions
    ) -> ProviderResponse:
        completion_kwargs = self._completion_kwargs(model, messages, options)
        logger.info(
            f"Completion kwargs: model={completion_kwargs['model']}, api_base={completion_kwargs.get('api_base')}, "
            f"stream={completion_kwargs['stream']}, has_api_key={'api_key' in completion_kwargs}"
        )

        # --- NON-STREAMING PATH ---
        if not options.raw_response:
            resp = await acompletion(**completion_kwargs)
            return ProviderResponse(
                status_code=200,
                headers=[("content-type", "application/json")],
                body=_single_chunk(json.dumps(_to_dict(resp)).encode("utf-8")),
            )

        # --- STREAMING PATH ---
        stream = await acompletion(**completion_kwargs)
        return ProviderResponse(
            status_code=200,
            headers=[("content-type", "text/event-stream"), ("cache-control", "no-cache")],
            body=_event_stream(stream),
        )


async def _single_chunk(data: bytes) -> AsyncIterator[bytes]:
    yield data


async def _event_stream(stream: Any) -> AsyncIterator[bytes]:
    try:
        async for chunk in stream:
            yield f"data: {json.dumps(_to_dict(chunk))}\n\n".encode("utf-8")
    except Exception as e:
        # Headers are already sent, so the failure goes out as an event
        logger.error(f"Error while streaming completion: {e}", exc_info=True)
        error_chunk = {"error": {"message": str(e), "type": "api_error"}}
        yield f"data: {json.dumps(error_chunk)}\n\n".encode("utf-8")

    # End-of-stream sentinel required by OpenAI protocol
    yield b"data: [DONE]\n\n"
