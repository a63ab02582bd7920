import logging
from typing import Any, AsyncIterator, Dict, List

from fastapi import Request
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from chat_relay.core.config import Settings
from chat_relay.providers.base import InferenceProvider, ProviderResponse, RunOptions
from chat_relay.schemas.chat import ChatRequestBody

logger = logging.getLogger(__name__)

ERROR_BODY = {"error": "Failed to process request"}

# Connection-level headers; the ASGI server sets its own
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}


def ensure_system_prompt(messages: List[Dict[str, Any]], system_prompt: str) -> List[Dict[str, Any]]:
    """
    Prepend the system prompt unless the conversation already has a system
    message somewhere. A conversation that has one comes back unchanged.
    """
    if any(m.get("role") == "system" for m in messages):
        return messages
    return [{"role": "system", "content": system_prompt}] + messages


async def _forward(result: ProviderResponse) -> AsyncIterator[bytes]:
    try:
        async for chunk in result.body:
            yield chunk
    finally:
        await result.aclose()


def _relay(result: ProviderResponse) -> StreamingResponse:
    # The background task covers a client that disconnects between chunks
    response = StreamingResponse(
        _forward(result),
        status_code=result.status_code,
        background=BackgroundTask(result.aclose),
    )
    response.raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in result.headers
        if name.lower() not in HOP_BY_HOP_HEADERS
    ]
    return response


async def handle_chat_request(request: Request, provider: InferenceProvider, settings: Settings):
    try:
        payload = ChatRequestBody.model_validate(await request.json())
        messages = ensure_system_prompt(payload.messages, settings.system_prompt)

        result = await provider.run(
            settings.model_id,
            messages,
            RunOptions(max_tokens=settings.max_tokens, raw_response=True),
        )
    except Exception as e:
        logger.error(f"Error processing chat request: {e}", exc_info=True)
        return JSONResponse(ERROR_BODY, status_code=500)

    return _relay(result)
