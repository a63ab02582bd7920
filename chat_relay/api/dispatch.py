from fastapi import Request
from fastapi.responses import PlainTextResponse

from chat_relay.api.chat import handle_chat_request
from chat_relay.core.router import Route, classify


async def dispatch(request: Request):
    """
    Catch-all endpoint, registered without a method list so every method
    reaches the routing rules.
    """
    state = request.app.state
    route = classify(request.method, request.url.path)

    if route is Route.ASSET:
        return await state.assets.fetch(request)
    if route is Route.CHAT:
        return await handle_chat_request(request, state.provider, state.settings)
    if route is Route.METHOD_NOT_ALLOWED:
        return PlainTextResponse("Method not allowed", status_code=405)
    return PlainTextResponse("Not found", status_code=404)
