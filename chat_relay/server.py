import os

import uvicorn
from fastapi import FastAPI

from chat_relay.api.dispatch import dispatch
from chat_relay.core.assets import StaticAssets
from chat_relay.core.config import get_settings
from chat_relay.core.log import configure_logging
from chat_relay.providers.factory import build_provider

settings = get_settings()
configure_logging(settings.log_level)

# Every path belongs to either the frontend or /api, so the generated docs are off
app = FastAPI(title="chat-relay", docs_url=None, redoc_url=None, openapi_url=None)

# Read-only collaborators shared by every request
app.state.settings = settings
app.state.provider = build_provider(settings)
app.state.assets = StaticAssets(settings.assets_dir)

app.add_route("/{full_path:path}", dispatch, include_in_schema=False)


def main() -> None:
    uvicorn.run(
        "chat_relay.server:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
