import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from chat_relay.core.prompts import SYSTEM_PROMPT

# Load environment variables from .env file
load_dotenv()

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str
    max_tokens: int = 1024
    system_prompt: str = SYSTEM_PROMPT
    provider: Literal["workers-ai", "litellm"] = "workers-ai"
    assets_dir: str = "public"
    request_timeout_s: float = 60.0
    log_level: str = "INFO"

    cloudflare_account_id: Optional[str] = None
    cloudflare_api_token: Optional[str] = None
    gateway_id: Optional[str] = None
    gateway_skip_cache: bool = False
    gateway_cache_ttl: Optional[int] = None

    # Only used by the litellm provider
    api_base: Optional[str] = None


def _load_yaml(path: Path) -> dict:
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return data or {}


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# Maps environment variables to settings fields
_ENV_OVERRIDES = {
    "CHAT_RELAY_MODEL_ID": "model_id",
    "CHAT_RELAY_MAX_TOKENS": "max_tokens",
    "CHAT_RELAY_PROVIDER": "provider",
    "CHAT_RELAY_ASSETS_DIR": "assets_dir",
    "CHAT_RELAY_TIMEOUT_S": "request_timeout_s",
    "LOG_LEVEL": "log_level",
    "CLOUDFLARE_ACCOUNT_ID": "cloudflare_account_id",
    "CLOUDFLARE_API_TOKEN": "cloudflare_api_token",
    "CLOUDFLARE_GATEWAY_ID": "gateway_id",
    "CLOUDFLARE_GATEWAY_SKIP_CACHE": "gateway_skip_cache",
    "CLOUDFLARE_GATEWAY_CACHE_TTL": "gateway_cache_ttl",
    "LLM_API_BASE": "api_base",
}


def load_settings(path: Optional[Path] = None, environ: Optional[dict] = None) -> Settings:
    """
    Build settings from the YAML defaults file, then apply environment overrides.
    Pydantic coerces the string values coming from the environment.
    """
    environ = os.environ if environ is None else environ
    data = _load_yaml(path or DEFAULT_SETTINGS_PATH)

    gateway = data.pop("gateway", None) or {}
    values = {key: value for key, value in data.items() if value is not None}
    if gateway.get("id"):
        values["gateway_id"] = gateway["id"]
    if gateway.get("skip_cache") is not None:
        values["gateway_skip_cache"] = gateway["skip_cache"]
    if gateway.get("cache_ttl") is not None:
        values["gateway_cache_ttl"] = gateway["cache_ttl"]

    for env_var, field in _ENV_OVERRIDES.items():
        raw = environ.get(env_var)
        if raw is None or raw == "":
            continue
        values[field] = _env_flag(raw) if field == "gateway_skip_cache" else raw

    return Settings(**values)


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
