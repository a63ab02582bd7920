from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Protocol, Tuple


@dataclass(frozen=True)
class RunOptions:
    max_tokens: int
    # Ask for the unbuffered streamed body rather than a materialized result
    raw_response: bool = True


@dataclass
class ProviderResponse:
    """
    Raw response handed back by a provider.
    `body` is lazy and can only be consumed once; `close` releases the
    upstream connection and is safe to call more than once.
    """
    status_code: int
    body: AsyncIterator[bytes]
    headers: List[Tuple[str, str]] = field(default_factory=list)
    close: Optional[Callable[[], Awaitable[None]]] = None

    async def aclose(self) -> None:
        if self.close is not None:
            await self.close()


class InferenceProvider(Protocol):
    async def run(
        self, model: str, messages: List[Dict[str, Any]], options: RunOptions
    ) -> ProviderResponse: ...
