from enum import Enum

API_PREFIX = "/api/"
CHAT_PATH = "/api/chat"


class Route(str, Enum):
    ASSET = "asset"
    CHAT = "chat"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    NOT_FOUND = "not_found"


def classify(method: str, path: str) -> Route:
    """
    Decide where a request goes. Rules are checked in order; first match wins.
    """
    if path == "/" or not path.startswith(API_PREFIX):
        return Route.ASSET
    if path == CHAT_PATH:
        if method.upper() == "POST":
            return Route.CHAT
        return Route.METHOD_NOT_ALLOWED
    return Route.NOT_FOUND
