from typing import Any, Dict, List
from pydantic import BaseModel

class ChatRequestBody(BaseModel):
    # Messages are forwarded to the provider exactly as received
    messages: List[Dict[str, Any]] = []
