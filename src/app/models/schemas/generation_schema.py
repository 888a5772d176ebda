from typing import Optional

from pydantic import BaseModel


class JsonMappingRequest(BaseModel):
    systemPrompt: Optional[str] = None
    prompt: str


class RewriteRequest(BaseModel):
    code: str
    instructions: str
    language: str = ""


class ScriptRequest(BaseModel):
    prompt: str
    language: str = "Deluge"


class CreateActionRequest(BaseModel):
    # Presence is checked by the route to keep its error message
    serviceName: Optional[str] = None
    userPrompt: Optional[str] = None
    uniqueName: Optional[str] = None
