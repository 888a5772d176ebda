from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_METHOD = "GET"


def is_present(value: Any) -> bool:
    """Presence as collection exporters mean it: empty objects and lists count."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def is_collection(document: Any) -> bool:
    """A document is a collection when it has ``info`` and an ``item`` list."""
    return (
        isinstance(document, dict)
        and is_present(document.get("info"))
        and isinstance(document.get("item"), list)
    )


def scalar_text(value: Any) -> Optional[str]:
    # Hand-edited collections carry numbers where strings belong
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _text_of(description: Any) -> Optional[str]:
    # Collection descriptions are either plain strings or {"content", "type"}
    if isinstance(description, str):
        return description
    if isinstance(description, dict) and isinstance(
        description.get("content"), str
    ):
        return description["content"]
    return None


def _url_from_parts(url: Dict[str, Any]) -> str:
    host = url.get("host") or []
    path = url.get("path") or []
    if isinstance(host, str):
        host = [host]
    if isinstance(path, str):
        path = [path]
    if not host and not path:
        return ""

    rebuilt = ".".join(str(part) for part in host)
    if url.get("protocol"):
        rebuilt = f"{url['protocol']}://{rebuilt}"
    if url.get("port"):
        rebuilt = f"{rebuilt}:{url['port']}"
    if path:
        rebuilt = f"{rebuilt}/" + "/".join(str(part) for part in path)

    query = [
        (q.get("key", ""), q.get("value") or "")
        for q in url.get("query") or []
        if isinstance(q, dict) and not q.get("disabled")
    ]
    if query:
        rebuilt = f"{rebuilt}?{urlencode(query, safe='{}')}"
    return rebuilt


class SourceRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    method: Optional[str] = None
    url: Union[str, Dict[str, Any], None] = None

    @field_validator("method", mode="before")
    @classmethod
    def _method_as_text(cls, value: Any) -> Optional[str]:
        return scalar_text(value)

    @field_validator("url", mode="before")
    @classmethod
    def _url_as_text_or_parts(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value
        return scalar_text(value)


class SourceItem(BaseModel):
    """One entry of a collection's ``item`` list. Never mutated."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: Optional[str] = None
    request: Union[SourceRequest, str, None] = None
    description: Any = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> Optional[str]:
        return scalar_text(value)

    @field_validator("request", mode="before")
    @classmethod
    def _request_if_present(cls, value: Any) -> Any:
        # An empty string or null request means "no request"
        if not is_present(value):
            return None
        if isinstance(value, (str, dict)):
            return value
        return {}

    @property
    def method(self) -> str:
        if isinstance(self.request, SourceRequest) and self.request.method:
            return self.request.method
        return DEFAULT_METHOD

    @property
    def url(self) -> str:
        if isinstance(self.request, str):
            return self.request
        if self.request is None:
            return ""
        url = self.request.url
        if isinstance(url, str):
            return url
        if isinstance(url, dict):
            if url.get("raw"):
                return str(url["raw"])
            return _url_from_parts(url)
        return ""

    @property
    def description_text(self) -> Optional[str]:
        return _text_of(self.description)

    @property
    def is_retained(self) -> bool:
        return self.request is not None and self.method.upper() == "GET"


class CollectionInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    description: Any = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> Optional[str]:
        return scalar_text(value)


class SourceCollection(BaseModel):
    model_config = ConfigDict(extra="allow")

    info: CollectionInfo = CollectionInfo()
    item: List[SourceItem] = []

    @field_validator("info", mode="before")
    @classmethod
    def _info_as_object(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @field_validator("item", mode="before")
    @classmethod
    def _items_as_objects(cls, value: Any) -> Any:
        # Stray entries keep their position but carry no request
        if not isinstance(value, list):
            return value
        return [entry if isinstance(entry, dict) else {} for entry in value]

    @property
    def name(self) -> Optional[str]:
        return self.info.name

    @property
    def description_text(self) -> Optional[str]:
        return _text_of(self.info.description)

    @property
    def retained_count(self) -> int:
        return sum(1 for item in self.item if item.is_retained)
