from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class EnrichmentSource(str, Enum):
    generated = "generated"
    fallback = "fallback"


class EnrichedName(BaseModel):
    """
    Display name and description for an endpoint or a service.

    ``source`` tells whether the text came from the model or was copied from
    the collection; ``reason`` says why a fallback happened.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    description: str
    source: EnrichmentSource
    reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == EnrichmentSource.fallback

    @classmethod
    def generated(cls, display_name: str, description: str) -> "EnrichedName":
        return cls(
            display_name=display_name,
            description=description,
            source=EnrichmentSource.generated,
        )

    @classmethod
    def fallback(
        cls, display_name: str, description: str, reason: str
    ) -> "EnrichedName":
        return cls(
            display_name=display_name,
            description=description,
            source=EnrichmentSource.fallback,
            reason=reason,
        )
