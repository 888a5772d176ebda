from typing import Any, Dict, List, Optional

from fastapi import Depends

from src.app.config.settings import settings
from src.app.models.domain.collection import SourceCollection, SourceItem
from src.app.models.domain.enrichment import EnrichedName
from src.app.models.domain.error import ProviderError
from src.app.prompts.enrichment_prompts import (
    DEFAULT_USE_CASE_MESSAGE,
    ENDPOINT_ENRICHMENT_SYSTEM_PROMPT,
    ENDPOINT_ENRICHMENT_USER_PROMPT,
    SERVICE_ENRICHMENT_SYSTEM_PROMPT,
    SERVICE_ENRICHMENT_USER_PROMPT,
    USE_CASE_SYSTEM_PROMPT,
    USE_CASE_USER_PROMPT,
)
from src.app.services.gemini_service import GeminiService
from src.app.utils.logging_utils import loggers
from src.app.utils.response_parser import extract_json_object

DEFAULT_SERVICE_NAME = "API Collection"


def _string_field(reply: Dict[str, Any], key: str) -> Optional[str]:
    value = reply.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class EnrichmentUseCase:
    """
    Best-effort business-friendly naming through the text generation gateway.

    Every method makes exactly one gateway call and never raises on gateway
    or parse failures; the collection's own text is used instead.
    """

    def __init__(self, gemini_service: GeminiService = Depends(GeminiService)):
        self.gemini_service = gemini_service
        self.model = settings.GEMINI_MODEL

    async def _ask_for_pair(
        self,
        system_prompt: str,
        user_prompt: str,
        name_key: str,
        fallback_name: str,
        fallback_description: str,
        subject: str,
    ) -> EnrichedName:
        """
        One gateway call asking for ``{name_key, description}``.

        Both keys must be non-empty strings; otherwise both fallback values
        are used and the reason is kept on the result.
        """
        try:
            text = await self.gemini_service.generate(
                self.model,
                [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except ProviderError as e:
            return self._fallback(
                subject,
                fallback_name,
                fallback_description,
                f"generation failed: {e.message}",
            )

        reply = extract_json_object(text)
        if reply is None:
            return self._fallback(
                subject,
                fallback_name,
                fallback_description,
                "reply is not a JSON object",
            )

        name = _string_field(reply, name_key)
        description = _string_field(reply, "description")
        if name is None or description is None:
            return self._fallback(
                subject,
                fallback_name,
                fallback_description,
                f"reply lacks '{name_key}' or 'description'",
            )
        return EnrichedName.generated(name, description)

    @staticmethod
    def _fallback(
        subject: str, name: str, description: str, reason: str
    ) -> EnrichedName:
        loggers["transform"].warning(
            f"{subject} enrichment failed, using original values: {reason}"
        )
        return EnrichedName.fallback(name, description, reason)

    async def enrich_endpoint(self, item: SourceItem, index: int) -> EnrichedName:
        """
        Name one collection item.

        Args:
            item: The source item.
            index: 1-based position of the item in the collection.
        """
        user_prompt = ENDPOINT_ENRICHMENT_USER_PROMPT.format(
            original_name=item.name or "Unnamed Endpoint",
            method=item.method,
            url=item.url,
            original_description=item.description_text or "No description",
        )
        return await self._ask_for_pair(
            ENDPOINT_ENRICHMENT_SYSTEM_PROMPT,
            user_prompt,
            "endpointName",
            fallback_name=item.name or f"Endpoint {index}",
            fallback_description=item.description_text or "",
            subject=f"Endpoint {index}",
        )

    async def enrich_service(self, collection: SourceCollection) -> EnrichedName:
        fallback_name = collection.name or DEFAULT_SERVICE_NAME
        fallback_description = collection.description_text or ""

        user_prompt = SERVICE_ENRICHMENT_USER_PROMPT.format(
            original_name=fallback_name,
            original_description=fallback_description,
            total_endpoints=len(collection.item),
            get_endpoints=collection.retained_count,
        )
        return await self._ask_for_pair(
            SERVICE_ENRICHMENT_SYSTEM_PROMPT,
            user_prompt,
            "serviceName",
            fallback_name=fallback_name,
            fallback_description=fallback_description,
            subject="Service",
        )

    async def summarize_use_case(
        self, service_name: str, endpoint_names: List[str]
    ) -> str:
        user_prompt = USE_CASE_USER_PROMPT.format(
            service_name=service_name,
            endpoint_count=len(endpoint_names),
            endpoint_names=", ".join(endpoint_names),
        )
        try:
            text = await self.gemini_service.generate(
                self.model,
                [
                    {"role": "system", "content": USE_CASE_SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except ProviderError as e:
            loggers["transform"].warning(
                f"Use case generation failed: {e.message}"
            )
            return DEFAULT_USE_CASE_MESSAGE
        return text.strip() or DEFAULT_USE_CASE_MESSAGE
