import base64
import time
from datetime import datetime, timezone
from typing import Any, Dict, List

import httpx
from fastapi import Depends

from src.app.config.settings import settings
from src.app.models.domain.error import Error, ProviderError
from src.app.repositories.error_repository import ErrorRepo
from src.app.repositories.llm_usage_repository import LLMUsageRepository
from src.app.services.api_service import ApiService
from src.app.services.llm_tracing_service import (
    extract_gemini_text,
    llm_tracing,
    parse_gemini_tokens,
)
from src.app.utils.logging_utils import loggers

# Chat roles mapped onto Gemini content roles; "system" goes to systemInstruction
GEMINI_ROLES = {"user": "user", "assistant": "model", "model": "model"}


def to_gemini_parts(content) -> List[Dict[str, Any]]:
    """
    Convert message content into Gemini parts.

    ``content`` is either a plain string or a list of parts shaped like
    ``{"type": "text", "text": ...}`` or
    ``{"type": "file", "data": bytes, "mediaType": ...}``.
    """
    if isinstance(content, str):
        return [{"text": content}]

    parts = []
    for part in content:
        part_type = part.get("type")
        if part_type == "text":
            parts.append({"text": part.get("text", "")})
        elif part_type == "file":
            data = part["data"]
            if isinstance(data, str):
                data = data.encode("utf-8")
            parts.append(
                {
                    "inlineData": {
                        "mimeType": part.get("mediaType", "application/octet-stream"),
                        "data": base64.b64encode(data).decode("ascii"),
                    }
                }
            )
        else:
            raise ValueError(f"Unsupported message part type: {part_type}")
    return parts


def build_generate_content_payload(
    messages: List[Dict[str, Any]], **params
) -> Dict[str, Any]:
    system_parts = []
    contents = []
    for message in messages:
        role = message.get("role")
        if role == "system":
            # An empty system prompt is legal in the chat format but rejected by Gemini
            if message.get("content"):
                system_parts.extend(to_gemini_parts(message["content"]))
            continue
        if role not in GEMINI_ROLES:
            raise ValueError(f"Unsupported message role: {role}")
        contents.append(
            {
                "role": GEMINI_ROLES[role],
                "parts": to_gemini_parts(message.get("content", "")),
            }
        )

    payload: Dict[str, Any] = {"contents": contents}
    if system_parts:
        payload["systemInstruction"] = {"parts": system_parts}
    if params:
        payload["generationConfig"] = dict(params)
    return payload


class GeminiService:
    def __init__(
        self,
        api_service: ApiService = Depends(ApiService),
        llm_usage_repository: LLMUsageRepository = Depends(LLMUsageRepository),
        error_repo: ErrorRepo = Depends(ErrorRepo),
    ) -> None:
        self.api_service = api_service
        self.base_url = settings.GEMINI_BASE_URL
        self.gemini_model = settings.GEMINI_MODEL
        self.llm_usage_repository = llm_usage_repository
        self.error_repo = error_repo

    @llm_tracing(provider="gemini")
    async def _generate_content(
        self,
        model_name: str,
        messages: List[Dict[str, Any]],
        **params,
    ) -> Dict[str, Any]:
        """
        Send a generateContent request to the Gemini API.
        :param model_name: Gemini model identifier, e.g. ``gemini-2.5-flash``.
        :param messages: Ordered role-tagged messages.
        :return: The raw JSON response of the API.
        :raises ProviderError: when the request fails or times out.
        """
        url = f"{self.base_url}/models/{model_name}:generateContent"

        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": settings.GEMINI_API_KEY,
        }

        try:
            payload = build_generate_content_payload(messages, **params)

            start_time = time.perf_counter()
            response = await self.api_service.post(
                url=url, headers=headers, data=payload
            )
            duration = time.perf_counter() - start_time
        except (httpx.HTTPError, ValueError) as e:
            message = f"Error while sending a request to the Gemini API: {str(e) or type(e).__name__}"
            await self.error_repo.insert_error(
                Error(message, source="GeminiService.generate")
            )
            raise ProviderError(message) from e

        tokens = parse_gemini_tokens(response)
        await self.llm_usage_repository.add_llm_usage(
            {
                "input_tokens": tokens["input"],
                "output_tokens": tokens["output"],
                "total_tokens": tokens["total"],
                "duration": duration,
                "provider": "Gemini",
                "model": model_name,
                "created_at": datetime.now(timezone.utc),
            }
        )
        return response

    async def generate(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        **params,
    ) -> str:
        """
        Generate text for the given messages.
        :raises ProviderError: when no text could be obtained.
        """
        response = await self._generate_content(
            model or self.gemini_model, messages, **params
        )
        text = extract_gemini_text(response)
        if not text:
            reason = response.get("promptFeedback", {}).get("blockReason")
            message = "Gemini API returned no text" + (
                f" (blocked: {reason})" if reason else ""
            )
            await self.error_repo.insert_error(
                Error(message, source="GeminiService.generate")
            )
            raise ProviderError(message)

        loggers["gemini"].info(
            f"Gemini {model or self.gemini_model} replied with {len(text)} characters"
        )
        return text
