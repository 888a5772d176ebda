from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException

from src.app.config.settings import settings
from src.app.models.domain.error import Error
from src.app.prompts.generation_prompts import (
    CREATE_ACTION_SYSTEM_PROMPT,
    CREATE_ACTION_USER_PROMPT,
    JSON_MAPPING_RULES,
    JSON_MAPPING_USER_PROMPT,
    REWRITE_SYSTEM_PROMPT,
    REWRITE_USER_PROMPT,
    SCRIPT_SYSTEM_PROMPT,
    SCRIPT_USER_PROMPT,
)
from src.app.repositories.error_repository import ErrorRepo
from src.app.services.gemini_service import GeminiService
from src.app.utils.response_parser import extract_json_object

REQUIRED_ACTION_FIELDS = ("action_id", "action_type", "display_name", "link_name", "type")


class PromptUseCase:
    """Single-shot prompts: format, call the model once, hand back the text."""

    def __init__(
        self,
        gemini_service: GeminiService = Depends(GeminiService),
        error_repo: ErrorRepo = Depends(ErrorRepo),
    ):
        self.gemini_service = gemini_service
        self.error_repo = error_repo
        self.model = settings.GEMINI_MODEL

    async def _complete(self, system_prompt: Optional[str], user_prompt: str) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        return await self.gemini_service.generate(self.model, messages)

    async def generate_json_mapping(
        self, system_prompt: Optional[str], prompt: str
    ) -> str:
        user_prompt = JSON_MAPPING_USER_PROMPT.format(
            rules=JSON_MAPPING_RULES, prompt=prompt
        )
        return await self._complete(system_prompt, user_prompt)

    async def rewrite(self, code: str, instructions: str, language: str = "") -> str:
        system_prompt = REWRITE_SYSTEM_PROMPT.format(
            language=f"{language} " if language else ""
        )
        user_prompt = REWRITE_USER_PROMPT.format(
            code=code, instructions=instructions
        )
        return await self._complete(system_prompt, user_prompt)

    async def generate_script(self, prompt: str, language: str = "Deluge") -> str:
        system_prompt = SCRIPT_SYSTEM_PROMPT.format(language=language)
        user_prompt = SCRIPT_USER_PROMPT.format(prompt=prompt)
        return await self._complete(system_prompt, user_prompt)

    async def create_action(
        self,
        service_name: str,
        user_prompt: str,
        unique_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Either generate an action object or answer a question about the service.

        Returns:
            ``{"action": <object or None>, "message": <text>}``

        Raises:
            HTTPException: 500 if a generated action object misses required fields.
        """
        text = await self._complete(
            CREATE_ACTION_SYSTEM_PROMPT,
            CREATE_ACTION_USER_PROMPT.format(
                service_name=service_name, user_prompt=user_prompt
            ),
        )

        action = extract_json_object(text)
        if action is None or not action.get("action_id"):
            return {"action": None, "message": text}

        missing_fields = [
            field for field in REQUIRED_ACTION_FIELDS if not action.get(field)
        ]
        if missing_fields:
            detail = f"Generated action object missing required fields: {', '.join(missing_fields)}"
            await self.error_repo.insert_error(
                Error(detail, source="PromptUseCase.create_action")
            )
            raise HTTPException(status_code=500, detail=detail)

        action["uniqueName"] = unique_name
        return {
            "action": action,
            "message": f"Action '{action['display_name']}' created successfully for service '{service_name}'",
        }
