from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException

from src.app.usecases.prompt_usecase.prompt_usecase import PromptUseCase


class GenerationController:
    """
    Controller for the single-shot text generation endpoints.
    """

    def __init__(self, prompt_usecase: PromptUseCase = Depends(PromptUseCase)):
        self.prompt_usecase = prompt_usecase

    async def generate_json(self, system_prompt: Optional[str], prompt: str) -> str:
        return await self.prompt_usecase.generate_json_mapping(system_prompt, prompt)

    async def rewrite(self, code: str, instructions: str, language: str) -> str:
        return await self.prompt_usecase.rewrite(code, instructions, language)

    async def deluge(self, prompt: str, language: str) -> str:
        return await self.prompt_usecase.generate_script(prompt, language)

    async def create_actions(
        self,
        service_name: Optional[str],
        user_prompt: Optional[str],
        unique_name: Optional[str],
    ) -> Dict[str, Any]:
        if not service_name or not user_prompt:
            raise HTTPException(
                status_code=400,
                detail="serviceName and userPrompt are required",
            )
        return await self.prompt_usecase.create_action(
            service_name, user_prompt, unique_name
        )
