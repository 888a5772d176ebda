from typing import Optional

from fastapi import Depends

from src.app.config.settings import settings
from src.app.prompts.generation_prompts import DEFAULT_ANALYSIS_PROMPT
from src.app.services.gemini_service import GeminiService

DEFAULT_MEDIA_TYPE = "application/pdf"


class DocumentAnalysisUseCase:
    def __init__(self, gemini_service: GeminiService = Depends(GeminiService)):
        self.gemini_service = gemini_service
        self.model = settings.GEMINI_MODEL

    async def execute(
        self,
        data: bytes,
        prompt: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> str:
        """Send the raw document with a prompt and return the model's analysis."""
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt or DEFAULT_ANALYSIS_PROMPT},
                    {
                        "type": "file",
                        "data": data,
                        "mediaType": media_type or DEFAULT_MEDIA_TYPE,
                    },
                ],
            }
        ]
        return await self.gemini_service.generate(self.model, messages)
