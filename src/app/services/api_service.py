from typing import Any, Dict, Optional

import httpx

from src.app.config.settings import settings


class ApiService:
    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout or settings.GEMINI_TIMEOUT_SECONDS

    async def post(
        self,
        url: str,
        headers: Dict[str, str],
        data: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Send a JSON POST request and return the decoded JSON body.
        :raises httpx.HTTPError: on transport errors, timeouts and non-2xx replies.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(url, headers=headers, json=data)
            response.raise_for_status()
            return response.json()
