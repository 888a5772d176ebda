import json
import re
from typing import Any, Dict, Optional

# Opening ```json fence with its trailing whitespace, or a closing ``` with its
# leading whitespace
CODE_FENCE_PATTERN = re.compile(r"```json\s*|\s*```")


def strip_code_fences(text: str) -> str:
    return CODE_FENCE_PATTERN.sub("", text).strip()


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse an LLM reply that is expected to hold a single JSON object.

    The reply may be wrapped in a ```json fenced block. Nothing beyond fence
    stripping is attempted.

    Returns:
        The parsed object, or None when the reply is not a JSON object.
    """
    if not isinstance(text, str):
        return None
    try:
        parsed = json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed
