import functools
import time
from datetime import datetime, timezone
from typing import Any, Dict, List

from src.app.services.langfuse_service import langfuse_service
from src.app.utils.logging_utils import loggers
from src.app.utils.tracing_context_utils import (
    request_context,
    user_query_context,
)


class LLMTracer:
    def __init__(self, max_traces: int = 1000):
        self.traces = {}  # Storing the traces by their ids
        self.max_traces = max_traces

    def get_trace(self, trace_id):
        return self.traces.get(trace_id)

    def add_trace(self, trace_id, trace_data):
        if trace_id not in self.traces:
            if len(self.traces) >= self.max_traces:
                # dicts keep insertion order, drop the oldest trace
                self.traces.pop(next(iter(self.traces)))
            self.traces[trace_id] = {"id": trace_id, "llm_calls": []}
        self.traces[trace_id]["llm_calls"].append(trace_data)
        return self.traces[trace_id]


# Global tracer instance
tracer = LLMTracer()


def calculate_gemini_price(
    model_name: str, input_tokens: int, output_tokens: int
) -> Dict[str, float]:
    # USD per million tokens
    pricing = {
        "gemini-2.5-flash": {"input": 0.30, "output": 2.50},
        "gemini-2.5-flash-lite": {"input": 0.10, "output": 0.40},
        "gemini-2.5-pro": {"input": 1.25, "output": 10.0},
        "gemini-2.0-flash": {"input": 0.10, "output": 0.40},
    }

    model_pricing = pricing.get(
        model_name, {"input": 0.0, "output": 0.0}
    )  # Default fallback

    input_price = (input_tokens / 1000000) * model_pricing["input"]
    output_price = (output_tokens / 1000000) * model_pricing["output"]
    total_price = input_price + output_price

    return {
        "input": round(input_price, 6),
        "output": round(output_price, 6),
        "total": round(total_price, 6),
    }


def parse_gemini_tokens(response_data: Dict[str, Any]) -> Dict[str, int]:
    usage = response_data.get("usageMetadata", {})
    input_tokens = usage.get("promptTokenCount", 0)
    output_tokens = usage.get("candidatesTokenCount", 0)
    return {
        "input": input_tokens,
        "output": output_tokens,
        "total": usage.get("totalTokenCount", input_tokens + output_tokens),
    }


def extract_gemini_text(response_data: Dict[str, Any]) -> str:
    candidates = response_data.get("candidates") or []
    if not candidates:
        return ""
    parts = candidates[0].get("content", {}).get("parts", [])
    return "".join(part.get("text", "") for part in parts)


def summarize_messages(messages: List[Dict[str, Any]], role: str) -> str:
    """Text content of all messages with the given role; file parts are elided."""
    texts = []
    for message in messages:
        if message.get("role") != role:
            continue
        content = message.get("content")
        if isinstance(content, str):
            texts.append(content)
            continue
        for part in content or []:
            if part.get("type") == "text":
                texts.append(part.get("text", ""))
            else:
                texts.append(f"<{part.get('mediaType', 'file')}>")
    return "\n".join(texts)


PROVIDER_CONFIGS = {
    "gemini": {
        "token_parser": parse_gemini_tokens,
        "price_calculator": calculate_gemini_price,
        "response_extractor": extract_gemini_text,
    },
}


def llm_tracing(provider: str):
    """
    Decorator for tracing LLM API calls with provider-specific handling.

    The wrapped coroutine takes ``(self, model_name, messages, **params)`` and
    returns the provider's raw JSON response.

    Args:
        provider: Name of the LLM provider (e.g., "gemini")
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, model_name, messages, **params):
            user_query = user_query_context.get()
            trace_id = request_context.get()

            if not langfuse_service.is_valid_trace_id(trace_id):
                loggers["lfuse"].info(
                    f"Skipping tracing - invalid trace ID: {trace_id}"
                )
                return await func(self, model_name, messages, **params)

            provider_config = PROVIDER_CONFIGS.get(provider, {})
            if not provider_config:
                loggers["lfuse"].warning(
                    f"No config found for provider: {provider}, falling back to default handling"
                )
                return await func(self, model_name, messages, **params)

            system_prompt = summarize_messages(messages, "system")
            user_prompt = summarize_messages(messages, "user")
            start_time = datetime.now(timezone.utc)
            start = time.perf_counter()

            try:
                raw_response = await func(self, model_name, messages, **params)
            except Exception as e:
                tracer.add_trace(
                    trace_id,
                    {
                        "id": trace_id,
                        "service_provider": provider,
                        "model_name": model_name,
                        "error": str(e),
                        "system_prompt": system_prompt,
                        "user_prompt": user_prompt,
                        "user_query": user_query,
                        "timestamp": time.time(),
                    },
                )
                raise

            response_time = time.perf_counter() - start
            end_time = datetime.now(timezone.utc)

            llm_response = provider_config["response_extractor"](raw_response)
            tokens_data = provider_config["token_parser"](raw_response)
            price_data = provider_config["price_calculator"](
                model_name,
                tokens_data.get("input", 0),
                tokens_data.get("output", 0),
            )

            tracer.add_trace(
                trace_id,
                {
                    "id": trace_id,
                    "service_provider": provider,
                    "model_name": model_name,
                    "tokens": tokens_data,
                    "price": price_data,
                    "system_prompt": system_prompt,
                    "user_prompt": user_prompt,
                    "user_query": user_query,
                    "llm_response": llm_response,
                    "response_time": response_time,
                    "timestamp": end_time.strftime("%Y-%m-%d %H:%M:%S"),
                },
            )

            generation_data = {
                "model_name": model_name,
                "service_provider": provider,
                "input": user_prompt,
                "output": llm_response,
                "system_prompt": system_prompt,
                "price": price_data,
                "tokens": tokens_data,
                "start_time": start_time,
                "end_time": end_time,
            }

            # Observability must never fail the generation itself
            try:
                await langfuse_service.create_generation_for_LLM(
                    trace_id,
                    generation_data,
                    f"{provider.capitalize()} Generation",
                )
            except Exception as e:
                loggers["lfuse"].error(
                    f"Error while creating generation for trace {trace_id}: {str(e)}"
                )

            return raw_response

        return wrapper

    return decorator


def get_trace(trace_id: str) -> Dict[str, Any]:
    return tracer.get_trace(trace_id)
