from typing import Any, Dict, Optional

from langfuse import Langfuse

from src.app.config.settings import settings
from src.app.utils.logging_utils import loggers
from src.app.utils.tracing_context_utils import tracer_context


class LangfuseService:
    def __init__(self) -> None:
        self.enabled = settings.LANGFUSE_TRACING_ENABLED
        self.langfuse_client = (
            self._initialize_langfuse_client() if self.enabled else None
        )

    def _initialize_langfuse_client(self):
        return Langfuse(
            public_key=settings.LANGFUSE_PUBLIC_KEY,
            secret_key=settings.LANGFUSE_SECRET_KEY,
            host=settings.LANGFUSE_HOST,
            release=settings.APP_VERSION,
        )

    def is_valid_trace_id(self, trace_id: Optional[str]) -> bool:
        """Validates if a trace ID should be used for creating traces"""
        return trace_id is not None and trace_id != "None" and trace_id != ""

    def create_trace(self, trace_id: str, name: str):
        if not self.enabled or not self.is_valid_trace_id(trace_id):
            return None
        return self.langfuse_client.trace(id=trace_id, name=name)

    async def create_generation_for_LLM(
        self, trace_id: str, generation_data: Dict[str, Any], name: str
    ) -> Optional[str]:
        if not self.enabled or not self.is_valid_trace_id(trace_id):
            loggers["lfuse"].info(
                f"Skipping generation creation for trace ID: {trace_id}"
            )
            return None

        trace = tracer_context.get()
        if trace is not None:
            trace.update(output=generation_data["output"])

        generation_object = self.langfuse_client.generation(
            trace_id=trace_id,
            name=name,
        )

        usage_details = {
            "input_token": generation_data["tokens"]["input"],
            "output_token": generation_data["tokens"]["output"],
            "total_token": generation_data["tokens"]["total"],
        }

        cost_details = {
            "input_cost": generation_data["price"]["input"],
            "output_cost": generation_data["price"]["output"],
            "total_cost": generation_data["price"]["total"],
        }

        metadata = {
            "provider": generation_data.get("service_provider", ""),
            "cost": generation_data["price"]["total"],
            "system_prompt": generation_data.get("system_prompt", ""),
            **usage_details,
        }

        generation_object.end(
            model=generation_data["model_name"],
            input=generation_data["input"],
            output=generation_data["output"],
            start_time=generation_data.get("start_time"),
            end_time=generation_data.get("end_time"),
            usage_details=usage_details,
            cost_details=cost_details,
            metadata=metadata,
        )

        loggers["lfuse"].info(
            f"generation object created: {generation_object.id}"
        )
        return generation_object.id

    def flush(self):
        if self.enabled:
            self.langfuse_client.flush()


langfuse_service = LangfuseService()
