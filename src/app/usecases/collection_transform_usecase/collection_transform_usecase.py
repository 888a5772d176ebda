import asyncio
import traceback
from typing import Any, Dict, List, Tuple

from fastapi import Depends
from pydantic import ValidationError

from src.app.config.settings import settings
from src.app.models.domain.collection import SourceCollection, SourceItem
from src.app.models.domain.enrichment import EnrichedName
from src.app.models.domain.error import Error, TransformError
from src.app.repositories.error_repository import ErrorRepo
from src.app.usecases.collection_transform_usecase.templates import (
    build_action,
    build_endpoint,
    build_resource,
    build_service,
    build_trigger,
)
from src.app.usecases.enrichment_usecase.enrichment_usecase import (
    EnrichmentUseCase,
)
from src.app.utils.logging_utils import loggers


class CollectionTransformUseCase:
    def __init__(
        self,
        enrichment_usecase: EnrichmentUseCase = Depends(EnrichmentUseCase),
        error_repo: ErrorRepo = Depends(ErrorRepo),
    ):
        self.enrichment_usecase = enrichment_usecase
        self.error_repo = error_repo
        self.concurrency = max(1, settings.ENRICHMENT_CONCURRENCY)

    async def execute(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Turn a collection document into a workflow definition.

        Args:
            document: Decoded collection JSON with ``info`` and an ``item`` list.

        Returns:
            ``{endpoints, service, envVariables, data_type_validation,
            resources, triggers, actions}``

        Raises:
            TransformError: If the document cannot be read as a collection or
                the definition cannot be assembled.
        """
        try:
            collection = SourceCollection.model_validate(document)
        except ValidationError as e:
            await self._log_error(f"Invalid collection document: {str(e)}")
            raise TransformError(
                f"Invalid collection document: {str(e)}", cause=e
            ) from e

        try:
            return await self._transform(collection)
        except Exception as e:
            stack_trace = traceback.format_exc()
            await self._log_error(
                f"Unexpected error while transforming collection: {str(e)}. Trace: {stack_trace}"
            )
            raise TransformError(str(e), cause=e) from e

    async def _transform(self, collection: SourceCollection) -> Dict[str, Any]:
        loggers["transform"].info(
            f"Processing collection '{collection.name}' with {len(collection.item)} items"
        )

        service_name = await self.enrichment_usecase.enrich_service(collection)

        retained: List[Tuple[int, SourceItem]] = []
        for idx, item in enumerate(collection.item):
            if not item.is_retained:
                loggers["transform"].info(
                    f"Skipping item {idx + 1} ({item.name}) - not a GET request"
                )
                continue
            retained.append((idx, item))

        names = await self._enrich_endpoints(retained)

        endpoints = []
        resources = []
        triggers = []
        actions = []
        for (idx, item), name in zip(retained, names):
            # Link names use the position in the source list, not among retained items
            i = idx + 1
            method = item.method
            url = item.url

            endpoints.append(
                build_endpoint(i, name.display_name, name.description, method, url)
            )
            resources.append(
                build_resource(
                    i, idx, name.display_name, name.description, method, url
                )
            )
            triggers.append(build_trigger(i, name.display_name, name.description))
            actions.append(build_action(i, name.display_name, name.description))

        loggers["transform"].info(
            f"Generated {len(endpoints)} endpoints, resources, triggers and actions"
        )

        return {
            "endpoints": endpoints,
            "service": build_service(
                service_name.display_name, service_name.description
            ),
            "envVariables": {},
            "data_type_validation": 0,
            "resources": resources,
            "triggers": triggers,
            "actions": actions,
        }

    async def _enrich_endpoints(
        self, retained: List[Tuple[int, SourceItem]]
    ) -> List[EnrichedName]:
        """Enrich items with at most ``concurrency`` calls in flight, in source order."""
        semaphore = asyncio.Semaphore(self.concurrency)

        async def enrich(idx: int, item: SourceItem) -> EnrichedName:
            async with semaphore:
                return await self.enrichment_usecase.enrich_endpoint(item, idx + 1)

        return list(
            await asyncio.gather(*(enrich(idx, item) for idx, item in retained))
        )

    async def _log_error(self, error_msg: str):
        await self.error_repo.insert_error(
            Error(error_msg, source="CollectionTransformUseCase.execute")
        )
