import json
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, UploadFile

from src.app.config.settings import settings
from src.app.models.domain.collection import is_collection
from src.app.models.domain.error import Error, TransformError
from src.app.repositories.error_repository import ErrorRepo
from src.app.usecases.collection_transform_usecase.collection_transform_usecase import (
    CollectionTransformUseCase,
)
from src.app.usecases.document_analysis_usecase.document_analysis_usecase import (
    DocumentAnalysisUseCase,
)
from src.app.usecases.enrichment_usecase.enrichment_usecase import (
    EnrichmentUseCase,
)
from src.app.utils.logging_utils import loggers
from src.app.utils.upload_utils import read_upload, remove_upload, save_upload


def parse_collection(content: bytes) -> Optional[Dict[str, Any]]:
    """Decode an upload as a collection document, or None if it is not one."""
    try:
        document = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    return document if is_collection(document) else None


class AppGenerationController:
    """
    Controller for uploaded documents: collections become workflow
    definitions, anything else is analysed by the model.
    """

    def __init__(
        self,
        transform_usecase: CollectionTransformUseCase = Depends(
            CollectionTransformUseCase
        ),
        enrichment_usecase: EnrichmentUseCase = Depends(EnrichmentUseCase),
        analysis_usecase: DocumentAnalysisUseCase = Depends(DocumentAnalysisUseCase),
        error_repository: ErrorRepo = Depends(ErrorRepo),
    ):
        self.transform_usecase = transform_usecase
        self.enrichment_usecase = enrichment_usecase
        self.analysis_usecase = analysis_usecase
        self.error_repository = error_repository

    async def generate_app(
        self,
        file: Optional[UploadFile],
        prompt: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        if file is None:
            raise HTTPException(status_code=400, detail="No file uploaded")
        if file.content_type not in settings.ALLOWED_UPLOAD_MEDIA_TYPES:
            raise HTTPException(status_code=415, detail="Unsupported file type")

        # The temp file only lives while its bytes are read
        temp_path = None
        try:
            temp_path = await save_upload(file)
            content = await read_upload(temp_path)
        finally:
            remove_upload(temp_path)

        document = parse_collection(content)
        if document is not None:
            return await self._process_collection(document)

        loggers["upload"].info(
            f"{file.filename} is not a collection, running document analysis"
        )
        text = await self.analysis_usecase.execute(
            content,
            prompt=prompt,
            media_type=file.content_type or media_type,
        )
        return {"success": True, "data": text}

    async def _process_collection(self, document: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.transform_usecase.execute(document)
        except TransformError as e:
            await self.error_repository.insert_error(
                Error(
                    f"Postman collection processing error: {e.message}",
                    source="AppGenerationController.generate_app",
                )
            )
            raise HTTPException(
                status_code=500,
                detail=f"Failed to process Postman collection: {e.message}",
            )

        service_name = response["service"]["displayName"]
        message = await self.enrichment_usecase.summarize_use_case(
            service_name,
            [endpoint["displayName"] for endpoint in response["endpoints"]],
        )
        return {
            "success": True,
            "data": response,
            "serviceName": service_name,
            "message": message,
        }
