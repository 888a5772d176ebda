from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from src.app.controllers.app_generation_controller import (
    AppGenerationController,
)
from src.app.utils.error_handler import handle_exceptions

router = APIRouter()


@router.post("/generate/app")
@handle_exceptions
async def generate_app(
    file: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    mediaType: Optional[str] = Form(None),
    controller: AppGenerationController = Depends(AppGenerationController),
):
    """
    Turn an uploaded Postman collection into a workflow definition, or
    analyse any other supported document.
    """
    result = await controller.generate_app(file, prompt, mediaType)
    return JSONResponse(content=result, status_code=status.HTTP_200_OK)
