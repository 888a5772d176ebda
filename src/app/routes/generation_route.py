from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.controllers.generation_controller import GenerationController
from src.app.models.schemas.generation_schema import (
    CreateActionRequest,
    JsonMappingRequest,
    RewriteRequest,
    ScriptRequest,
)
from src.app.utils.error_handler import handle_exceptions

router = APIRouter()


@router.post("/generate/json")
@handle_exceptions
async def generate_json(
    request: JsonMappingRequest,
    controller: GenerationController = Depends(GenerationController),
):
    """
    Generate a JSON-to-XML mapping snippet.
    """
    result = await controller.generate_json(request.systemPrompt, request.prompt)
    return JSONResponse(
        content={"success": True, "data": result},
        status_code=status.HTTP_200_OK,
    )


@router.post("/rewrite")
@handle_exceptions
async def rewrite(
    request: RewriteRequest,
    controller: GenerationController = Depends(GenerationController),
):
    """
    Fill the <FILL_ME> gap of a code snippet.
    """
    result = await controller.rewrite(
        request.code, request.instructions, request.language
    )
    return JSONResponse(
        content={"success": True, "data": result},
        status_code=status.HTTP_200_OK,
    )


@router.post("/deluge")
@handle_exceptions
async def deluge(
    request: ScriptRequest,
    controller: GenerationController = Depends(GenerationController),
):
    result = await controller.deluge(request.prompt, request.language)
    return JSONResponse(
        content={"success": True, "data": result},
        status_code=status.HTTP_200_OK,
    )


@router.post("/create/actions")
@handle_exceptions
async def create_actions(
    request: CreateActionRequest,
    controller: GenerationController = Depends(GenerationController),
):
    """
    Create a workflow action, or answer a question about the service.
    """
    result = await controller.create_actions(
        request.serviceName, request.userPrompt, request.uniqueName
    )
    return JSONResponse(
        content={"success": True, **result},
        status_code=status.HTTP_200_OK,
    )
