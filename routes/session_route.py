"""FastAPI routes for prompt studio sessions."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from controllers.session_controller import (
	delete_session,
	generate,
	get_history_thumbnail,
	get_session,
	list_history,
	post_message,
	reset_session,
	select_model,
	start_session,
)
from services.errors import StudioError
from utils.http_errors import error_response, unexpected_error_response

router = APIRouter(prefix="/sessions", tags=["sessions"])


class MessagePayload(BaseModel):
	text: str = ""


class ModelPayload(BaseModel):
	model: str = ""


async def _run(action, *args, failure: str = "Session request failed."):
	try:
		return await action(*args)
	except StudioError as exc:
		return error_response(exc)
	except Exception as exc:  # pylint: disable=broad-exception-caught
		return unexpected_error_response(exc, failure)


@router.post("")
async def start_session_route(request: Request):
	return await _run(start_session, request)


@router.get("/{session_id}")
async def get_session_route(request: Request, session_id: str):
	return await _run(get_session, request, session_id)


@router.delete("/{session_id}")
async def delete_session_route(request: Request, session_id: str):
	return await _run(delete_session, request, session_id)


@router.post("/{session_id}/messages")
async def post_message_route(request: Request, session_id: str, payload: MessagePayload):
	return await _run(post_message, request, session_id, payload.text, failure="Failed to enhance prompt.")


@router.put("/{session_id}/model")
async def select_model_route(request: Request, session_id: str, payload: ModelPayload):
	return await _run(select_model, request, session_id, payload.model)


@router.post("/{session_id}/generate")
async def generate_route(request: Request, session_id: str):
	return await _run(generate, request, session_id, failure="Failed to generate image.")


@router.get("/{session_id}/history")
async def list_history_route(request: Request, session_id: str):
	return await _run(list_history, request, session_id)


@router.get("/{session_id}/history/{index}/thumbnail")
async def history_thumbnail_route(request: Request, session_id: str, index: int):
	return await _run(get_history_thumbnail, request, session_id, index)


@router.post("/{session_id}/reset")
async def reset_session_route(request: Request, session_id: str):
	return await _run(reset_session, request, session_id)
