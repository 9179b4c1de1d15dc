"""Studio session helpers driving the conversation and creation pipelines."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import Request
from fastapi.responses import Response

from services.errors import InvalidRequestError, NotFoundError, StudioError
from services.studio.creation import NO_PROMPT_MESSAGE
from services.studio.session_store import StudioSession, StudioSessionStore
from services.thumbnail_generator import ThumbnailGenerator


def _store(request: Request) -> StudioSessionStore:
	return request.app.state.session_store


def _session(request: Request, session_id: str) -> StudioSession:
	try:
		return _store(request).get(session_id)
	except KeyError as exc:
		raise NotFoundError(f"Session {session_id} not found") from exc


def _snapshot(session: StudioSession) -> Dict[str, Any]:
	conversation = session.conversation
	creation = session.creation
	return {
		"session_id": session.session_id,
		"messages": [asdict(message) for message in conversation.messages],
		"conversation_state": conversation.state.value,
		"chat_error": conversation.error,
		"final_prompt": conversation.final_prompt,
		"creation_state": creation.state.value,
		"selected_model": creation.selected_model,
		"image_url": creation.image_url,
		"generation_error": creation.error,
		"history_size": len(creation.history),
	}


async def start_session(request: Request) -> Dict[str, Any]:
	"""Create a new studio session and return its id."""
	session = _store(request).create()
	return {"session_id": session.session_id}


async def get_session(request: Request, session_id: str) -> Dict[str, Any]:
	return _snapshot(_session(request, session_id))


async def delete_session(request: Request, session_id: str) -> Dict[str, Any]:
	_session(request, session_id)
	_store(request).delete(session_id)
	return {"session_id": session_id, "deleted": True}


async def post_message(request: Request, session_id: str, text: str) -> Dict[str, Any]:
	"""Submit a chat message and return both turns plus the refreshed final prompt."""
	conversation = _session(request, session_id).conversation
	reply = await conversation.submit(text)
	user_message = conversation.messages[-2]
	return {
		"session_id": session_id,
		"user_message": asdict(user_message),
		"assistant_message": asdict(reply),
		"final_prompt": conversation.final_prompt,
	}


async def select_model(request: Request, session_id: str, model: str) -> Dict[str, Any]:
	creation = _session(request, session_id).creation
	return {"session_id": session_id, "selected_model": creation.select_model(model)}


async def generate(request: Request, session_id: str) -> Dict[str, Any]:
	"""Generate an image from the session's current final prompt.

	Raises the stored failure so the route can map it to its status code;
	history is only touched on success.
	"""
	session = _session(request, session_id)
	creation = session.creation
	result = await creation.generate(session.conversation.final_prompt)
	if not result.ok:
		if creation.last_failure is not None:
			raise creation.last_failure
		raise InvalidRequestError(result.error or NO_PROMPT_MESSAGE)
	return {
		"session_id": session_id,
		"imageUrl": result.image_url,
		"history_size": len(creation.history),
	}


async def list_history(request: Request, session_id: str) -> List[Dict[str, Any]]:
	"""Return the session history, newest first."""
	creation = _session(request, session_id).creation
	return [
		{"index": index, "prompt": entry.prompt, "src": entry.src}
		for index, entry in enumerate(creation.history)
	]


async def get_history_thumbnail(request: Request, session_id: str, index: int) -> Response:
	"""Return a PNG thumbnail for one history entry."""
	creation = _session(request, session_id).creation
	if index < 0 or index >= len(creation.history):
		raise NotFoundError(f"History entry {index} not found")
	try:
		png = ThumbnailGenerator().create_thumbnail_from_data_uri(creation.history[index].src)
	except ValueError as exc:
		raise StudioError("Failed to render thumbnail.", details=str(exc)) from exc
	return Response(content=png, media_type="image/png")


async def reset_session(request: Request, session_id: str) -> Dict[str, Any]:
	"""Start a new creation: clear chat, prompt, image and error; keep history."""
	session = _session(request, session_id)
	session.conversation.reset()
	session.creation.reset()
	return _snapshot(session)
