"""Prompt refinement conversation: transcript, pending flag, and final prompt."""

from __future__ import annotations

import enum
import itertools
import logging
from typing import Iterator, List, Optional, Sequence

from models.studio_models import ASSISTANT_ROLE, USER_ROLE, ChatMessage
from services.errors import InvalidRequestError, SessionBusyError, StudioError, UpstreamTransportError, error_message
from services.gemini.prompt_enhancer import PromptEnhancer

LOGGER = logging.getLogger(__name__)


class ConversationState(str, enum.Enum):
	IDLE = "idle"
	AWAITING_ENHANCEMENT = "awaiting_enhancement"


def final_prompt(messages: Sequence[ChatMessage], pending: bool = False) -> str:
	"""Return the prompt ready for generation.

	The value only moves forward once a turn completes: while an enhancement
	is pending it stays at the last assistant reply that preceded the
	pending submission. Empty until an assistant message exists.
	"""
	candidates = messages
	if pending and messages and messages[-1].role == USER_ROLE:
		candidates = messages[:-1]
	for message in reversed(candidates):
		if message.role == ASSISTANT_ROLE:
			return message.content
	return ""


class Conversation:
	"""Chat transcript driven through the prompt enhancer, one turn at a time."""

	def __init__(self, enhancer: PromptEnhancer, ids: Optional[Iterator[int]] = None) -> None:
		self.enhancer = enhancer
		self._ids = ids or itertools.count(1)
		self.messages: List[ChatMessage] = []
		self.state = ConversationState.IDLE
		self.error: Optional[str] = None

	@property
	def pending(self) -> bool:
		return self.state is ConversationState.AWAITING_ENHANCEMENT

	@property
	def can_submit(self) -> bool:
		return not self.pending

	@property
	def final_prompt(self) -> str:
		return final_prompt(self.messages, self.pending)

	def _append(self, role: str, content: str) -> ChatMessage:
		message = ChatMessage(id=next(self._ids), role=role, content=content)
		self.messages.append(message)
		return message

	async def submit(self, text: str) -> ChatMessage:
		"""Send one user idea to the enhancer and return the assistant reply.

		Raises:
			SessionBusyError: If an enhancement is already pending.
			InvalidRequestError: If the text is blank.
			StudioError: If the enhancement fails; the conversation is back to idle.
		"""
		if not self.can_submit:
			raise SessionBusyError("An enhancement request is already in progress.")
		cleaned = (text or "").strip()
		if not cleaned:
			raise InvalidRequestError("Message text is required.")

		self._append(USER_ROLE, cleaned)
		self.state = ConversationState.AWAITING_ENHANCEMENT
		self.error = None
		try:
			reply = await self.enhancer.enhance(cleaned)
		except StudioError as exc:
			self.error = exc.message
			raise
		except Exception as exc:  # pylint: disable=broad-exception-caught
			LOGGER.exception("Unexpected enhancement failure")
			self.error = error_message(exc)
			raise UpstreamTransportError("Failed to enhance prompt.", details=self.error) from exc
		finally:
			self.state = ConversationState.IDLE

		return self._append(ASSISTANT_ROLE, reply)

	def reset(self) -> None:
		"""Start a new creation; message ids keep increasing."""
		if self.pending:
			raise SessionBusyError("Cannot reset while an enhancement request is in progress.")
		self.messages = []
		self.error = None
		self.state = ConversationState.IDLE
