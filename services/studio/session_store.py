"""Simple in-memory store for prompt studio sessions."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Dict
from uuid import uuid4

from services.gemini.image_generator import ImageGenerationService
from services.gemini.prompt_enhancer import PromptEnhancer
from services.studio.conversation import Conversation
from services.studio.creation import Creation


@dataclass
class StudioSession:
	"""Conversation and creation pipelines owned by one browser session."""

	session_id: str
	conversation: Conversation
	creation: Creation
	created_at: float = field(default_factory=lambda: time.time())


class StudioSessionStore:
	"""Manage studio sessions for the lifetime of the process."""

	def __init__(self, enhancer: PromptEnhancer, generator: ImageGenerationService) -> None:
		self.enhancer = enhancer
		self.generator = generator
		self._sessions: Dict[str, StudioSession] = {}

	def __len__(self) -> int:
		return len(self._sessions)

	def create(self) -> StudioSession:
		"""Create a new session with empty conversation and history."""
		session_id = uuid4().hex
		session = StudioSession(
			session_id=session_id,
			conversation=Conversation(self.enhancer, ids=itertools.count(1)),
			creation=Creation(self.generator),
		)
		self._sessions[session_id] = session
		return session

	def get(self, session_id: str) -> StudioSession:
		"""Return a session or raise KeyError if missing."""
		session = self._sessions.get(session_id)
		if session is None:
			raise KeyError(f"Session {session_id} not found")
		return session

	def delete(self, session_id: str) -> None:
		self.get(session_id)
		del self._sessions[session_id]
