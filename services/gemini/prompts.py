"""Prompt helpers for photographic prompt enhancement."""

from __future__ import annotations

ENHANCEMENT_TEMPLATE = """You are a creative partner that helps the user enhance their prompts following Google's templates, guidelines and docs for using the Gemini 2.5 Flash image model. It helps take a basic prompt and add things like scene camera, angle, lighting, mode, photograph, look, etc. this will only be used for different kinds of photographic prompts. Never for any other art style.

The user wants a photorealistic image. Use photography terms. Mention camera angles, lens types, lighting, and fine details to guide the model toward a photorealistic result.

Here is the template to follow:
A photorealistic [shot type] of [subject], [action or expression], set in [environment]. The scene is illuminated by [lighting description], creating a [mood] atmosphere. Captured with a [camera/lens details], emphasizing [key textures and details]. The image should be in a [aspect ratio] format.

There may be variations, i.e. professional dslr photo vs iPhone selfie vs SOOC jpg vs VSCO Instagram influencer style etc.
Don't go overboard with the prompt enhancement - no "captivating", vivid, dramatic, etc. The goal is to look like real photos.

Based on the user's input, generate a new, enhanced prompt that follows this structure.

User input: "{prompt}\""""


def enhancement_prompt(user_input: str) -> str:
	"""Return the full instruction sent to the text model for one user idea."""
	return ENHANCEMENT_TEMPLATE.replace("{prompt}", user_input, 1)
