"""Tests for the photographic prompt enhancer."""

import pytest
from google.genai import types

from services.errors import ConfigurationError, InvalidRequestError, UpstreamTransportError
from services.gemini.prompt_enhancer import HARM_CATEGORIES, PromptEnhancer
from services.gemini.prompts import ENHANCEMENT_TEMPLATE, enhancement_prompt


class TestEnhancementPrompt:
    def test_interpolates_user_input(self):
        text = enhancement_prompt("a cat on a windowsill")
        assert text.endswith('User input: "a cat on a windowsill"')
        assert "{prompt}" not in text

    def test_keeps_template_guidance(self):
        assert "[shot type]" in ENHANCEMENT_TEMPLATE
        assert "[aspect ratio]" in ENHANCEMENT_TEMPLATE
        assert "captivating" in ENHANCEMENT_TEMPLATE

    def test_braces_in_user_input_are_kept(self):
        assert 'User input: "{weird} input"' in enhancement_prompt("{weird} input")


class TestPromptEnhancer:
    @pytest.mark.asyncio
    async def test_enhance_returns_model_text(self, fake_client, gemini_response, text_part, enhanced_prompt):
        fake_client.aio.models.generate_content.return_value = gemini_response(text_part(enhanced_prompt))
        enhancer = PromptEnhancer(fake_client)

        reply = await enhancer.enhance("a cat on a windowsill")

        assert reply == enhanced_prompt
        assert "windowsill" in reply
        assert reply != "a cat on a windowsill"

    @pytest.mark.asyncio
    async def test_request_payload(self, fake_client, gemini_response, text_part):
        fake_client.aio.models.generate_content.return_value = gemini_response(text_part("ok"))
        enhancer = PromptEnhancer(fake_client, model="gemini-2.5-flash")

        await enhancer.enhance("  a red bicycle  ")

        kwargs = fake_client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        contents = kwargs["contents"]
        assert len(contents) == 1
        assert contents[0].role == "user"
        assert contents[0].parts[0].text == enhancement_prompt("a red bicycle")

    @pytest.mark.asyncio
    async def test_safety_filters_disabled_for_all_categories(self, fake_client, gemini_response, text_part):
        fake_client.aio.models.generate_content.return_value = gemini_response(text_part("ok"))

        await PromptEnhancer(fake_client).enhance("portrait")

        config = fake_client.aio.models.generate_content.await_args.kwargs["config"]
        categories = {setting.category for setting in config.safety_settings}
        assert categories == set(HARM_CATEGORIES)
        assert all(s.threshold == types.HarmBlockThreshold.BLOCK_NONE for s in config.safety_settings)

    @pytest.mark.asyncio
    async def test_joins_multiple_text_parts(self, fake_client, gemini_response, text_part):
        fake_client.aio.models.generate_content.return_value = gemini_response(
            text_part("A photorealistic "), text_part("close-up")
        )

        assert await PromptEnhancer(fake_client).enhance("x") == "A photorealistic close-up"

    @pytest.mark.asyncio
    async def test_missing_client_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as excinfo:
            await PromptEnhancer(None).enhance("a cat")
        assert excinfo.value.message == "GEMINI_API_KEY is not set"

    @pytest.mark.asyncio
    async def test_blank_prompt_rejected_without_network_call(self, fake_client):
        with pytest.raises(InvalidRequestError):
            await PromptEnhancer(fake_client).enhance("   ")
        fake_client.aio.models.generate_content.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_error_is_converted(self, fake_client):
        fake_client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(UpstreamTransportError) as excinfo:
            await PromptEnhancer(fake_client).enhance("a cat")

        assert excinfo.value.to_payload() == {"error": "Failed to enhance prompt.", "details": "quota exceeded"}

    @pytest.mark.asyncio
    async def test_empty_reply_is_a_failure(self, fake_client, gemini_response):
        fake_client.aio.models.generate_content.return_value = gemini_response()

        with pytest.raises(UpstreamTransportError) as excinfo:
            await PromptEnhancer(fake_client).enhance("a cat")
        assert excinfo.value.details == "The model returned an empty prompt."


class TestPromptEnhancerStream:
    @pytest.mark.asyncio
    async def test_stream_yields_text_chunks(self, fake_client, gemini_response, text_part):
        async def chunks():
            for text in ("A photorealistic ", "", "close-up"):
                yield gemini_response(text_part(text)) if text else gemini_response()

        fake_client.aio.models.generate_content_stream.return_value = chunks()

        stream = await PromptEnhancer(fake_client).stream("a cat")
        collected = [chunk async for chunk in stream]

        assert collected == ["A photorealistic ", "close-up"]

    @pytest.mark.asyncio
    async def test_failure_on_first_chunk_raises_before_streaming(self, fake_client):
        async def chunks():
            raise RuntimeError("All connection attempts failed")
            yield  # pragma: no cover

        fake_client.aio.models.generate_content_stream.return_value = chunks()

        with pytest.raises(UpstreamTransportError) as excinfo:
            await PromptEnhancer(fake_client).stream("a cat")

        assert excinfo.value.to_payload() == {
            "error": "Failed to enhance prompt.",
            "details": "All connection attempts failed",
        }

    @pytest.mark.asyncio
    async def test_stream_without_text_is_a_failure(self, fake_client, gemini_response):
        async def chunks():
            yield gemini_response()

        fake_client.aio.models.generate_content_stream.return_value = chunks()

        with pytest.raises(UpstreamTransportError) as excinfo:
            await PromptEnhancer(fake_client).stream("a cat")
        assert excinfo.value.details == "The model returned an empty prompt."

    @pytest.mark.asyncio
    async def test_mid_stream_failure_propagates(self, fake_client, gemini_response, text_part):
        async def chunks():
            yield gemini_response(text_part("A photorealistic"))
            raise RuntimeError("stream dropped")

        fake_client.aio.models.generate_content_stream.return_value = chunks()

        stream = await PromptEnhancer(fake_client).stream("a cat")
        collected = []
        with pytest.raises(UpstreamTransportError) as excinfo:
            async for chunk in stream:
                collected.append(chunk)

        assert collected == ["A photorealistic"]
        assert excinfo.value.details == "stream dropped"

    @pytest.mark.asyncio
    async def test_stream_requires_client(self):
        with pytest.raises(ConfigurationError):
            await PromptEnhancer(None).stream("a cat")
