"""Google Gemini API wrapper with model fallback and retry."""

import json
import logging

from google import genai
from google.genai import types

from config import settings
from services.image_parser import ParsedImage
from services.retry import with_backoff

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _build_contents(prompt: str, images: list[ParsedImage] | None) -> list:
    """Interleave labeled photos ahead of the prompt text."""
    contents: list = []
    for image in images or []:
        if image.label:
            contents.append(types.Part.from_text(text=f"Photo ({image.label}):"))
        contents.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
    contents.append(types.Part.from_text(text=prompt))
    return contents


def _parse_json(text: str) -> dict:
    text = text.strip()
    # Strip markdown code fences if present
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    data = json.loads(text)
    if not isinstance(data, dict):
        raise json.JSONDecodeError("Expected a JSON object", text, 0)
    return data


@with_backoff()
async def _generate(client: genai.Client, model: str, contents: list, config) -> str:
    response = await client.aio.models.generate_content(
        model=model,
        contents=contents,
        config=config,
    )
    return response.text or ""


async def generate_json(prompt: str, images: list[ParsedImage] | None = None) -> dict | None:
    """Send a prompt (and optional photos) to Gemini and parse the JSON response.

    Models in settings.gemini_models are tried in order. Returns None when
    no model answers or the answer is not a JSON object.
    """
    client = get_client()
    if client is None:
        return None

    contents = _build_contents(prompt, images)
    config = types.GenerateContentConfig(
        temperature=settings.gemini_temperature,
        max_output_tokens=settings.gemini_max_output_tokens,
        response_mime_type="application/json",
    )

    for model in settings.gemini_models:
        try:
            text = await _generate(client, model, contents, config)
        except Exception as e:
            logger.warning("Gemini model %s failed: %s", model, e)
            continue

        try:
            return _parse_json(text)
        except json.JSONDecodeError as e:
            logger.warning("Gemini model %s returned invalid JSON: %s", model, e)
            continue

    logger.error("Gemini API error: all models failed (%s)", ", ".join(settings.gemini_models))
    return None
