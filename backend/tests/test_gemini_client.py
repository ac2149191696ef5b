import pytest

from config import settings
from services import gemini_client
from services.image_parser import ParsedImage


@pytest.fixture
def fake_client(monkeypatch):
    monkeypatch.setattr(gemini_client, "get_client", lambda: object())


def test_parse_json_plain():
    assert gemini_client._parse_json('{"is_ready": true}') == {"is_ready": True}


def test_parse_json_strips_code_fences():
    text = '```json\n{"title": "Dune", "author": "Frank Herbert"}\n```'
    assert gemini_client._parse_json(text) == {"title": "Dune", "author": "Frank Herbert"}


def test_parse_json_rejects_non_object():
    with pytest.raises(ValueError):
        gemini_client._parse_json("[1, 2, 3]")


def test_build_contents_labels_each_photo():
    images = [
        ParsedImage("front cover", "image/png", b"a"),
        ParsedImage("spine", "image/jpeg", b"b"),
    ]
    contents = gemini_client._build_contents("Grade this book", images)
    # label + image per photo, then the prompt
    assert len(contents) == 5
    assert contents[-1].text == "Grade this book"


@pytest.mark.asyncio
async def test_generate_json_without_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    assert await gemini_client.generate_json("prompt") is None


@pytest.mark.asyncio
async def test_generate_json_falls_back_to_next_model(monkeypatch, fake_client):
    monkeypatch.setattr(settings, "gemini_models", ["primary", "fallback"])
    tried = []

    async def fake_generate(client, model, contents, config):
        tried.append(model)
        if model == "primary":
            raise RuntimeError("404 model not found")
        return '{"is_ready": true}'

    monkeypatch.setattr(gemini_client, "_generate", fake_generate)

    assert await gemini_client.generate_json("prompt") == {"is_ready": True}
    assert tried == ["primary", "fallback"]


@pytest.mark.asyncio
async def test_generate_json_all_models_fail(monkeypatch, fake_client):
    monkeypatch.setattr(settings, "gemini_models", ["primary", "fallback"])

    async def fake_generate(client, model, contents, config):
        raise RuntimeError("503 overloaded")

    monkeypatch.setattr(gemini_client, "_generate", fake_generate)
    assert await gemini_client.generate_json("prompt") is None


@pytest.mark.asyncio
async def test_generate_json_invalid_json(monkeypatch, fake_client):
    async def fake_generate(client, model, contents, config):
        return "I think this book is in great shape!"

    monkeypatch.setattr(gemini_client, "_generate", fake_generate)
    assert await gemini_client.generate_json("prompt") is None


@pytest.mark.asyncio
async def test_generate_json_invalid_json_tries_next_model(monkeypatch, fake_client):
    monkeypatch.setattr(settings, "gemini_models", ["primary", "fallback"])
    tried = []

    async def fake_generate(client, model, contents, config):
        tried.append(model)
        if model == "primary":
            return "Title: Dune"
        return '{"title": "Dune"}'

    monkeypatch.setattr(gemini_client, "_generate", fake_generate)

    assert await gemini_client.generate_json("prompt") == {"title": "Dune"}
    assert tried == ["primary", "fallback"]
