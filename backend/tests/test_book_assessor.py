"""Tests for the intake orchestrator (provider boundary + engine wiring)."""

import base64

import pytest

from config import settings
from models.requests import LabeledPhoto
from models.responses import IntakeResponse
from models.schemas.contextual_factors import ContextualFactors
from services import book_assessor, gemini_client
from services.image_parser import ParsedImage

PHOTOS = [
    ParsedImage("front cover", "image/png", b"front"),
    ParsedImage("spine", "image/png", b"spine"),
]

GOOD_RESPONSE = {
    "cover_condition": 9,
    "spine_condition": 9,
    "pages_condition": 8,
    "binding_integrity": 8,
    "cleanliness": 9,
    "has_annotations": False,
    "annotation_severity": "none",
    "is_complete": True,
    "should_reject": False,
    "justification": "Crisp cover, uncreased spine.",
}


def _fake_provider(monkeypatch, response):
    prompts = []

    async def fake_generate_json(prompt, images=None):
        prompts.append((prompt, images))
        return response

    monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)
    return prompts


class TestParseVisualAssessment:
    def test_valid_response(self):
        visual = book_assessor.parse_visual_assessment(GOOD_RESPONSE)
        assert visual is not None
        assert visual.cover_condition == 9
        assert visual.justification == "Crisp cover, uncreased spine."

    def test_out_of_range_scores_clamped(self):
        raw = dict(GOOD_RESPONSE, cover_condition=12, spine_condition=-2, pages_condition=7.6)
        visual = book_assessor.parse_visual_assessment(raw)
        assert visual.cover_condition == 10
        assert visual.spine_condition == 0
        assert visual.pages_condition == 8

    def test_missing_field(self):
        raw = dict(GOOD_RESPONSE)
        del raw["pages_condition"]
        assert book_assessor.parse_visual_assessment(raw) is None

    def test_unknown_severity(self):
        raw = dict(GOOD_RESPONSE, annotation_severity="extreme")
        assert book_assessor.parse_visual_assessment(raw) is None

    def test_inconsistent_annotations_kept(self):
        raw = dict(GOOD_RESPONSE, has_annotations=False, annotation_severity="minor")
        visual = book_assessor.parse_visual_assessment(raw)
        assert visual.annotation_severity == "minor"
        assert visual.annotations_consistent is False

    def test_infinite_score_rejected(self):
        raw = dict(GOOD_RESPONSE, cover_condition=float("inf"))
        assert book_assessor.parse_visual_assessment(raw) is None

    def test_severity_case_normalized(self):
        raw = dict(GOOD_RESPONSE, has_annotations=True, annotation_severity=" Minor ")
        visual = book_assessor.parse_visual_assessment(raw)
        assert visual.annotation_severity == "minor"

    def test_null_justification(self):
        raw = dict(GOOD_RESPONSE, justification=None)
        visual = book_assessor.parse_visual_assessment(raw)
        assert visual.justification == ""


class TestDecodePhotos:
    def test_too_many_photos(self, monkeypatch):
        monkeypatch.setattr(settings, "max_photos", 1)
        uri = "data:image/png;base64," + base64.b64encode(b"img").decode()
        photos = [LabeledPhoto(label="front", data_uri=uri), LabeledPhoto(label="back", data_uri=uri)]
        with pytest.raises(ValueError, match="Too many photos"):
            book_assessor.decode_photos(photos)

    def test_decodes_labels(self):
        uri = "data:image/png;base64," + base64.b64encode(b"img").decode()
        images = book_assessor.decode_photos([LabeledPhoto(label="spine", data_uri=uri)])
        assert images[0].label == "spine"
        assert images[0].data == b"img"


class TestAssessVisual:
    @pytest.mark.asyncio
    async def test_prompt_lists_photo_labels(self, monkeypatch):
        prompts = _fake_provider(monkeypatch, GOOD_RESPONSE)
        visual, degraded = await book_assessor.assess_visual(PHOTOS, "Read once, like new.")
        assert degraded is False
        assert visual.cover_condition == 9
        prompt, images = prompts[0]
        assert "- front cover" in prompt
        assert "- spine" in prompt
        assert "Read once, like new." in prompt
        assert images == PHOTOS

    @pytest.mark.asyncio
    async def test_provider_unavailable_uses_fallback(self, monkeypatch):
        _fake_provider(monkeypatch, None)
        visual, degraded = await book_assessor.assess_visual(PHOTOS, "")
        assert degraded is True
        assert visual.cover_condition == 5
        assert visual.should_reject is False
        assert visual.is_complete is True
        assert "unavailable" in visual.justification

    @pytest.mark.asyncio
    async def test_malformed_response_uses_fallback(self, monkeypatch):
        _fake_provider(monkeypatch, {"verdict": "looks fine"})
        visual, degraded = await book_assessor.assess_visual(PHOTOS, "")
        assert degraded is True
        assert "malformed" in visual.justification

    @pytest.mark.asyncio
    async def test_infinite_score_uses_fallback(self, monkeypatch):
        _fake_provider(monkeypatch, dict(GOOD_RESPONSE, pages_condition=float("-inf")))
        visual, degraded = await book_assessor.assess_visual(PHOTOS, "")
        assert degraded is True
        assert visual.pages_condition == 5

    @pytest.mark.asyncio
    async def test_malformed_response_keeps_rejection(self, monkeypatch):
        raw = dict(GOOD_RESPONSE, should_reject=True, is_complete=False)
        del raw["pages_condition"]
        _fake_provider(monkeypatch, raw)
        visual, degraded = await book_assessor.assess_visual(PHOTOS, "")
        assert degraded is True
        assert visual.should_reject is True
        assert visual.is_complete is False


class TestRunIntake:
    @pytest.mark.asyncio
    async def test_scores_provider_assessment(self, monkeypatch):
        _fake_provider(monkeypatch, GOOD_RESPONSE)
        result = await book_assessor.run_intake(PHOTOS, "", ContextualFactors())
        assert isinstance(result, IntakeResponse)
        assert result.degraded is False
        assert result.credit_assessment.final_credits == 2.8
        assert result.credit_assessment.justification.startswith("Crisp cover, uncreased spine.")

    @pytest.mark.asyncio
    async def test_rejected_book(self, monkeypatch):
        _fake_provider(monkeypatch, dict(GOOD_RESPONSE, should_reject=True, justification="Mould."))
        context = ContextualFactors(is_first_time_donor=True, is_new_book=True)
        result = await book_assessor.run_intake(PHOTOS, "", context)
        assert result.credit_assessment.final_credits == 0
        assert result.credit_assessment.justification.endswith("missing pages.")

    @pytest.mark.asyncio
    async def test_fallback_is_scored(self, monkeypatch):
        _fake_provider(monkeypatch, None)
        result = await book_assessor.run_intake(PHOTOS, "", ContextualFactors())
        assert result.degraded is True
        # neutral fallback: 3 - 1 - 1 - 1 + 0 + 1 = 1 -> 0.5 + demand 0.3
        assert result.credit_assessment.condition_score == 1.0
        assert result.credit_assessment.final_credits == 0.8

    @pytest.mark.asyncio
    async def test_malformed_rejection_pays_nothing(self, monkeypatch):
        raw = dict(GOOD_RESPONSE, should_reject=True, is_complete=False, cover_condition="torn")
        _fake_provider(monkeypatch, raw)
        context = ContextualFactors(is_first_time_donor=True)
        result = await book_assessor.run_intake(PHOTOS, "", context)
        assert result.degraded is True
        assert result.credit_assessment.final_credits == 0


class TestCaptureSteps:
    @pytest.mark.asyncio
    async def test_readiness(self, monkeypatch):
        _fake_provider(monkeypatch, {"is_ready": True})
        result = await book_assessor.check_readiness(PHOTOS[0])
        assert result.is_ready is True
        assert result.degraded is False

    @pytest.mark.asyncio
    async def test_readiness_unavailable(self, monkeypatch):
        _fake_provider(monkeypatch, None)
        result = await book_assessor.check_readiness(PHOTOS[0])
        assert result.is_ready is False
        assert result.degraded is True

    @pytest.mark.asyncio
    async def test_metadata(self, monkeypatch):
        _fake_provider(monkeypatch, {"title": "  The Hobbit ", "author": "J.R.R. Tolkien"})
        result = await book_assessor.extract_metadata(PHOTOS[0])
        assert result.title == "The Hobbit"
        assert result.author == "J.R.R. Tolkien"

    @pytest.mark.asyncio
    async def test_metadata_blank_fields(self, monkeypatch):
        _fake_provider(monkeypatch, {"title": None, "author": ""})
        result = await book_assessor.extract_metadata(PHOTOS[0])
        assert result.title == ""
        assert result.author == ""
        assert result.degraded is False
