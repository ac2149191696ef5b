"""Orchestrator: book intake from photos to credit award.

Pipeline:
1. Decode and validate the labeled photos
2. Gemini condition grading -> VisualAssessment
   (neutral fallback when the provider is unavailable or returns junk)
3. Deterministic credit engine -> CreditAssessment
"""

import logging

from pydantic import ValidationError

from config import settings
from models.requests import LabeledPhoto
from models.responses import IntakeResponse
from models.schemas.book_metadata import BookMetadata, CaptureReadiness
from models.schemas.contextual_factors import ContextualFactors
from models.schemas.visual_assessment import VisualAssessment
from services import gemini_client, prompt_builder
from services.image_parser import ParsedImage, parse_data_uri, validate_size
from services.scoring.engine import compute_credit_assessment, is_rejected
from services.scoring.registry import get_demand_source, get_rarity_source

logger = logging.getLogger(__name__)

FEATURE_FIELDS = (
    "cover_condition",
    "spine_condition",
    "pages_condition",
    "binding_integrity",
    "cleanliness",
)
FEATURE_MIN = 0
FEATURE_MAX = 10


def decode_photo(data_uri: str, label: str = "") -> ParsedImage:
    """Parse a data URI and enforce the upload size limit. Raises ValueError."""
    image = parse_data_uri(data_uri, label=label)
    validate_size(image.data, settings.max_upload_size_mb)
    return image


def decode_photos(photos: list[LabeledPhoto]) -> list[ParsedImage]:
    if len(photos) > settings.max_photos:
        raise ValueError(f"Too many photos (max {settings.max_photos})")
    return [decode_photo(p.data_uri, label=p.label) for p in photos]


def _normalize_features(raw: dict) -> dict:
    """Coerce provider feature scores to ints within 0-10."""
    data = dict(raw)
    for field in FEATURE_FIELDS:
        if field not in data:
            continue
        try:
            value = round(float(data[field]))
        except (TypeError, ValueError, OverflowError):
            continue  # left for pydantic to reject
        clamped = min(FEATURE_MAX, max(FEATURE_MIN, value))
        if clamped != value:
            logger.warning("Provider %s=%s out of range, clamped to %s", field, value, clamped)
        data[field] = clamped

    if isinstance(data.get("annotation_severity"), str):
        data["annotation_severity"] = data["annotation_severity"].strip().lower()
    if data.get("justification") is None:
        data["justification"] = ""
    return data


def _flag(raw: dict, key: str) -> bool | None:
    value = raw.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


def _fallback_keeping_verdict(raw: dict, reason: str) -> VisualAssessment:
    """Neutral fallback that still honours an explicit reject/incomplete verdict."""
    fallback = VisualAssessment.neutral_fallback(reason)
    update = {}
    if _flag(raw, "should_reject") is True:
        update["should_reject"] = True
    if _flag(raw, "is_complete") is False:
        update["is_complete"] = False
    if update:
        logger.warning("Keeping provider verdict %s on malformed assessment", update)
        return fallback.model_copy(update=update)
    return fallback


def parse_visual_assessment(raw: dict) -> VisualAssessment | None:
    """Validate provider JSON into a VisualAssessment, or None if malformed."""
    try:
        visual = VisualAssessment.model_validate(_normalize_features(raw))
    except ValidationError as e:
        logger.error("Provider returned an invalid visual assessment: %s", e)
        return None

    if not visual.annotations_consistent:
        logger.warning(
            "Inconsistent annotation flags (has_annotations=%s, severity=%s); using severity",
            visual.has_annotations,
            visual.annotation_severity,
        )
    return visual


async def check_readiness(photo: ParsedImage) -> CaptureReadiness:
    data = await gemini_client.generate_json(prompt_builder.build_readiness_prompt(), [photo])
    if data is None:
        logger.warning("Gemini readiness check unavailable")
        return CaptureReadiness(is_ready=False, degraded=True)
    return CaptureReadiness(is_ready=bool(data.get("is_ready", False)))


async def extract_metadata(photo: ParsedImage) -> BookMetadata:
    data = await gemini_client.generate_json(prompt_builder.build_metadata_prompt(), [photo])
    if data is None:
        logger.warning("Gemini metadata extraction unavailable")
        return BookMetadata(degraded=True)
    return BookMetadata(
        title=str(data.get("title") or "").strip(),
        author=str(data.get("author") or "").strip(),
    )


async def assess_visual(photos: list[ParsedImage], description: str) -> tuple[VisualAssessment, bool]:
    """Grade the book's condition. Returns (assessment, degraded)."""
    prompt = prompt_builder.build_condition_prompt(description, [p.label for p in photos])
    data = await gemini_client.generate_json(prompt, photos)

    if data is None:
        logger.warning("Gemini condition assessment unavailable, using neutral fallback")
        return VisualAssessment.neutral_fallback("assessment service unavailable"), True

    visual = parse_visual_assessment(data)
    if visual is None:
        return _fallback_keeping_verdict(data, "assessment response was malformed"), True
    return visual, False


async def run_intake(
    photos: list[ParsedImage],
    description: str,
    context: ContextualFactors,
) -> IntakeResponse:
    """Grade the photos and score the result with the credit engine."""
    visual, degraded = await assess_visual(photos, description)

    credit = compute_credit_assessment(
        visual,
        context,
        demand_source=get_demand_source(settings.demand_source),
        rarity_source=get_rarity_source(settings.rarity_source),
    )
    logger.info(
        "Intake scored: %.2f credits (rejected=%s, degraded=%s)",
        credit.final_credits,
        is_rejected(visual),
        degraded,
    )
    return IntakeResponse(visual_assessment=visual, credit_assessment=credit, degraded=degraded)
