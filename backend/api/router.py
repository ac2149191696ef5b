from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import AssessRequest, ComputeCreditsRequest, PhotoRequest
from models.responses import HealthResponse, IntakeResponse
from models.schemas.book_metadata import BookMetadata, CaptureReadiness
from models.schemas.credit_assessment import CreditAssessment
from models.schemas.visual_assessment import VisualAssessment
from services import book_assessor
from services.scoring.engine import compute_credit_assessment
from services.scoring.registry import get_demand_source, get_rarity_source

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        gemini_configured=bool(settings.gemini_api_key),
        models=settings.gemini_models,
    )


@router.post("/intake/readiness", response_model=CaptureReadiness)
@limiter.limit(settings.rate_limit)
async def readiness(request: Request, body: PhotoRequest):
    try:
        photo = book_assessor.decode_photo(body.photo_data_uri, label="front cover")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return await book_assessor.check_readiness(photo)


@router.post("/intake/metadata", response_model=BookMetadata)
@limiter.limit(settings.rate_limit)
async def metadata(request: Request, body: PhotoRequest):
    try:
        photo = book_assessor.decode_photo(body.photo_data_uri, label="front cover")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return await book_assessor.extract_metadata(photo)


@router.post("/intake/assess", response_model=IntakeResponse)
@limiter.limit(settings.rate_limit)
async def assess(request: Request, body: AssessRequest):
    try:
        photos = book_assessor.decode_photos(body.photos)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return await book_assessor.run_intake(photos, body.description, body.context)


@router.post("/credits/compute", response_model=CreditAssessment)
async def compute_credits(body: ComputeCreditsRequest):
    visual = VisualAssessment.model_validate(body.visual_assessment.model_dump())
    return compute_credit_assessment(
        visual,
        body.context,
        demand_source=get_demand_source(settings.demand_source),
        rarity_source=get_rarity_source(settings.rarity_source),
    )
