import logging

from fastapi import APIRouter, Body, HTTPException

from api.models import FieldInfo, FieldListResponse, ParseRequest, ParseResponse, PasteRequest
from diastolic import DEFAULT_REGISTRY, parse
from paste import PasteOutcome, handle_paste

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.get("/fields", response_model=FieldListResponse)
async def list_fields():
    return FieldListResponse(
        fields=[FieldInfo(**info) for info in DEFAULT_REGISTRY.list_fields()],
    )


@router.post("/parse", response_model=ParseResponse)
async def parse_text(request: ParseRequest = Body(...)):
    """Extract diastolic measurements from pasted report text."""
    if not request.text or not request.text.strip():
        raise HTTPException(
            status_code=400,
            detail="Text content is required and cannot be empty.",
        )
    try:
        bag = parse(request.text)
    except Exception as e:
        logger.exception("Report parsing failed: %s", e)
        raise HTTPException(
            status_code=422,
            detail="Failed to parse report text.",
        )
    logger.debug("Parsed %d fields from %d chars", len(bag), len(request.text))
    return ParseResponse(values=bag, count=len(bag))


@router.post("/paste", response_model=PasteOutcome)
async def paste(request: PasteRequest = Body(...)):
    """Decide whether a paste is taken over and which form fields it fills."""
    outcome = handle_paste(
        request.text,
        request.options,
        destinations=request.destinations,
        in_text_entry=request.in_text_entry,
        modifier=request.modifier,
    )
    if outcome.intercept:
        logger.info("Paste intercepted: %d fields extracted, %d assigned", outcome.signal_count, outcome.updated)
    return outcome
