from fastapi import APIRouter, HTTPException, Query
import logging

from publicid.core.config import settings
from publicid.core.errors import PublicIdError
from publicid.schemas.public_id import BandInfoResponse
from publicid.services.sizing import describe_band

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/bands/{length}", response_model=BandInfoResponse)
def get_band_endpoint(length: int, alphabet: str = Query(settings.PUBLIC_ID_DEFAULT_ALPHABET)):
    """Capacity and expected permutation cost for one (length, alphabet) band."""
    try:
        band = describe_band(length, alphabet, settings.PUBLIC_ID_MIN_DOMAIN_BITS)
    except PublicIdError as e:
        logger.warning(f"Band lookup rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return BandInfoResponse(
        length=band.length,
        alphabet=band.alphabet_type,
        base=band.base,
        min_idx=band.min_idx,
        capacity=band.capacity,
        bits=band.bits,
        rounds=band.rounds,
        expected_evaluations=band.expected_evaluations,
    )
