from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from publicid.core.config import settings
from publicid.core.errors import BandExhausted, DomainTooLarge, InvalidAlphabet, InvalidLength
from publicid.db.Connection import database
from publicid.schemas.public_id import PublicIdCreateRequest, PublicIdResponse
from publicid.services.generator import PublicIdGenerator
from publicid.services.providers import (
    DatabaseCounter,
    DatabaseSecretProvider,
    RedisCounter,
    RedisSecretProvider,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_generator(db: Session = Depends(database.get_db)) -> PublicIdGenerator:
    if settings.PUBLIC_ID_BACKEND == "redis":
        return PublicIdGenerator(
            RedisSecretProvider(database.redis_client),
            RedisCounter(database.redis_client, settings.PUBLIC_ID_COUNTER_KEY),
        )
    return PublicIdGenerator(DatabaseSecretProvider(db), DatabaseCounter(db))


@router.post("/v1/public-ids", response_model=PublicIdResponse, status_code=status.HTTP_201_CREATED)
def create_public_id_endpoint(id_request: PublicIdCreateRequest,
                              generator: PublicIdGenerator = Depends(get_generator)):
    try:
        public_id = generator.generate(id_request.length, id_request.alphabet_type)
    except (InvalidLength, InvalidAlphabet, DomainTooLarge) as e:
        logger.warning(f"Rejected public id request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except BandExhausted as e:
        logger.error(f"Public id band exhausted: {e}")
        raise HTTPException(status_code=409, detail=str(e))

    logger.info(f"API success: issued public id of length {id_request.length} ({id_request.alphabet_type})")
    return PublicIdResponse(
        public_id=public_id,
        length=id_request.length,
        alphabet=id_request.alphabet_type,
    )
