from pydantic import BaseModel, Field

from publicid.core.config import settings

# Request DTOs
class PublicIdCreateRequest(BaseModel):
    # alphabet_type is the Python field, 'alphabet' is the JSON key.
    # Range and name checks happen in the generator so the API reports the same errors.
    length: int = settings.PUBLIC_ID_DEFAULT_LENGTH
    alphabet_type: str = Field(settings.PUBLIC_ID_DEFAULT_ALPHABET, alias="alphabet")

    model_config = {"populate_by_name": True}


# Response DTOs
class PublicIdResponse(BaseModel):
    public_id: str
    length: int
    alphabet: str


class BandInfoResponse(BaseModel):
    length: int
    alphabet: str
    base: int
    min_idx: int
    capacity: int
    bits: int
    rounds: int
    expected_evaluations: float
