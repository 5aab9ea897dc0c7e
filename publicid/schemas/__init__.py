# re-export common schemas for simpler imports
from .public_id import PublicIdCreateRequest, PublicIdResponse, BandInfoResponse

__all__ = [
    "PublicIdCreateRequest",
    "PublicIdResponse",
    "BandInfoResponse",
]
