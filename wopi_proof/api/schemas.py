"""
Pydantic schemas for FastAPI endpoints
"""
from typing import List

from pydantic import BaseModel, Field, field_validator

from wopi_proof.core.proof.canonical import (
    check_field_length,
    check_percent_encoding,
    decode_access_token,
)


class ProofHeadersRequest(BaseModel):
    """Request body for proof header generation.

    Lengths and percent escapes are checked here, when the token and URI enter
    the system, so an oversized or malformed value is rejected before it
    reaches the signing path.
    """
    access_token: str = Field(..., description="Access token as sent in the query string (percent-encoded)")
    uri: str = Field(..., description="Full URI of the outbound WOPI request")

    @field_validator("access_token")
    @classmethod
    def access_token_fits(cls, v: str) -> str:
        check_percent_encoding("access_token", v)
        check_field_length("access_token", decode_access_token(v))
        return v

    @field_validator("uri")
    @classmethod
    def uri_fits(cls, v: str) -> str:
        check_field_length("uri", v)
        return v


class NameValue(BaseModel):
    """An ordered header or attribute entry"""
    name: str
    value: str


class ProofHeadersResponse(BaseModel):
    """Proof headers in the order they must be sent"""
    enabled: bool = Field(..., description="Whether proof headers were produced")
    headers: List[NameValue] = Field(default_factory=list)


class DiscoveryAttributesResponse(BaseModel):
    """Attributes of the discovery <proof-key> element"""
    enabled: bool = Field(..., description="Whether a proof key is loaded")
    attributes: List[NameValue] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    proof_key: bool
