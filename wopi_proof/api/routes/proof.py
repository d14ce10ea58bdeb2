"""
Proof Endpoints

Exposes the proof service to the collaborators that dispatch WOPI requests and
assemble the discovery document.

Endpoints:
- POST /proof/headers    X-WOPI-TimeStamp / X-WOPI-Proof for one request
- GET  /proof/discovery  value / modulus / exponent for <proof-key>
"""

from fastapi import APIRouter, Depends, Request

from wopi_proof.api.schemas import (
    DiscoveryAttributesResponse,
    NameValue,
    ProofHeadersRequest,
    ProofHeadersResponse,
)
from wopi_proof.core.proof.service import ProofService

router = APIRouter(prefix="/proof", tags=["proof"])


def get_proof_service(request: Request) -> ProofService:
    """The service built at startup and shared by all requests."""
    return request.app.state.proof_service


@router.post("/headers", response_model=ProofHeadersResponse)
async def proof_headers(
    body: ProofHeadersRequest,
    service: ProofService = Depends(get_proof_service),
):
    headers = service.get_proof_headers(body.access_token, body.uri)
    return ProofHeadersResponse(
        enabled=bool(headers),
        headers=[NameValue(name=name, value=value) for name, value in headers],
    )


@router.get("/discovery", response_model=DiscoveryAttributesResponse)
async def discovery_attributes(service: ProofService = Depends(get_proof_service)):
    attributes = service.get_discovery_attributes()
    return DiscoveryAttributesResponse(
        enabled=bool(attributes),
        attributes=[NameValue(name=name, value=value) for name, value in attributes],
    )
