"""Provider routes: listings, merged details, attributes, stats, clients."""

from fastapi import APIRouter, Depends, HTTPException

from metadata_health.dependencies import get_dataset
from metadata_health.schemas.envelope import EntityListResponse, EntityResponse, ListingResponse
from metadata_health.services.dataset_service import DatasetService, NotFound

router = APIRouter(prefix="/providers", tags=["Providers"])


@router.get("", response_model=ListingResponse, summary="List All Providers")
async def list_providers(dataset: DatasetService = Depends(get_dataset)):
    """All providers with their attributes, relationships and stats."""
    listing = await dataset.list_providers()
    return {"data": listing.data, "meta": {"total": listing.total, "timestamp": listing.timestamp}}


@router.get("/attributes", response_model=ListingResponse, summary="List All Provider Attributes")
async def list_provider_attributes(dataset: DatasetService = Depends(get_dataset)):
    """All providers with their attributes and relationships (no stats)."""
    listing = await dataset.list_provider_attributes()
    return {"data": listing.data, "meta": {"total": listing.total, "timestamp": listing.timestamp}}


@router.get(
    "/{provider_id}",
    response_model=EntityResponse,
    summary="Get Provider Details",
    responses={404: {"description": "Provider not found"}},
)
async def get_provider(provider_id: str, dataset: DatasetService = Depends(get_dataset)):
    """One provider with its attributes, relationships and stats."""
    result = await dataset.get_provider(provider_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}


@router.get(
    "/{provider_id}/attributes",
    response_model=EntityResponse,
    summary="Get Provider Attributes",
    responses={404: {"description": "Provider attributes not found"}},
)
async def get_provider_attributes(provider_id: str, dataset: DatasetService = Depends(get_dataset)):
    """Only the attributes and relationships of a provider."""
    result = await dataset.get_provider_attributes(provider_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}


@router.get(
    "/{provider_id}/stats",
    response_model=EntityResponse,
    summary="Get Provider Stats",
    responses={404: {"description": "Provider stats not found"}},
)
async def get_provider_stats(provider_id: str, dataset: DatasetService = Depends(get_dataset)):
    """The stats record of a provider."""
    result = await dataset.get_provider_stats(provider_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}


@router.get(
    "/{provider_id}/clients",
    response_model=EntityListResponse,
    summary="List Provider Clients",
    responses={404: {"description": "Provider not found or no clients found"}},
)
async def get_provider_clients(provider_id: str, dataset: DatasetService = Depends(get_dataset)):
    """Clients declared by the provider, attributes only."""
    result = await dataset.get_provider_clients(provider_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}
