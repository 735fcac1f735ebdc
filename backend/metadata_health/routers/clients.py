"""Client routes: listings, merged details, attributes, stats."""

from fastapi import APIRouter, Depends, HTTPException

from metadata_health.dependencies import get_dataset
from metadata_health.schemas.envelope import EntityResponse, ListingResponse
from metadata_health.services.dataset_service import DatasetService, NotFound

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=ListingResponse, summary="List All Clients")
async def list_clients(dataset: DatasetService = Depends(get_dataset)):
    """All clients with their attributes, relationships and stats."""
    listing = await dataset.list_clients()
    return {"data": listing.data, "meta": {"total": listing.total, "timestamp": listing.timestamp}}


@router.get("/attributes", response_model=ListingResponse, summary="List All Client Attributes")
async def list_client_attributes(dataset: DatasetService = Depends(get_dataset)):
    """All clients with their attributes and relationships (no stats)."""
    listing = await dataset.list_client_attributes()
    return {"data": listing.data, "meta": {"total": listing.total, "timestamp": listing.timestamp}}


@router.get(
    "/{client_id}",
    response_model=EntityResponse,
    summary="Get Client Details",
    responses={404: {"description": "Client not found"}},
)
async def get_client(client_id: str, dataset: DatasetService = Depends(get_dataset)):
    """One client with its attributes, relationships and stats."""
    result = await dataset.get_client(client_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}


@router.get(
    "/{client_id}/attributes",
    response_model=EntityResponse,
    summary="Get Client Attributes",
    responses={404: {"description": "Client attributes not found"}},
)
async def get_client_attributes(client_id: str, dataset: DatasetService = Depends(get_dataset)):
    """Only the attributes and relationships of a client."""
    result = await dataset.get_client_attributes(client_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}


@router.get(
    "/{client_id}/stats",
    response_model=EntityResponse,
    summary="Get Client Stats",
    responses={404: {"description": "Client stats not found"}},
)
async def get_client_stats(client_id: str, dataset: DatasetService = Depends(get_dataset)):
    """The stats record of a client."""
    result = await dataset.get_client_stats(client_id)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.detail)
    return {"data": result}
