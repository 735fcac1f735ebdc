from metadata_health.services.dataset_service import DatasetService, get_dataset as _get_dataset


async def get_dataset() -> DatasetService:
    """Return the process-wide dataset service. Overridden in tests."""
    return _get_dataset()
