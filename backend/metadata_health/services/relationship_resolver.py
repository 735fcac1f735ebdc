"""Resolve a provider's declared clients into client attribute records."""

from typing import Any

from metadata_health.services.entity_index import EntityIndex


def resolve_provider_clients(index: EntityIndex, provider_id: str) -> list[dict[str, Any]]:
    """Client attribute records for a provider, in declared order.

    Unknown client ids are dropped. Client stats are not merged in.
    """
    provider = index.providers_attributes.get(provider_id)
    if provider is None:
        return []

    clients = []
    for client_id in provider.client_ids:
        client = index.clients_attributes.get(client_id)
        if client is not None:
            clients.append(client.to_dict())
    return clients
