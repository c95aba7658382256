"""Infrastructure layer for external communication."""

from users_common.infra.cosmos.cosmos_base import BaseCosmosClient, create_cosmos_client

__all__ = ["BaseCosmosClient", "create_cosmos_client"]
