"""Generic base class for Cosmos DB container operations."""

import logging
from typing import Any, Generic, TypeVar

from azure.cosmos import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


def create_cosmos_client(
    connection_string: str | None = None,
    endpoint: str | None = None,
    key: str | None = None,
) -> CosmosClient:
    """Create a Cosmos DB client.

    A connection string wins over endpoint settings. Without a key the client
    authenticates with the ambient managed identity.

    Args:
        connection_string: Full Cosmos DB connection string
        endpoint: Cosmos DB endpoint URL
        key: Cosmos DB account key

    Returns:
        CosmosClient instance
    """
    if connection_string:
        return CosmosClient.from_connection_string(connection_string)

    if not endpoint:
        raise ValueError("AZURE_COSMOSDB_ENDPOINT or AZURE_COSMOSDB_CONNECTION_STRING is required")

    if key:
        return CosmosClient(url=endpoint, credential=key)

    # Use managed identity
    return CosmosClient(url=endpoint, credential=DefaultAzureCredential())


class BaseCosmosClient(Generic[T]):
    """Infrastructure layer: generic document operations on one container."""

    def __init__(self, container: ContainerProxy) -> None:
        """Wrap an existing container client.

        Args:
            container: Container proxy obtained during startup
        """
        self.container = container
        self.container_name = container.id

    @staticmethod
    def _strip_system_fields(item: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}

    def create_item(self, item: T) -> dict:
        """Create an item in Cosmos DB.

        Args:
            item: Pydantic model instance to create

        Returns:
            Created item as dictionary (with Cosmos system fields removed)
        """
        try:
            created = self.container.create_item(body=item.model_dump(mode="json"))
            logger.info("Created item %s in container %s", created["id"], self.container_name)
            return self._strip_system_fields(created)
        except Exception as e:
            logger.error("Failed to create item in %s: %s", self.container_name, e)
            raise

    def read_item(self, item_id: str, partition_key: str) -> dict | None:
        """Read an item from Cosmos DB.

        Returns:
            Item as dictionary (with Cosmos system fields removed), or None if not found
        """
        try:
            item = self.container.read_item(item=item_id, partition_key=partition_key)
            logger.debug("Read item %s from container %s", item_id, self.container_name)
            return self._strip_system_fields(item)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found in container %s", item_id, self.container_name)
            return None
        except Exception as e:
            logger.error("Failed to read item %s from %s: %s", item_id, self.container_name, e)
            raise

    def replace_item(self, item_id: str, item: T) -> dict:
        """Replace an item in Cosmos DB (full replace).

        Args:
            item_id: Item ID
            item: Pydantic model instance holding the new document

        Returns:
            Replaced item as dictionary (with Cosmos system fields removed)
        """
        try:
            replaced = self.container.replace_item(item=item_id, body=item.model_dump(mode="json"))
            logger.info("Replaced item %s in container %s", item_id, self.container_name)
            return self._strip_system_fields(replaced)
        except CosmosResourceNotFoundError:
            logger.error("Item %s not found for replace in %s", item_id, self.container_name)
            raise
        except Exception as e:
            logger.error("Failed to replace item %s in %s: %s", item_id, self.container_name, e)
            raise

    def query_items(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[dict]:
        """Run a cross-partition query.

        Args:
            query: SQL query string
            parameters: Optional query parameters

        Returns:
            List of items as dictionaries
        """
        try:
            items = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters,
                    enable_cross_partition_query=True,
                )
            )
            logger.debug("Queried %d items from container %s", len(items), self.container_name)
            return [self._strip_system_fields(item) for item in items]
        except Exception as e:
            logger.error("Failed to query items from %s: %s", self.container_name, e)
            raise

    def delete_item(self, item_id: str, partition_key: str) -> bool:
        """Delete an item from Cosmos DB.

        Returns:
            True if the item was deleted, False if it did not exist
        """
        try:
            self.container.delete_item(item=item_id, partition_key=partition_key)
            logger.info("Deleted item %s from container %s", item_id, self.container_name)
            return True
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for deletion in %s", item_id, self.container_name)
            return False
        except Exception as e:
            logger.error("Failed to delete item %s from %s: %s", item_id, self.container_name, e)
            raise
