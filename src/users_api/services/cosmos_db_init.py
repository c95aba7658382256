"""Cosmos DB initialization service."""

import logging

from azure.cosmos import ContainerProxy, CosmosClient, DatabaseProxy, PartitionKey

from users_api.config import Settings
from users_common.infra.cosmos.cosmos_base import create_cosmos_client

logger = logging.getLogger(__name__)

USERS_PARTITION_KEY = "/id"


class CosmosDbInitializer:
    """Create the database and users container if they don't exist."""

    def __init__(self, settings: Settings):
        """Initialize the initializer.

        Args:
            settings: Application settings with Cosmos DB configuration
        """
        self.settings = settings
        self.client: CosmosClient | None = None
        self.database: DatabaseProxy | None = None

    @property
    def is_emulator(self) -> bool:
        # Emulator typically requires provisioned throughput
        target = self.settings.azure_cosmosdb_endpoint or self.settings.azure_cosmosdb_connection_string or ""
        return "localhost" in target.lower() or "127.0.0.1" in target

    def connect(self) -> None:
        """Create connection to Cosmos DB."""
        self.client = create_cosmos_client(
            connection_string=self.settings.azure_cosmosdb_connection_string,
            endpoint=self.settings.azure_cosmosdb_endpoint,
            key=self.settings.azure_cosmosdb_key,
        )
        logger.info("Created Cosmos DB client (emulator=%s)", self.is_emulator)

    def initialize_database(self) -> DatabaseProxy:
        """Create database if it doesn't exist."""
        if self.client is None:
            raise RuntimeError("connect() must be called before initialize_database()")
        self.database = self.client.create_database_if_not_exists(id=self.settings.database_name)
        logger.info("Database '%s' initialized", self.settings.database_name)
        return self.database

    def initialize_users_container(self) -> ContainerProxy:
        """Create the users container if it doesn't exist."""
        if self.database is None:
            raise RuntimeError("initialize_database() must be called before initialize_users_container()")

        options = {"offer_throughput": 400} if self.is_emulator else {}
        container = self.database.create_container_if_not_exists(
            id=self.settings.users_container,
            partition_key=PartitionKey(path=USERS_PARTITION_KEY),
            **options,
        )
        logger.info(
            "Container '%s' initialized with partition key '%s'",
            self.settings.users_container,
            USERS_PARTITION_KEY,
        )
        return container

    def initialize(self) -> ContainerProxy:
        """Run full initialization: connect, create database and container."""
        self.connect()
        self.initialize_database()
        container = self.initialize_users_container()
        logger.info("Cosmos DB initialization completed successfully")
        return container


async def initialize_cosmos_db(settings: Settings) -> ContainerProxy:
    """Initialize Cosmos DB during application startup.

    Failure is fatal: the error is logged and re-raised so the server stops
    before accepting requests.

    Args:
        settings: Application settings

    Returns:
        The users container
    """
    initializer = CosmosDbInitializer(settings)
    try:
        return initializer.initialize()
    except Exception as e:
        logger.critical("Failed to initialize Cosmos DB: %s", e)
        raise
