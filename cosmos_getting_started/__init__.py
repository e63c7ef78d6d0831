"""Getting started with Azure Cosmos DB: create, point-read and query sample family items."""

__version__ = "0.1.0"
