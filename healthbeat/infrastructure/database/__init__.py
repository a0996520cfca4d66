"""
Database package - Infrastructure Layer

MongoDB client backing the service catalog and the health check results.
"""

from healthbeat.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
