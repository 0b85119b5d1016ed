"""Database clients used by the repositories."""

from .mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
