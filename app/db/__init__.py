from .connection import MongoConnection

__all__ = ["MongoConnection"]
