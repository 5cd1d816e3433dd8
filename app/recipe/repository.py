# 레시피 컬렉션 접근 — motor

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from app.constants import RecipeConfig
from app.db.connection import MongoConnection


class RecipeRepository:
    def __init__(self, connection: MongoConnection, collection_name: str = RecipeConfig.COLLECTION_NAME):
        self.logger = logging.getLogger(__name__)
        self.connection = connection
        self.collection_name = collection_name

    async def _collection(self) -> AsyncIOMotorCollection:
        db = await self.connection.get_database()
        return db[self.collection_name]

    async def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        col = await self._collection()
        result = await col.insert_one(doc)
        return {**doc, "_id": result.inserted_id}

    async def find_all(self) -> List[Dict[str, Any]]:
        # 최신 수정순, 동일 시각은 _id 역순
        col = await self._collection()
        cursor = col.find({}).sort([("updatedAt", -1), ("_id", -1)])
        return await cursor.to_list(length=None)

    async def find_by_id(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        if not ObjectId.is_valid(recipe_id):
            return None
        col = await self._collection()
        return await col.find_one({"_id": ObjectId(recipe_id)})

    async def ensure_indexes(self) -> None:
        col = await self._collection()
        await col.create_index([("updatedAt", -1)])
        await col.create_index([("tags", 1)])
