"""
Generation Store
Persistence of finished generations in the "generations" collection.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from models.generation_schema import GenerationRecord

logger = logging.getLogger("GenerationStore")


def get_generation_collection(db: AsyncIOMotorDatabase):
    return db["generations"]


def _to_object_id(generation_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(generation_id)
    except (InvalidId, TypeError):
        return None


def _to_record(doc: Dict) -> GenerationRecord:
    return GenerationRecord(
        id=str(doc["_id"]),
        content_type=doc["content_type"],
        tone=doc["tone"],
        word_limit=doc["word_limit"],
        input_data=doc.get("input_data", {}),
        generated_content=doc["generated_content"],
        created_at=doc["created_at"],
        updated_at=doc.get("updated_at"),
    )


class GenerationStore:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = get_generation_collection(db)

    async def insert(
        self,
        content_type: str,
        tone: str,
        word_limit: int,
        input_data: Dict[str, str],
        generated_content: str,
    ) -> GenerationRecord:
        doc = {
            "content_type": content_type,
            "tone": tone,
            "word_limit": word_limit,
            "input_data": input_data,
            "generated_content": generated_content,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Saved {content_type} generation {result.inserted_id}")
        return _to_record(doc)

    async def list(self, limit: int = 50) -> List[GenerationRecord]:
        cursor = self.collection.find({}).sort("created_at", -1).limit(limit)
        docs = await cursor.to_list(length=limit)
        return [_to_record(doc) for doc in docs]

    async def get(self, generation_id: str) -> Optional[GenerationRecord]:
        object_id = _to_object_id(generation_id)
        if object_id is None:
            return None
        doc = await self.collection.find_one({"_id": object_id})
        return _to_record(doc) if doc else None

    async def update_content(self, generation_id: str, generated_content: str) -> Optional[GenerationRecord]:
        object_id = _to_object_id(generation_id)
        if object_id is None:
            return None
        result = await self.collection.update_one(
            {"_id": object_id},
            {"$set": {"generated_content": generated_content, "updated_at": datetime.now(timezone.utc)}},
        )
        if result.matched_count == 0:
            return None
        return await self.get(generation_id)

    async def delete(self, generation_id: str) -> bool:
        object_id = _to_object_id(generation_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0
