import logging
from datetime import UTC, datetime
from typing import List

from pymongo import DESCENDING, MongoClient


class HistoryStorage:
    indexes = ["created_at"]
    max_items = 10

    def __init__(self, db: MongoClient) -> None:
        self._db: MongoClient = db
        self._log = logging.getLogger("history")

    def prepare(self) -> None:
        for index in self.indexes:
            try:
                self._db.history.create_index(index)
            except Exception as e:
                self._log.warning(
                    "Can't create index %s. May be already exists. Info: %s", index, e
                )

    def add(self, message: str, intensity: int, responses: List[str]) -> dict:
        """Store a generation and keep only the newest ``max_items`` entries"""
        item = {
            "message": message,
            "intensity": intensity,
            "responses": list(responses),
            "created_at": datetime.now(UTC),
        }
        self._db.history.insert_one(item)
        self._trim()
        return item

    def get_recent(self, limit: int = max_items) -> List[dict]:
        cursor = (
            self._db.history.find({}, projection={"_id": 0})
            .sort("created_at", DESCENDING)
            .limit(limit)
        )
        return list(cursor)

    def clear(self) -> int:
        result = self._db.history.delete_many({})
        return result.deleted_count

    def _trim(self) -> None:
        stale = (
            self._db.history.find({}, projection={"_id": 1})
            .sort("created_at", DESCENDING)
            .skip(self.max_items)
        )
        stale_ids = [doc["_id"] for doc in stale]
        if stale_ids:
            self._db.history.delete_many({"_id": {"$in": stale_ids}})
