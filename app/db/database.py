import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from app.services.exceptions import PersistenceError

load_dotenv()

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
DATA_DIR = os.getenv("DATA_DIR", "data")
STORAGE_KEY = os.getenv("STORAGE_KEY", "wellbeingEntries")
MONGO_URI = os.getenv("MONGO_URI")
DB_NAME = os.getenv("DB_NAME")
KV_COLLECTION = os.getenv("KV_COLLECTION", "kv_store")

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Flat key-value storage, one file per key under ``data_dir``."""

    def __init__(self, data_dir=DATA_DIR):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[bytes]:
        # Raw bytes, decoding is left to the reader
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            logger.error("Could not read %s: %s", path, e, exc_info=True)
            raise PersistenceError(f"Could not read record '{key}'") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            # Readers see either the old payload or the new one
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error("Could not write %s: %s", path, e, exc_info=True)
            raise PersistenceError(f"Could not write record '{key}'") from e


class MongoStorage:
    """Key-value storage on a Mongo collection, one document per key."""

    def __init__(self, collection):
        self.collection = collection

    def get_item(self, key: str) -> Optional[str]:
        try:
            doc = self.collection.find_one({"_id": key})
        except PyMongoError as e:
            logger.error("Mongo read of '%s' failed: %s", key, e, exc_info=True)
            raise PersistenceError(f"Could not read record '{key}'") from e
        if doc is None:
            return None
        return doc.get("value")

    def set_item(self, key: str, value: str) -> None:
        try:
            self.collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)
        except PyMongoError as e:
            logger.error("Mongo write of '%s' failed: %s", key, e, exc_info=True)
            raise PersistenceError(f"Could not write record '{key}'") from e


def connect_mongo(uri=MONGO_URI, db_name=DB_NAME):
    if not uri or not db_name:
        raise PersistenceError("MONGO_URI and DB_NAME must be set for the mongo backend")
    try:
        client = MongoClient(uri)
        client.admin.command("ping")
    except ConnectionFailure as e:
        logger.error("Could not connect to MongoDB: %s", e, exc_info=True)
        raise PersistenceError("Database connection failed") from e
    logger.info("Connected to MongoDB database '%s'", db_name)
    return client[db_name]


@lru_cache
def get_storage():
    if STORAGE_BACKEND == "mongo":
        return MongoStorage(connect_mongo()[KV_COLLECTION])
    if STORAGE_BACKEND != "file":
        raise ValueError(f"Unknown STORAGE_BACKEND: {STORAGE_BACKEND}")
    logger.info("Using file storage in '%s'", DATA_DIR)
    return JsonFileStorage(DATA_DIR)
