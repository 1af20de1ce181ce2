import logging

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


def connect(uri: str, db_name: str) -> MongoClient:
    if not uri or not db_name:
        raise Exception("Set MONGODB_URI and MONGO_DB_NAME in your .env")

    client = MongoClient(uri)
    try:
        client.admin.command("ping")
        logger.info("connected to MongoDB")
    except PyMongoError as e:
        logger.error("connection to MongoDB failed: %s", e)
    return client


def ensure_indexes(db):
    db.users.create_index([("username", ASCENDING)], unique=True)


# FastAPI dependency; the handle is opened by the app lifespan
def get_db(request: Request):
    return request.app.state.db
