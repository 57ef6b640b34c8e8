"""
MongoDB adapter: connect-or-fallback startup and small document helpers.
If the configured MongoDB is missing or unreachable, an in-memory database
is provisioned instead.
"""
import logging
from collections import namedtuple

import mongomock
from bson import ObjectId
from flask import current_app
from pymongo import ASCENDING, MongoClient

from onlineexam.config import DEFAULT_DB_NAME

logger = logging.getLogger(__name__)

DatabaseHandle = namedtuple("DatabaseHandle", ["client", "db", "in_memory"])


def connect(uri, dbname=DEFAULT_DB_NAME):
    """
    Connect to MongoDB, falling back to an in-memory instance.
    Only raises when the in-memory fallback itself cannot be provisioned.
    """
    if uri:
        client = None
        try:
            client = MongoClient(uri, serverSelectionTimeoutMS=3000)
            client.admin.command("ping")
            db = client.get_default_database(default=dbname)
        except Exception as e:
            logger.warning(
                "[MONGO] failed to connect to MONGO_URI, starting in-memory MongoDB: %s", e
            )
            if client is not None:
                client.close()
        else:
            # A reachable database is kept even if its indexes cannot be built
            try:
                ensure_indexes(db)
            except Exception as e:
                logger.error("[MONGO] index setup failed on MONGO_URI database: %s", e)
            logger.info("[MONGO] connected (MONGO_URI) db=%s", db.name)
            return DatabaseHandle(client, db, False)

    client = start_in_memory()
    db = client[dbname]
    ensure_indexes(db)
    logger.info("[MONGO] connected (in-memory) db=%s", dbname)
    return DatabaseHandle(client, db, True)


def start_in_memory():
    """Provision a fresh, process-local MongoDB substitute."""
    return mongomock.MongoClient()


def ensure_indexes(db):
    db.users.create_index([("email", ASCENDING)], unique=True)
    db.exams.create_index([("createdBy", ASCENDING)])
    db.submissions.create_index(
        [("examId", ASCENDING), ("studentId", ASCENDING)], unique=True
    )


def get_db():
    """Database bound to the current Flask app."""
    return current_app.extensions["mongo"].db


def object_id(value):
    """Parse an id string. Returns None for anything that is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize(doc, drop=()):
    """Render a document for JSON: `_id` becomes `id`, ObjectIds become strings."""
    if doc is None:
        return None
    out = {}
    for key, value in doc.items():
        if key in drop:
            continue
        if key == "_id":
            key = "id"
        if isinstance(value, ObjectId):
            value = str(value)
        out[key] = value
    return out
