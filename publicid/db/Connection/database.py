import logging

import redis
from redis.connection import ConnectionPool
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from publicid.core.config import settings

logger = logging.getLogger(__name__)

# Holds the secret slots and, without the Redis backend, the counter
SQLALCHEMY_DATABASE_URL = settings.database_url
_connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(SQLALCHEMY_DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Only touched when PUBLIC_ID_BACKEND=redis; connects on first command
redis_pool = ConnectionPool(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    decode_responses=True,
    max_connections=20,
    socket_connect_timeout=2,
)
redis_client = redis.Redis(connection_pool=redis_pool)


def verify_database_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Public id database unreachable: {e}")
        return False


def verify_redis_connection() -> bool:
    try:
        return bool(redis_client.ping())
    except redis.exceptions.RedisError as e:
        logger.error(f"Public id Redis unreachable: {e}")
        return False
