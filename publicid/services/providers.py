"""Secret providers and monotonic counters consumed by the id generator.

Secrets are base64 text of 32 random bytes; the generator keys the
permutation with the UTF-8 bytes of that text. Counters start at 1 and never
hand out the same value twice.
"""
import base64
import logging
import secrets
import threading
from typing import Dict, Optional, Protocol

import redis
from sqlalchemy.orm import Session

from publicid.db import repository

logger = logging.getLogger(__name__)

SECRET_KEY_PREFIX = "public_id_key"
SECRET_BYTES = 32


class SecretProvider(Protocol):
    def get_or_create_secret(self, namespace: str) -> bytes: ...


class Counter(Protocol):
    def next(self) -> int: ...


def new_secret() -> str:
    return base64.b64encode(secrets.token_bytes(SECRET_BYTES)).decode("ascii")


def secret_slot(namespace: str) -> str:
    return f"{SECRET_KEY_PREFIX}:{namespace}"


class DatabaseSecretProvider:
    def __init__(self, db: Session):
        self.db = db

    def get_or_create_secret(self, namespace: str) -> bytes:
        value = repository.insert_config_if_absent(
            self.db,
            secret_slot(namespace),
            new_secret(),
            description=f"Public id permutation key for namespace '{namespace}'",
        )
        return value.encode("utf-8")


class DatabaseCounter:
    def __init__(self, db: Session):
        self.db = db

    def next(self) -> int:
        return repository.issue_sequence_value(self.db)


class RedisSecretProvider:
    def __init__(self, client: redis.Redis):
        self.client = client

    def get_or_create_secret(self, namespace: str) -> bytes:
        key = secret_slot(namespace)
        # SET NX is atomic: only the first writer's key survives
        if self.client.set(key, new_secret(), nx=True):
            logger.info("Created secret for namespace '%s' in Redis", namespace)
        value = self.client.get(key)
        if value is None:
            raise RuntimeError(f"Secret for namespace '{namespace}' missing after SET NX")
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        return value.encode("utf-8")


class RedisCounter:
    def __init__(self, client: redis.Redis, key: str):
        self.client = client
        self.key = key

    def next(self) -> int:
        return int(self.client.incr(self.key))


class InMemorySecretProvider:
    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._secrets: Dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()

    def get_or_create_secret(self, namespace: str) -> bytes:
        with self._lock:
            if namespace not in self._secrets:
                self._secrets[namespace] = new_secret().encode("utf-8")
            return self._secrets[namespace]


class InMemoryCounter:
    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value
