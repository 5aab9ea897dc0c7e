from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from publicid.db.Models.models import SystemConfig, PublicIdSequence, public_id_seq

logger = logging.getLogger(__name__)


def get_config_value(db: Session, key: str) -> Optional[str]:
    row = db.query(SystemConfig).filter(SystemConfig.key == key).first()
    return row.value if row else None


def insert_config_if_absent(db: Session, key: str, value: str, description: Optional[str] = None) -> str:
    """Store `value` under `key` unless another writer got there first.

    Returns whichever value ended up stored, so concurrent callers converge.
    """
    existing = get_config_value(db, key)
    if existing is not None:
        return existing

    db.add(SystemConfig(key=key, value=value, description=description))
    try:
        db.commit()
        logger.info("Created config slot '%s'", key)
        return value
    except IntegrityError:
        db.rollback()
        logger.info("Config slot '%s' was created concurrently, reading winner", key)

    stored = get_config_value(db, key)
    if stored is None:
        raise RuntimeError(f"Config slot '{key}' vanished after insert conflict")
    return stored


def issue_sequence_value(db: Session) -> int:
    if db.get_bind().dialect.supports_sequences:
        value = db.execute(select(public_id_seq.next_value())).scalar_one()
        db.commit()
        return value

    row = PublicIdSequence()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row.id
