from sqlalchemy import BigInteger, Column, String, Integer, DateTime, Sequence
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()

# Singleton configuration slots; the per-namespace public id secret lives here
class SystemConfig(Base):
    __tablename__ = "system_configs"

    key = Column(String, primary_key=True, index=True)
    value = Column(String, nullable=False)
    description = Column(String, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

# Counter on databases with native sequences (Postgres). 64-bit: the larger
# bands hold far more than 2^31 ids.
public_id_seq = Sequence("public_id_seq", start=1, minvalue=1, data_type=BigInteger(), metadata=Base.metadata)

class PublicIdSequence(Base):
    __tablename__ = "public_id_sequence"

    # Counter for databases without sequences: each inserted row's id is the
    # next value. SQLite only autoincrements INTEGER primary keys.
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    issued_at = Column(DateTime, default=datetime.utcnow)
