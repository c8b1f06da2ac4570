"""Engine and session factory for the tenant configuration database"""

from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from boleto_gateway.config import settings

# One short read per webhook; pre-ping drops connections the server closed
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    pool_recycle=settings.database_pool_recycle_seconds,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Request-scoped session; closed once the response is sent"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
