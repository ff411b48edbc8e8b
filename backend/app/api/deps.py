from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.session_source import SqlSessionSource


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_source(db: Session = Depends(get_db)) -> SqlSessionSource:
    return SqlSessionSource(db)
