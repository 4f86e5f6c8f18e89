from typing import Generator, Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from scenario_hub.core.config import get_settings
from scenario_hub.core.errors import Unauthenticated
from scenario_hub.db.session import SessionLocal
from scenario_hub.models.user import User
from scenario_hub.services import auth as auth_service
from scenario_hub.services.storage import BundleStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_bundle_store() -> BundleStore:
    return BundleStore(get_settings().storage_root)


def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    if not authorization:
        raise Unauthenticated("Missing Authorization header")

    # clients send either the bare token or "Bearer <token>"
    scheme, _, credentials = authorization.partition(" ")
    token = credentials.strip() if scheme.lower() == "bearer" and credentials else authorization.strip()
    return auth_service.resolve_token(db, token)
