import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from scenario_hub.core.config import get_settings
from scenario_hub.core.errors import IncorrectPassword, Unauthenticated, UnknownUser, UserExists
from scenario_hub.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
settings = get_settings()


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def get_user(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_name(db: Session, name: str) -> Optional[User]:
    return db.query(User).filter(User.name == name).first()


def create_user(db: Session, name: str, email: str, password: str) -> User:
    if get_user_by_name(db, name):
        raise UserExists("Username already taken")
    if get_user(db, email=email):
        raise UserExists("User already exists")

    # e-mail verification is not implemented, accounts start out verified
    user = User(name=name, email=email, hashed_password=get_password_hash(password), verified=True)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise UserExists("User already exists") from exc
    db.refresh(user)
    logger.info("Registered user %r", name)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = get_user(db, email=email)
    if not user:
        raise UnknownUser("User not found")
    if not verify_password(password, user.hashed_password):
        logger.warning("Failed login for %r", email)
        raise IncorrectPassword("Incorrect password")
    return user


def issue_token(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id)}, expires_delta=timedelta(minutes=settings.access_token_expire_minutes)
    )


def resolve_token(db: Session, token: str) -> User:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise Unauthenticated("Invalid or expired token") from exc

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise Unauthenticated("Invalid or expired token")

    user = db.get(User, int(subject))
    if user is None:
        raise Unauthenticated("Invalid or expired token")
    return user
