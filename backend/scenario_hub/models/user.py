from sqlalchemy import Column, Integer, String, DateTime, Boolean, Index, func
from scenario_hub.db.session import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (Index("idx_users_unique_name", "name", unique=True),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
