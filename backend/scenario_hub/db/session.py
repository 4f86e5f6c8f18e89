from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from scenario_hub.core.config import get_settings

settings = get_settings()

DATABASE_URL = settings.database_url

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, future=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)

Base = declarative_base()
