from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from scenario_hub.db.session import Base


class ScenarioMetadata(Base):
    __tablename__ = "scenario_metadata"
    __table_args__ = (
        Index("idx_scenarios_unique_name", "name", unique=True),
        CheckConstraint("time >= 0", name="ck_scenarios_time_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    author = Column(String, nullable=False)
    time = Column(Float, nullable=False)
    uuid = Column(String(36), nullable=False, unique=True)
    created = Column(DateTime(timezone=True), nullable=False, index=True)
    # deleting a user must never take their scenarios with them
    created_by = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)

    creator = relationship("User")
