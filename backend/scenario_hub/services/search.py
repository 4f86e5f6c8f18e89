from typing import Optional
from sqlalchemy.orm import Session

from scenario_hub.models.scenario import ScenarioMetadata

DEFAULT_LIMIT = 50


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def find_scenarios(db: Session, query: Optional[str] = None, limit: int = DEFAULT_LIMIT, offset: int = 0):
    """Newest scenarios first, optionally only those whose name contains ``query`` (case-insensitive)."""
    q = db.query(ScenarioMetadata)
    if query and query.strip():
        pattern = f"%{_escape_like(query)}%"
        q = q.filter(ScenarioMetadata.name.ilike(pattern, escape="\\"))
    return (
        q.order_by(ScenarioMetadata.created.desc(), ScenarioMetadata.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def find_first_by_field(db: Session, field: str, value) -> Optional[ScenarioMetadata]:
    column = getattr(ScenarioMetadata, field)
    return db.query(ScenarioMetadata).filter(column == value).first()
