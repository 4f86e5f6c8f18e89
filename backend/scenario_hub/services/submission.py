"""Scenario submission: validate the upload, then persist record and bundle together.

The record is inserted with ``flush`` so unique-index violations surface
before anything touches the disk. Files are written next, and only then is
the transaction committed. If writing the files or the commit fails, the
transaction is rolled back and the bundle directory removed, so a committed
record always has its files and no files outlive a failed submission.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from scenario_hub.core.errors import (
    DuplicateName,
    FileWriteError,
    MissingFile,
    PersistenceError,
    ScenarioHubError,
)
from scenario_hub.models.scenario import ScenarioMetadata
from scenario_hub.models.user import User
from scenario_hub.schemas.scenario import ScenarioForm
from scenario_hub.services.identity import generate_scenario_id
from scenario_hub.services.metadata import parse_info, validate_consistency
from scenario_hub.services.search import find_first_by_field
from scenario_hub.services.storage import INFO_FILENAME, SCRIPT_FILENAME, BundleStore

logger = logging.getLogger(__name__)


def require_file(data: Optional[bytes], filename: str) -> bytes:
    if not data:
        raise MissingFile(filename)
    return data


def _insert_record(db: Session, record: ScenarioMetadata) -> None:
    name = record.name
    db.add(record)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        if find_first_by_field(db, "name", name) is not None:
            raise DuplicateName(f"A scenario named {name!r} already exists") from exc
        logger.exception("Record store rejected scenario %r", name)
        raise PersistenceError("Failed to save scenario metadata") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Record store failed while saving scenario %r", name)
        raise PersistenceError("Failed to save scenario metadata") from exc


def submit_scenario(
    db: Session,
    store: BundleStore,
    user: User,
    info_bytes: Optional[bytes],
    script_bytes: Optional[bytes],
    form: ScenarioForm,
) -> ScenarioMetadata:
    user_id = user.id
    try:
        info_bytes = require_file(info_bytes, INFO_FILENAME)
        script_bytes = require_file(script_bytes, SCRIPT_FILENAME)
        doc = parse_info(info_bytes)
        time = validate_consistency(doc, form)
    except ScenarioHubError as exc:
        logger.warning("Rejected scenario upload from user %s: %s", user_id, exc.message)
        raise

    scenario_id = generate_scenario_id()
    record = ScenarioMetadata(
        name=doc.name,
        author=doc.author,
        time=time,
        uuid=scenario_id,
        created=datetime.now(timezone.utc),
        created_by=user_id,
    )
    try:
        _insert_record(db, record)
    except DuplicateName as exc:
        logger.warning("Rejected scenario upload from user %s: %s", user_id, exc.message)
        raise

    try:
        store.write_bundle(scenario_id, info_bytes, script_bytes)
    except (OSError, ValueError) as exc:
        db.rollback()
        store.remove_bundle(scenario_id)
        logger.exception("Failed to write bundle %s", scenario_id)
        raise FileWriteError(f"Failed to save scenario files for {scenario_id}") from exc

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        store.remove_bundle(scenario_id)
        logger.exception("Failed to commit scenario %s", scenario_id)
        raise PersistenceError("Failed to save scenario metadata") from exc

    db.refresh(record)
    logger.info("Created scenario %r (%s) for user %s", record.name, scenario_id, user_id)
    return record
