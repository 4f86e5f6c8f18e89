from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List, Optional

from scenario_hub.api import deps
from scenario_hub.core.config import get_settings
from scenario_hub.core.errors import UploadTooLarge
from scenario_hub.models.user import User
from scenario_hub.schemas.scenario import (
    ScenarioCreated,
    ScenarioDetail,
    ScenarioForm,
    ScenarioSummary,
    SearchRequest,
)
from scenario_hub.services.search import find_first_by_field, find_scenarios
from scenario_hub.services.storage import INFO_FILENAME, SCRIPT_FILENAME, BundleStore, bundle_url
from scenario_hub.services.submission import require_file, submit_scenario

router = APIRouter(prefix="/api", tags=["scenarios"])


async def _read_upload(upload: Optional[UploadFile], limit: int) -> Optional[bytes]:
    if upload is None:
        return None
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise UploadTooLarge(f"{upload.filename or 'upload'} exceeds {limit} bytes")
    return data


@router.post("/createScenario", response_model=ScenarioCreated)
async def create_scenario(
    info_file: Optional[UploadFile] = File(None, alias=INFO_FILENAME),
    script_file: Optional[UploadFile] = File(None, alias=SCRIPT_FILENAME),
    name: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    time: Optional[str] = Form(None),
    db: Session = Depends(deps.get_db),
    store: BundleStore = Depends(deps.get_bundle_store),
    user: User = Depends(deps.get_current_user),
):
    limit = get_settings().max_upload_bytes
    info_bytes = await _read_upload(info_file, limit)
    script_bytes = await _read_upload(script_file, limit)
    require_file(info_bytes, INFO_FILENAME)
    require_file(script_bytes, SCRIPT_FILENAME)
    form = ScenarioForm.from_fields(name=name, author=author, time=time)

    # database and disk I/O stay off the event loop
    scenario = await run_in_threadpool(submit_scenario, db, store, user, info_bytes, script_bytes, form)
    return ScenarioCreated(
        id=scenario.uuid,
        info_file=bundle_url(scenario.uuid, INFO_FILENAME),
        script_file=bundle_url(scenario.uuid, SCRIPT_FILENAME),
    )


@router.post("/findScenarios", response_model=List[ScenarioSummary])
def search_scenarios(payload: Optional[SearchRequest] = None, db: Session = Depends(deps.get_db)):
    query = payload.query if payload else None
    return find_scenarios(db, query, limit=get_settings().search_page_size)


@router.get("/scenarios/{scenario_id}", response_model=ScenarioDetail)
def get_scenario(scenario_id: str, db: Session = Depends(deps.get_db)):
    scenario = find_first_by_field(db, "uuid", scenario_id)
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return ScenarioDetail(
        name=scenario.name,
        author=scenario.author,
        time=scenario.time,
        uuid=scenario.uuid,
        info_file=bundle_url(scenario.uuid, INFO_FILENAME),
        script_file=bundle_url(scenario.uuid, SCRIPT_FILENAME),
    )
