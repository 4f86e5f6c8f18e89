import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from scenario_hub.api import auth, scenarios
from scenario_hub.core.config import get_settings
from scenario_hub.core.errors import ScenarioHubError
from scenario_hub.db.init_db import init_db
from scenario_hub.db.session import engine
from scenario_hub.services.storage import SCENARIOS_DIR

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Scenario Hub")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event():
    init_db(engine)
    (settings.storage_root / SCENARIOS_DIR).mkdir(parents=True, exist_ok=True)


@app.exception_handler(ScenarioHubError)
async def scenario_hub_error_handler(request: Request, exc: ScenarioHubError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = errors[0]["loc"][-1] if errors else "request"
    return JSONResponse(status_code=400, content={"detail": f"Invalid value for {field}", "code": "invalid_request"})


app.include_router(auth.router)
app.include_router(scenarios.router)

# the bundle files are public, like the original pb_public directory
app.mount(
    f"/{SCENARIOS_DIR}",
    StaticFiles(directory=settings.storage_root / SCENARIOS_DIR, check_dir=False),
    name=SCENARIOS_DIR,
)


@app.get("/health")
def health_check():
    return {"status": "ok"}
