import uvicorn

from scenario_hub.core.config import get_settings


def run():
    settings = get_settings()
    uvicorn.run(
        "scenario_hub.main:app",
        host="0.0.0.0",
        port=settings.app_port,
        reload=settings.app_env == "development",
    )


if __name__ == "__main__":
    run()
