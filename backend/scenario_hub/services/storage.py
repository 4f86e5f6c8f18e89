import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

SCENARIOS_DIR = "scenarios"
INFO_FILENAME = "info.toml"
SCRIPT_FILENAME = "script.lua"


def bundle_url(scenario_id: str, filename: str) -> str:
    return f"/{SCENARIOS_DIR}/{scenario_id}/{filename}"


class BundleStore:
    """Raw file storage rooted at the public directory that is served statically."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def bundle_dir(self, scenario_id: str) -> Path:
        return self.root / SCENARIOS_DIR / scenario_id

    def resolve(self, relative_path: str) -> Path:
        target = (self.root / relative_path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise ValueError(f"Path escapes storage root: {relative_path}")
        return target

    def write_file(self, relative_path: str, data: bytes) -> Path:
        target = self.resolve(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target

    def read_file(self, relative_path: str) -> bytes:
        return self.resolve(relative_path).read_bytes()

    def write_bundle(self, scenario_id: str, info_bytes: bytes, script_bytes: bytes) -> None:
        base = f"{SCENARIOS_DIR}/{scenario_id}"
        self.write_file(f"{base}/{INFO_FILENAME}", info_bytes)
        self.write_file(f"{base}/{SCRIPT_FILENAME}", script_bytes)

    def remove_bundle(self, scenario_id: str) -> None:
        directory = self.bundle_dir(scenario_id)
        if directory.exists():
            shutil.rmtree(directory, ignore_errors=True)
            logger.info("Removed bundle directory %s", directory)
