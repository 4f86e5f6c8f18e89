"""Parsing of ``info.toml`` and its cross-check against the submitted form fields."""

import math
import re
import tomllib

from pydantic import ValidationError

from scenario_hub.core.errors import InvalidFormTime, InvalidMetadata, MetadataMismatch
from scenario_hub.schemas.scenario import InfoDocument, ScenarioForm

# plain ASCII decimal or exponent notation, no digit separators
DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_info(data: bytes) -> InfoDocument:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidMetadata("Failed to parse info.toml: not valid UTF-8") from exc

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidMetadata(f"Failed to parse info.toml: {exc}") from exc

    try:
        return InfoDocument.model_validate(raw)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise InvalidMetadata(f"Invalid info.toml field {field!r}: {error['msg']}") from exc


def parse_form_time(value: str) -> float:
    text = value.strip()
    if not DECIMAL_RE.fullmatch(text):
        raise InvalidFormTime(f"Invalid value for time: {value!r}")
    parsed = float(text)
    if not math.isfinite(parsed):
        raise InvalidFormTime(f"Invalid value for time: {value!r}")
    return parsed


def validate_consistency(doc: InfoDocument, form: ScenarioForm) -> float:
    """Check that ``info.toml`` and the form describe the same scenario.

    Returns the form's ``time`` as a number. A form time that is not a
    number raises :class:`InvalidFormTime` before any field is compared.
    """
    form_time = parse_form_time(form.time)

    for field, declared, submitted in (
        ("name", doc.name, form.name),
        ("author", doc.author, form.author),
        ("time", doc.time, form_time),
    ):
        if declared != submitted:
            raise MetadataMismatch(
                f"Supplied metadata and metadata in info.toml do not match ({field}: {submitted!r} != {declared!r})"
            )
    return form_time
