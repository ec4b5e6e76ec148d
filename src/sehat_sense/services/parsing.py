"""Parsing helpers for free-text model responses."""

import json
import math
import re
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from sehat_sense.domain.errors import ParseError
from sehat_sense.domain.reports import ReportData

REPORT_LABELS: dict[str, str] = {
    "hba1c": "hba1c",
    "fasting glucose": "glucose",
    "fasting blood sugar": "glucose",
    "fbs": "glucose",
    "glucose": "glucose",
    "ldl": "ldl",
    "ldl cholesterol": "ldl",
    "hdl": "hdl",
    "hdl cholesterol": "hdl",
    "total cholesterol": "total_cholesterol",
    "triglycerides": "triglycerides",
    "vitamin d": "vitamin_d",
    "vitamin d3": "vitamin_d",
    "vitamin b12": "vitamin_b12",
    "vitamin b-12": "vitamin_b12",
    "sgpt": "sgpt",
    "sgpt/alt": "sgpt",
    "alt": "sgpt",
    "sgot": "sgot",
    "sgot/ast": "sgot",
    "ast": "sgot",
}

T = TypeVar("T")

_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
_LABEL_NOISE = " \t*-•#_`"
_VALUE_NOISE = " \t*`"
_UNITS = re.compile(r"\([^)]*\)")
_PAIRS = {"{": "}", "[": "]"}


def parse_report_text(text: str) -> ReportData:
    """Parse ``Label: value`` lines into report data.

    Unknown labels and values without a leading finite number are skipped.
    """
    values: dict[str, float] = {}
    for line in text.splitlines():
        label, sep, raw_value = line.partition(":")
        if not sep:
            continue
        key = _UNITS.sub("", label).strip(_LABEL_NOISE).lower()
        field_name = REPORT_LABELS.get(key)
        if field_name is None:
            continue
        value = _leading_number(raw_value.strip(_VALUE_NOISE))
        if value is not None:
            values[field_name] = value
    return ReportData(**values)


def _leading_number(text: str) -> float | None:
    match = _NUMBER.match(text)
    if match is None:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value


def extract_json_span(text: str, opener: str) -> str | None:
    """Return the first balanced JSON object or array span in text.

    Brackets inside string literals are ignored. Returns ``None`` when no
    opener is present or the first span never closes.
    """
    closer = _PAIRS[opener]
    start = text.find(opener)
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def parse_json_payload(text: str, opener: str, adapter: TypeAdapter[T]) -> T:
    """Extract the first JSON span and validate it against a schema."""
    span = extract_json_span(text, opener)
    if span is None:
        raise ParseError("No JSON span found in model response", raw_text=text)
    try:
        payload = json.loads(span)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in model response: {exc}", text) from exc
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise ParseError(
            f"Model response does not match the expected shape: {exc}", text
        ) from exc
