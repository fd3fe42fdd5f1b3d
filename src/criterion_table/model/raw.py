"""Typed views of the cargo-criterion JSON message stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Mapping, Union

from criterion_table.errors import InputParseError
from criterion_table.util.json import JSONDecodeError, iter_json_documents
from criterion_table.util.logging import log_event

LOG = logging.getLogger(__name__)

_REASON_BENCHMARK = "benchmark-complete"
_REASON_GROUP = "group-complete"


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InputParseError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_str(payload: Mapping[str, Any], key: str, what: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise InputParseError(f"{what}.{key} must be a string")
    return value


def _optional_str(payload: Mapping[str, Any], key: str, what: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InputParseError(f"{what}.{key} must be a string")
    return value


def _to_number(value: Any, what: str) -> float:
    # bool is an int subclass but never a valid measurement.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputParseError(f"{what} must be a number")
    return float(value)


def _optional_number(payload: Mapping[str, Any], key: str, what: str) -> float | None:
    value = payload.get(key)
    if value is None:
        return None
    return _to_number(value, f"{what}.{key}")


def _number_list(payload: Mapping[str, Any], key: str, what: str) -> tuple[float, ...]:
    values = payload.get(key)
    if values is None:
        return ()
    if not isinstance(values, list):
        raise InputParseError(f"{what}.{key} must be a list")
    return tuple(_to_number(value, f"{what}.{key}[]") for value in values)


@dataclass(frozen=True)
class ConfidenceInterval:
    estimate: float
    unit: str
    lower_bound: float | None = None
    upper_bound: float | None = None

    @classmethod
    def from_payload(cls, payload: Any, what: str) -> "ConfidenceInterval":
        payload = _require_mapping(payload, what)
        if "estimate" not in payload:
            raise InputParseError(f"{what}.estimate is missing")
        return cls(
            estimate=_to_number(payload["estimate"], f"{what}.estimate"),
            unit=_require_str(payload, "unit", what),
            lower_bound=_optional_number(payload, "lower_bound", what),
            upper_bound=_optional_number(payload, "upper_bound", what),
        )

    @classmethod
    def optional(cls, payload: Mapping[str, Any], key: str, what: str) -> "ConfidenceInterval | None":
        value = payload.get(key)
        if value is None:
            return None
        return cls.from_payload(value, f"{what}.{key}")


@dataclass(frozen=True)
class Throughput:
    per_iteration: int
    unit: str


class ChangeType(Enum):
    NO_CHANGE = "NoChange"
    IMPROVED = "Improved"
    REGRESSED = "Regressed"


@dataclass(frozen=True)
class ChangeDetails:
    mean: ConfidenceInterval
    median: ConfidenceInterval
    change: ChangeType

    @classmethod
    def from_payload(cls, payload: Any, what: str) -> "ChangeDetails":
        payload = _require_mapping(payload, what)
        try:
            change = ChangeType(payload.get("change"))
        except ValueError as exc:
            raise InputParseError(f"{what}.change is not a known change type", cause=exc) from exc
        return cls(
            mean=ConfidenceInterval.from_payload(payload.get("mean"), f"{what}.mean"),
            median=ConfidenceInterval.from_payload(payload.get("median"), f"{what}.median"),
            change=change,
        )


@dataclass(frozen=True)
class RawBenchmarkRecord:
    """A finished benchmark; only ``id`` and ``typical`` feed the tables."""

    id: str
    typical: ConfidenceInterval
    report_directory: str | None = None
    iteration_count: tuple[float, ...] = ()
    measured_values: tuple[float, ...] = ()
    unit: str | None = None
    throughput: tuple[Throughput, ...] = ()
    mean: ConfidenceInterval | None = None
    median: ConfidenceInterval | None = None
    median_abs_dev: ConfidenceInterval | None = None
    slope: ConfidenceInterval | None = None
    change: ChangeDetails | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawBenchmarkRecord":
        what = "benchmark"
        if "typical" not in payload:
            raise InputParseError("benchmark.typical is missing")
        change = payload.get("change")
        return cls(
            id=_require_str(payload, "id", what),
            typical=ConfidenceInterval.from_payload(payload["typical"], "benchmark.typical"),
            report_directory=_optional_str(payload, "report_directory", what),
            iteration_count=_number_list(payload, "iteration_count", what),
            measured_values=_number_list(payload, "measured_values", what),
            unit=_optional_str(payload, "unit", what),
            throughput=_throughput_list(payload.get("throughput")),
            mean=ConfidenceInterval.optional(payload, "mean", what),
            median=ConfidenceInterval.optional(payload, "median", what),
            median_abs_dev=ConfidenceInterval.optional(payload, "median_abs_dev", what),
            slope=ConfidenceInterval.optional(payload, "slope", what),
            change=None if change is None else ChangeDetails.from_payload(change, "benchmark.change"),
        )


@dataclass(frozen=True)
class RawBenchmarkGroup:
    group_name: str
    benchmarks: tuple[str, ...] = field(default_factory=tuple)
    report_directory: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawBenchmarkGroup":
        benchmarks = payload.get("benchmarks") or []
        if not isinstance(benchmarks, list) or not all(isinstance(name, str) for name in benchmarks):
            raise InputParseError("group.benchmarks must be a list of strings")
        return cls(
            group_name=_require_str(payload, "group_name", "group"),
            benchmarks=tuple(benchmarks),
            report_directory=_optional_str(payload, "report_directory", "group"),
        )


RawCriterionData = Union[RawBenchmarkRecord, RawBenchmarkGroup]


def _throughput_list(values: Any) -> tuple[Throughput, ...]:
    if values is None:
        return ()
    if not isinstance(values, list):
        raise InputParseError("benchmark.throughput must be a list")
    items = []
    for value in values:
        value = _require_mapping(value, "benchmark.throughput[]")
        per_iteration = value.get("per_iteration")
        if isinstance(per_iteration, bool) or not isinstance(per_iteration, int):
            raise InputParseError("benchmark.throughput[].per_iteration must be an integer")
        items.append(Throughput(per_iteration, _require_str(value, "unit", "benchmark.throughput[]")))
    return tuple(items)


def parse_raw_record(payload: Any) -> RawCriterionData:
    payload = _require_mapping(payload, "record")
    reason = payload.get("reason")
    if reason == _REASON_GROUP or (reason is None and "group_name" in payload):
        return RawBenchmarkGroup.from_payload(payload)
    if reason == _REASON_BENCHMARK or (reason is None and "id" in payload and "typical" in payload):
        return RawBenchmarkRecord.from_payload(payload)
    raise InputParseError("record is neither a benchmark nor a benchmark group")


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        line = data.count(b"\n", 0, exc.start) + 1
        raise InputParseError("input is not valid UTF-8", line=line, cause=exc) from exc


def _read_text(stream) -> str:
    if isinstance(stream, str):
        return stream
    if isinstance(stream, (bytes, bytearray)):
        return _decode(bytes(stream))
    if hasattr(stream, "read"):
        return _read_text(stream.read())
    chunks = list(stream)
    if chunks and isinstance(chunks[0], (bytes, bytearray)):
        return _decode(b"".join(chunks))
    return "".join(chunks)


def read_raw_records(stream) -> list[RawCriterionData]:
    """Read every JSON message of ``stream`` (file-like, iterable of lines, str or bytes).

    Messages are whitespace separated: one per line, pretty-printed over several
    lines or several on one line. The whole stream is consumed before returning;
    the first malformed message aborts.
    """
    text = _read_text(stream)
    records: list[RawCriterionData] = []
    try:
        for lineno, payload in iter_json_documents(text):
            try:
                records.append(parse_raw_record(payload))
            except InputParseError as exc:
                exc.line = lineno
                raise
    except JSONDecodeError as exc:
        raise InputParseError("invalid JSON", line=exc.lineno, cause=exc) from exc

    groups = sum(1 for record in records if isinstance(record, RawBenchmarkGroup))
    log_event(
        LOG,
        "records_read",
        benchmarks=len(records) - groups,
        groups=groups,
    )
    return records
