import io
import json

import pytest

from criterion_table.errors import InputParseError
from criterion_table.model.raw import (
    ChangeType,
    RawBenchmarkGroup,
    RawBenchmarkRecord,
    parse_raw_record,
    read_raw_records,
)


def test_read_raw_records_from_text(fib_stream):
    records = read_raw_records(io.StringIO(fib_stream))

    assert [type(record) for record in records] == [RawBenchmarkRecord, RawBenchmarkRecord, RawBenchmarkGroup]
    assert records[0].id == "Fib/Recursive/10"
    assert records[0].typical.estimate == 120.0
    assert records[0].typical.unit == "ns"
    assert records[2].benchmarks == ("Fib/Recursive/10", "Fib/Iterative/10")


def test_read_raw_records_accepts_bytes_and_blank_lines(fib_stream):
    payload = ("\n\n" + fib_stream + "\n   \n").encode("utf-8")

    records = read_raw_records(payload)

    assert len(records) == 3


def test_optional_members_are_typed(make_payload):
    payload = make_payload(
        "T/C/r",
        10.0,
        throughput=[{"per_iteration": 1024, "unit": "bytes"}],
        change={
            "mean": {"estimate": -0.1, "lower_bound": -0.2, "upper_bound": 0.0, "unit": "%"},
            "median": {"estimate": -0.1, "lower_bound": -0.2, "upper_bound": 0.0, "unit": "%"},
            "change": "Improved",
        },
    )

    record = parse_raw_record(payload)

    assert record.throughput[0].per_iteration == 1024
    assert record.change.change is ChangeType.IMPROVED
    assert record.slope.estimate == 10.0
    assert record.iteration_count == (5_000.0, 10_000.0, 15_000.0)


def test_minimal_benchmark_without_reason():
    record = parse_raw_record({"id": "T/C", "typical": {"estimate": 3, "unit": "us"}})

    assert isinstance(record, RawBenchmarkRecord)
    assert record.typical.estimate == 3.0
    assert record.mean is None
    assert record.change is None


def test_group_without_reason():
    record = parse_raw_record({"group_name": "G", "benchmarks": ["G/a"], "report_directory": "/tmp/G"})

    assert record == RawBenchmarkGroup("G", ("G/a",), "/tmp/G")


def test_invalid_json_reports_line(make_payload, jsonl):
    text = jsonl(make_payload("T/C/r", 1.0)) + "{not json\n"

    with pytest.raises(InputParseError) as excinfo:
        read_raw_records(text)

    assert excinfo.value.line == 2
    assert str(excinfo.value).startswith("line 2: invalid JSON")


@pytest.mark.parametrize(
    "payload",
    [
        {"reason": "benchmark-complete", "id": "T/C"},
        {"reason": "benchmark-complete", "id": 7, "typical": {"estimate": 1.0, "unit": "ns"}},
        {"id": "T/C", "typical": {"estimate": "fast", "unit": "ns"}},
        {"id": "T/C", "typical": {"estimate": True, "unit": "ns"}},
        {"id": "T/C", "typical": {"unit": "ns"}},
        {"id": "T/C", "typical": {"estimate": 1.0, "unit": "ns"}, "change": {"change": "Sideways"}},
        {"reason": "group-complete", "group_name": "G", "benchmarks": "G/a"},
        {"something": "else"},
        ["not", "an", "object"],
    ],
)
def test_malformed_records_are_rejected(payload):
    with pytest.raises(InputParseError):
        parse_raw_record(payload)


def test_malformed_record_line_number(jsonl, make_payload):
    text = jsonl(make_payload("T/C/r", 1.0), make_payload("T/D/r", 1.0), {"something": "else"})

    with pytest.raises(InputParseError) as excinfo:
        read_raw_records(text)

    assert excinfo.value.line == 3


def test_pretty_printed_and_shared_line_records(make_payload, make_group):
    first = make_payload("T/C/r", 1.0)
    second = make_payload("T/D/r", 2.0)
    text = json.dumps(first, indent=2) + "\n" + json.dumps(second) + " " + json.dumps(make_group("T", ["T/C/r"]))

    records = read_raw_records(text)

    assert [record.id for record in records[:2]] == ["T/C/r", "T/D/r"]
    assert isinstance(records[2], RawBenchmarkGroup)


def test_error_line_counts_pretty_printed_records(make_payload):
    text = json.dumps(make_payload("T/C/r", 1.0), indent=2) + "\n" + json.dumps({"something": "else"})

    with pytest.raises(InputParseError) as excinfo:
        read_raw_records(text)

    assert excinfo.value.line == text.count("\n") + 1


def test_invalid_utf8_is_an_input_error(make_payload, jsonl):
    payload = jsonl(make_payload("T/C/r", 1.0)).encode("utf-8") + b"\xff\xfe\n"

    with pytest.raises(InputParseError) as excinfo:
        read_raw_records(payload)

    assert excinfo.value.line == 2
    assert isinstance(excinfo.value.cause, UnicodeDecodeError)
