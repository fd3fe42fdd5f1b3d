from __future__ import annotations

import json

import pytest

from criterion_table.model.raw import RawBenchmarkRecord


def _interval(estimate, unit):
    return {
        "estimate": estimate,
        "lower_bound": estimate * 0.98,
        "upper_bound": estimate * 1.02,
        "unit": unit,
    }


def benchmark_payload(identifier, estimate, unit="ns", **overrides):
    payload = {
        "reason": "benchmark-complete",
        "id": identifier,
        "report_directory": f"/work/target/criterion/reports/{identifier}",
        "iteration_count": [5_000, 10_000, 15_000],
        "measured_values": [estimate * 5_000, estimate * 10_000, estimate * 15_000],
        "unit": "ns",
        "throughput": [],
        "typical": _interval(estimate, unit),
        "mean": _interval(estimate, unit),
        "median": _interval(estimate, unit),
        "median_abs_dev": _interval(estimate / 100.0, unit),
        "slope": _interval(estimate, unit),
        "change": None,
    }
    payload.update(overrides)
    return payload


def group_payload(group_name, benchmarks):
    return {
        "reason": "group-complete",
        "group_name": group_name,
        "benchmarks": list(benchmarks),
        "report_directory": f"/work/target/criterion/reports/{group_name}",
    }


@pytest.fixture
def make_payload():
    return benchmark_payload


@pytest.fixture
def make_group():
    return group_payload


@pytest.fixture
def make_record():
    def _make(identifier, estimate, unit="ns"):
        return RawBenchmarkRecord.from_payload(benchmark_payload(identifier, estimate, unit))

    return _make


@pytest.fixture
def jsonl():
    def _dump(*payloads):
        return "".join(json.dumps(payload) + "\n" for payload in payloads)

    return _dump


@pytest.fixture
def fib_stream(jsonl):
    return jsonl(
        benchmark_payload("Fib/Recursive/10", 120.0),
        benchmark_payload("Fib/Iterative/10", 12.0),
        group_payload("Fib", ["Fib/Recursive/10", "Fib/Iterative/10"]),
    )
