"""Conformance fixture loader for stubmatch.

Loads YAML fixtures from tests/fixtures/ and feeds them to any test that
asks for a ``match_case`` argument. Symmetric cases are expanded into both
directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from stubmatch import ANY

if TYPE_CHECKING:
    import pytest

    from stubmatch import MethodPattern, UrlPattern

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class MatchCase:
    """A single (pattern, request) case from a conformance fixture."""

    fixture_name: str
    case_name: str
    method: str | MethodPattern
    url: str | UrlPattern
    request_method: str
    request_url: str
    expect: bool

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── YAML → stubmatch values ────────────────────────────────────────────────


def _pattern(value: str) -> Any:
    return ANY if value == "ANY" else value


def load_match_cases() -> list[MatchCase]:
    """Load every match case from every fixture file."""
    cases: list[MatchCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[MatchCase]:
    """Load a fixture file (may contain multiple documents)."""
    cases: list[MatchCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                cases.extend(_expand(doc["name"], case))
    return cases


def _expand(fixture_name: str, case: dict[str, Any]) -> list[MatchCase]:
    pattern = case["pattern"]
    request = case["request"]
    forward = MatchCase(
        fixture_name=fixture_name,
        case_name=case["name"],
        method=_pattern(pattern["method"]),
        url=_pattern(pattern["url"]),
        request_method=request["method"],
        request_url=request["url"],
        expect=case["expect"],
    )
    if not case.get("symmetric", False):
        return [forward]
    backward = MatchCase(
        fixture_name=fixture_name,
        case_name=f"{case['name']} (swapped)",
        method=_pattern(request["method"]),
        url=_pattern(request["url"]),
        request_method=pattern["method"],
        request_url=pattern["url"],
        expect=case["expect"],
    )
    return [forward, backward]


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    if "match_case" in metafunc.fixturenames:
        cases = load_match_cases()
        metafunc.parametrize("match_case", cases, ids=[c.id for c in cases])
