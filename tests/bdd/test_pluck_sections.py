"""Behaviour tests for destructive section plucking.

These pytest-bdd scenarios are driven by ``features/pluck_sections.feature``
and show that ``SectionSession.pluck`` hands each matching section out once,
leaves unrelated sections (and their original indexes) in place, and returns
an empty list when asked again.

Usage
-----
Run ``pytest tests/bdd/test_pluck_sections.py -v``. The scenarios only use an
in-memory document, so no files or network access are needed.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from podlike.session import SectionSession

if typ.TYPE_CHECKING:
    from podlike.parser import Section

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "pluck_sections.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given('a document with two grouped "name" sections and a bare "pod" section')
def given_document(scenario_state: ScenarioState) -> None:
    """Create a session over two group members followed by a bare section."""
    scenario_state["session"] = SectionSession(
        "=name example-1\nFirst\n=cut\n"
        "=name example-2\nSecond\n=cut\n"
        "=pod\nThird\n=cut\n"
    )
    scenario_state["plucks"] = []


@when(parsers.parse('I pluck the "{kind}" sections named "{key}"'))
@when(parsers.parse('I pluck the "{kind}" sections named "{key}" again'))
def when_pluck(scenario_state: ScenarioState, kind: str, key: str) -> None:
    """Pluck from the shared session and remember the result."""
    session = typ.cast("SectionSession", scenario_state["session"])
    scenario_state["plucks"].append(session.pluck(typ.cast("typ.Any", kind), key))


@then(parsers.parse('the first pluck returned the sections "{names}"'))
def then_first_pluck(scenario_state: ScenarioState, names: str) -> None:
    """Check the names returned by the first pluck."""
    first = typ.cast("list[Section]", scenario_state["plucks"][0])
    expected = [name.strip() for name in names.split(",")]
    assert [section.name for section in first] == expected, (
        f"Expected first pluck to return {expected}, got {first!r}"
    )


@then("the second pluck returned nothing")
def then_second_pluck_empty(scenario_state: ScenarioState) -> None:
    """The repeated pluck finds no remaining matches."""
    assert scenario_state["plucks"][1] == [], "expected the second pluck to be empty"


@then(parsers.parse('only the "{name}" section remains with index {index:d}'))
def then_remaining(scenario_state: ScenarioState, name: str, index: int) -> None:
    """The untouched section keeps its original index."""
    session = typ.cast("SectionSession", scenario_state["session"])
    remaining = [(section.name, section.index) for section in session.sections()]
    assert remaining == [(name, index)], f"unexpected remaining sections {remaining!r}"


@then(parsers.parse('the group "{group}" still has {count:d} sections'))
def then_group_count(scenario_state: ScenarioState, group: str, count: int) -> None:
    """Plucking bare sections does not touch grouped ones."""
    session = typ.cast("SectionSession", scenario_state["session"])
    assert len(session.list(group)) == count
