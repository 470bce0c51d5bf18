"""Step definitions for progression step ordering."""

from __future__ import annotations

from typing import List

from behave import given, then, when

from catalog_helpers import split_list


def _steps_url(context, suffix: str = "") -> str:
    return f"{context.api_prefix}/progressions/{context.progression_id}/steps{suffix}"


def _append(context, reference: str):
    response = context.client.post(_steps_url(context), json={"verse_id": context.verses[reference]})
    if response.status_code == 201:
        context.steps[reference] = response.json()["step"]["id"]
    return response


def _response_steps(context) -> List[dict]:
    body = context.response.json()
    assert "steps" in body, body
    return body["steps"]


@given('an empty progression named "{name}"')
def step_empty_progression(context, name: str) -> None:
    response = context.client.post(f"{context.api_prefix}/progressions", json={"name": name})
    assert response.status_code == 201, response.text
    context.progression_id = response.json()["id"]


@given('the progression contains "{references}"')
def step_progression_contains(context, references: str) -> None:
    for reference in split_list(references):
        response = _append(context, reference)
        assert response.status_code == 201, response.text
    context.backend.calls.clear()


@given('the backend refuses rank {rank:d} for "{reference}"')
def step_refuse_rank(context, rank: int, reference: str) -> None:
    context.backend.refused_ranks.add((context.steps[reference], rank))


@when("the backend accepts every rank update")
def step_accept_ranks(context) -> None:
    context.backend.refused_ranks.clear()


@when('I append "{reference}"')
def step_append(context, reference: str) -> None:
    context.backend.calls.clear()
    context.response = _append(context, reference)


@when('I move "{reference}" {direction}')
def step_move(context, reference: str, direction: str) -> None:
    context.backend.calls.clear()
    url = _steps_url(context, f"/{context.steps[reference]}/move")
    context.response = context.client.post(url, json={"direction": direction})


@when('I remove "{reference}"')
def step_remove(context, reference: str) -> None:
    context.backend.calls.clear()
    context.response = context.client.delete(_steps_url(context, f"/{context.steps[reference]}"))


@when("I renumber the progression")
def step_renumber(context) -> None:
    context.backend.calls.clear()
    context.response = context.client.post(_steps_url(context, "/renumber"))


@then('the progression order is "{references}"')
def step_order(context, references: str) -> None:
    actual = [s["verse"]["reference"] for s in _response_steps(context)]
    assert actual == split_list(references), actual


@then('the ranks are "{ranks}"')
def step_ranks(context, ranks: str) -> None:
    actual = [s["step_order"] for s in _response_steps(context)]
    assert actual == [int(r) for r in split_list(ranks)], actual


@then('the stored ranks are "{ranks}"')
def step_stored_ranks(context, ranks: str) -> None:
    response = context.client.get(f"{context.api_prefix}/progressions/{context.progression_id}")
    assert response.status_code == 200, response.text
    actual = [s["step_order"] for s in response.json()["steps"]]
    assert actual == [int(r) for r in split_list(ranks)], actual


@then('the only backend call was "{name}"')
def step_only_call(context, name: str) -> None:
    assert context.backend.call_names() == [name], context.backend.call_names()
