"""Step definitions for verse cross-references."""

from __future__ import annotations

from behave import given, then, when


def _references_url(context, source: str, target: str = "") -> str:
    url = f"{context.api_prefix}/verses/{context.verses[source]}/references"
    return f"{url}/{context.verses[target]}" if target else url


def _add(context, source: str, target: str):
    return context.client.post(
        _references_url(context, source),
        json={"referenced_verse_id": context.verses[target]},
    )


@given('"{source}" already references "{target}"')
def step_existing_reference(context, source: str, target: str) -> None:
    response = _add(context, source, target)
    assert response.status_code == 201, response.text


@when('I reference "{target}" from "{source}"')
def step_add_reference(context, target: str, source: str) -> None:
    context.response = _add(context, source, target)


@when('I remove the reference from "{source}" to "{target}"')
def step_remove_reference(context, source: str, target: str) -> None:
    context.response = context.client.delete(_references_url(context, source, target))


@when('I fetch "{reference}"')
def step_fetch(context, reference: str) -> None:
    context.response = context.client.get(f"{context.api_prefix}/verses/{context.verses[reference]}")


@then('"{source}" references "{target}"')
def step_references(context, source: str, target: str) -> None:
    body = context.response.json()
    assert body["id"] == context.verses[source], body
    assert [v["reference"] for v in body["referenced_verses"]] == [target], body


@then('"{source}" references nothing')
def step_references_nothing(context, source: str) -> None:
    body = context.response.json()
    assert body["id"] == context.verses[source], body
    assert body["referenced_verses"] == [], body


@then('"{target}" is referenced by "{source}"')
def step_referenced_by(context, target: str, source: str) -> None:
    body = context.response.json()
    assert body["id"] == context.verses[target], body
    assert [v["reference"] for v in body["referencing_verses"]] == [source], body
