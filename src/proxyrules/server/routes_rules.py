"""Rule routes: list, add, remove."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from proxyrules.rules.errors import RuleError
from proxyrules.rules.models import Rule, from_token
from proxyrules.rules.store import RuleStore


class RuleRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    rule_type: str
    value: str

    def to_rule(self) -> Rule:
        return Rule(rule_type=from_token(self.rule_type), value=self.value)


def render_rules(rules: tuple[Rule, ...] | list[Rule]) -> str:
    return "".join(f"{r.line()}\n" for r in rules)


def _error(exc: RuleError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=exc.status_code)


async def _read_rule(request: Request) -> Rule | JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse({"error": "Invalid JSON"}, status_code=400)
    try:
        req = RuleRequest.model_validate(body)
    except ValidationError:
        return JSONResponse(
            {"error": "rule_type and value are required strings"},
            status_code=422,
        )
    try:
        return req.to_rule()
    except RuleError as e:
        return _error(e)


async def list_rules(request: Request) -> PlainTextResponse:
    """GET /rules — one ``TOKEN,value`` line per rule, insertion order."""
    store: RuleStore = request.app.state.rule_store
    rules = await store.list_rules()
    return PlainTextResponse(render_rules(rules))


async def add_rule(request: Request) -> Response:
    """POST /rules — validate and append a rule."""
    rule = await _read_rule(request)
    if isinstance(rule, JSONResponse):
        return rule
    store: RuleStore = request.app.state.rule_store
    try:
        await store.add(rule)
    except RuleError as e:
        return _error(e)
    return Response(status_code=201)


async def delete_rule(request: Request) -> Response:
    """DELETE /rules — remove an exactly matching rule."""
    rule = await _read_rule(request)
    if isinstance(rule, JSONResponse):
        return rule
    store: RuleStore = request.app.state.rule_store
    try:
        await store.remove(rule)
    except RuleError as e:
        return _error(e)
    return Response(status_code=204)


routes = [
    Route("/rules", list_rules, methods=["GET"]),
    Route("/rules", add_rule, methods=["POST"]),
    Route("/rules", delete_rule, methods=["DELETE"]),
]
