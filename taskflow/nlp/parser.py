from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date
from functools import reduce
from typing import Any, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict

from ..utils.dates import local_today
from ..utils.text import collapse_whitespace
from .dates import resolve_due

# Quick-add tokens
PRIORITY_PAT = re.compile(r"(?:\bpri:|(?<!\w)!)([hml])\b", re.IGNORECASE)
CONTEXT_PAT = re.compile(r"(?<!\w)@(home|work|computer|phone|errands|anywhere)\b", re.IGNORECASE)
PROJECT_PAT = re.compile(r"\bpro:(\S+)", re.IGNORECASE)
DUE_PAT = re.compile(r"\bdue:(\S+)", re.IGNORECASE)
TAG_PAT = re.compile(r"\+([A-Za-z0-9_]+)")
# "waiting" before "wait" so the longer spelling is consumed whole
STATUS_PAT = re.compile(r">(waiting|wait|next|someday|maybe)", re.IGNORECASE)

PRIORITY_CODES = {"h": "high", "m": "medium", "l": "low"}
STATUS_WORDS = {
    "next": "next",
    "wait": "waiting",
    "waiting": "waiting",
    "someday": "someday",
    "maybe": "someday",
}


class ParsedTaskDraft(BaseModel):
    """Structured result of one quick-add line. Never persisted as-is."""

    model_config = ConfigDict(frozen=True)

    title: str
    priority: Literal["high", "medium", "low"] | None = None
    context: Literal["@home", "@work", "@computer", "@phone", "@errands", "@anywhere"] | None = None
    project_name: str | None = None
    due_date: str | None = None  # YYYY-MM-DD
    tags: tuple[str, ...] = ()
    status: Literal["next", "waiting", "someday"] | None = None


class ExtractionRule(NamedTuple):
    field: str
    extract: Callable[[str], tuple[str, Any]]


def _first_match(pattern: re.Pattern[str], convert: Callable[[str], Any]) -> Callable[[str], tuple[str, Any]]:
    """Rule body that strips the first match of `pattern` and converts its group."""

    def extract(text: str) -> tuple[str, Any]:
        m = pattern.search(text)
        if not m:
            return text, None
        return text[: m.start()] + text[m.end() :], convert(m.group(1))

    return extract


def _all_tags(text: str) -> tuple[str, tuple[str, ...] | None]:
    tags = tuple(TAG_PAT.findall(text))
    if not tags:
        return text, None
    return TAG_PAT.sub("", text), tags


def build_rules(today: date) -> tuple[ExtractionRule, ...]:
    """
    Extraction pipeline in its fixed order:
    priority -> context -> project -> due -> tags -> status.

    Project runs before due and tags so that `pro:+x` and `due:+3d` are
    consumed whole before the tag rule sees the string.
    """
    return (
        ExtractionRule("priority", _first_match(PRIORITY_PAT, lambda g: PRIORITY_CODES[g.lower()])),
        ExtractionRule("context", _first_match(CONTEXT_PAT, lambda g: f"@{g.lower()}")),
        ExtractionRule("project_name", _first_match(PROJECT_PAT, lambda g: g)),
        ExtractionRule("due_date", _first_match(DUE_PAT, lambda g: resolve_due(g, today))),
        ExtractionRule("tags", _all_tags),
        ExtractionRule("status", _first_match(STATUS_PAT, lambda g: STATUS_WORDS[g.lower()])),
    )


def _apply_rule(state: tuple[str, dict[str, Any]], rule: ExtractionRule) -> tuple[str, dict[str, Any]]:
    text, fields = state
    text, value = rule.extract(text)
    if value is None:
        return text, fields
    return text, {**fields, rule.field: value}


def parse_task_input(text: str, today: date | None = None) -> ParsedTaskDraft:
    """
    Quick-add parser:
    - priority via pri:H|M|L or !H|M|L
    - context via one of the six @contexts
    - project reference via pro:<name> (resolved later by the caller)
    - due date via due:today|tomorrow|tom|+Nd|YYYY-MM-DD
    - tags via +word (all of them)
    - status shortcut via >next, >wait(ing), >someday, >maybe
    Only the first priority/context/project/due/status token counts; later ones
    stay in the title. Unknown due values are stripped but leave no date.
    """
    if today is None:
        today = local_today()

    work, fields = reduce(_apply_rule, build_rules(today), (text, {}))
    return ParsedTaskDraft(title=collapse_whitespace(work), **fields)
