"""
Placeholder substitution for user-editable receipt templates.

Grammar:
    (Name)        replaced by context[Name], blank when unknown
    (Name A|B)    A when context[Name] is truthy, else B

Alternations are resolved in a first pass and simple tokens in a second, so the
simple pattern never sees an alternation's literal text. Parenthesised text that
matches neither form is kept verbatim.
"""

from __future__ import annotations

import re
from typing import List, Mapping

from retailpos.errors import TemplateRenderError

TOKEN_NAME = r"[A-Za-z][A-Za-z0-9_]*"

ALTERNATION_RE = re.compile(rf"\((?P<name>{TOKEN_NAME}) (?P<when_true>[^()|]*)\|(?P<when_false>[^()|]*)\)")
SIMPLE_RE = re.compile(rf"\((?P<name>{TOKEN_NAME})\)")
# an opener whose line never closes
UNTERMINATED_RE = re.compile(rf"\((?P<name>{TOKEN_NAME})[^()\n]*(?=\n|\Z)")

FALSY_VALUES = {"", "0", "false"}


def is_truthy(value) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() not in FALSY_VALUES


class TemplateEngine:
    """Renders (template, context) pairs; holds no state between calls."""

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def render(self, template: str, context: Mapping[str, str]) -> str:
        if not template:
            return ""
        if self.strict:
            self.check(template)

        def alternate(match: re.Match) -> str:
            if is_truthy(context.get(match.group("name"))):
                return match.group("when_true")
            return match.group("when_false")

        def substitute(match: re.Match) -> str:
            value = context.get(match.group("name"))
            return "" if value is None else str(value)

        resolved = ALTERNATION_RE.sub(alternate, template)
        return SIMPLE_RE.sub(substitute, resolved)

    def check(self, template: str) -> None:
        """Raise TemplateRenderError for a token opener that is never closed."""
        match = UNTERMINATED_RE.search(template)
        if match:
            line = template.count("\n", 0, match.start()) + 1
            raise TemplateRenderError(
                f"Unterminated token ({match.group('name')} on line {line}"
            )

    @staticmethod
    def tokens(template: str) -> List[str]:
        """Token names referenced by the template, first occurrence order."""
        found = [(m.start(), m.group("name")) for m in ALTERNATION_RE.finditer(template)]
        # blank alternations in place so simple-token offsets still index `template`
        blanked = ALTERNATION_RE.sub(lambda m: " " * len(m.group(0)), template)
        found += [(m.start(), m.group("name")) for m in SIMPLE_RE.finditer(blanked)]
        names: List[str] = []
        for _, name in sorted(found):
            if name not in names:
                names.append(name)
        return names

    def missing_tokens(self, template: str, context: Mapping[str, str]) -> List[str]:
        return [name for name in self.tokens(template) if name not in context]


def render_template(template: str, context: Mapping[str, str]) -> str:
    """Best-effort render with a throwaway engine."""
    return TemplateEngine().render(template, context)
