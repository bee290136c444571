"""Ordered, cached regular-expression rewrite rules."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

log = logging.getLogger(__name__)

_TEMPLATE_ESCAPE = re.compile(r"\$(\$|&|`|'|\d{1,2})")


def default_priority_function(key: str) -> int:
    """Give every rule the same priority."""
    if not isinstance(key, str):
        raise TypeError("rule key must be a string")
    return 0


@dataclass
class Rule:
    """A compiled pattern, its replacement template and its priority."""

    rule: re.Pattern
    repr: str
    priority: int


def _expand(match: re.Match, template: str) -> str:
    """Expand ``$&``, ``$n``, ``$$``, ``$``` and ``$'`` in ``template``."""
    groups = match.re.groups

    def group(index: int) -> str:
        if 0 <= index <= groups:
            return match.group(index) or ""
        return ""

    def replace(escape: re.Match) -> str:
        code = escape.group(1)
        if code == "$":
            return "$"
        if code == "&":
            return match.group(0)
        if code == "`":
            return match.string[: match.start()]
        if code == "'":
            return match.string[match.end() :]
        if len(code) == 2 and int(code) > groups:
            return group(int(code[0])) + code[1]
        return group(int(code))

    return _TEMPLATE_ESCAPE.sub(replace, template)


class RegexCollection:
    """Map strings through the first matching rule, caching every result.

    Rules are tried in descending priority; keys are matched case
    insensitively.  When no rule matches, ``default_repr`` is returned.
    """

    def __init__(
        self,
        mapping: Any = None,
        default_repr: str = "",
        priority_function: Callable[[str], int] = default_priority_function,
    ) -> None:
        self.default_repr = default_repr
        self.rules: list[Rule] = []
        self._cache: dict[str, str] = {}
        if mapping is None:
            return
        if not isinstance(mapping, dict):
            log.warning("Mapping is not an object")
            return
        for key, value in mapping.items():
            if not (isinstance(key, str) and isinstance(value, str)):
                continue
            priority = priority_function(key)
            try:
                pattern = re.compile(key, re.IGNORECASE)
            except re.error as exc:
                log.error("Invalid rule '%s': %s", key, exc)
                continue
            self.rules.append(Rule(pattern, value, priority))
        self.rules.sort(key=lambda r: r.priority, reverse=True)

    def _find_match(self, value: str) -> tuple[str, bool]:
        for rule in self.rules:
            match = rule.rule.search(value)
            if match:
                return _expand(match, rule.repr), True
        return value, False

    def get_with_match(self, value: str) -> tuple[str, bool]:
        """Return the representation and whether a rule matched on this lookup.

        A cached result reports ``False``: rules are only evaluated once
        per value.
        """
        if value in self._cache:
            return self._cache[value], False
        result, matched = self._find_match(value)
        if not matched:
            result = self.default_repr
        self._cache[value] = result
        return result, matched

    def get(self, value: str) -> str:
        """Return the representation for ``value``."""
        return self.get_with_match(value)[0]