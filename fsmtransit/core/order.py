# fsmtransit/core/order.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Ordering template tokens.

A template is a sequence of ``subject.verb`` tokens. Expanded against a concrete
action, source and destination, each token yields one dispatch path; the
template order is the order in which handler groups run.
"""

from __future__ import annotations

from enum import Enum
from typing import List, NamedTuple, Sequence, Tuple

from fsmtransit.core.errors import ConfigurationError
from fsmtransit.core.events import WILDCARD, Category, DispatchPath, Phase

DEFAULT_ORDER: Tuple[str, ...] = (
    "*.start",
    "action.start",
    "from.leave",
    "*.leave",
    "*.enter",
    "to.enter",
    "action.end",
    "*.end",
)


class Subject(Enum):
    ANY = "*"
    ACTION = "action"
    FROM = "from"
    TO = "to"


class OrderToken(NamedTuple):
    subject: Subject
    verb: Phase

    @classmethod
    def parse(cls, token: str) -> "OrderToken":
        """
        :param token: A ``subject.verb`` string such as ``from.leave``.
        :raises ConfigurationError: If the token is malformed.
        """
        if not isinstance(token, str) or token.count(".") != 1:
            raise ConfigurationError(f"Invalid order token {token!r}: expected 'subject.verb'")
        subject, verb = token.split(".")
        try:
            return cls(Subject(subject), Phase(verb))
        except ValueError as e:
            raise ConfigurationError(f"Invalid order token {token!r}: {e}") from e

    def resolve(self, action: str, from_state: str, to_state: str) -> DispatchPath:
        """
        Compute the concrete dispatch path for this token.

        The category always follows the verb. Any non-wildcard subject names the
        action for start/end, the source for leave and the destination for enter.
        """
        category = self.verb.category
        if self.subject is Subject.ANY:
            name = WILDCARD
        elif category is Category.ACTION:
            name = action
        elif self.verb is Phase.LEAVE:
            name = from_state
        else:
            name = to_state
        return DispatchPath(category, name, self.verb)

    def __str__(self) -> str:
        return f"{self.subject.value}.{self.verb.value}"


def parse_order(order: Sequence[str]) -> List[OrderToken]:
    """Parse every token of a template, failing on the first malformed one."""
    return [OrderToken.parse(token) for token in order]
