"""Parsing of ``git describe --tags --long`` output."""

from __future__ import annotations

import re

from ..errors import MalformedDescriptionError
from .base import Description

# The greedy tag group makes the match anchor on the last -<n>-g<hash> suffix,
# so tags such as v1.2.0-rc-1 keep their hyphens.
DESCRIBE_PATTERN = re.compile(r"^(.*)-(\d+)-g([0-9,a-f]+)$", re.ASCII)


def parse_description(line: str) -> Description:
    """Parse ``<tag>-<n>-g<hash>`` into a :class:`Description`.

    Raises:
        MalformedDescriptionError: if the line does not have that shape.
    """
    match = DESCRIBE_PATTERN.match(line)
    if not match:
        raise MalformedDescriptionError(line)
    tag, count, short_hash = match.groups()
    try:
        additional = int(count)
    except ValueError as e:
        raise MalformedDescriptionError(line, f"invalid commit count {count!r}") from e
    return Description(tag=tag, additional_commits=additional, short_hash=short_hash)
