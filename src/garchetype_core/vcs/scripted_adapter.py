"""Scripted VCS client for environments without a real repository."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import EmptyOutputError

Outcome = Union[str, BaseException]


class ScriptedClient:
    """VCS client that replays scripted outcomes.

    ``outcomes`` maps a primitive name (``"describe"``, ``"fetch"``...) to
    either the text to return or an exception instance to raise. The short
    hash is scripted under ``"rev_parse_short"``. Primitives without a script
    behave like a git command that printed nothing: queries raise
    ``EmptyOutputError`` while ``clone``/``fetch``/``pull`` return ``""``.
    Every call is appended to ``calls`` as ``(primitive, args)``.
    """

    _MUTATING = frozenset({"clone", "fetch", "pull"})

    def __init__(self, outcomes: Optional[Dict[str, Outcome]] = None, **kwargs: Outcome):
        self.outcomes: Dict[str, Outcome] = dict(outcomes or {})
        self.outcomes.update(kwargs)
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def called(self, primitive: str) -> bool:
        return any(name == primitive for name, _ in self.calls)

    def _play(self, primitive: str, *args: Any) -> str:
        self.calls.append((primitive, args))
        outcome = self.outcomes.get(primitive)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            if primitive in self._MUTATING:
                return ""
            raise EmptyOutputError([primitive])
        out = outcome.strip()
        if not out and primitive not in self._MUTATING:
            raise EmptyOutputError([primitive])
        return out

    def is_inside_work_tree(self, directory: Path) -> str:
        return self._play("is_inside_work_tree", directory)

    def top_level(self, directory: Path) -> str:
        return self._play("top_level", directory)

    def current_branch(self, directory: Path) -> str:
        return self._play("current_branch", directory)

    def rev_parse(self, directory: Path, short: bool = False) -> str:
        return self._play("rev_parse_short" if short else "rev_parse", directory)

    def last_commit_date(self, directory: Path) -> str:
        return self._play("last_commit_date", directory)

    def status_porcelain(self, directory: Path) -> str:
        return self._play("status_porcelain", directory)

    def describe(self, directory: Path) -> str:
        return self._play("describe", directory)

    def clone(self, url: str, directory: Path) -> str:
        return self._play("clone", url, directory)

    def remote_url(self, directory: Path, name: str) -> str:
        return self._play("remote_url", directory, name)

    def fetch(self, directory: Path) -> str:
        return self._play("fetch", directory)

    def pull(self, directory: Path) -> str:
        return self._play("pull", directory)
