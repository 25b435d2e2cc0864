"""Overlay generator for archetype folders.

A transformation file (YAML) declares the inputs an archetype needs and the
transformations applied while copying the archetype onto a destination
tree::

    ignore:
      - "*.bak"
    inputs:
      - id: feature_name
        text: Name of the feature
        type: text
      - id: with_readme
        type: yesno
        default: "yes"
    transformations:
      - name: feature name
        type: replace
        pattern: hello-world
        replacement: "{{ .feature_name }}"
        files: ["**"]
      - name: readme section
        type: include
        region_marker: __README__
        condition: .with_readme
        files: ["README.md"]

Replacements apply to file contents and relative paths. Include regions are
delimited by lines containing ``BEGIN <marker>`` and ``END <marker>``; the
marker lines are always dropped and the region body is kept only when the
condition holds. Existing destination files are overwritten, nothing is
deleted.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

import yaml

from .archetypes import is_transformation_file
from .errors import GenerationError

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{\s*\.(\w+)\s*\}\}")
_TRUE = {"yes", "y", "true", "1"}
_FALSE = {"no", "n", "false", "0"}


@dataclass
class TemplateInput:
    id: str
    type: str = "text"  # text, yesno
    text: str = ""
    default: Optional[str] = None

    def coerce(self, raw: str) -> Any:
        if self.type != "yesno":
            return raw
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise GenerationError(f"input '{self.id}' expects yes or no, got {raw!r}")


@dataclass
class Transformation:
    name: str
    type: str
    files: List[str] = field(default_factory=lambda: ["**"])
    pattern: str = ""
    replacement: str = ""
    region_marker: str = ""
    condition: str = ""

    def applies_to(self, rel_path: str) -> bool:
        return any(fnmatch.fnmatch(rel_path, glob) for glob in self.files)


@dataclass
class TransformationSpec:
    inputs: List[TemplateInput] = field(default_factory=list)
    transformations: List[Transformation] = field(default_factory=list)
    ignore: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformationSpec":
        try:
            inputs = [
                TemplateInput(
                    id=str(item["id"]),
                    type=str(item.get("type", "text")),
                    text=str(item.get("text", "")),
                    default=None if item.get("default") is None else str(item["default"]),
                )
                for item in data.get("inputs") or []
            ]
            transformations = []
            for item in data.get("transformations") or []:
                kind = str(item.get("type", ""))
                if kind not in ("replace", "include"):
                    raise GenerationError(f"unsupported transformation type {kind!r}")
                if kind == "replace" and not item.get("pattern"):
                    raise GenerationError("replace transformation requires a pattern")
                if kind == "include" and not item.get("region_marker"):
                    raise GenerationError("include transformation requires a region_marker")
                transformations.append(
                    Transformation(
                        name=str(item.get("name", kind)),
                        type=kind,
                        files=[str(f) for f in item.get("files") or ["**"]],
                        pattern=str(item.get("pattern", "")),
                        replacement=str(item.get("replacement", "")),
                        region_marker=str(item.get("region_marker", "")),
                        condition=str(item.get("condition", "")),
                    )
                )
        except (KeyError, TypeError, AttributeError) as e:
            raise GenerationError(f"invalid transformation file: {e}") from e
        return cls(
            inputs=inputs,
            transformations=transformations,
            ignore=[str(i) for i in data.get("ignore") or []],
        )

    @classmethod
    def load(cls, path: Path) -> "TransformationSpec":
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise GenerationError(f"cannot read transformation file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise GenerationError(f"invalid YAML in {path}: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise GenerationError(f"transformation file must be a mapping: {path}")
        return cls.from_dict(raw)


def parse_input_args(inputs: Sequence[TemplateInput], args: Sequence[str]) -> Dict[str, Any]:
    """Resolve input values from ``--id value`` / ``--id=value`` arguments."""
    known = {i.id: i for i in inputs}
    given: Dict[str, str] = {}
    it = iter(args)
    for arg in it:
        if not arg.startswith("--"):
            raise GenerationError(f"unexpected argument {arg!r}")
        key, sep, value = arg[2:].partition("=")
        if key not in known:
            raise GenerationError(f"unknown input '{key}'")
        if not sep:
            try:
                value = next(it)
            except StopIteration:
                raise GenerationError(f"missing value for input '{key}'") from None
        given[key] = value

    values: Dict[str, Any] = {}
    for spec in inputs:
        raw = given.get(spec.id, spec.default)
        if raw is None:
            raise GenerationError(f"missing required input '{spec.id}'")
        values[spec.id] = spec.coerce(raw)
    return values


def render(text: str, values: Dict[str, Any]) -> str:
    def _sub(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            raise GenerationError(f"unknown placeholder '{key}'")
        return str(values[key])

    return PLACEHOLDER.sub(_sub, text)


def evaluate_condition(condition: str, values: Dict[str, Any]) -> bool:
    expr = condition.strip()
    negate = expr.startswith("not ")
    if negate:
        expr = expr[4:].strip()
    if not expr.startswith("."):
        raise GenerationError(f"invalid condition {condition!r}")
    key = expr[1:]
    if key not in values:
        raise GenerationError(f"unknown input '{key}' in condition")
    result = bool(values[key])
    return not result if negate else result


def apply_include(text: str, marker: str, keep: bool) -> str:
    out: List[str] = []
    inside = False
    for line in text.splitlines(keepends=True):
        if f"BEGIN {marker}" in line:
            inside = True
            continue
        if f"END {marker}" in line:
            inside = False
            continue
        if inside and not keep:
            continue
        out.append(line)
    return "".join(out)


def _iter_files(source_dir: Path, ignore: Sequence[str]) -> Iterator[Path]:
    for path in sorted(source_dir.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(source_dir).as_posix()
        if is_transformation_file(path.name):
            continue
        if any(fnmatch.fnmatch(rel, glob) for glob in ignore):
            logger.debug("ignoring %s", rel)
            continue
        yield path


def overlay_generate(
    transformation_file: Path,
    source_dir: Path,
    destination: Path,
    args: Sequence[str],
) -> List[Path]:
    """Render ``source_dir`` onto ``destination`` and return the written files."""
    spec = TransformationSpec.load(Path(transformation_file))
    values = parse_input_args(spec.inputs, args)
    source_dir = Path(source_dir)
    destination = Path(destination)

    written: List[Path] = []
    for path in _iter_files(source_dir, spec.ignore):
        rel = path.relative_to(source_dir).as_posix()
        data = path.read_bytes()
        try:
            text: Optional[str] = data.decode("utf-8")
        except UnicodeDecodeError:
            text = None

        target_rel = rel
        for t in spec.transformations:
            if not t.applies_to(rel):
                continue
            if t.type == "replace":
                replacement = render(t.replacement, values)
                target_rel = target_rel.replace(t.pattern, replacement)
                if text is not None:
                    text = text.replace(t.pattern, replacement)
            elif text is not None:
                text = apply_include(text, t.region_marker, evaluate_condition(t.condition, values))

        target = destination / target_rel
        target.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            target.write_bytes(data)
        else:
            target.write_bytes(text.encode("utf-8"))
        logger.debug("wrote %s", target)
        written.append(target)
    return written
