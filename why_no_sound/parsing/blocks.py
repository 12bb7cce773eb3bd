"""Generic parser for the nested record blocks printed by ``pactl list``.

Every ``pactl list cards|sinks|sink-inputs`` listing has the same shape::

    Sink #0
        State: RUNNING
        Name: alsa_output.pci-0000_00_1f.3.analog-stereo
        Properties:
            device.description = "Built-in Audio"
        Ports:
            analog-output-speaker: Speakers (type: Speaker, priority: 10000, available)

A :class:`BlockGrammar` says which line starts a new record and which lines
open a nested subsection; :func:`parse_records` turns a blob of text into
:class:`Record` objects. Parsing never raises: anything it does not
recognise is skipped.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
import re
from typing import Mapping

_PROPERTY_PATTERN = re.compile(r'^([^\s=:]+)\s+=\s+(.*)$')
_FIELD_PATTERN = re.compile(r"^([^:]+):(.*)$")
_SINK_HEADER_PATTERN = re.compile(r"^Sink #\d+\s*$")

DEFAULT_SUBSECTIONS = frozenset(
    {"Properties", "Ports", "Profiles", "Sinks", "Sources", "Formats"}
)


def parse_property(line: str) -> tuple[str, str] | None:
    """Parse a ``key = "value"`` property line; quotes are stripped."""

    match = _PROPERTY_PATTERN.match(line.strip())
    if match is None:
        return None
    value = match.group(2).strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return match.group(1), value


def parse_field(line: str) -> tuple[str, str] | None:
    """Parse a ``label: value`` line into trimmed parts."""

    match = _FIELD_PATTERN.match(line.strip())
    if match is None:
        return None
    label = match.group(1).strip()
    if not label:
        return None
    return label, match.group(2).strip()


def indentation(line: str) -> int:
    """Return the width of the leading whitespace of ``line``."""

    return len(line) - len(line.lstrip())


def subsection_header(names: Iterable[str]) -> Callable[[str], str | None]:
    """Return a predicate mapping ``"<name>:"`` lines to ``name``."""

    known = frozenset(names)

    def _match(line: str) -> str | None:
        if line.endswith(":") and line[:-1] in known:
            return line[:-1]
        return None

    return _match


@dataclass(frozen=True)
class BlockGrammar:
    """Predicates driving :func:`parse_records`.

    ``is_boundary`` receives a stripped line and returns True when it starts
    a new record. ``subsection_name`` receives a stripped line and returns
    the subsection name when the line opens one.
    """

    is_boundary: Callable[[str], bool]
    subsection_name: Callable[[str], str | None] = field(
        default=subsection_header(DEFAULT_SUBSECTIONS)
    )


@dataclass(frozen=True)
class Subsection:
    """A named group of lines nested inside a record."""

    name: str
    lines: tuple[str, ...] = ()
    depths: tuple[int, ...] = ()

    def entries(self) -> list[tuple[str, str]]:
        """Return ``(label, value)`` pairs for the top-level lines only.

        Deeper continuation lines (such as ``Part of profile(s): ...`` under
        a port) are skipped.
        """

        if not self.lines:
            return []
        top = min(self.depths)
        pairs: list[tuple[str, str]] = []
        for line, depth in zip(self.lines, self.depths):
            if depth != top:
                continue
            parsed = parse_property(line) or parse_field(line)
            if parsed is not None:
                pairs.append(parsed)
        return pairs

    def labels(self) -> list[str]:
        """Return the labels of the top-level entries."""

        return [label for label, _ in self.entries()]


@dataclass(frozen=True)
class Record:
    """One parsed record: its header line, fields, properties and subsections."""

    header: str
    fields: Mapping[str, str] = field(default_factory=dict)
    properties: Mapping[str, str] = field(default_factory=dict)
    subsections: Mapping[str, Subsection] = field(default_factory=dict)

    def get(self, label: str, default: str = "") -> str:
        """Return a field value, falling back to a property of the same name."""

        if label in self.fields:
            return self.fields[label]
        return self.properties.get(label, default)

    def subsection(self, name: str) -> Subsection:
        """Return the named subsection, or an empty one."""

        return self.subsections.get(name) or Subsection(name=name)


class _RecordBuilder:
    def __init__(self, header: str) -> None:
        self.header = header
        self.fields: dict[str, str] = {}
        self.properties: dict[str, str] = {}
        self.subsections: dict[str, tuple[list[str], list[int]]] = {}
        self._open: str | None = None
        self._open_depth = 0
        self.add_line(header)

    def open_subsection(self, name: str, depth: int) -> None:
        self._open = name
        self._open_depth = depth
        self.subsections.setdefault(name, ([], []))

    def accepts_nested(self, depth: int) -> bool:
        return self._open is not None and depth > self._open_depth

    def add_nested(self, line: str, depth: int) -> None:
        assert self._open is not None
        lines, depths = self.subsections[self._open]
        lines.append(line)
        depths.append(depth - self._open_depth)
        prop = parse_property(line)
        if prop is not None:
            self.properties.setdefault(*prop)

    def add_line(self, line: str) -> None:
        self._open = None
        prop = parse_property(line)
        if prop is not None:
            self.properties.setdefault(*prop)
            return
        parsed = parse_field(line)
        if parsed is not None:
            self.fields.setdefault(*parsed)

    def build(self) -> Record:
        return Record(
            header=self.header,
            fields=dict(self.fields),
            properties=dict(self.properties),
            subsections={
                name: Subsection(name=name, lines=tuple(lines), depths=tuple(depths))
                for name, (lines, depths) in self.subsections.items()
            },
        )


def parse_records(text: str, grammar: BlockGrammar) -> Iterator[Record]:
    """Lazily split ``text`` into records according to ``grammar``.

    Lines before the first boundary are ignored. Duplicate labels keep their
    first value. A subsection runs until the next subsection header, a line
    indented no deeper than its header, or the next record boundary.
    """

    builder: _RecordBuilder | None = None
    for raw_line in (text or "").splitlines():
        stripped = raw_line.strip()
        if not stripped:
            continue

        if grammar.is_boundary(stripped):
            if builder is not None:
                yield builder.build()
            builder = _RecordBuilder(stripped)
            continue

        if builder is None:
            continue

        depth = indentation(raw_line)
        name = grammar.subsection_name(stripped)
        if name is not None:
            builder.open_subsection(name, depth)
        elif builder.accepts_nested(depth):
            builder.add_nested(stripped, depth)
        else:
            builder.add_line(stripped)

    if builder is not None:
        yield builder.build()


def render_record(record: Record) -> str:
    """Write a record back out in the block format it was parsed from."""

    lines = [record.header]
    header_field = parse_field(record.header)
    nested_keys = {
        prop[0]
        for sub in record.subsections.values()
        for prop in (parse_property(line) for line in sub.lines)
        if prop is not None
    }

    for label, value in record.fields.items():
        if header_field is not None and header_field[0] == label:
            continue
        lines.append(f"\t{label}: {value}".rstrip())
    for key, value in record.properties.items():
        if key in nested_keys:
            continue
        lines.append(f'\t{key} = "{value}"')
    for sub in record.subsections.values():
        lines.append(f"\t{sub.name}:")
        for line, depth in zip(sub.lines, sub.depths):
            lines.append("\t" + "\t" * depth + line)
    return "\n".join(lines) + "\n"


def _starts_with(prefix: str) -> Callable[[str], bool]:
    def _match(line: str) -> bool:
        return line.startswith(prefix)

    return _match


PACTL_NAME_GRAMMAR = BlockGrammar(is_boundary=_starts_with("Name:"))
PACTL_SINK_HEADER_GRAMMAR = BlockGrammar(
    is_boundary=lambda line: _SINK_HEADER_PATTERN.match(line) is not None
)
PACTL_STREAM_GRAMMAR = BlockGrammar(is_boundary=_starts_with("Sink:"))
