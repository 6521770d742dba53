"""
Line-oriented front matter codec.

Reads and rewrites a small set of scalar string fields inside the delimited
block at the top of a file, without a YAML parser. The same block format is
used by Markdown posts and by the generated .astro files, where metadata
keys and script `const` assignments share one block.

This is not schema-validating: a hand-edited or malformed block degrades to
"field not found" when reading. Only targeted updates on a file with no
block at all are errors.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from studio.core.errors import MalformedMetadataError
from studio.core.naming import humanize_slug

DELIMITER = "---"


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


def split_lines(text: str) -> list[str]:
    """Split text into lines without line endings."""
    return text.splitlines()


def join_lines(lines: Iterable[str], trailing_newline: bool = True) -> str:
    """Join lines with LF, optionally ending with a newline."""
    text = "\n".join(lines)
    if trailing_newline:
        text += "\n"
    return text


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def find_block(lines: list[str]) -> tuple[int, int] | None:
    """Locate the front matter block.

    Line 0 must be exactly the delimiter; the block closes at the next line
    that is exactly the delimiter.

    Returns:
        (0, end) where end is the closing delimiter's index, or None
    """
    if not lines or lines[0] != DELIMITER:
        return None
    for i in range(1, len(lines)):
        if lines[i] == DELIMITER:
            return 0, i
    return None


def render_value(value: str) -> str:
    """Render a value as a double-quoted string literal.

    JSON string syntax is also a valid YAML double-quoted scalar and a valid
    script string, so one rendering serves both kinds of line.
    """
    return json.dumps(value, ensure_ascii=False)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        try:
            decoded = json.loads(value)
        except ValueError:
            return value[1:-1]
        if isinstance(decoded, str):
            return decoded
        return value[1:-1]
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    return value


def extract_field(lines: list[str], block_end: int, key: str) -> str | None:
    """Get the value of the first `key:` line inside the block.

    Args:
        lines: File lines
        block_end: Index of the closing delimiter
        key: Field name

    Returns:
        Unquoted value, or None if no line in the block has that key
    """
    prefix = f"{key}:"
    for line in lines[1:block_end]:
        stripped = line.strip()
        if stripped.startswith(prefix):
            return _unquote(stripped[len(prefix):].strip())
    return None


def read_field(text: str, key: str) -> str | None:
    """Get a front matter field straight from file text."""
    lines = split_lines(text)
    block = find_block(lines)
    if block is None:
        return None
    return extract_field(lines, block[1], key)


def resolve_title(content: str, slug: str) -> str:
    """Resolve a post's display title.

    Precedence: front matter `title:` (even when empty), then the first `# `
    heading anywhere in the file, then the humanized slug.
    """
    lines = split_lines(content)

    block = find_block(lines)
    if block is not None:
        title = extract_field(lines, block[1], "title")
        if title is not None:
            return title

    for line in lines:
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip()

    return humanize_slug(slug)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldRule:
    """One textual rendering of a field inside the block.

    pattern spots the line to rewrite; template rebuilds it. Templates are
    str.format strings receiving {indent}, {value}, and the pattern's named
    groups.
    """

    pattern: re.Pattern[str]
    template: str
    value: str
    insert_if_missing: bool = False

    def matches(self, line: str) -> bool:
        return self.pattern.match(line) is not None

    def render(self, line: str = "") -> str:
        match = self.pattern.match(line)
        groups = match.groupdict() if match else {}
        indent = line[: len(line) - len(line.lstrip())]
        return self.template.format(indent=indent, value=render_value(self.value), **groups)


def _escape_braces(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


def key_rule(key: str, value: str) -> FieldRule:
    """Rule for a metadata line: `key: "value"`. Inserted when missing."""
    return FieldRule(
        pattern=re.compile(rf"^\s*{re.escape(key)}:"),
        template="{indent}" + _escape_braces(key) + ": {value}",
        value=value,
        insert_if_missing=True,
    )


def assignment_rule(name: str, value: str) -> FieldRule:
    """Rule for a script line: `const name = "value";`. Never inserted."""
    return FieldRule(
        pattern=re.compile(
            rf"^\s*(?P<decl>(?:export\s+)?(?:const|let|var))\s+{re.escape(name)}\s*="
        ),
        template="{indent}{decl} " + _escape_braces(name) + " = {value};",
        value=value,
    )


def apply_rules(lines: list[str], rules: Iterable[FieldRule]) -> list[str]:
    """Apply rules to the block and return the new lines.

    Each rule rewrites the first matching line between the delimiters.
    Rules that match nothing and allow insertion are added right after the
    opening delimiter, in the order given.

    Raises:
        MalformedMetadataError: If there is no front matter block
    """
    block = find_block(lines)
    if block is None:
        raise MalformedMetadataError("No frontmatter block")

    start, end = block
    result = list(lines)
    inserts: list[str] = []

    for rule in rules:
        for i in range(start + 1, end):
            if rule.matches(result[i]):
                result[i] = rule.render(result[i])
                break
        else:
            if rule.insert_if_missing:
                inserts.append(rule.render())

    result[start + 1:start + 1] = inserts
    return result


def upsert_fields(
    lines: list[str],
    fields: Mapping[str, str],
    assignments: Mapping[str, str] | None = None,
    create: bool = False,
) -> list[str]:
    """Set front matter fields, keeping script assignments in step.

    Each field rewrites its `key:` line (or is inserted) and also rewrites a
    `const key = ...` line if one exists. Names in assignments only rewrite
    existing `const` lines.

    Args:
        lines: File lines
        fields: Ordered key -> value
        assignments: Extra script variable name -> value
        create: Start a new block if the file has none

    Returns:
        Updated lines

    Raises:
        MalformedMetadataError: If there is no block and create is False
    """
    if find_block(lines) is None:
        if not create:
            raise MalformedMetadataError("No frontmatter block")
        lines = [DELIMITER, DELIMITER, *lines]

    rules: list[FieldRule] = []
    for key, value in fields.items():
        rules.append(key_rule(key, value))
        rules.append(assignment_rule(key, value))
    for name, value in (assignments or {}).items():
        rules.append(assignment_rule(name, value))

    return apply_rules(lines, rules)


def update_text(
    text: str,
    fields: Mapping[str, str],
    assignments: Mapping[str, str] | None = None,
) -> str:
    """upsert_fields over whole file text, keeping its trailing newline."""
    lines = upsert_fields(split_lines(text), fields, assignments)
    return join_lines(lines, trailing_newline=text.endswith(("\n", "\r")))
