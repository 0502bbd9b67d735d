"""Frontmatter block serializer with quote-if-special string escaping"""

import datetime
import json
import math
from collections.abc import Mapping, Sequence
from typing import Any

from gardenfm.core.models import Bool, Map, Null, Number, Seq, Str, Value


BLOCK_START = "---"
BLOCK_END = "---"

QUOTE_TRIGGERS = frozenset(":#{}[],&*?|-<>=!%@`")


def to_value(obj: Any) -> Value:
    """Lift a plain Python value into its serializer variant."""
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        return Number(obj)
    if isinstance(obj, str):
        return Str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return Str(obj.decode("utf-8", errors="replace"))
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return Str(obj.isoformat())
    if isinstance(obj, Mapping):
        return Map(dict(obj))
    if isinstance(obj, Sequence):
        return Seq(tuple(obj))
    return Str(str(obj))


def needs_quotes(text: str) -> bool:
    """True when text holds a trigger character, an edge space, or a newline."""
    return (
        any(c in QUOTE_TRIGGERS for c in text)
        or text.startswith(" ")
        or text.endswith(" ")
        or "\n" in text
    )


def quote(text: str) -> str:
    """Wrap text in double quotes, escaping backslashes, quotes, then newlines."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def format_number(n: int | float) -> str:
    if isinstance(n, int):
        return str(n)
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    return str(int(n)) if n.is_integer() else repr(n)


def _plain(item: Any) -> str:
    """Sequence item in its simple string form; no escaping is applied."""
    match to_value(item):
        case Null():
            return "null"
        case Bool(value=b):
            return "true" if b else "false"
        case Number(value=n):
            return format_number(n)
        case Str(value=s):
            return s
        case Seq(items=items):
            return ",".join(_plain(i) for i in items)
        case Map(entries=entries):
            return _compact_json(entries)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    return str(obj)


def _compact_json(entries: dict[str, Any]) -> str:
    return json.dumps(entries, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def format_entry(key: str, value: Value) -> str:
    """Render one key and its value as a line (or a line group for sequences)."""
    match value:
        case Null():
            return f"{key}: \n"
        case Bool(value=b):
            return f"{key}: {'true' if b else 'false'}\n"
        case Number(value=n):
            return f"{key}: {format_number(n)}\n"
        case Str(value=s):
            return f"{key}: {quote(s) if needs_quotes(s) else s}\n"
        case Seq(items=()):
            return f"{key}: []\n"
        case Seq(items=items):
            return f"{key}:\n" + "".join(f"  - {_plain(i)}\n" for i in items)
        case Map(entries=entries):
            return f"{key}: {_compact_json(entries)}\n"
    raise TypeError(f"Unsupported value variant: {type(value).__name__}")


def render_body(record: Mapping[str, Any]) -> str:
    """Render every entry in insertion order; an empty record renders as ''."""
    return "".join(format_entry(key, to_value(value)) for key, value in record.items())


def render_block(record: Mapping[str, Any]) -> str:
    """Render record between the start and end delimiter lines."""
    return f"{BLOCK_START}\n{render_body(record)}{BLOCK_END}\n"
