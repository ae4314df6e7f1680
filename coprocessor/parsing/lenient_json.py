"""
Lenient JSON extraction for free-text LLM output.

Agents are asked to answer with a single JSON object but regularly wrap it
in prose or Markdown fences, or emit near-JSON (single quotes, trailing
commas, // remarks). extract() recovers the value when it can and returns
an ExtractionError value when it cannot. It never raises.

Repairs run cumulatively in a fixed order with a strict parse after each
step; the first successful parse wins:

1. strip_code_fences   - keep the body of the first ``` fenced block
2. balanced_object     - outermost balanced {...} span
3. single_quotes       - 'text' -> "text" outside double-quoted strings
4. line_comments       - drop // comments outside strings
5. trailing_commas     - drop commas directly before } or ]
"""

import json
import re
from typing import Any, Callable, Iterator, Optional, Tuple, Union

from pydantic import BaseModel

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class ExtractionError(BaseModel):
    """No strict parse or repair produced valid JSON."""

    raw: str
    reason: str = ""
    error_type: str = "extraction_error"


def _try_parse(text: str) -> Tuple[bool, Any, str]:
    try:
        return True, json.loads(text), ""
    except ValueError as e:
        return False, None, str(e)
    except RecursionError:
        return False, None, "nesting too deep"


def _scan(text: str) -> Iterator[Tuple[int, str, bool]]:
    """Yield (index, char, quoted) where quoted covers double-quoted literals."""
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            yield index, char, True
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
            yield index, char, True
        else:
            yield index, char, False


def strip_code_fences(text: str) -> str:
    """Return the body of the first fenced block, or the trimmed text."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()

    stripped = text.strip()
    # Unterminated fence from a truncated answer
    if stripped.startswith("```"):
        newline = stripped.find("\n")
        return stripped[newline + 1:].strip() if newline != -1 else ""
    return stripped


def balanced_object(text: str) -> str:
    """Return the outermost balanced {...} span, ignoring braces in strings."""
    start = text.find("{")
    if start == -1:
        return text

    depth = 0
    for index, char, quoted in _scan(text[start:]):
        if quoted:
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:start + index + 1]

    end = text.rfind("}")
    if end > start:
        return text[start:end + 1]
    return text[start:]


def single_quotes(text: str) -> str:
    """Rewrite single-quoted strings as double-quoted JSON strings."""
    out = []
    quote: Optional[str] = None
    escaped = False

    for char in text:
        if quote is None:
            if char == "'":
                quote = "'"
                out.append('"')
            else:
                if char == '"':
                    quote = '"'
                out.append(char)
            continue

        if escaped:
            escaped = False
            if quote == "'" and char == "'":
                # \' needs no escape inside a double-quoted string
                out.pop()
            out.append(char)
        elif char == "\\":
            escaped = True
            out.append(char)
        elif char == quote:
            quote = None
            out.append('"')
        elif char == '"':
            out.append('\\"')
        else:
            out.append(char)

    return "".join(out)


def line_comments(text: str) -> str:
    """Drop // comments that start outside string literals."""
    out = []
    in_string = False
    escaped = False
    index = 0

    while index < len(text):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif text.startswith("//", index):
            newline = text.find("\n", index)
            if newline == -1:
                break
            index = newline
            continue
        out.append(char)
        index += 1

    return "".join(out)


def trailing_commas(text: str) -> str:
    """Drop commas that directly precede a closing bracket."""
    out = []
    for index, char, quoted in _scan(text):
        if char == "," and not quoted:
            ahead = index + 1
            while ahead < len(text) and text[ahead].isspace():
                ahead += 1
            if ahead < len(text) and text[ahead] in "}]":
                continue
        out.append(char)
    return "".join(out)


REPAIRS: Tuple[Tuple[str, Callable[[str], str]], ...] = (
    ("strip_code_fences", strip_code_fences),
    ("balanced_object", balanced_object),
    ("single_quotes", single_quotes),
    ("line_comments", line_comments),
    ("trailing_commas", trailing_commas),
)


def extract_with_repair(raw: Any) -> Tuple[Union[Any, ExtractionError], Optional[str]]:
    """
    Extract a JSON value and report which repair recovered it.

    Args:
        raw: Text that should contain one JSON object

    Returns:
        (value, repair_name). repair_name is None when the strict parse
        succeeded. On failure value is an ExtractionError.
    """
    if not isinstance(raw, str):
        return ExtractionError(raw=str(raw), reason="input is not a string"), None

    ok, value, error = _try_parse(raw)
    if ok:
        return value, None

    candidate = raw
    for name, repair in REPAIRS:
        repaired = repair(candidate)
        if repaired == candidate:
            continue
        candidate = repaired
        ok, value, error = _try_parse(candidate)
        if ok:
            return value, name

    return ExtractionError(raw=raw, reason=error), None


def extract(raw: Any) -> Union[Any, ExtractionError]:
    """Best-effort JSON value from LLM text, or an ExtractionError."""
    value, _ = extract_with_repair(raw)
    return value
