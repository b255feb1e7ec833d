"""Best-effort JSON parsing of language model replies.

Models are asked for JSON but routinely wrap it in code fences, prefix it
with prose, append commentary or stop mid-object. ``parse_model_json`` tries
the reply as-is, then a repaired version, and reports the outcome as a value:
``Parsed`` or ``Failed``. It never raises.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Parsed:
    """A JSON object recovered from model output.

    Attributes:
        data: The parsed object
        repaired: True if the text had to be cleaned up before it parsed
    """

    data: Dict[str, Any]
    repaired: bool = False


@dataclass(frozen=True)
class Failed:
    """Model output that did not yield a JSON object.

    Attributes:
        reason: Human-readable cause, suitable for a verdict reason
        raw: The original model output
    """

    reason: str
    raw: str = ""


ParseOutcome = Union[Parsed, Failed]


def strip_code_fences(text: str) -> str:
    """Remove a leading ```/```json fence line and a trailing ``` fence."""
    t = (text or "").strip()
    if t.startswith("```"):
        lines = t.splitlines()[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        t = "\n".join(lines).strip()
    return t


def extract_jsonish_tail(text: str) -> str:
    """Drop everything before the first '{' or '['."""
    t = text or ""
    starts = [i for i in (t.find("{"), t.find("[")) if i != -1]
    if not starts:
        return t.strip()
    return t[min(starts):].strip()


def _scan_brackets(text: str) -> tuple:
    """Walk ``text`` outside string literals.

    Returns:
        (open_stack, balanced_end) where open_stack holds the unclosed openers
        and balanced_end is the index just past the bracket that closes the
        first top-level value (None if it is never closed).
    """
    stack: List[str] = []
    in_str = False
    esc = False
    started = False
    balanced_end: Optional[int] = None

    for i, ch in enumerate(text):
        if in_str:
            if esc:
                esc = False
            elif ch == "\\":
                esc = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            in_str = True
            continue

        if ch in "{[":
            stack.append(ch)
            started = True
        elif ch in "}]" and stack:
            top = stack[-1]
            if (top == "{" and ch == "}") or (top == "[" and ch == "]"):
                stack.pop()
                if started and not stack:
                    balanced_end = i + 1
                    break

    return stack, balanced_end


def repair_json_text(text: str, max_append: int = 256) -> str:
    """
    Clean up a model reply so that ``json.loads`` has a chance.

    1) strip code fences
    2) keep the tail starting at the first bracket
    3) cut after the first complete value (drops trailing prose)
    4) otherwise append the missing closers (fixes truncated output)
    """
    t = extract_jsonish_tail(strip_code_fences(text))

    stack, balanced_end = _scan_brackets(t)
    if balanced_end is not None:
        return t[:balanced_end].strip()

    if stack:
        closers = "".join("}" if opener == "{" else "]" for opener in reversed(stack))
        t = t + closers[:max_append]
    return t.strip()


def parse_model_json(text: Optional[str]) -> ParseOutcome:
    """
    Parse a JSON object from a model reply.

    Args:
        text: Raw model output (may be None or empty)

    Returns:
        Parsed(data, repaired) on success, Failed(reason, raw) otherwise.
        A reply that parses to something other than an object is a failure.
    """
    raw = (text or "").strip()
    if not raw:
        return Failed(reason="Model returned an empty response", raw=raw)

    try:
        obj = json.loads(raw)
        if isinstance(obj, dict):
            return Parsed(data=obj, repaired=False)
    except json.JSONDecodeError:
        pass

    repaired = repair_json_text(raw)
    try:
        obj = json.loads(repaired)
    except json.JSONDecodeError as e:
        return Failed(reason=f"Model response is not valid JSON: {e.msg}", raw=raw)

    if not isinstance(obj, dict):
        return Failed(
            reason=f"Model response is JSON but not an object: {type(obj).__name__}",
            raw=raw,
        )
    return Parsed(data=obj, repaired=repaired != raw)
