"""Pull a JSON object out of free-form model output."""

from __future__ import annotations

import json
import re

_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def extract_json_object(text: str) -> dict:
    """Return the first JSON object found in ``text``.

    Accepts bare JSON, a fenced ```json block, or an object embedded in prose.
    Raises ValueError when no object can be decoded.
    """
    text = text.strip()
    candidates = [text]
    fenced = _FENCE.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    candidates.extend(_brace_spans(text))

    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except (json.JSONDecodeError, TypeError):
            continue
        if isinstance(value, dict):
            return value

    closed = _close_truncated(text)
    if closed is not None:
        return closed

    raise ValueError(f"No JSON object found in text: {text[:200]}...")


def _brace_spans(text: str) -> list[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return []
    return [text[start : end + 1]]


def _close_truncated(text: str, max_attempts: int = 20) -> dict | None:
    """Recover an object from a response that stopped mid-way.

    Cuts back to the last complete member (at a comma) and closes whatever
    brackets are still open.
    """
    start = text.find("{")
    if start == -1:
        return None
    body = text[start:]
    cuts = [len(body)] + [i for i in range(len(body) - 1, 0, -1) if body[i] == ","]
    for cut in cuts[:max_attempts]:
        piece = body[:cut].rstrip().rstrip(",")
        closers = _open_brackets(piece)
        if not closers:
            continue
        try:
            value = json.loads(piece + closers)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value
    return None


def _open_brackets(text: str) -> str:
    """Closing characters for brackets still open at the end of ``text``."""
    stack: list[str] = []
    in_string = escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack:
            stack.pop()
    if in_string:
        return ""
    return "".join(reversed(stack))
