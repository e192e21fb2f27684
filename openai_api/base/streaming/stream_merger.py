"""Delta merging for streamed chat completions.

A streamed completion arrives as a sequence of ``chat.completion.chunk``
objects. :class:`StreamMerger` folds them, in arrival order, into one
completion-shaped mapping.

Merge rules:
    - Top-level fields other than ``choices`` are first-write-wins, except
      ``usage`` which takes every non-null value (usage totals arrive in the
      terminal chunk).
    - Choices are keyed by ``index`` and merged independently.
    - ``role`` is set once; ``content`` fragments are concatenated.
    - Tool calls are keyed by their ``index`` within the choice; ``id``,
      ``type`` and ``function.name`` are set once and ``function.arguments``
      fragments are concatenated.
    - ``finish_reason`` is last-non-null-wins.

Missing fields are treated as absent; nothing is ever rejected. The merger is
not thread-safe: use one instance per in-flight stream.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional


@dataclass
class _MergedToolCall:
    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "id": self.id,
            "type": self.type,
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class _MergedChoice:
    index: int
    role: Optional[str] = None
    content: Optional[str] = None
    finish_reason: Optional[str] = None
    tool_calls: Dict[int, _MergedToolCall] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [
                self.tool_calls[i].to_dict() for i in sorted(self.tool_calls)
            ]
        return {
            "index": self.index,
            "message": message,
            "finish_reason": self.finish_reason,
        }


def _as_index(value: Any) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


class StreamMerger:
    """Accumulates streamed delta events into a single completion."""

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}
        self._choices: Dict[int, _MergedChoice] = {}

    def merge(self, event: Mapping[str, Any]) -> None:
        """Fold one parsed delta event into the accumulator."""
        if not isinstance(event, Mapping):
            return
        for key, value in event.items():
            if key == "choices":
                continue
            if key == "usage":
                if value is not None or key not in self._fields:
                    self._fields[key] = value
            elif key not in self._fields:
                self._fields[key] = value
        for choice in event.get("choices") or ():
            if isinstance(choice, Mapping):
                self._merge_choice(choice)

    def _merge_choice(self, choice: Mapping[str, Any]) -> None:
        index = _as_index(choice.get("index"))
        merged = self._choices.get(index)
        if merged is None:
            merged = self._choices[index] = _MergedChoice(index=index)

        delta = choice.get("delta")
        if isinstance(delta, Mapping):
            role = delta.get("role")
            if role is not None and merged.role is None:
                merged.role = role
            content = delta.get("content")
            if isinstance(content, str):
                merged.content = (merged.content or "") + content
            for fragment in delta.get("tool_calls") or ():
                if isinstance(fragment, Mapping):
                    self._merge_tool_call(merged, fragment)

        finish_reason = choice.get("finish_reason")
        if finish_reason is not None:
            merged.finish_reason = finish_reason

    @staticmethod
    def _merge_tool_call(choice: _MergedChoice, fragment: Mapping[str, Any]) -> None:
        index = _as_index(fragment.get("index"))
        call = choice.tool_calls.get(index)
        if call is None:
            call = choice.tool_calls[index] = _MergedToolCall(index=index)
        if call.id is None and fragment.get("id") is not None:
            call.id = fragment["id"]
        if call.type is None and fragment.get("type") is not None:
            call.type = fragment["type"]
        function = fragment.get("function")
        if isinstance(function, Mapping):
            if call.name is None and function.get("name") is not None:
                call.name = function["name"]
            arguments = function.get("arguments")
            if isinstance(arguments, str):
                call.arguments += arguments

    def merged(self) -> Dict[str, Any]:
        """Return the accumulated completion.

        ``choices`` is listed in first-seen order, which need not be index
        order. Choice and message mappings are rebuilt on every call.
        """
        result = dict(self._fields)
        result["choices"] = [choice.to_dict() for choice in self._choices.values()]
        return result


def merge_stream(events: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge every event of ``events`` and return the merged completion."""
    merger = StreamMerger()
    for event in events:
        merger.merge(event)
    return merger.merged()


__all__ = ["StreamMerger", "merge_stream"]
