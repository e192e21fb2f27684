"""Tests for folding streamed delta events into a single completion."""
from __future__ import annotations

import itertools
import json

from openai_api.base.streaming import StreamMerger, iter_sse_events, merge_stream

from .utils import split_every, sse_body


def _by_index(merged):
    merged = dict(merged)
    merged["choices"] = sorted(merged["choices"], key=lambda c: c["index"])
    return merged


def test_merges_interleaved_choices(load_jsonl, load_fixture):
    merged = merge_stream(load_jsonl("stream_content.jsonl"))
    assert _by_index(merged) == load_fixture("stream_content_result.json")


def test_merges_parallel_tool_calls(load_jsonl, load_fixture):
    merged = merge_stream(load_jsonl("stream_tool_calls.jsonl"))
    assert merged == load_fixture("stream_tool_calls_result.json")


def test_content_concatenation_per_choice():
    events = [
        {"choices": [{"index": 0, "delta": {"content": "Hel"}}]},
        {"choices": [{"index": 0, "delta": {"content": "lo"}}]},
        {"choices": [{"index": 0, "delta": {"content": ", world"}}]},
    ]
    merged = merge_stream(events)
    assert merged["choices"][0]["message"]["content"] == "Hello, world"


def test_top_level_fields_first_write_wins():
    merged = merge_stream(
        [
            {"id": "a", "model": "m1", "choices": []},
            {"id": "b", "model": "m2", "created": 5, "choices": []},
        ]
    )
    assert (merged["id"], merged["model"], merged["created"]) == ("a", "m1", 5)


def test_usage_takes_last_non_null_value():
    merged = merge_stream(
        [
            {"usage": None, "choices": []},
            {"usage": {"total_tokens": 3}, "choices": []},
            {"usage": None, "choices": []},
        ]
    )
    assert merged["usage"] == {"total_tokens": 3}


def test_finish_reason_last_non_null_wins():
    merged = merge_stream(
        [
            {"choices": [{"index": 0, "delta": {"role": "assistant"}, "finish_reason": None}]},
            {"choices": [{"index": 0, "delta": {}, "finish_reason": "length"}]},
            {"choices": [{"index": 0, "delta": {}, "finish_reason": None}]},
        ]
    )
    choice = merged["choices"][0]
    assert choice["finish_reason"] == "length"
    assert choice["message"]["role"] == "assistant"


def test_role_is_set_once():
    merged = merge_stream(
        [
            {"choices": [{"index": 0, "delta": {"role": "assistant"}}]},
            {"choices": [{"index": 0, "delta": {"role": "tool"}}]},
        ]
    )
    assert merged["choices"][0]["message"]["role"] == "assistant"


def test_choice_indices_are_independent():
    events = [
        {"choices": [{"index": 1, "delta": {"content": "b1"}}]},
        {"choices": [{"index": 0, "delta": {"content": "a1"}}]},
        {"choices": [{"index": 1, "delta": {"content": "b2"}}]},
        {"choices": [{"index": 0, "delta": {"content": "a2"}}]},
    ]
    merged = merge_stream(events)
    # first-seen order, not index order
    assert [c["index"] for c in merged["choices"]] == [1, 0]
    contents = {c["index"]: c["message"]["content"] for c in merged["choices"]}
    assert contents == {0: "a1a2", 1: "b1b2"}


def test_interleaving_other_choices_does_not_change_a_choice():
    a = [{"choices": [{"index": 0, "delta": {"content": s}}]} for s in ("x", "y", "z")]
    b = [{"choices": [{"index": 1, "delta": {"content": s}}]} for s in ("1", "2")]
    alone = merge_stream(a)["choices"][0]
    for positions in itertools.combinations(range(len(a) + len(b)), len(b)):
        a_iter, b_iter = iter(a), iter(b)
        events = [next(b_iter) if i in positions else next(a_iter) for i in range(len(a) + len(b))]
        merged = merge_stream(events)
        choice = next(c for c in merged["choices"] if c["index"] == 0)
        assert choice == alone


def test_missing_fields_are_tolerated():
    merged = merge_stream(
        [
            {},
            {"choices": None},
            {"choices": [{"delta": None}]},
            {"choices": [{"index": 0, "delta": {"content": None, "tool_calls": None}}]},
            {"choices": [{"index": 0, "delta": {"tool_calls": [{"function": {"arguments": None}}]}}]},
        ]
    )
    choice = merged["choices"][0]
    assert choice["index"] == 0
    assert choice["message"]["content"] is None
    assert choice["message"]["tool_calls"] == [
        {"index": 0, "id": None, "type": None, "function": {"name": None, "arguments": ""}}
    ]


def test_non_mapping_event_is_ignored():
    merger = StreamMerger()
    merger.merge(["not", "an", "event"])
    assert merger.merged() == {"choices": []}


def test_merged_snapshot_is_independent_of_later_merges():
    merger = StreamMerger()
    merger.merge({"choices": [{"index": 0, "delta": {"content": "a"}}]})
    snapshot = merger.merged()
    merger.merge({"choices": [{"index": 0, "delta": {"content": "b"}}]})
    assert snapshot["choices"][0]["message"]["content"] == "a"
    assert merger.merged()["choices"][0]["message"]["content"] == "ab"


def test_decoded_sse_body_merges_same_for_any_chunking(load_jsonl, load_fixture):
    body = sse_body(load_jsonl("stream_tool_calls.jsonl"))
    expected = load_fixture("stream_tool_calls_result.json")
    for size in (1, 2, 3, 7, 64, len(body)):
        events = (json.loads(e.data) for e in iter_sse_events(split_every(body, size)))
        assert merge_stream(events) == expected, f"chunk size {size}"


def test_events_after_done_are_not_merged():
    body = sse_body([{"choices": [{"index": 0, "delta": {"content": "kept"}}]}])
    body += b'data: {"choices":[{"index":0,"delta":{"content":"dropped"}}]}\n\n'

    merged = merge_stream(json.loads(e.data) for e in iter_sse_events([body]))
    assert merged["choices"][0]["message"]["content"] == "kept"


def test_role_content_and_finish_reason_from_two_deltas():
    merged = merge_stream(
        [
            {"choices": [{"index": 0, "delta": {"role": "assistant", "content": "Hello"}}]},
            {"choices": [{"index": 0, "delta": {"content": " world"}, "finish_reason": "stop"}]},
        ]
    )
    assert merged["choices"] == [
        {"index": 0, "message": {"role": "assistant", "content": "Hello world"}, "finish_reason": "stop"}
    ]


def test_tool_call_id_kept_and_arguments_concatenated():
    merged = merge_stream(
        [
            {
                "choices": [
                    {
                        "index": 0,
                        "delta": {
                            "tool_calls": [
                                {
                                    "index": 0,
                                    "id": "call_1",
                                    "type": "function",
                                    "function": {"name": "get_weather", "arguments": '{"lo'},
                                }
                            ]
                        },
                    }
                ]
            },
            {"choices": [{"index": 0, "delta": {"tool_calls": [{"index": 0, "function": {"arguments": 'cation":"NYC"}'}}]}}]},
        ]
    )
    (call,) = merged["choices"][0]["message"]["tool_calls"]
    assert call["id"] == "call_1"
    assert call["function"] == {"name": "get_weather", "arguments": '{"location":"NYC"}'}
