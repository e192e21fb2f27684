"""Common helpers for the OpenAI-style clients.

Purpose:
    Provide the header builder and the non-streaming POST/response handling
    shared by :class:`Completion` and :class:`Embedding`, plus the
    ``clean_body`` response trimmer.

Notes:
    The mixin assumes the consumer defines ``name`` (model display name),
    ``api_key``, ``api_url`` and ``_logger`` attributes.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping

import httpx

from ..base.errors import APIError, ErrorKind, classify_response, classify_transport_error
from ..base.http import get_httpx_client
from ..base.logging import LogContext, normalized_log_event

_USAGE_KEYS = ("prompt_tokens", "completion_tokens", "total_tokens")


class OpenAICommonMixin:
    """Mixin offering header building and the one-shot request path."""

    def _build_headers(self) -> Dict[str, str]:
        """Return JSON content-type and Bearer authorization headers."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _log_context(self) -> LogContext:
        return LogContext(model=self.name, endpoint=self.api_url)

    def _post(self, payload: Mapping[str, Any], purpose: str, ctx: LogContext) -> httpx.Response:
        """POST ``payload`` through the pooled client for ``purpose``.

        Request failures are re-raised as ``CONNECTION``, ``TIMEOUT`` or (for an
        undecodable body) ``UNEXPECTED_RESPONSE`` :class:`APIError` instances
        and never reach the status classifier.
        """
        normalized_log_event(self._logger, f"{purpose}.start", ctx, phase="start")
        try:
            client = get_httpx_client(None, purpose=purpose)
            return client.post(self.api_url, json=dict(payload), headers=self._build_headers())
        except httpx.RequestError as e:
            err = classify_transport_error(e, model=self.name)
            self._log_error(purpose, ctx, err)
            raise err from e

    def _handle_response(self, response: httpx.Response, purpose: str, ctx: LogContext, t0: float) -> Dict[str, Any]:
        """Return the parsed body of a 200 response or raise the classified error."""
        if response.status_code != httpx.codes.OK:
            err = classify_response(response.status_code, response.content, model=self.name)
            self._log_error(purpose, ctx, err)
            raise err
        try:
            data = response.json()
        except ValueError as e:
            err = APIError(
                kind=ErrorKind.UNEXPECTED_RESPONSE,
                message=f"Response body is not valid JSON: {response.text[:200]}",
                status=response.status_code,
                body=response.text,
                model=self.name,
            )
            self._log_error(purpose, ctx, err)
            raise err from e
        if isinstance(data, dict) and data.get("id"):
            ctx = ctx.bind(response_id=data["id"])
        normalized_log_event(
            self._logger,
            f"{purpose}.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=data.get("usage") if isinstance(data, dict) else None,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return data

    def _log_error(self, purpose: str, ctx: LogContext, err: APIError) -> None:
        normalized_log_event(
            self._logger,
            f"{purpose}.error",
            ctx,
            phase="finalize",
            emitted=False,
            error_code=err.kind.value,
            status=err.status,
            error=err.message,
        )


def clean_body(body: Mapping[str, Any]) -> Dict[str, Any]:
    """Trim a chat completion body to message roles/contents and token totals.

    Example:
        ``{"id": ..., "choices": [{"index": 0, "message": {"role": "assistant",
        "content": "Hi", "refusal": None}, "logprobs": None}], "usage": {...}}``
        becomes ``{"choices": [{"message": {"role": "assistant", "content":
        "Hi"}}], "usage": {...}}``.
    """
    choices = []
    for choice in body.get("choices") or ():
        if not isinstance(choice, Mapping):
            continue
        message = choice.get("message")
        if not isinstance(message, Mapping):
            message = {}
        choices.append({"message": {"role": message.get("role"), "content": message.get("content")}})
    usage = body.get("usage")
    if isinstance(usage, Mapping):
        usage = {key: usage.get(key) for key in _USAGE_KEYS}
    return {"choices": choices, "usage": usage}


__all__ = ["OpenAICommonMixin", "clean_body"]
