"""Single-model chat completion client.

Summary:
- Non-stream chat: one POST, parsed JSON body on 200, classified
  :class:`APIError` otherwise.
- Streaming chat: POST with ``stream: true``; the SSE body is decoded with
  :class:`SSEDecoder` and every JSON payload is either pulled from
  :meth:`Completion.stream_events` or pushed to the ``stream`` sink given at
  construction.

Timeouts:
- Chat and stream requests use the long chat timeouts from
  ``get_timeout_config()`` via the pooled ``httpx`` clients.

Errors:
- Transport failures become ``CONNECTION``/``TIMEOUT`` errors, an
  undecodable body becomes ``UNEXPECTED_RESPONSE``; non-200
  statuses go through ``classify_response`` with the full error body. Nothing
  is retried or recovered here.
"""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

import httpx

from ..base.errors import APIError, ErrorKind, classify_response, classify_transport_error
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ModelReference
from ..base.streaming import iter_sse_events
from ..config.defaults import OPENAI_CHAT_COMPLETIONS_URL
from .helpers import OpenAICommonMixin

StreamSink = Callable[[Dict[str, Any], httpx.Response], Any]


class Completion(OpenAICommonMixin):
    """Calls the chat completions endpoint of a single model.

    Parameters:
        model: The :class:`ModelReference` to target.
        stream: Optional sink invoked as ``stream(event, response)`` for every
            decoded delta event; when set, :meth:`chat` streams.
        raw: When true, non-streaming :meth:`chat` returns the
            ``httpx.Response`` without status classification.
    """

    def __init__(self, model: ModelReference, stream: Optional[StreamSink] = None, raw: bool = False) -> None:
        self.model = model
        self.name = model.name
        self.api_key = model.api_key
        self.api_url = model.api_url or OPENAI_CHAT_COMPLETIONS_URL
        self.stream = stream
        self.raw = raw
        self._logger = get_logger("openai_api.completion")

    def chat(self, parameters: Mapping[str, Any]) -> Union[Dict[str, Any], httpx.Response, None]:
        """Issue one chat request.

        Returns:
            The parsed response body, the raw ``httpx.Response`` when ``raw``
            is set, or ``None`` in streaming mode (events go to the sink).

        Raises:
            APIError: Classified HTTP or transport failure.
        """
        if self.stream is None:
            return self._single_request_chat(parameters)
        self._stream_chat(parameters)
        return None

    def stream_events(self, parameters: Mapping[str, Any]) -> Iterator[Dict[str, Any]]:
        """Yield parsed delta events of a streamed chat request, in order.

        The generator is lazy and single-use; closing it early closes the
        underlying connection. Errors are raised from the first ``next()``
        call when the status is not 200.
        """
        for event, _response in self._iter_stream(parameters):
            yield event

    def _single_request_chat(self, parameters: Mapping[str, Any]) -> Union[Dict[str, Any], httpx.Response]:
        ctx = self._log_context()
        t0 = time.perf_counter()
        response = self._post(parameters, "chat", ctx)
        if self.raw:
            return response
        return self._handle_response(response, "chat", ctx, t0)

    def _stream_chat(self, parameters: Mapping[str, Any]) -> None:
        for event, response in self._iter_stream(parameters):
            self.stream(event, response)

    def _iter_stream(self, parameters: Mapping[str, Any]) -> Iterator[Tuple[Dict[str, Any], httpx.Response]]:
        payload = {**parameters, "stream": True}
        ctx = self._log_context()
        t0 = time.perf_counter()
        emitted = 0
        normalized_log_event(self._logger, "stream.start", ctx, phase="start")
        try:
            client = get_httpx_client(None, purpose="stream")
            with client.stream("POST", self.api_url, json=payload, headers=self._build_headers()) as response:
                if response.status_code != httpx.codes.OK:
                    response.read()
                    raise classify_response(response.status_code, response.content, model=self.name)
                for record in iter_sse_events(response.iter_bytes()):
                    event = self._parse_event(record.data)
                    if ctx.response_id is None and isinstance(event, dict) and event.get("id"):
                        ctx = ctx.bind(response_id=event["id"])
                    emitted += 1
                    yield event, response
        except httpx.RequestError as e:
            err = classify_transport_error(e, model=self.name)
            self._log_stream_error(ctx, err, emitted)
            raise err from e
        except APIError as err:
            self._log_stream_error(ctx, err, emitted)
            raise
        normalized_log_event(
            self._logger,
            "stream.finalize",
            ctx,
            phase="finalize",
            emitted=emitted > 0,
            emitted_count=emitted,
            total_duration_ms=(time.perf_counter() - t0) * 1000.0,
        )

    def _parse_event(self, data: str) -> Dict[str, Any]:
        try:
            return json.loads(data)
        except ValueError as e:
            raise APIError(
                kind=ErrorKind.UNEXPECTED_RESPONSE,
                message=f"Malformed stream event: {data[:200]}",
                status=httpx.codes.OK,
                body=data,
                model=self.name,
            ) from e

    def _log_stream_error(self, ctx: LogContext, err: APIError, emitted: int) -> None:
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase="start" if emitted == 0 else "midstream",
            emitted=emitted > 0,
            error_code=err.kind.value,
            status=err.status,
            error=err.message,
        )


__all__ = ["Completion", "StreamSink"]
