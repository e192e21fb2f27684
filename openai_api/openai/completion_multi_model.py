"""Chat completion across an ordered list of candidate models.

Each model gets a fresh :class:`Completion`; the first success wins. The
fallback policy itself (which error kinds move on to the next model and
which abort) lives in :mod:`openai_api.base.resilience.fallback`.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from ..base.logging import get_logger
from ..base.models import ModelReference
from ..base.resilience.fallback import run_with_fallback
from .completion import Completion, StreamSink


class CompletionMultiModel:
    """Calls chat completions with sequential fallback over ``models``.

    Parameters:
        models: Candidate models, tried in order.
        stream: Optional sink forwarded to every :class:`Completion`. A model
            that fails before producing events falls back like a non-streaming
            call; events already delivered by a model that fails later are not
            retracted.
    """

    def __init__(self, models: Iterable[ModelReference], stream: Optional[StreamSink] = None) -> None:
        self.models: List[ModelReference] = list(models)
        self.stream = stream
        self._logger = get_logger("openai_api.fallback")

    def chat(self, parameters: Mapping[str, Any]) -> Union[Dict[str, Any], httpx.Response, None]:
        """Return the first successful chat result.

        Raises:
            APIError: ``CONNECTION``, ``TIMEOUT`` or ``CONTENT_FILTER`` from
                the current model, or ``NOT_FOUND("No models available")``
                when the list is empty or every model was unavailable.
        """
        return run_with_fallback(
            self.models,
            lambda model: Completion(model, stream=self.stream).chat(parameters),
            describe=lambda model: model.name,
            logger=self._logger,
        )


__all__ = ["CompletionMultiModel"]
