"""Single-model embeddings client.

Issues one POST to the embeddings endpoint with the short embedding timeouts
and the model identifier of the :class:`ModelReference` injected into the
request body. Response handling and error classification are shared with the
chat client through :class:`OpenAICommonMixin`.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping

from ..base.logging import get_logger
from ..base.models import ModelReference
from ..config.defaults import OPENAI_EMBEDDINGS_URL
from .helpers import OpenAICommonMixin


class Embedding(OpenAICommonMixin):
    """Calls the embeddings endpoint of a single model."""

    def __init__(self, model: ModelReference) -> None:
        self.model = model
        self.name = model.name
        self.api_key = model.api_key
        self.api_url = model.api_url or OPENAI_EMBEDDINGS_URL
        self.model_identifier = model.model
        self._logger = get_logger("openai_api.embedding")

    def embed(self, parameters: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the parsed embeddings response for ``parameters``.

        ``parameters`` is copied; the copy's ``model`` is set to the reference's
        model identifier when one is configured.

        Raises:
            APIError: Classified HTTP or transport failure.
        """
        payload = dict(parameters)
        if self.model_identifier:
            payload["model"] = self.model_identifier
        ctx = self._log_context()
        t0 = time.perf_counter()
        response = self._post(payload, "embedding", ctx)
        return self._handle_response(response, "embedding", ctx, t0)


__all__ = ["Embedding"]
