"""Model Client - One Request/Response Exchange with the LLM.

The orchestration loop drives tool calling itself, so the client is a thin
wrapper over Pydantic AI's direct API: send the history, the system
instructions and the tool definitions, get one ModelResponse back. No agent
graph runs here and no tool is executed by the provider library.

Model Resolution:
    The model is either a Pydantic AI Model instance (FunctionModel/TestModel
    in tests) or a "provider:name" string resolved by Pydantic AI on first
    request, e.g. "google-gla:gemini-2.5-flash". The provider's API key is
    read from the environment by Pydantic AI.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic_ai.direct import model_request
from pydantic_ai.messages import ModelMessage, ModelRequest, ModelResponse, SystemPromptPart
from pydantic_ai.models import Model, ModelRequestParameters
from pydantic_ai.settings import ModelSettings
from pydantic_ai.tools import ToolDefinition

logger = logging.getLogger(__name__)


def with_instructions(messages: Sequence[ModelMessage], instructions: str) -> list[ModelMessage]:
    """Prefix the first request of a history with a system prompt part."""
    out = list(messages)
    if not instructions or not out or not isinstance(out[0], ModelRequest):
        return out
    first = out[0]
    out[0] = ModelRequest(parts=[SystemPromptPart(content=instructions), *first.parts])
    return out


class GenerativeModelClient:
    """Sends conversation history plus tool schemas to the model, one exchange per call."""

    def __init__(self, model: Model | str, settings: ModelSettings | None = None):
        self.model = model
        self.settings = settings

    @property
    def model_name(self) -> str:
        return self.model if isinstance(self.model, str) else self.model.model_name

    async def generate(
        self,
        messages: Sequence[ModelMessage],
        tools: Sequence[ToolDefinition],
        instructions: str = "",
    ) -> ModelResponse:
        parameters = ModelRequestParameters(function_tools=list(tools))
        response = await model_request(
            self.model,
            with_instructions(messages, instructions),
            model_settings=self.settings,
            model_request_parameters=parameters,
        )
        logger.debug("Model %s answered with %d parts", self.model_name, len(response.parts))
        return response


__all__ = ["GenerativeModelClient", "with_instructions"]
