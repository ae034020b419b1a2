"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) -> ILanguageModel.
All ChatBedrock / langchain_aws details are confined here. Extraction prompts
want repeatable, literal answers, so the model runs at a low temperature.
"""

import os
from typing import Any, Optional

from langchain_aws import ChatBedrock

from src.domain.ports.llm_port import ILanguageModel


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    MODEL_ID = "us.amazon.nova-pro-v1:0"

    def __init__(
        self,
        model_id: Optional[str] = None,
        region: Optional[str] = None,
        temperature: float = 0.1,
        _runnable: Any = None,
    ) -> None:
        """
        Args:
            model_id:    Bedrock model id; defaults to MODEL_ID.
            region:      AWS region; defaults to AWS_DEFAULT_REGION or us-east-1.
            temperature: Sampling temperature.
            _runnable:   Optional pre-built Runnable (used by tests to avoid
                         constructing ChatBedrock).
        """
        if _runnable is not None:
            self._llm = _runnable
        else:
            self._llm = ChatBedrock(
                model=model_id or self.MODEL_ID,
                model_kwargs={"temperature": temperature},
                region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            )

    async def ainvoke(self, messages: list[Any], config: Optional[dict] = None) -> str:
        response = await self._llm.ainvoke(messages, config=config)
        content = getattr(response, "content", response)
        if isinstance(content, list):
            # multimodal replies arrive as content blocks
            return "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        return str(content)
