from __future__ import annotations

from typing import Protocol

from topicqa.core.metrics import track_inference
from topicqa.domain.exceptions import OffTopicQueryError
from topicqa.domain.topic import TopicConfig
from topicqa.qa.prompt import build_answer_prompt, build_relevance_prompt
from topicqa.qa.reference_data import read_reference_data

NO_RESPONSE_TEXT = "No response received."


class LLMClient(Protocol):
    async def generate(self, *, prompt: str) -> str | None: ...


def normalize_reply(text: str | None) -> str:
    """Trim and lower-case model output; an empty reply becomes a fixed placeholder."""

    if not text:
        return NO_RESPONSE_TEXT
    return text.strip().lower()


class TopicQAService:
    """
    Answers a query about the configured topic in the configured language.

    Flow: read the reference file, ask the model whether the query is on topic,
    then ask it again with the file contents as context. Inference errors propagate.
    """

    def __init__(self, *, config: TopicConfig, llm_client: LLMClient, data_file_path: str):
        self._config = config
        self._llm = llm_client
        self._data_file_path = data_file_path

    async def _ask_model(self, *, kind: str, prompt: str) -> str:
        with track_inference(kind):
            text = await self._llm.generate(prompt=prompt)
        return normalize_reply(text)

    async def is_related_to_topic(self, query: str) -> bool:
        reply = await self._ask_model(
            kind="relevance",
            prompt=build_relevance_prompt(config=self._config, query=query),
        )
        return "yes" in reply

    async def answer(self, query: str) -> str:
        data = await read_reference_data(self._data_file_path)

        if not await self.is_related_to_topic(query):
            raise OffTopicQueryError(self._config.topic)

        return await self._ask_model(
            kind="answer",
            prompt=build_answer_prompt(config=self._config, data=data, query=query),
        )
