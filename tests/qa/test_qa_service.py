from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from tests.qa._helpers import FailingLLM, ScriptedLLM
from topicqa.core.llm.ollama_client import OllamaTransportError
from topicqa.domain.exceptions import OffTopicQueryError, ReferenceDataUnavailableError
from topicqa.domain.topic import TopicConfig
from topicqa.qa.prompt import build_answer_prompt, build_relevance_prompt
from topicqa.qa.service import NO_RESPONSE_TEXT, TopicQAService, normalize_reply

CONFIG = TopicConfig(topic="tacos al pastor", language="Spanish")


def test_relevance_prompt_text() -> None:
    assert build_relevance_prompt(config=CONFIG, query="¿Lleva piña?") == (
        'Be concise, respond only in Spanish. Is the following query related to "tacos al pastor"? '
        'Respond with "yes" or "no". Query: ¿Lleva piña?'
    )


def test_answer_prompt_text() -> None:
    assert build_answer_prompt(config=CONFIG, data="Cerdo adobado.", query="¿Lleva piña?") == (
        "Directives: Be as brief and concise as possible, language only Spanish. "
        "Data: Cerdo adobado.. Query: ¿Lleva piña?."
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Sí, Lleva PIÑA.\n", "sí, lleva piña."),
        ("", NO_RESPONSE_TEXT),
        (None, NO_RESPONSE_TEXT),
    ],
)
def test_normalize_reply(raw, expected) -> None:
    assert normalize_reply(raw) == expected


def test_answer_reads_file_before_classifying(tmp_path: Path) -> None:
    llm = ScriptedLLM()
    svc = TopicQAService(
        config=CONFIG, llm_client=llm, data_file_path=str(tmp_path / "missing.spanish.txt")
    )

    with pytest.raises(ReferenceDataUnavailableError):
        asyncio.run(svc.answer("¿Lleva piña?"))

    assert llm.prompts == []


def test_unreadable_file_is_logged_as_server(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="topicqa.qa")
    svc = TopicQAService(
        config=CONFIG, llm_client=ScriptedLLM(), data_file_path=str(tmp_path / "missing.spanish.txt")
    )

    with pytest.raises(ReferenceDataUnavailableError):
        asyncio.run(svc.answer("¿Lleva piña?"))

    records = [r for r in caplog.records if r.name == "topicqa.qa"]
    assert len(records) == 1
    assert records[0].getMessage().startswith("Error reading the file: ")
    assert records[0].__dict__["client_ip"] == "SERVER"


def test_non_utf8_file_is_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "tacos_al_pastor.spanish.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    svc = TopicQAService(config=CONFIG, llm_client=ScriptedLLM(), data_file_path=str(path))

    with pytest.raises(ReferenceDataUnavailableError):
        asyncio.run(svc.answer("¿Lleva piña?"))


def test_off_topic_raises_with_topic(data_file: Path) -> None:
    svc = TopicQAService(
        config=CONFIG, llm_client=ScriptedLLM(relevance="no"), data_file_path=str(data_file)
    )

    with pytest.raises(OffTopicQueryError) as exc_info:
        asyncio.run(svc.answer("¿Quién ganó el mundial?"))

    assert exc_info.value.message == "This API only responds to questions about tacos al pastor"


def test_inference_errors_propagate(data_file: Path) -> None:
    llm = FailingLLM(OllamaTransportError("boom"))
    svc = TopicQAService(config=CONFIG, llm_client=llm, data_file_path=str(data_file))

    with pytest.raises(OllamaTransportError):
        asyncio.run(svc.answer("¿Lleva piña?"))

    assert len(llm.prompts) == 1
