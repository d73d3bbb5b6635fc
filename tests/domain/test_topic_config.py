from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from topicqa.domain.exceptions import InvalidTopicFileNameError
from topicqa.domain.topic import TopicConfig


@pytest.mark.parametrize(
    ("path", "topic", "language"),
    [
        ("arepas_reina_pepiada.spanish.txt", "arepas reina pepiada", "Spanish"),
        ("/srv/data.v2/arepas_reina_pepiada.spanish.txt", "arepas reina pepiada", "Spanish"),
        ("croissant.french.txt", "croissant", "French"),
        ("pad_thai.tHAI.txt", "pad thai", "THAI"),
        ("sushi.japanese", "sushi", "Japanese"),
    ],
)
def test_from_data_file_extracts_topic_and_language(path: str, topic: str, language: str) -> None:
    config = TopicConfig.from_data_file(path)
    assert config == TopicConfig(topic=topic, language=language)


@pytest.mark.parametrize(
    "path",
    ["badname.txt", "a.b.c.txt", ".spanish.txt", "arepas..txt", "/data/badname.txt"],
)
def test_from_data_file_rejects_malformed_names(path: str) -> None:
    with pytest.raises(InvalidTopicFileNameError):
        TopicConfig.from_data_file(path)


def test_topic_config_is_immutable() -> None:
    config = TopicConfig(topic="arepas", language="Spanish")
    with pytest.raises(AttributeError):
        config.topic = "tacos"  # type: ignore[misc]


@pytest.mark.parametrize("name", ["badname.txt", "a.b.c.txt"])
def test_malformed_data_file_name_prevents_startup(tmp_path, name: str) -> None:
    os.environ["DATA_FILE_PATH"] = str(tmp_path / name)
    from topicqa.core.settings import get_settings

    get_settings.cache_clear()

    from topicqa.main import create_app

    with pytest.raises(InvalidTopicFileNameError):
        with TestClient(create_app()):
            pass
