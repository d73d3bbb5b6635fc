from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from topicqa.domain.exceptions import InvalidTopicFileNameError

_DATA_FILE_SUFFIX = ".txt"


@dataclass(frozen=True)
class TopicConfig:
    """Topic and answer language the gateway is locked to for its whole lifetime."""

    topic: str
    language: str

    @classmethod
    def from_data_file(cls, path: str) -> TopicConfig:
        """
        Derive the config from a `{topic}.{language}.txt` file name.

        Only the basename is inspected, so directories may contain dots.
        Topic words are underscore-separated; the language gets its first letter upper-cased.
        """

        name = PurePath(path).name
        if name.endswith(_DATA_FILE_SUFFIX):
            name = name[: -len(_DATA_FILE_SUFFIX)]

        parts = name.split(".")
        if len(parts) != 2 or not all(parts):
            raise InvalidTopicFileNameError(path)

        topic, language = parts
        return cls(topic=topic.replace("_", " "), language=_capitalize(language))


def _capitalize(value: str) -> str:
    # str.capitalize() would lower-case the remaining letters.
    return value[:1].upper() + value[1:]
