from __future__ import annotations


class InvalidTopicFileNameError(ValueError):
    """Raised at startup when the data file name is not `{topic}.{language}.txt`."""

    def __init__(self, path: str):
        super().__init__(
            f"Invalid file name format for {path!r}. Expected {{topic}}.{{language}}.txt"
        )
        self.path = path


class GatewayRequestError(Exception):
    """Base class for user-correctable request errors (mapped to 400)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingClientHeaderError(GatewayRequestError):
    def __init__(self) -> None:
        super().__init__("The 'X-Forwarded-For' header is required.")


class OffTopicQueryError(GatewayRequestError):
    def __init__(self, topic: str):
        super().__init__(f"This API only responds to questions about {topic}")
        self.topic = topic


class ReferenceDataUnavailableError(Exception):
    """Raised when the reference data file is missing or unreadable."""

    message = "Data file is missing or cannot be read."
