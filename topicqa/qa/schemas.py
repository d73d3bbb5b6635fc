from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from topicqa.domain.topic import TopicConfig

DEFAULT_QUERY = "Hello"


class AskIn(BaseModel):
    query: str = Field(
        default=DEFAULT_QUERY,
        description="Question for the model. Must relate to the configured topic.",
        examples=["¿Qué lleva el relleno?"],
    )

    @field_validator("query", mode="before")
    @classmethod
    def _null_query_means_default(cls, value: Any) -> Any:
        # {"query": null} behaves like a body without "query".
        return DEFAULT_QUERY if value is None else value


class AskOut(BaseModel):
    response: str = Field(description="Model answer, trimmed and lower-cased.")


class QueryExample(BaseModel):
    query: str


class AnswerExample(BaseModel):
    response: str


class UsageOut(BaseModel):
    endpoint: str
    method: str
    body: QueryExample
    example: QueryExample
    response: AnswerExample


class WelcomeOut(BaseModel):
    message: str
    usage: UsageOut

    @classmethod
    def for_topic(cls, config: TopicConfig) -> WelcomeOut:
        return cls(
            message=(
                f"Welcome to the DeepSeek AI API! This API provides answers in "
                f"{config.language} about {config.topic}."
            ),
            usage=UsageOut(
                endpoint="/ask",
                method="POST",
                body=QueryExample(query="Your question here"),
                example=QueryExample(query=f"Cómo hacer unas {config.topic}?"),
                response=AnswerExample(response=f"Step-by-step instructions in {config.language}."),
            ),
        )
