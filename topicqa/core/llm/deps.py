from __future__ import annotations

from fastapi import Request

from topicqa.core.llm.ollama_client import OllamaClient, OllamaConfig
from topicqa.core.settings import Settings
from topicqa.domain.topic import TopicConfig


def build_ollama_client(settings: Settings) -> OllamaClient:
    config = OllamaConfig(
        base_url=settings.ollama_base_url,
        model=settings.ollama_model,
        timeout_seconds=float(settings.ollama_timeout_seconds),
    )
    return OllamaClient(config=config)


def get_ollama_client(request: Request) -> OllamaClient:
    """Dependency provider for the shared client created during startup."""

    return request.app.state.ollama_client


def get_topic_config(request: Request) -> TopicConfig:
    return request.app.state.topic_config
