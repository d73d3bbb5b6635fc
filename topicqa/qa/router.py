from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header

from topicqa.api.schemas import ErrorOut
from topicqa.core.llm.deps import get_ollama_client, get_topic_config
from topicqa.core.settings import get_settings
from topicqa.domain.exceptions import MissingClientHeaderError
from topicqa.domain.topic import TopicConfig
from topicqa.qa.schemas import AskIn, AskOut, WelcomeOut
from topicqa.qa.service import LLMClient, TopicQAService

router = APIRouter(tags=["qa"])
logger = logging.getLogger("topicqa.qa")

_ERROR_RESPONSES = {
    400: {
        "model": ErrorOut,
        "description": (
            "Missing header or off-topic query. An unreadable data file also returns 400, "
            "with the bare `{\"error\": ...}` body instead."
        ),
    },
    500: {"model": ErrorOut, "description": "Inference server failure"},
}


def require_client_ip(
    x_forwarded_for: str | None = Header(
        default=None,
        description="Caller address. Used for logging only, not for authentication.",
    ),
) -> str:
    if x_forwarded_for is None:
        raise MissingClientHeaderError()
    return x_forwarded_for


def get_qa_service(
    config: TopicConfig = Depends(get_topic_config),
    llm_client: LLMClient = Depends(get_ollama_client),
) -> TopicQAService:
    return TopicQAService(
        config=config,
        llm_client=llm_client,
        data_file_path=get_settings().data_file_path,
    )


@router.get(
    "/",
    response_model=WelcomeOut,
    responses={400: _ERROR_RESPONSES[400]},
    summary="Welcome message and usage example",
)
async def home(
    client_ip: str = Depends(require_client_ip),
    config: TopicConfig = Depends(get_topic_config),
) -> WelcomeOut:
    logger.info("Request: /", extra={"client_ip": client_ip})
    return WelcomeOut.for_topic(config)


@router.post(
    "/ask",
    response_model=AskOut,
    responses=_ERROR_RESPONSES,
    summary="Ask a question about the configured topic",
)
async def ask(
    payload: AskIn | None = None,
    client_ip: str = Depends(require_client_ip),
    svc: TopicQAService = Depends(get_qa_service),
) -> AskOut:
    """
    Two sequential generations: a yes/no relevance check, then the answer with the
    reference data as context. Off-topic queries never reach the second call.
    """

    query = (payload or AskIn()).query
    logger.info("Processing /ask request", extra={"client_ip": client_ip})
    return AskOut(response=await svc.answer(query))
