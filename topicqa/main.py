from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from topicqa.api.exception_handlers import register_exception_handlers
from topicqa.api.schemas import HealthOut
from topicqa.core.llm.deps import build_ollama_client
from topicqa.core.logging import SERVER_CLIENT, setup_logging
from topicqa.core.metrics import PrometheusMetricsMiddleware, metrics_router
from topicqa.core.middleware.http_logging import HttpLoggingMiddleware
from topicqa.core.settings import get_settings
from topicqa.domain.topic import TopicConfig
from topicqa.qa.router import router as qa_router

setup_logging()
logger = logging.getLogger("topicqa.qa")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A malformed data file name raises here and aborts startup.
        settings = get_settings()
        app.state.topic_config = TopicConfig.from_data_file(settings.data_file_path)
        app.state.ollama_client = build_ollama_client(settings)
        logger.info("API server running", extra={"client_ip": SERVER_CLIENT})
        try:
            yield
        finally:
            await app.state.ollama_client.aclose()

    app = FastAPI(
        title="Topic QA Gateway",
        description=(
            "Answers questions about a single topic, in a single language, using a locally "
            "hosted model.\n\n"
            "- Topic and language come from the data file name (`{topic}.{language}.txt`).\n"
            "- The data file contents are sent to the model as context for every answer.\n"
            "- `X-Forwarded-For` is required and used for logging only."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        openapi_tags=[
            {
                "name": "qa",
                "description": "Welcome message and topic-restricted question answering.",
            },
            {
                "name": "health",
                "description": "Basic uptime check; does not contact the inference server.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthOut, tags=["health"], summary="Health check")
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(qa_router)
    return app


app = create_app()
