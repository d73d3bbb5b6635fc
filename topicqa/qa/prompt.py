from __future__ import annotations

from topicqa.domain.topic import TopicConfig


def build_relevance_prompt(*, config: TopicConfig, query: str) -> str:
    """Yes/no classification prompt; the caller looks for "yes" in the reply."""

    return (
        f"Be concise, respond only in {config.language}. "
        f'Is the following query related to "{config.topic}"? '
        f'Respond with "yes" or "no". Query: {query}'
    )


def build_answer_prompt(*, config: TopicConfig, data: str, query: str) -> str:
    # The whole reference file goes in verbatim; there is no truncation.
    return (
        f"Directives: Be as brief and concise as possible, language only {config.language}. "
        f"Data: {data}. Query: {query}."
    )
