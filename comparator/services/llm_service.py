# comparator/services/llm_service.py
import logging
from typing import Sequence

from langchain_groq import ChatGroq
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from pydantic import ValidationError

from comparator.core.config import settings
from comparator.core.schema import response_format
from comparator.errors import BackendUnavailable, InputInvalid, MalformedResponse
from comparator.models import ChatMessage, ComparisonResult
from comparator.services import history_service
from comparator.services.prompt_service import FOLLOW_UP_SYSTEM_PROMPT, build_comparison_prompt

logger = logging.getLogger(__name__)

BACKEND_ERROR_MESSAGE = "An error occurred with the AI service."
EMPTY_QUESTION_MESSAGE = "Please enter a follow-up question."
MIN_LIST_ITEMS = 3
MAX_LIST_ITEMS = 5

# Initialize the Groq Chat model once per process.
# Retries are disabled: every request is a single attempt.
llm = ChatGroq(
    model_name=settings.GROQ_MODEL,
    groq_api_key=settings.GROQ_API_KEY,
    temperature=settings.LLM_TEMPERATURE,
    timeout=settings.LLM_TIMEOUT,
    max_retries=0,
)

def build_comparison_chain(model: BaseChatModel) -> Runnable:
    """Chains the model, constrained to the comparison JSON schema, into a string parser."""
    return model.bind(response_format=response_format()) | StrOutputParser()

def build_chat_chain(model: BaseChatModel) -> Runnable:
    """Chains the follow-up prompt (system, replayed history, new question) into the model."""
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", FOLLOW_UP_SYSTEM_PROMPT),
            MessagesPlaceholder(variable_name="history"),
            ("human", "{query}"),
        ]
    )
    return prompt | model | StrOutputParser()

comparison_chain = build_comparison_chain(llm)
chat_chain = build_chat_chain(llm)

def _check_list_lengths(result: ComparisonResult) -> None:
    # Pros/cons counts are requested from the model, not enforced.
    for device in (result.device1, result.device2):
        for label, items in (("pros", device.pros), ("cons", device.cons)):
            if not MIN_LIST_ITEMS <= len(items) <= MAX_LIST_ITEMS:
                logger.warning(
                    "Model returned %d %s for %r (expected %d-%d)",
                    len(items), label, device.name, MIN_LIST_ITEMS, MAX_LIST_ITEMS,
                )

async def get_comparison(name_a: str, name_b: str) -> ComparisonResult:
    """
    Requests a structured comparison of two devices from the LLM.
    Uses .ainvoke() for a single, complete response.

    Args:
        name_a: The first device name, validated by the caller.
        name_b: The second device name, validated by the caller.

    Returns:
        The parsed comparison.

    Raises:
        BackendUnavailable: If the backend call fails.
        MalformedResponse: If the output is not valid JSON of the expected shape.
    """
    prompt = build_comparison_prompt(name_a, name_b)
    logger.info("Requesting comparison: %r vs %r", name_a, name_b)

    try:
        raw = await comparison_chain.ainvoke(prompt)
    except Exception as e:
        logger.error("Comparison request failed: %s", e, exc_info=True)
        raise BackendUnavailable(BACKEND_ERROR_MESSAGE) from e

    try:
        result = ComparisonResult.model_validate_json(raw.strip())
    except ValidationError as e:
        logger.error("Malformed comparison from model: %s", e)
        raise MalformedResponse(BACKEND_ERROR_MESSAGE) from e

    _check_list_lengths(result)
    return result

async def get_follow_up(comparison: ComparisonResult, history: Sequence[ChatMessage]) -> str:
    """
    Answers the newest user question in the history, grounded in the comparison.

    Args:
        comparison: The comparison the conversation is about.
        history: The chat so far, ending with the unanswered user question.

    Returns:
        The model's plain-text answer.

    Raises:
        InvalidChatState: If the history does not end on a user turn.
        InputInvalid: If the question is blank.
        BackendUnavailable: If the backend call fails.
        MalformedResponse: If the backend returns an empty answer.
    """
    context, query = history_service.build_chat_history(comparison, history)
    if not query.strip():
        raise InputInvalid(EMPTY_QUESTION_MESSAGE)

    logger.info("Sending follow-up with %d context messages", len(context))

    try:
        answer = await chat_chain.ainvoke({
            "history": history_service.to_langchain_messages(context),
            "query": query,
        })
    except Exception as e:
        logger.error("Follow-up request failed: %s", e, exc_info=True)
        raise BackendUnavailable(BACKEND_ERROR_MESSAGE) from e

    if not answer or not answer.strip():
        logger.error("Model returned an empty follow-up answer")
        raise MalformedResponse(BACKEND_ERROR_MESSAGE)

    return answer
