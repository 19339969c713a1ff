# comparator/services/session_service.py
import logging
from typing import List, Optional

from comparator.errors import ComparatorError, InputInvalid
from comparator.models import ChatMessage, ComparisonResult
from comparator.services.comparator_client import ComparatorClient

logger = logging.getLogger(__name__)

COMPARE_FAILED_MESSAGE = "Failed to fetch comparison. The model may be unavailable. Please try again later."
FOLLOW_UP_FAILED_MESSAGE = "Sorry, I couldn't answer that. Please try again."
NO_COMPARISON_MESSAGE = "Compare two devices before asking a follow-up question."
EMPTY_QUESTION_MESSAGE = "Please enter a follow-up question."

class ComparisonSession:
    """
    In-memory state for one user: the current comparison and its chat.

    Failures are caught here and turned into a single display string in
    `error`. Callers must not run two operations on one session at once.
    """

    def __init__(self, client: ComparatorClient) -> None:
        self.client = client
        self.comparison: Optional[ComparisonResult] = None
        self.history: List[ChatMessage] = []
        self.error: Optional[str] = None

    async def compare(self, name_a: str, name_b: str) -> Optional[ComparisonResult]:
        """
        Fetches a new comparison. On success it replaces the current one and
        clears the chat; on failure the previous state is kept.
        """
        self.error = None
        try:
            result = await self.client.request_comparison(name_a, name_b)
        except InputInvalid as e:
            self.error = e.message
            return None
        except ComparatorError as e:
            logger.warning("Comparison failed (%s): %s", type(e).__name__, e.message)
            self.error = COMPARE_FAILED_MESSAGE
            return None

        self.comparison = result
        self.history = []
        return result

    async def ask(self, question: str) -> Optional[str]:
        """
        Asks a follow-up question about the current comparison.

        The question is appended to `history` before the request is sent and
        removed again if the request fails, so it can be retried cleanly.
        """
        self.error = None
        if not question or not question.strip():
            self.error = EMPTY_QUESTION_MESSAGE
            return None
        if self.comparison is None:
            self.error = NO_COMPARISON_MESSAGE
            return None

        user_message = ChatMessage(role="user", content=question)
        self.history.append(user_message)

        try:
            answer = await self.client.send_follow_up(self.comparison, list(self.history))
        except ComparatorError as e:
            logger.warning("Follow-up failed (%s): %s", type(e).__name__, e.message)
            self.history.pop()
            self.error = FOLLOW_UP_FAILED_MESSAGE
            return None

        self.history.append(ChatMessage(role="model", content=answer))
        return answer
