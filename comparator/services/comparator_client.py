# comparator/services/comparator_client.py
import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from pydantic import ValidationError

from comparator.errors import BackendUnavailable, InputInvalid, InvalidChatState, MalformedResponse
from comparator.models import ChatMessage, ChatResponse, ComparisonResult
from comparator.services.history_service import INVALID_HISTORY_MESSAGE
from comparator.services.prompt_service import normalize_device_names

logger = logging.getLogger(__name__)

API_PATH = "/api/comparator"
EMPTY_QUESTION_MESSAGE = "Please enter a follow-up question."

class ComparatorClient:
    """
    Calls the comparator HTTP endpoint.

    `transport` is handed to httpx unchanged, so the client can target an
    in-process ASGI app (httpx.ASGITransport) or a mock transport.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def _post(self, payload: Dict[str, Any], failure_message: str) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(API_PATH, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                detail = _error_detail(e.response) or failure_message
                # 4xx means the server rejected our request, not that it is down.
                if e.response.is_client_error:
                    raise InputInvalid(detail) from e
                raise BackendUnavailable(detail) from e
            except httpx.RequestError as e:
                logger.error("Network error while calling %s: %s", API_PATH, e)
                raise BackendUnavailable(failure_message) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse("Response body is not valid JSON.") from e

    async def request_comparison(self, name_a: str, name_b: str) -> ComparisonResult:
        """
        Asks the server to compare two devices.

        Raises:
            InputInvalid: If either name is blank (no request is sent) or the server answers 4xx.
            BackendUnavailable: On network failure or a 5xx status.
            MalformedResponse: If the body is not a comparison.
        """
        first, second = normalize_device_names(name_a, name_b)
        data = await self._post(
            {"action": "compare", "device1Name": first, "device2Name": second},
            "Failed to fetch comparison from the server.",
        )
        try:
            return ComparisonResult.model_validate(data)
        except ValidationError as e:
            raise MalformedResponse("Server returned an incomplete comparison.") from e

    async def send_follow_up(
        self, comparison: ComparisonResult, history: Sequence[ChatMessage]
    ) -> str:
        """
        Sends the chat so far, ending with the new question, and returns the answer.

        Raises:
            InvalidChatState: If the history does not end on a user turn. No request is sent.
            InputInvalid: If the history is empty or the question blank (no request is sent),
                or the server answers 4xx.
            BackendUnavailable: On network failure or a 5xx status.
            MalformedResponse: If the body has no `response` text.
        """
        if not history:
            raise InputInvalid("Chat history is required.")
        if history[-1].role != "user":
            raise InvalidChatState(INVALID_HISTORY_MESSAGE)
        if not history[-1].content.strip():
            raise InputInvalid(EMPTY_QUESTION_MESSAGE)
        data = await self._post(
            {
                "action": "chat",
                "chatContext": comparison.model_dump(mode="json"),
                "chatHistory": [msg.model_dump(mode="json") for msg in history],
            },
            "Failed to send follow-up message to the server.",
        )
        try:
            return ChatResponse.model_validate(data).response
        except ValidationError as e:
            raise MalformedResponse("Server returned no answer.") from e

def _error_detail(response: httpx.Response) -> Optional[str]:
    """Reads the `error` field from a failed response, if the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("error")
    return None
