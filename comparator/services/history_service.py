# comparator/services/history_service.py
from typing import List, Sequence, Tuple

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from comparator.errors import InvalidChatState
from comparator.models import ChatMessage, ComparisonResult
from comparator.services.prompt_service import build_comparison_prompt

INVALID_HISTORY_MESSAGE = "Invalid chat history. Last message must be from user."

def build_chat_history(
    comparison: ComparisonResult, history: Sequence[ChatMessage]
) -> Tuple[List[ChatMessage], str]:
    """
    Rebuilds the full conversation for a follow-up turn.

    The backend keeps no state between calls, so every turn replays the
    original comparison request and the structured answer before the prior
    follow-ups.

    Args:
        comparison: The comparison the chat is grounded in.
        history: The visible chat, ending with the unanswered user question.

    Returns:
        A tuple of (context messages, new user message text). The context
        holds 2 + len(history) - 1 messages.

    Raises:
        InvalidChatState: If the rebuilt conversation does not end on a user turn.
    """
    messages = [
        ChatMessage(
            role="user",
            content=build_comparison_prompt(comparison.device1.name, comparison.device2.name),
        ),
        ChatMessage(role="model", content=comparison.model_dump_json(indent=2)),
    ]
    messages.extend(history)

    last_message = messages.pop()
    if last_message.role != "user":
        raise InvalidChatState(INVALID_HISTORY_MESSAGE)

    return messages, last_message.content

def to_langchain_messages(messages: Sequence[ChatMessage]) -> List[BaseMessage]:
    """Converts chat messages to LangChain message objects."""
    langchain_history: List[BaseMessage] = []
    for msg in messages:
        if msg.role == "user":
            langchain_history.append(HumanMessage(content=msg.content))
        else:
            langchain_history.append(AIMessage(content=msg.content))
    return langchain_history
