"""Shared pytest fixtures."""

import os

# The settings module refuses to load without a credential.
os.environ.setdefault("GROQ_API_KEY", "test-key")

from typing import Any, List

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda

from comparator.models import ChatMessage, ComparisonResult, DeviceData, DeviceSpecs
from comparator.services import llm_service


class RecordingModel:
    """Stands in for the chat model and records every prompt it receives."""

    def __init__(self, answer: str = "The Pixel has the better zoom.") -> None:
        self.answer = answer
        self.calls: List[Any] = []

    def record(self, prompt_value: Any) -> str:
        self.calls.append(prompt_value.to_messages())
        return self.answer

    def as_runnable(self) -> RunnableLambda:
        return RunnableLambda(self.record)


def _raise_backend_down(_: Any) -> str:
    raise ConnectionError("backend down")


@pytest.fixture
def sample_comparison() -> ComparisonResult:
    return ComparisonResult(
        device1=DeviceData(
            name="iPhone 15 Pro",
            specs=DeviceSpecs(
                display="6.1-inch Super Retina XDR OLED, 120Hz",
                camera="48MP main, 12MP ultra wide, 12MP 3x telephoto",
                processor="A17 Pro",
                battery="3274 mAh, 27W wired",
                ram="8GB",
                storage="128GB / 256GB / 512GB / 1TB",
                price="$999",
            ),
            pros=["Fast A17 Pro chip", "Light titanium frame", "Excellent video recording"],
            cons=["Expensive", "Slow charging", "Only 3x optical zoom"],
        ),
        device2=DeviceData(
            name="Pixel 8 Pro",
            specs=DeviceSpecs(
                display="6.7-inch LTPO OLED, 120Hz",
                camera="50MP main, 48MP ultra wide, 48MP 5x telephoto",
                processor="Google Tensor G3",
                battery="5050 mAh, 30W wired",
                ram="12GB",
                storage="128GB / 256GB / 512GB / 1TB",
                price="$999",
            ),
            pros=["5x telephoto", "Seven years of updates", "Bright display", "Strong AI features"],
            cons=["Tensor G3 runs warm", "Average battery life", "Heavy"],
        ),
        summary="Pick the iPhone for video and performance, the Pixel for zoom and software features.",
    )


@pytest.fixture
def sample_history() -> List[ChatMessage]:
    return [
        ChatMessage(role="user", content="Which one has the better camera?"),
        ChatMessage(role="model", content="The Pixel 8 Pro, thanks to its 5x telephoto."),
        ChatMessage(role="user", content="And which lasts longer on a charge?"),
    ]


@pytest.fixture
def fake_comparison_backend(monkeypatch, sample_comparison):
    """Replaces the comparison chain with a fake model answering the sample comparison."""
    model = FakeListChatModel(responses=[sample_comparison.model_dump_json()])
    monkeypatch.setattr(llm_service, "comparison_chain", llm_service.build_comparison_chain(model))
    return model


@pytest.fixture
def recording_chat_backend(monkeypatch) -> RecordingModel:
    """Replaces the chat chain with one whose model records the prompts it sees."""
    model = RecordingModel()
    monkeypatch.setattr(llm_service, "chat_chain", llm_service.build_chat_chain(model.as_runnable()))
    return model


@pytest.fixture
def failing_backend(monkeypatch):
    """Makes both chains fail as if the backend were unreachable."""
    failing = RunnableLambda(_raise_backend_down)
    monkeypatch.setattr(llm_service, "comparison_chain", failing)
    monkeypatch.setattr(llm_service, "chat_chain", failing)
