# comparator/services/prompt_service.py
from typing import Optional, Tuple

from comparator.errors import InputInvalid

MISSING_NAMES_MESSAGE = "Please enter both device names."

# System instruction for every follow-up chat turn
FOLLOW_UP_SYSTEM_PROMPT = (
    "You are a helpful assistant specializing in comparing electronic devices. "
    "The user has just received a detailed comparison. Answer their follow-up questions "
    "concisely based on the initial data provided and your general knowledge."
)

def build_comparison_prompt(name_a: str, name_b: str) -> str:
    """
    Builds the instruction that asks the model for a side-by-side comparison.

    Args:
        name_a: The first device name, already trimmed.
        name_b: The second device name, already trimmed.

    Returns:
        The prompt text. The same names always give the same string.
    """
    return (
        f'Provide a detailed side-by-side comparison of the following two devices: "{name_a}" and "{name_b}".\n'
        "For each device, include its key specifications (Display, Camera, Processor, Battery, RAM, Storage, "
        "and estimated Price in USD), a list of 3-5 pros, and a list of 3-5 cons.\n"
        "Finally, provide an overall summary and recommendation on which device is better "
        "for different types of users.\n"
        f'Ensure the device names in the response exactly match what you find for "{name_a}" and "{name_b}".'
    )

def normalize_device_names(name_a: Optional[str], name_b: Optional[str]) -> Tuple[str, str]:
    """
    Trims both device names.

    Raises:
        InputInvalid: If either name is missing or blank.
    """
    first = (name_a or "").strip()
    second = (name_b or "").strip()
    if not first or not second:
        raise InputInvalid(MISSING_NAMES_MESSAGE)
    return first, second
