"""Input size limit applied before file text is embedded in a prompt."""

import logging

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n[... content truncated at {limit} characters ...]\n"


class InputTooLargeError(ValueError):
    """Raised when text exceeds the configured limit under the reject policy."""

    def __init__(self, label: str, size: int, limit: int) -> None:
        super().__init__(
            f"{label} is {size} characters, exceeding the limit of {limit}"
        )
        self.label = label
        self.size = size
        self.limit = limit


def enforce_input_limit(
    text: str,
    limit: int,
    policy: str = "reject",
    label: str = "input",
) -> str:
    """Check text against a character limit.

    Args:
        text: Text about to be embedded in a prompt.
        limit: Maximum number of characters. Zero or less disables the check.
        policy: "reject" to raise, "truncate" to cut the text down.
        label: Name used in messages, usually the file path.

    Returns:
        The text, truncated if the policy allows it.

    Raises:
        InputTooLargeError: If the text is too long and the policy is reject.
        ValueError: If the policy is unknown.
    """
    if limit <= 0 or len(text) <= limit:
        return text

    if policy == "reject":
        raise InputTooLargeError(label, len(text), limit)
    if policy == "truncate":
        logger.warning(
            "Truncating %s from %d to %d characters", label, len(text), limit
        )
        return text[:limit] + TRUNCATION_MARKER.format(limit=limit)
    raise ValueError(f"Unknown oversize policy: {policy}")
