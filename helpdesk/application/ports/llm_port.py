"""Port interface for model-based message classification."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when credentials are present and a call may be attempted."""
        ...

    @abstractmethod
    async def classify(self, text: str) -> dict | None:
        """Return the model's JSON object for *text*.

        None means the model gave no usable answer. The payload is untrusted
        and must be sanitized by the caller.
        """
        ...
