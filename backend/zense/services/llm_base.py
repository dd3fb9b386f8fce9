"""
Zense Backend - Abstract LLM Service Interface
===============================================

What:  Abstract base class for the text-generation provider behind the vent
       assistant.
Why:   VentService only needs "prompt in, reply out". Keeping that behind
       an ABC lets tests pass a mock and keeps Gemini specifics in one file.
Who:   Implemented by GeminiService; consumed by VentService and /health.
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Contract:
        - generate_text() returns the model's plain-text reply
        - implementations handle their own retries and circuit breaking
        - provider errors surface as LLMServiceError or CircuitBreakerOpenError
    """

    @abstractmethod
    async def generate_text(self, prompt: str) -> str:
        """
        Send a complete prompt and return the generated reply.

        Returns:
            The reply text, stripped. Never None.

        Raises:
            LLMServiceError: the provider failed after all retries
            CircuitBreakerOpenError: recent failures opened the circuit
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability check (no tokens consumed)."""
        ...
