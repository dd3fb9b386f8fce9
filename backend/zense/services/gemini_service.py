"""
Zense Backend - Google Gemini Text Service
===========================================

What:  LLMService implementation on top of google-generativeai.
Who:   Process-wide singleton used by VentService (chat replies) and the
       health endpoint.

Resilience Strategy:
    1. tenacity retry with exponential backoff + jitter around the API call
    2. a circuit breaker in front of it, so a Gemini outage turns into an
       immediate 503 instead of every request waiting through the retries
    3. per-call latency logging with a short call id
"""

import asyncio
import logging
import time
import uuid
from typing import Optional

import google.generativeai as genai
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
)

from zense.config import settings
from zense.exceptions import LLMServiceError, CircuitBreakerOpenError
from zense.services.llm_base import LLMService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Circuit Breaker
# ══════════════════════════════════════════════════════════════════════════

class CircuitBreaker:
    """
    Failure gate in front of the Gemini API.

    State Machine:
        CLOSED     every call allowed; failures are counted and the circuit
                   opens once failure_threshold is reached
        OPEN       calls rejected with CircuitBreakerOpenError until
                   recovery_timeout seconds have passed since the last failure
        HALF_OPEN  one trial call allowed; success closes the circuit,
                   failure opens it again

    Not thread-safe: counters live on the instance, which is fine for the
    single-process async worker it runs in.
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

    def __init__(self, failure_threshold: int = 5, recovery_timeout: int = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time: Optional[float] = None

    def can_execute(self) -> bool:
        """
        Returns True when a call may proceed.

        Raises:
            CircuitBreakerOpenError: circuit is OPEN and still inside the
                recovery window
        """
        if self.state == self.CLOSED:
            return True

        if self.state == self.OPEN:
            elapsed = time.time() - (self.last_failure_time or 0)
            if elapsed >= self.recovery_timeout:
                logger.info(
                    "Circuit breaker transitioning to HALF_OPEN after %.1fs",
                    elapsed,
                )
                self.state = self.HALF_OPEN
                return True
            remaining = int(self.recovery_timeout - elapsed)
            raise CircuitBreakerOpenError(recovery_time=remaining)

        return True

    def record_success(self) -> None:
        if self.state == self.HALF_OPEN:
            logger.info("Circuit breaker transitioning to CLOSED (service recovered)")
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time = None

    def record_failure(self) -> None:
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self.state == self.HALF_OPEN:
            logger.warning("Circuit breaker returning to OPEN (trial call failed)")
            self.state = self.OPEN
        elif self.failure_count >= self.failure_threshold:
            logger.warning(
                "Circuit breaker OPENING after %d consecutive failures",
                self.failure_count,
            )
            self.state = self.OPEN


# ══════════════════════════════════════════════════════════════════════════
# Gemini Service
# ══════════════════════════════════════════════════════════════════════════

class GeminiService(LLMService):
    """
    Gemini text generation with retry and circuit breaking.

    Error Handling Chain:
        API call fails → tenacity retries (RETRY_MAX_ATTEMPTS, backoff)
        → retries exhausted → breaker failure recorded → LLMServiceError
        → CB_FAILURE_THRESHOLD failures → breaker OPEN → instant 503s
        → CB_RECOVERY_TIMEOUT elapsed → one trial call (HALF_OPEN)
    """

    REQUEST_TIMEOUT_SECONDS = 60

    def __init__(self):
        # The SDK keeps the API key in module-level state
        if settings.gemini_api_key and settings.gemini_api_key != "your_gemini_api_key_here":
            genai.configure(api_key=settings.gemini_api_key)

        self.model = genai.GenerativeModel(settings.gemini_model)

        self.circuit_breaker = CircuitBreaker(
            failure_threshold=settings.cb_failure_threshold,
            recovery_timeout=settings.cb_recovery_timeout,
        )

        logger.info(
            "GeminiService initialized with model=%s, "
            "circuit_breaker(threshold=%d, recovery=%ds)",
            settings.gemini_model,
            settings.cb_failure_threshold,
            settings.cb_recovery_timeout,
        )

    async def generate_text(self, prompt: str) -> str:
        """
        Generate a reply for `prompt`.

        Flow:
            1. breaker check (may raise CircuitBreakerOpenError)
            2. API call with retries
            3. breaker success/failure bookkeeping

        Raises:
            CircuitBreakerOpenError: circuit is open
            LLMServiceError: Gemini failed after all attempts
        """
        call_id = str(uuid.uuid4())[:8]

        self.circuit_breaker.can_execute()

        logger.info("[%s] Sending prompt to Gemini (%d chars)", call_id, len(prompt))

        try:
            reply = await self._call_gemini_with_retry(prompt, call_id)
            self.circuit_breaker.record_success()
            return reply

        except Exception as e:
            # reraise=True: tenacity hands back the last attempt's own exception
            self.circuit_breaker.record_failure()
            logger.error(
                "[%s] Gemini failed after %d attempt(s): %s",
                call_id,
                settings.retry_max_attempts,
                str(e),
                exc_info=True,
            )
            raise LLMServiceError(
                message="The vent assistant could not generate a reply. Please try again later.",
                retry_after=self.circuit_breaker.recovery_timeout,
                context={
                    "call_id": call_id,
                    "attempts": settings.retry_max_attempts,
                    "error_type": type(e).__name__,
                },
            ) from e

    @retry(
        # The SDK raises generic exceptions for quota and transport errors
        retry=retry_if_exception_type((
            ConnectionError,
            TimeoutError,
            Exception,
        )),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_min_wait,
            max=settings.retry_max_wait,
            jitter=1,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call_gemini_with_retry(self, prompt: str, call_id: str) -> str:
        """The raw API call; only this part is retried, never the breaker check."""
        start_time = time.time()

        try:
            response = await self.model.generate_content_async(
                prompt,
                request_options={"timeout": self.REQUEST_TIMEOUT_SECONDS},
            )
            duration_ms = (time.time() - start_time) * 1000
            reply = response.text.strip() if response.text else ""

            logger.info(
                "[%s] Gemini reply in %.0fms, %d chars",
                call_id,
                duration_ms,
                len(reply),
            )
            return reply

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Gemini API call failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
            )
            raise

    async def health_check(self) -> bool:
        """Lists available models: verifies key and connectivity without using tokens."""
        try:
            # The SDK pages through models with blocking HTTP calls
            models = await asyncio.to_thread(lambda: list(genai.list_models()))
            model_names = [m.name for m in models]
            target = f"models/{settings.gemini_model}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


# ── Singleton Instance ────────────────────────────────────────────────────
# Shared so the circuit breaker state spans all requests
gemini_service = GeminiService()
