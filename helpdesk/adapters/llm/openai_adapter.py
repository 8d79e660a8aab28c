"""OpenAI adapter — implements LLMPort using the OpenAI API."""

from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI

from helpdesk.application.ports.llm_port import LLMPort
from helpdesk.config import settings
from helpdesk.domain.policies.model_output import ModelOutputError, extract_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
Ты — классификатор сообщений службы поддержки. Клиенты пишут в Telegram на
русском, узбекском (латиница и кириллица) или английском языке.

Проанализируй сообщение и верни ОДИН JSON-объект ровно с такими полями:

{
  "category": one of ["technical", "integration", "billing", "complaint", "feature_request",
                      "order", "delivery", "menu", "app", "onboarding", "question",
                      "feedback", "general"],
  "sentiment": one of ["positive", "neutral", "negative", "frustrated"],
  "intent": one of ["greeting", "gratitude", "closing", "faq_pricing", "faq_hours",
                    "faq_contacts", "ask_question", "report_problem", "request_feature",
                    "complaint", "information", "response", "unknown"],
  "urgency": integer 0-5 (0 = не срочно, 5 = критично),
  "isProblem": boolean — сообщение описывает сбой или жалобу, требующую внимания,
  "needsResponse": boolean — на сообщение нужно ответить,
  "autoReplyAllowed": boolean — можно ответить шаблоном без участия человека,
  "summary": краткое описание (1 предложение) на языке сообщения,
  "entities": object со строковыми значениями, например {"product": "...", "error": "...", "integration": "..."}
}

Правила:
- "спасибо", "rahmat", "ок", "ha", "понятно" — это gratitude/response, needsResponse=false, isProblem=false.
- Приветствия — greeting, autoReplyAllowed=true, needsResponse=true.
- Расхождения в суммах, чеках, списаниях ("почему 50000 если было 40000") — billing, isProblem=true.
- autoReplyAllowed=true только для greeting, gratitude, closing и faq_* без проблемы.
- Отвечай ТОЛЬКО JSON, без markdown и пояснений."""


class OpenAIAdapter(LLMPort):
    """OpenAI implementation of LLMPort."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_retries: int | None = None,
        timeout_seconds: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._model = model or settings.openai_model
        self._max_retries = max_retries if max_retries is not None else settings.openai_max_retries
        timeout = timeout_seconds if timeout_seconds is not None else settings.openai_timeout_seconds
        if client is not None:
            self._client = client
        elif self.is_configured:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=httpx.Timeout(timeout, connect=min(5.0, timeout)),
                max_retries=0,
            )
        else:
            self._client = None

    @property
    def is_configured(self) -> bool:
        key = (self._api_key or "").strip()
        return bool(key) and "your-openai-api-key" not in key

    @property
    def model(self) -> str:
        return self._model

    async def classify(self, text: str) -> dict | None:
        """Ask the model for a classification; None after all attempts fail."""
        if self._client is None:
            logger.warning("OPENAI_API_KEY is not set (or placeholder). Skipping model call.")
            return None

        for attempt in range(1, self._max_retries + 1):
            try:
                response = await self._client.chat.completions.create(
                    model=self._model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": text},
                    ],
                    temperature=0.3,
                    max_tokens=500,
                )
                raw_text = response.choices[0].message.content or ""
                return extract_json_object(raw_text)

            except ModelOutputError as e:
                logger.warning(
                    "Attempt %d/%d: unusable model reply: %s",
                    attempt, self._max_retries, e,
                )
            except (IndexError, AttributeError) as e:
                logger.warning(
                    "Attempt %d/%d: malformed completion response: %s",
                    attempt, self._max_retries, e,
                )
            except Exception:
                logger.exception(
                    "Attempt %d/%d: unexpected error during model call",
                    attempt, self._max_retries,
                )

        logger.warning("All model attempts failed")
        return None
