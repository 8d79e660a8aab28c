"""AnalyzeMessageUseCase — classify text and, optionally, project it onto a stored message."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from helpdesk.application.ports.channel_repo import ChannelRepository
from helpdesk.application.ports.message_repo import MessageRepository
from helpdesk.application.ports.unit_of_work import NullUnitOfWork, UnitOfWork
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.domain.entities.classification import ClassificationResult
from helpdesk.domain.policies.case_policy import (
    auto_reply_gate,
    clears_awaiting_reply,
    escalated_channel_priority,
)
from helpdesk.domain.policies.language import detect_language
from helpdesk.domain.value_objects.enums import ChannelPriority, Language

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOutcome:
    classification: ClassificationResult
    language: Language
    message_id: int | None = None
    updated: bool = False
    channel_priority: ChannelPriority | None = None
    awaiting_reply_cleared: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "analysis": self.classification.to_dict(),
            "language": self.language.value,
            "message_id": self.message_id,
            "updated": self.updated,
            "channel_priority": self.channel_priority.value if self.channel_priority else None,
            "awaiting_reply_cleared": self.awaiting_reply_cleared,
            "errors": self.errors,
        }


class AnalyzeMessageUseCase:
    """Classification with best-effort side effects.

    Without ``message_id`` this is a pure classification. With it, the
    result is stored on the message, the channel's awaiting-reply flag is
    cleared when no response is needed, and the channel is escalated for
    urgent problems. The message update and the channel policies each run
    in a savepoint; their failures are reported in ``errors`` and the
    classification is always returned.
    """

    def __init__(
        self,
        classifier: ClassifyMessageUseCase,
        message_repo: MessageRepository,
        channel_repo: ChannelRepository,
        uow: UnitOfWork | None = None,
    ):
        self._classifier = classifier
        self._messages = message_repo
        self._channels = channel_repo
        self._uow = uow or NullUnitOfWork()

    async def execute(
        self,
        text: str,
        message_id: int | None = None,
        channel_id: str | None = None,
    ) -> AnalysisOutcome:
        result = await self._classifier.execute(text)
        outcome = AnalysisOutcome(
            classification=result,
            language=detect_language(text),
            message_id=message_id,
        )
        if message_id is None and channel_id is None:
            return outcome

        if message_id is not None:
            try:
                async with self._uow.savepoint():
                    channel_id = await self._update_message(message_id, channel_id, result, outcome)
            except Exception as e:
                logger.exception("Could not store analysis on message %s", message_id)
                outcome.updated = False
                outcome.errors.append(str(e) or type(e).__name__)

        if channel_id is not None:
            try:
                async with self._uow.savepoint():
                    await self._apply_channel_policies(channel_id, result, outcome)
            except Exception as e:
                logger.exception("Channel policies failed for %s", channel_id)
                outcome.awaiting_reply_cleared = False
                outcome.channel_priority = None
                outcome.errors.append(str(e) or type(e).__name__)

        return outcome

    async def _update_message(
        self,
        message_id: int,
        channel_id: str | None,
        result: ClassificationResult,
        outcome: AnalysisOutcome,
    ) -> str | None:
        message = await self._messages.get_by_id(message_id)
        if message is None:
            outcome.errors.append(f"message {message_id} not found")
            return channel_id
        message.apply_classification(result, auto_reply_gate(result, message.sender_role))
        await self._messages.update_classification(message)
        outcome.updated = True
        return channel_id or message.channel_id

    async def _apply_channel_policies(
        self, channel_id: str, result: ClassificationResult, outcome: AnalysisOutcome
    ) -> None:
        channel = await self._channels.get_or_create(channel_id)
        if clears_awaiting_reply(result):
            outcome.awaiting_reply_cleared = await self._channels.set_awaiting_reply(channel_id, False)

        new_priority = escalated_channel_priority(channel.priority, result)
        if new_priority is not None:
            await self._channels.set_priority(channel_id, new_priority)
            outcome.channel_priority = new_priority
            logger.info("Channel %s escalated to %s", channel_id, new_priority.value)
