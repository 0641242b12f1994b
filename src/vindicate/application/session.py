"""Review session cursor used by UI drivers."""

import logging
from datetime import datetime

from vindicate.application.service import FlashcardService
from vindicate.application.settings import FlashcardSettings
from vindicate.domain.errors import CardNotAtHeadError, UnknownCardError
from vindicate.domain.models import Card, CardProgress, Grade

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    Walks a review queue front to back.

    Only the card at the head of the queue may be graded. Settings are
    captured when the session starts and used for every grade in it.
    """

    def __init__(
        self,
        service: FlashcardService,
        queue: list[Card],
        settings: FlashcardSettings | None = None,
    ):
        self._service = service
        self._queue = list(queue)
        self._ids = {card.id for card in self._queue}
        self._position = 0
        self.settings = settings or service.settings()
        self.graded: list[tuple[str, Grade]] = []

    @property
    def current(self) -> Card | None:
        if self.is_finished:
            return None
        return self._queue[self._position]

    @property
    def remaining(self) -> int:
        return len(self._queue) - self._position

    @property
    def total(self) -> int:
        return len(self._queue)

    @property
    def is_finished(self) -> bool:
        return self._position >= len(self._queue)

    def grade(self, card_id: str, grade: Grade, now: datetime | None = None) -> CardProgress:
        """
        Grade the card at the head of the queue and advance.

        Raises:
            UnknownCardError: card_id is not in this session's queue.
            CardNotAtHeadError: card_id is queued but not currently shown.
        """
        if card_id not in self._ids:
            raise UnknownCardError(card_id)

        head = self.current
        if head is None or head.id != card_id:
            raise CardNotAtHeadError(card_id, head.id if head else None)

        progress = self._service.grade(card_id, grade, self.settings, now)
        self.graded.append((card_id, grade))
        self._position += 1

        if self.is_finished:
            logger.info(f"Session finished: {len(self.graded)} cards graded")
        return progress
