"""Exception hierarchy for vindicate."""


class VindicateError(Exception):
    """Base class for all vindicate errors."""


class DeckSourceError(VindicateError):
    """The deck source could not be read or has an invalid shape."""


class GradingRequestError(VindicateError):
    """A grade was submitted that does not match the session state."""

    def __init__(self, card_id: str, message: str):
        super().__init__(message)
        self.card_id = card_id


class UnknownCardError(GradingRequestError):
    """The graded card is not part of the current review queue."""

    def __init__(self, card_id: str):
        super().__init__(card_id, f"Card {card_id!r} is not in the current review queue")


class CardNotAtHeadError(GradingRequestError):
    """The graded card is queued but is not the card currently shown."""

    def __init__(self, card_id: str, head_id: str | None):
        super().__init__(
            card_id,
            f"Card {card_id!r} is not at the head of the queue (current: {head_id!r})",
        )
        self.head_id = head_id
