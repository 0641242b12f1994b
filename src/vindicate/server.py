import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from vindicate.application.config import resolve_config
from vindicate.application.factory import get_flashcard_service
from vindicate.application.service import FlashcardService
from vindicate.application.settings import FlashcardSettings
from vindicate.consts import VERSION
from vindicate.domain.errors import DeckSourceError
from vindicate.domain.models import Card, CardProgress, DirectionMode, Grade
from vindicate.infrastructure.adapters.kv_store import MemoryStore

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("vindicate.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"vindicate server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("vindicate server shutting down...")


app = FastAPI(
    title="vindicate server",
    description="Flashcard scheduling API for vindicate UI drivers.",
    version=VERSION,
    lifespan=lifespan,
)

start_time = time.time()


@lru_cache
def shared_memory_store() -> MemoryStore:
    """One in-memory store for the life of the server process."""
    return MemoryStore()


def get_service() -> FlashcardService:
    config = resolve_config()
    store = shared_memory_store() if config.storage == "memory" else None
    return get_flashcard_service(config, store)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class CardModel(BaseModel):
    id: str
    front: str
    back: list[str]

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(id=card.id, front=card.front, back=list(card.back))


class QueueRequest(BaseModel):
    mode: DirectionMode = DirectionMode.PRESENTATION
    category: str = "All"
    shuffle_all: bool = False


class QueueResponse(BaseModel):
    cards: list[CardModel]
    due: int
    new_accepted: int
    new_available: int


class GradeRequest(BaseModel):
    card_id: str
    grade: Grade
    mode: DirectionMode = DirectionMode.PRESENTATION


class ProgressModel(BaseModel):
    card_id: str
    review_due_at: datetime
    interval_days: float
    ease_factor: float

    @classmethod
    def from_progress(cls, card_id: str, progress: CardProgress) -> "ProgressModel":
        return cls(
            card_id=card_id,
            review_due_at=progress.review_due_at,
            interval_days=progress.interval_days,
            ease_factor=progress.ease_factor,
        )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/catalog", response_model=list[CardModel])
def get_catalog(
    mode: DirectionMode = DirectionMode.PRESENTATION,
    category: str = "All",
    service: FlashcardService = Depends(get_service),
):
    try:
        catalog = service.build_catalog(mode, category)
    except DeckSourceError as e:
        logger.error(f"Deck unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return [CardModel.from_card(c) for c in catalog]


@app.post("/queue", response_model=QueueResponse)
def build_queue(req: QueueRequest, service: FlashcardService = Depends(get_service)):
    """
    Build a session queue. shuffle_all returns the whole catalog unscheduled.
    """
    try:
        catalog = service.build_catalog(req.mode, req.category)
    except DeckSourceError as e:
        logger.error(f"Deck unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    if req.shuffle_all:
        cards = service.shuffle_all(catalog)
        return QueueResponse(
            cards=[CardModel.from_card(c) for c in cards],
            due=0,
            new_accepted=0,
            new_available=0,
        )

    result = service.plan_queue(catalog)
    return QueueResponse(
        cards=[CardModel.from_card(c) for c in result.queue],
        due=result.due_count,
        new_accepted=result.new_accepted,
        new_available=result.new_available,
    )


@app.post("/grade", response_model=ProgressModel)
def grade_card(req: GradeRequest, service: FlashcardService = Depends(get_service)):
    """
    Grade a card. The card must exist in the catalog for the given mode.
    """
    try:
        known = {c.id for c in service.build_catalog(req.mode)}
    except DeckSourceError as e:
        logger.error(f"Deck unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    if req.card_id not in known:
        raise HTTPException(status_code=404, detail=f"Unknown card {req.card_id!r}")

    progress = service.grade(req.card_id, req.grade)
    return ProgressModel.from_progress(req.card_id, progress)


@app.get("/settings")
def get_settings(service: FlashcardService = Depends(get_service)):
    return service.settings().model_dump(by_alias=True)


@app.put("/settings")
def put_settings(settings: FlashcardSettings, service: FlashcardService = Depends(get_service)):
    service.save_settings(settings)
    return settings.model_dump(by_alias=True)
