"""FastAPI main application."""

import logging
from dataclasses import asdict
from datetime import date
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List, Optional
import structlog

from ..config import settings, FLOWER_CATALOG, ALWAYS_EMOJIS, ROTATING_EMOJIS
from ..config.message_sets import MESSAGE_SETS, get_message_set
from ..core.calendar import days_between, days_since_start
from ..core.garden_layout import GardenLayoutConfig, generate_emojis, generate_garden
from ..core.messages import build_message_points
from ..core.species import summarize_species

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Garden API",
    description="Deterministic flower garden with hidden messages",
    version="0.1.0",
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Response models
class PlacementResponse(BaseModel):
    """One flower as sent to the page."""

    id: int
    x: float
    y: float
    variant: str
    scale: float
    rotation: float
    depth: int
    day_number: int
    date: str
    message_id: Optional[str] = None


class GardenResponse(BaseModel):
    """A full garden for one day count."""

    count: int
    max_count: int
    start_date: date
    flowers: List[PlacementResponse]


class MessageSummary(BaseModel):
    """A registered hidden message."""

    id: str
    label: str
    lines: List[str]
    start_day: int
    flower_count: int


class SpeciesSummary(BaseModel):
    """Species used by a hidden message."""

    message_id: str
    species: Dict[str, int]


class EmojiResponse(BaseModel):
    """One scattered emoji."""

    id: int
    emoji: str
    x: float
    y: float
    rotation: float
    scale: float
    depth: int
    always_show: bool


def layout_from_settings() -> GardenLayoutConfig:
    """Map settings onto the layout engine's configuration."""
    return GardenLayoutConfig(
        cols=settings.grid_cols,
        rows=settings.grid_rows,
        grid_seed=settings.grid_seed,
        start_date=settings.garden_start_date,
    )


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Log startup."""
    logger.info(
        "Starting Garden API",
        start_date=settings.garden_start_date.isoformat(),
        messages=len(MESSAGE_SETS),
    )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Garden API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/garden", response_model=GardenResponse)
def get_garden(
    count: Optional[int] = Query(None, ge=0, description="Explicit number of flowers"),
    on: Optional[date] = Query(None, alias="date", description="Day to render; defaults to today"),
):
    """
    Render the garden.

    With ``count`` the garden is rendered for exactly that many days (capped
    at the end date); otherwise the count is derived from ``date``.
    """
    max_count = max(0, days_between(settings.garden_start_date, settings.garden_end_date))
    if count is None:
        count = days_since_start(
            on or date.today(), settings.garden_start_date, settings.garden_end_date
        )
    count = min(count, max_count)

    logger.info("Garden requested", count=count)
    flowers = generate_garden(count, MESSAGE_SETS, FLOWER_CATALOG, layout=layout_from_settings())

    return GardenResponse(
        count=count,
        max_count=max_count,
        start_date=settings.garden_start_date,
        flowers=[PlacementResponse(**asdict(flower)) for flower in flowers],
    )


@app.get("/garden/messages", response_model=List[MessageSummary])
def list_messages():
    """List registered hidden messages."""
    summaries = []
    for message in MESSAGE_SETS:
        _, points = build_message_points(message)
        summaries.append(
            MessageSummary(
                id=message.id,
                label=message.label,
                lines=message.lines,
                start_day=message.start_day,
                flower_count=len(points),
            )
        )
    return summaries


@app.get("/garden/messages/{message_id}/species", response_model=SpeciesSummary)
def get_message_species(message_id: str):
    """Species the flowers of one hidden message are drawn from."""
    try:
        message = get_message_set(message_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Message not found")

    _, points = build_message_points(message)
    species = summarize_species(point.species for point in points if point.species)
    return SpeciesSummary(message_id=message.id, species=species)


@app.get("/garden/emojis", response_model=List[EmojiResponse])
def get_emojis():
    """Decorative emoji scatter."""
    emojis = generate_emojis(ALWAYS_EMOJIS, ROTATING_EMOJIS, seed=settings.emoji_seed)
    return [EmojiResponse(**asdict(emoji)) for emoji in emojis]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
