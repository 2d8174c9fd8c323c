"""Main FastAPI application module for the fact puzzle generator."""

from typing import List, Optional

from fastapi import FastAPI, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from puzzle_facts import FactEntry, PillowFontMetrics

from puzzle_service.config import PIECE_COUNT_OPTIONS, settings
from puzzle_service.logging_config import configure_logging
from puzzle_service.models.puzzle_model import (
    BackResponse,
    EdgeMetaModel,
    FactLayout,
    FactsRequest,
    FactsResponse,
    FrontResponse,
    PuzzleResponse,
    RewriteNotice,
    SizeRequest,
)
from puzzle_service.services.renderer import InvalidPhotoError, get_renderer, normalize_photo
from puzzle_service.services.session import PuzzleSession, SessionError, SessionStore

configure_logging(settings.LOG_LEVEL)

# Initialize FastAPI app
app = FastAPI(title=settings.PROJECT_NAME)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Puzzles in progress, kept in memory only
sessions = SessionStore(max_sessions=settings.MAX_SESSIONS, ttl_seconds=settings.SESSION_TTL_SECONDS)


def _get_session(puzzle_id: str) -> PuzzleSession:
    session = sessions.get(puzzle_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Puzzle not found")
    return session


def _layout(entry: Optional[FactEntry]) -> Optional[FactLayout]:
    if entry is None:
        return None
    return FactLayout(
        index=entry.index,
        back_index=entry.back_index,
        text=entry.text,
        lines=list(entry.fit.lines),
        font_size=entry.fit.font_size,
        line_height=entry.fit.line_height,
        truncated=entry.fit.truncated,
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post(f"{settings.API_V1_STR}/puzzle/upload", response_model=PuzzleResponse)
async def upload_puzzle(file: Optional[UploadFile] = None) -> PuzzleResponse:
    """Upload the photo for a new puzzle.

    Args:
        file: The photo.

    Returns:
        PuzzleResponse: The puzzle ID, normalised size and piece-count options.

    Raises:
        HTTPException: If the file is missing, too large or not an image.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    if file.size and file.size > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="File too large")

    data = await file.read()
    if len(data) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        photo = await run_in_threadpool(normalize_photo, data, settings.PUZZLE_MAX_SIDE)
    except InvalidPhotoError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    session = sessions.create(
        photo,
        metrics=PillowFontMetrics(settings.FONT_PATH),
        config=settings.layout_config(),
    )
    return PuzzleResponse(
        puzzle_id=session.puzzle_id,
        width=session.width,
        height=session.height,
        piece_count_options=sorted(PIECE_COUNT_OPTIONS),
    )


@app.post(f"{settings.API_V1_STR}/puzzle/{{puzzle_id}}/size", response_model=FrontResponse)
def choose_size(puzzle_id: str, request: SizeRequest) -> FrontResponse:
    """Choose the number of pieces and render the front side.

    Any facts sent for an earlier size are discarded.

    Raises:
        HTTPException: If the puzzle is unknown or the piece count is not offered.
    """
    session = _get_session(puzzle_id)
    try:
        geometry = session.select_size(request.piece_count, request.seed)
    except SessionError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    renderer = get_renderer()
    front = renderer.render_front(session.photo, geometry)
    spec = geometry.spec

    def _edges(grid) -> List[List[EdgeMetaModel]]:
        return [[EdgeMetaModel(amplitude_px=m.amplitude_px, sign=m.sign) for m in line] for line in grid]

    return FrontResponse(
        puzzle_id=puzzle_id,
        rows=spec.rows,
        cols=spec.cols,
        seed=spec.seed,
        image=renderer.image_to_base64(front),
        paths=geometry.paths,
        horizontal=_edges(geometry.metadata.horizontal),
        vertical=_edges(geometry.metadata.vertical),
    )


@app.post(f"{settings.API_V1_STR}/puzzle/{{puzzle_id}}/facts", response_model=FactsResponse)
def add_facts(puzzle_id: str, request: FactsRequest) -> FactsResponse:
    """Add facts, one per line, to the next free pieces.

    Raises:
        HTTPException: If the puzzle is unknown or no size has been chosen.
    """
    session = _get_session(puzzle_id)
    try:
        placed, rejected = session.add_facts(request.text)
    except SessionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    total = session.capacity
    return FactsResponse(
        accepted=len(placed),
        total=total,
        remaining=total - session.fact_count,
        complete=session.is_complete,
        notices=[RewriteNotice(index=e.index, original=e.sanitized, text=e.text) for e in placed if e.changed],
        failures=[e.index for e in placed if e.failed],
        rejected=rejected,
    )


@app.get(f"{settings.API_V1_STR}/puzzle/{{puzzle_id}}/back", response_model=BackResponse)
def get_back(puzzle_id: str) -> BackResponse:
    """Render the back side once every piece has a fact.

    Raises:
        HTTPException: If the puzzle is unknown or still missing facts.
    """
    session = _get_session(puzzle_id)
    if not session.is_complete or session.geometry is None or session.assignment is None:
        raise HTTPException(status_code=409, detail="Puzzle is missing facts")

    renderer = get_renderer()
    back = renderer.render_back(session.geometry, session.assignment)
    return BackResponse(
        puzzle_id=puzzle_id,
        image=renderer.image_to_base64(back),
        front=[_layout(e) for e in session.assignment.front_order()],
        back=[_layout(e) for e in session.assignment.back_order()],
    )


@app.delete(f"{settings.API_V1_STR}/puzzle/{{puzzle_id}}")
def discard_puzzle(puzzle_id: str) -> dict[str, str]:
    """Discard a puzzle and everything derived from it."""
    if not sessions.discard(puzzle_id):
        raise HTTPException(status_code=404, detail="Puzzle not found")
    return {"status": "discarded"}
