"""Request and response models for the puzzle endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field


class PuzzleResponse(BaseModel):
    """Response model for photo upload."""

    puzzle_id: str
    width: int
    height: int
    piece_count_options: List[int]


class SizeRequest(BaseModel):
    """Request model for choosing the number of pieces."""

    piece_count: int = Field(..., description="One of the offered piece counts")
    seed: Optional[int] = Field(None, ge=0, le=0xFFFFFFFF, description="Cut-line seed (random if omitted)")


class EdgeMetaModel(BaseModel):
    """Bulge of one edge."""

    amplitude_px: float
    sign: int


class FrontResponse(BaseModel):
    """Response model for the generated front side."""

    puzzle_id: str
    rows: int
    cols: int
    seed: int
    image: str = Field(..., description="Base64 encoded PNG data URL")
    paths: List[str]
    horizontal: List[List[EdgeMetaModel]]
    vertical: List[List[EdgeMetaModel]]


class FactsRequest(BaseModel):
    """Request model for sending facts, one per line."""

    text: str = Field(..., min_length=1)


class RewriteNotice(BaseModel):
    """A fact that was shortened to fit its piece."""

    index: int
    original: str
    text: str


class FactLayout(BaseModel):
    """Layout of one fact on the back side."""

    index: int
    back_index: int
    text: str
    lines: List[str]
    font_size: int
    line_height: float
    truncated: bool


class FactsResponse(BaseModel):
    """Progress after receiving facts."""

    accepted: int
    total: int
    remaining: int
    complete: bool
    notices: List[RewriteNotice] = Field(default_factory=list)
    failures: List[int] = Field(default_factory=list, description="Front indices of facts that do not fit")
    rejected: List[str] = Field(default_factory=list, description="Lines with no printable text, not placed")


class BackResponse(BaseModel):
    """Response model for the generated back side."""

    puzzle_id: str
    image: str = Field(..., description="Base64 encoded PNG data URL")
    front: List[Optional[FactLayout]]
    back: List[Optional[FactLayout]]
