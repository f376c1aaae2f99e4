"""
Annotate API endpoint.

Splits text into literal and annotated segments and applies one user
interaction to the tooltip state. The client sends back the open
occurrence id it holds; the server returns the new one.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from explainmycard.models.failure import ApiResponse, create_success
from explainmycard.services.card_report import SegmentModel
from explainmycard.services.keyword_annotator import TooltipState, annotate, occurrence_ids

router = APIRouter(prefix="/annotate", tags=["annotate"])


class AnnotateRequest(BaseModel):
    """Text to annotate plus an optional interaction."""

    text: str
    open_id: str | None = Field(default=None, description="Currently open occurrence")
    click: str | None = Field(default=None, description="Occurrence id that was clicked")
    outside_click: bool = False
    key: str | None = Field(default=None, description="Key pressed, e.g. 'Escape'")


class AnnotateResponse(BaseModel):
    segments: list[SegmentModel]
    open_id: str | None = None


@router.post("/", response_model=ApiResponse[AnnotateResponse])
async def annotate_text(request: AnnotateRequest) -> ApiResponse[AnnotateResponse]:
    """Annotate text and return the resulting tooltip state."""
    segments = annotate(request.text)
    known_ids = set(occurrence_ids(segments))

    state = TooltipState(open_id=request.open_id if request.open_id in known_ids else None)
    if request.click is not None and request.click in known_ids:
        state = state.toggle(request.click)
    if request.outside_click:
        state = state.outside_click()
    if request.key is not None:
        state = state.key_pressed(request.key)

    return create_success(
        AnnotateResponse(
            segments=[SegmentModel.from_segment(s) for s in segments],
            open_id=state.open_id,
        )
    )
