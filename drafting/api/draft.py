import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from drafting.models.draft_state import new_draft
from drafting.services.draft_store import DraftStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["draft"])

MISSING_DRAFT_ID = "Draft ID is missing in the URL."
DRAFT_NOT_FOUND = "Draft not found"
INTERNAL_ERROR = "Internal Server Error"

# -----------------------
# API models
# -----------------------


class CreateDraftRequest(BaseModel):
    name: Optional[str] = None
    topic: Optional[str] = None


class ParticipantIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


class AddParticipantRequest(BaseModel):
    participant: Optional[ParticipantIn] = None


# -----------------------
# Helpers
# -----------------------


def get_draft_store(request: Request) -> DraftStore:
    return request.app.state.draft_store


def internal_error(action: str, exc: Exception) -> HTTPException:
    logger.exception("Error %s: %s", action, exc)
    return HTTPException(status_code=500, detail=INTERNAL_ERROR)


def require_participant(req) -> ParticipantIn:
    participant = req.participant if req else None
    if participant is None or not participant.name or not participant.user_id:
        raise HTTPException(status_code=400, detail="Missing participant name or userId")
    return participant


def set_active(store: DraftStore, draft_id: str, is_active: bool, action: str):
    try:
        draft = store.set_active(draft_id, is_active)
    except Exception as exc:
        raise internal_error(action, exc)

    if draft is None:
        raise HTTPException(status_code=404, detail=DRAFT_NOT_FOUND)

    logger.info("Draft %s isActive=%s", draft_id, is_active)
    return {**draft, "isActive": is_active}


# -----------------------
# API endpoints
# -----------------------


@router.post("/createDraft", status_code=201)
def create_draft(
    req: Optional[CreateDraftRequest] = None,
    store: DraftStore = Depends(get_draft_store),
):
    if req is None or not req.name or not req.topic:
        raise HTTPException(status_code=400, detail="Missing name or topic")

    draft = new_draft(req.name, req.topic)
    try:
        draft_id = store.create(draft)
    except Exception as exc:
        raise internal_error("creating draft", exc)

    logger.info("Created draft %s (%s)", draft_id, req.topic)
    return {**draft, "draftId": draft_id}


@router.get("/getDraft/{draft_id}")
def get_draft(draft_id: str, store: DraftStore = Depends(get_draft_store)):
    try:
        draft = store.get_by_id(draft_id)
    except Exception as exc:
        raise internal_error("retrieving draft", exc)

    if draft is None:
        raise HTTPException(status_code=404, detail=DRAFT_NOT_FOUND)

    return draft


@router.post("/startDraft/{draft_id}")
def start_draft(draft_id: str, store: DraftStore = Depends(get_draft_store)):
    return set_active(store, draft_id, True, "starting draft")


@router.post("/endDraft/{draft_id}")
def end_draft(draft_id: str, store: DraftStore = Depends(get_draft_store)):
    return set_active(store, draft_id, False, "ending draft")


@router.post("/addParticipant/{draft_id}")
def add_participant(
    draft_id: str,
    req: Optional[AddParticipantRequest] = None,
    store: DraftStore = Depends(get_draft_store),
):
    participant = require_participant(req)

    try:
        draft = store.add_participant(
            draft_id, {"name": participant.name, "userId": participant.user_id}
        )
    except Exception as exc:
        raise internal_error("adding participant", exc)

    if draft is None:
        raise HTTPException(status_code=404, detail=DRAFT_NOT_FOUND)

    logger.info("Added participant %s to draft %s", participant.user_id, draft_id)
    return draft


# Routes that matched without an id segment, e.g. POST /startDraft/ or
# POST /startDraft/abc/ (the id is whatever follows the final slash)


def missing_draft_id():
    raise HTTPException(status_code=400, detail=MISSING_DRAFT_ID)


def add_participant_missing_draft_id(req: Optional[AddParticipantRequest] = None):
    # body is validated before the id, so a bad body wins over a missing id
    require_participant(req)
    missing_draft_id()


for _path, _method, _endpoint in (
    ("/getDraft", "GET", missing_draft_id),
    ("/startDraft", "POST", missing_draft_id),
    ("/endDraft", "POST", missing_draft_id),
    ("/addParticipant", "POST", add_participant_missing_draft_id),
):
    for _suffix in ("", "/", "/{draft_id}/"):
        router.add_api_route(
            _path + _suffix,
            _endpoint,
            methods=[_method],
            include_in_schema=False,
        )
