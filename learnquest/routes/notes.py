"""
learnquest/routes/notes.py
Timestamped notes per video

notes.json maps video id -> list of notes. Note ids are unique across all
videos.
"""
import logging
from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends

from learnquest.errors import ErrorCode, NotFoundError
from learnquest.schemas.common import SuccessResponse
from learnquest.schemas.notes import Note, NoteCreate, NoteUpdate
from learnquest.store import NOTES, JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])


# ============================================================================
# HELPERS
# ============================================================================

def _load_notes(store: JsonStore) -> Dict[str, List[Note]]:
    raw = store.read(NOTES, {})
    return {video_id: [Note.model_validate(n) for n in notes] for video_id, notes in raw.items()}


def _save_notes(store: JsonStore, notes: Dict[str, List[Note]]) -> None:
    store.write(NOTES, {video_id: [n.to_store() for n in entries] for video_id, entries in notes.items()})


def _next_id(notes: Dict[str, List[Note]]) -> int:
    return max((n.id for entries in notes.values() for n in entries), default=0) + 1


def _find_note(notes: Dict[str, List[Note]], video_id: int, note_id: int) -> Note:
    for note in notes.get(str(video_id), []):
        if note.id == note_id:
            return note
    raise NotFoundError("Note", note_id, code=ErrorCode.NOTE_NOT_FOUND)


# ============================================================================
# CRUD ENDPOINTS
# ============================================================================

@router.get("/{video_id}", response_model=List[Note])
async def list_notes(video_id: int, store: JsonStore = Depends(get_store)):
    notes = _load_notes(store).get(str(video_id), [])
    return sorted(notes, key=lambda n: (n.timestamp, n.id))


@router.post("/{video_id}", response_model=Note, status_code=201)
async def create_note(video_id: int, note_data: NoteCreate, store: JsonStore = Depends(get_store)):
    notes = _load_notes(store)
    note = Note(
        id=_next_id(notes),
        video_id=str(video_id),
        timestamp=note_data.timestamp,
        content=note_data.content,
        created_at=datetime.now().isoformat(),
    )
    notes.setdefault(str(video_id), []).append(note)
    _save_notes(store, notes)
    logger.info(f"✅ Note {note.id} added to video {video_id}")
    return note


@router.patch("/{video_id}/{note_id}", response_model=Note)
async def update_note(video_id: int, note_id: int, note_data: NoteUpdate, store: JsonStore = Depends(get_store)):
    notes = _load_notes(store)
    note = _find_note(notes, video_id, note_id)
    note.content = note_data.content
    if note_data.timestamp is not None:
        note.timestamp = note_data.timestamp
    note.updated_at = datetime.now().isoformat()
    _save_notes(store, notes)
    return note


@router.delete("/{video_id}/{note_id}", response_model=SuccessResponse)
async def delete_note(video_id: int, note_id: int, store: JsonStore = Depends(get_store)):
    notes = _load_notes(store)
    note = _find_note(notes, video_id, note_id)
    notes[str(video_id)].remove(note)
    if not notes[str(video_id)]:
        del notes[str(video_id)]
    _save_notes(store, notes)
    logger.info(f"🗑️ Note {note_id} deleted from video {video_id}")
    return SuccessResponse(message="Note deleted")
