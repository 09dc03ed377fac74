"""Notes and appointments endpoints."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, HTTPException

from herjourney.dependencies import State
from herjourney.models.tracking import (
    AppointmentCreate,
    AppointmentRead,
    NoteCreate,
    NoteRead,
    NoteUpdate,
)
from herjourney.storage.service import NotFoundError

router = APIRouter(tags=["notes"])


# ---------- Notes ----------

@router.get("/notes", response_model=list[NoteRead])
def list_notes(state: State) -> Any:
    """Pinned notes first, then newest first."""
    notes = state.get().logs.notes
    return sorted(notes, key=lambda n: (n.pinned, n.date), reverse=True)


@router.post("/notes", response_model=NoteRead, status_code=201)
def create_note(body: NoteCreate, state: State) -> Any:
    return state.add_note(**body.model_dump())


@router.patch("/notes/{note_id}", response_model=NoteRead)
def update_note(note_id: uuid.UUID, body: NoteUpdate, state: State) -> Any:
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        return state.update_note(note_id, **updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Note not found")


@router.delete("/notes/{note_id}", status_code=204)
def delete_note(note_id: uuid.UUID, state: State) -> None:
    try:
        state.delete_note(note_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Note not found")


# ---------- Appointments ----------

@router.get("/appointments", response_model=list[AppointmentRead])
def list_appointments(state: State) -> Any:
    return sorted(state.get().logs.appointments, key=lambda a: a.date)


@router.post("/appointments", response_model=AppointmentRead, status_code=201)
def create_appointment(body: AppointmentCreate, state: State) -> Any:
    return state.add_appointment(**body.model_dump())
