from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from billed.errors import ErrorKind, InvalidTransitionError


class DraftState(str, Enum):
    EMPTY = "empty"
    FILE_SELECTED = "file_selected"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    UPLOAD_FAILED = "upload_failed"
    SUBMITTING = "submitting"
    SUBMIT_FAILED = "submit_failed"
    SUBMITTED = "submitted"


TRANSITIONS: dict[DraftState, frozenset[DraftState]] = {
    DraftState.EMPTY: frozenset({DraftState.FILE_SELECTED}),
    DraftState.FILE_SELECTED: frozenset({DraftState.UPLOADING}),
    DraftState.UPLOADING: frozenset({DraftState.UPLOADED, DraftState.UPLOAD_FAILED}),
    DraftState.UPLOAD_FAILED: frozenset({DraftState.FILE_SELECTED}),
    DraftState.UPLOADED: frozenset({DraftState.FILE_SELECTED, DraftState.SUBMITTING}),
    DraftState.SUBMITTING: frozenset({DraftState.SUBMITTED, DraftState.SUBMIT_FAILED}),
    DraftState.SUBMIT_FAILED: frozenset({DraftState.UPLOADED}),
    DraftState.SUBMITTED: frozenset(),
}


class Draft(BaseModel):
    state: DraftState = DraftState.EMPTY
    bill_id: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    upload_error: ErrorKind | None = None

    type: str | None = None
    name: str | None = None
    amount: float | None = None
    date: str | None = None
    vat: float | None = None
    pct: int | None = None
    commentary: str | None = None

    @property
    def has_file(self) -> bool:
        return self.file_url is not None

    def can_transition(self, target: DraftState) -> bool:
        return target in TRANSITIONS[self.state]

    def transition(self, target: DraftState) -> None:
        if not self.can_transition(target):
            raise InvalidTransitionError(f"Cannot move draft from {self.state.value} to {target.value}")
        self.state = target
