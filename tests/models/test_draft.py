import pytest

from billed.errors import InvalidTransitionError
from billed.models.draft import TRANSITIONS, Draft, DraftState


class TestDraft:
    def test_defaults(self):
        draft = Draft()
        assert draft.state == DraftState.EMPTY
        assert not draft.has_file
        assert draft.upload_error is None

    def test_happy_path(self):
        draft = Draft()
        for state in (
            DraftState.FILE_SELECTED,
            DraftState.UPLOADING,
            DraftState.UPLOADED,
            DraftState.SUBMITTING,
            DraftState.SUBMITTED,
        ):
            draft.transition(state)
        assert draft.state == DraftState.SUBMITTED

    def test_failed_states_are_recoverable(self):
        draft = Draft(state=DraftState.UPLOAD_FAILED)
        draft.transition(DraftState.FILE_SELECTED)

        draft = Draft(state=DraftState.SUBMIT_FAILED)
        draft.transition(DraftState.UPLOADED)
        assert draft.state == DraftState.UPLOADED

    def test_submitted_is_terminal(self):
        assert TRANSITIONS[DraftState.SUBMITTED] == frozenset()
        draft = Draft(state=DraftState.SUBMITTED)
        with pytest.raises(InvalidTransitionError):
            draft.transition(DraftState.UPLOADED)

    def test_cannot_submit_without_upload(self):
        draft = Draft()
        assert not draft.can_transition(DraftState.SUBMITTING)
        with pytest.raises(InvalidTransitionError, match="empty to submitting"):
            draft.transition(DraftState.SUBMITTING)
        assert draft.state == DraftState.EMPTY

    def test_every_state_has_transitions(self):
        assert set(TRANSITIONS) == set(DraftState)
