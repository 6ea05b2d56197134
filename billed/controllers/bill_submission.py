from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from billed.constants import ROUTES_PATH
from billed.errors import (
    BillError,
    ErrorKind,
    InvalidFileTypeError,
    InvalidTransitionError,
    UploadInProgressError,
    ValidationError,
    classify_error,
)
from billed.models.bill import Bill, BillStatus, FullUpdate, UpdateResult
from billed.models.draft import Draft, DraftState
from billed.models.file import SelectedFile
from billed.models.form import BillForm, parse_form
from billed.models.user import UserSession
from billed.settings import settings
from billed.stores.base import RemoteBillStore

logger = logging.getLogger(__name__)


class BillSubmissionController:
    """Drives one new-bill draft from file selection to persisted bill.

    The receipt is uploaded as soon as a valid file is selected; the form
    fields are only validated on submit, which then updates the record the
    upload created.
    """

    def __init__(
        self,
        store: RemoteBillStore,
        user: UserSession,
        on_navigate: Callable[[str], None],
        upload_timeout: float | None = None,
        submit_timeout: float | None = None,
    ) -> None:
        self.store = store
        self.user = user
        self.on_navigate = on_navigate
        self.upload_timeout = settings.upload_timeout if upload_timeout is None else upload_timeout
        self.submit_timeout = settings.submit_timeout if submit_timeout is None else submit_timeout
        self.draft: Draft | None = None
        self._upload_token = 0
        self._uploading = False
        self.mount()

    @property
    def uploading(self) -> bool:
        return self._uploading

    def mount(self) -> Draft:
        """Start a fresh draft, dropping any previous one."""
        self._upload_token += 1
        self._uploading = False
        self.draft = Draft()
        logger.debug("New bill draft mounted for %s", self.user.email)
        return self.draft

    def discard(self) -> None:
        """Drop the draft; a pending upload's response will be ignored."""
        self._upload_token += 1
        self._uploading = False
        self.draft = None
        logger.debug("Bill draft discarded")

    def _require_draft(self) -> Draft:
        if self.draft is None:
            raise InvalidTransitionError("No bill draft is mounted")
        return self.draft

    async def select_file(self, file: SelectedFile) -> Draft:
        draft = self._require_draft()
        if self._uploading:
            logger.warning("Ignoring %s: an upload is already in progress", file.name)
            raise UploadInProgressError()

        if not file.is_allowed_type:
            draft.upload_error = ErrorKind.INVALID_FILE_TYPE
            logger.warning("Rejected %s: unsupported type %r", file.name, file.mime_type)
            raise InvalidFileTypeError(file.mime_type)

        if draft.state == DraftState.SUBMIT_FAILED:
            draft.transition(DraftState.UPLOADED)
        draft.transition(DraftState.FILE_SELECTED)
        draft.upload_error = None

        self._upload_token += 1
        token = self._upload_token
        self._uploading = True
        draft.transition(DraftState.UPLOADING)
        try:
            result = await asyncio.wait_for(
                self.store.create(file, self.user.email),
                timeout=self.upload_timeout,
            )
        except asyncio.CancelledError:
            if token == self._upload_token:
                self._uploading = False
                draft.transition(DraftState.UPLOAD_FAILED)
                logger.warning("Upload of %s cancelled", file.name)
            raise
        except Exception as exc:
            error = classify_error(exc)
            if token != self._upload_token:
                logger.warning("Discarding failure of superseded upload %s: %s", file.name, error)
                return draft
            self._uploading = False
            draft.transition(DraftState.UPLOAD_FAILED)
            if isinstance(error, BillError):
                draft.upload_error = error.kind
            logger.warning("Upload of %s failed: %s", file.name, error)
            if error is exc:
                raise
            raise error from exc

        if token != self._upload_token:
            logger.warning("Discarding response of superseded upload %s", file.name)
            return draft

        self._uploading = False
        draft.file_url = result.file_url
        draft.file_name = file.name
        if result.key:
            draft.bill_id = result.key
        draft.transition(DraftState.UPLOADED)
        logger.info("Receipt %s uploaded, bill_id=%s", file.name, draft.bill_id)
        return draft

    async def submit(self, form_fields: Mapping[str, Any]) -> UpdateResult:
        draft = self._require_draft()
        if draft.state == DraftState.UPLOADING:
            raise UploadInProgressError()
        if not draft.has_file:
            raise ValidationError("file", "A receipt must be uploaded before submitting")
        if draft.state == DraftState.UPLOAD_FAILED:
            raise ValidationError("file", "The last receipt upload failed")

        form = parse_form(form_fields)
        self._fill_draft(draft, form)
        bill = Bill(
            id=draft.bill_id,
            employee_email=self.user.email,
            type=form.type,
            name=form.name,
            amount=form.amount,
            date=form.date,
            vat=form.vat,
            pct=form.pct,
            commentary=form.commentary,
            file_url=draft.file_url,
            file_name=draft.file_name,
            status=BillStatus.PENDING,
        )
        return await self.update_bill(bill)

    @staticmethod
    def _fill_draft(draft: Draft, form: BillForm) -> None:
        draft.type = form.type.value
        draft.name = form.name
        draft.amount = form.amount
        draft.date = form.date
        draft.vat = form.vat
        draft.pct = form.pct
        draft.commentary = form.commentary

    async def update_bill(self, bill: Bill) -> UpdateResult:
        """Persist ``bill`` over the draft's record and go back to the list.

        The status is always reset to pending, and the owner and attachment
        come from the session and the draft, whatever ``bill`` carries.
        """
        draft = self._require_draft()
        if draft.state == DraftState.SUBMIT_FAILED:
            draft.transition(DraftState.UPLOADED)
        draft.transition(DraftState.SUBMITTING)
        bill = bill.model_copy(
            update={
                "status": BillStatus.PENDING,
                "employee_email": self.user.email,
                "file_url": draft.file_url,
                "file_name": draft.file_name,
            }
        )

        selector = draft.bill_id or bill.id
        try:
            result = await asyncio.wait_for(
                self.store.update(bill, selector=selector),
                timeout=self.submit_timeout,
            )
        except asyncio.CancelledError:
            draft.transition(DraftState.SUBMIT_FAILED)
            logger.warning("Submitting bill %s cancelled", selector)
            raise
        except Exception as exc:
            draft.transition(DraftState.SUBMIT_FAILED)
            error = classify_error(exc)
            logger.warning("Submitting bill %s failed: %s", selector, error)
            if error is exc:
                raise
            raise error from exc

        draft.transition(DraftState.SUBMITTED)
        if isinstance(result, FullUpdate):
            logger.info("Bill %s submitted by %s, status=%s", result.bill.id, self.user.email, result.bill.status.value)
        else:
            logger.info("Bill %s submitted by %s", selector, self.user.email)
        self.draft = None
        self.on_navigate(ROUTES_PATH["Bills"])
        return result
