"""
Submission Handler

Drives one submission through the state machine: validate, update the
claim blocks once, then upload each attachment in order. The first failure
ends the run. Work already done on the platform is not rolled back.
"""
import logging
from typing import Any, Optional

from intake.clients.root_client import RemoteClaimClient
from intake.core.errors import IntakeError, UnexpectedError, ValidationError
from intake.core.models import ClaimSubmission, SubmissionRun
from intake.core.states import SubmissionState
from intake.state_machine.machine import SubmissionStateMachine
from intake.submission.validator import EntryPoint, SubmissionValidator

logger = logging.getLogger(__name__)


class SubmissionHandler:
    """
    Orchestrates validation and the sequential remote calls for a submission.

    Remote calls are awaited one at a time; upload i+1 is only issued after
    upload i has succeeded.
    """

    def __init__(
        self,
        client: RemoteClaimClient,
        state_machine: Optional[SubmissionStateMachine] = None
    ):
        """
        Initialize the handler.

        Args:
            client: Platform client used for the metadata update and uploads
            state_machine: State machine guarding the run's transitions
        """
        self.client = client
        self.state_machine = state_machine or SubmissionStateMachine()

    async def handle(
        self,
        payload: Any,
        entry_point: EntryPoint,
        claim_number: Optional[str] = None
    ) -> SubmissionRun:
        """
        Process a submission from start to a terminal state.

        Args:
            payload: Decoded JSON body of the request
            entry_point: The route that received the request
            claim_number: Claim identifier from the URL, if any

        Returns:
            The finished run, in SUCCEEDED or FAILED
        """
        run = SubmissionRun(entry_point=entry_point.name)
        self.state_machine.transition(run, SubmissionState.VALIDATING)

        try:
            submission = SubmissionValidator(entry_point).validate(payload, claim_number)
        except ValidationError as e:
            logger.warning(
                f"Run {run.id}: submission to {entry_point.name} rejected "
                f"({e.field}: {e.reason})"
            )
            return self._fail(run, e)

        run.claim_id = submission.claim_id
        run.attachment_count = len(submission.attachments)

        try:
            await self._update_metadata(run, submission)
            await self._upload_attachments(run, submission)
        except IntakeError as e:
            logger.error(
                f"Run {run.id}: claim {run.claim_id} failed in {run.current_state.value} "
                f"after {run.uploaded_count}/{run.attachment_count} uploads: {e.message}"
            )
            return self._fail(run, e)
        except Exception:
            logger.exception(f"Run {run.id}: unexpected error for claim {run.claim_id}")
            return self._fail(run, UnexpectedError())

        run.success_message = entry_point.success_message
        self.state_machine.transition(run, SubmissionState.SUCCEEDED)
        logger.info(
            f"Run {run.id}: claim {run.claim_id} updated with "
            f"{run.uploaded_count} attachment(s)"
        )
        return run

    async def _update_metadata(self, run: SubmissionRun, submission: ClaimSubmission) -> None:
        self.state_machine.transition(run, SubmissionState.UPDATING_METADATA)
        logger.info(
            f"Run {run.id}: updating blocks {list(submission.blocks)} on claim {submission.claim_id}"
        )

        try:
            result = await self.client.update_claim_blocks(submission.claim_id, submission.blocks)
        except Exception as e:
            run.add_event("update_claim_blocks", submission.claim_id, f"failed: {e}")
            raise

        run.add_event("update_claim_blocks", submission.claim_id, f"status {result.status_code}")

    async def _upload_attachments(self, run: SubmissionRun, submission: ClaimSubmission) -> None:
        # Entered even when there are no attachments
        self.state_machine.transition(run, SubmissionState.UPLOADING_ATTACHMENTS)

        for index, attachment in enumerate(submission.attachments):
            if index > 0:
                self.state_machine.transition(run, SubmissionState.UPLOADING_ATTACHMENTS)

            logger.info(
                f"Run {run.id}: uploading attachment {index + 1}/{run.attachment_count} "
                f"({attachment.filename}) to claim {submission.claim_id}"
            )

            try:
                result = await self.client.upload_attachment(submission.claim_id, attachment)
            except Exception as e:
                run.add_event("upload_attachment", attachment.filename, f"failed: {e}")
                raise

            run.add_event("upload_attachment", attachment.filename, f"status {result.status_code}")
            run.uploaded_count += 1

    def _fail(self, run: SubmissionRun, error: IntakeError) -> SubmissionRun:
        run.error = error
        self.state_machine.transition(run, SubmissionState.FAILED)
        return run
