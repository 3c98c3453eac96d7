"""
Submission State Machine

Guards the transitions a submission run may take while it is processed.
"""
from typing import Dict, List, Set

from intake.core.states import SubmissionState
from intake.core.models import SubmissionRun


class SubmissionStateMachine:
    """
    State machine for a single submission run.

    Remote calls only happen in UPDATING_METADATA and UPLOADING_ATTACHMENTS.
    UPLOADING_ATTACHMENTS transitions to itself once per attachment, so
    attachment i+1 is only reachable after attachment i has succeeded.
    """

    SUCCESS_FLOW: List[SubmissionState] = [
        SubmissionState.RECEIVED,
        SubmissionState.VALIDATING,
        SubmissionState.UPDATING_METADATA,
        SubmissionState.UPLOADING_ATTACHMENTS,
        SubmissionState.SUCCEEDED
    ]

    # Define valid transitions (from_state -> set of valid to_states)
    TRANSITIONS: Dict[SubmissionState, Set[SubmissionState]] = {
        SubmissionState.RECEIVED: {SubmissionState.VALIDATING},
        SubmissionState.VALIDATING: {SubmissionState.UPDATING_METADATA, SubmissionState.FAILED},
        SubmissionState.UPDATING_METADATA: {SubmissionState.UPLOADING_ATTACHMENTS, SubmissionState.FAILED},
        SubmissionState.UPLOADING_ATTACHMENTS: {
            SubmissionState.UPLOADING_ATTACHMENTS,
            SubmissionState.SUCCEEDED,
            SubmissionState.FAILED
        },
        SubmissionState.SUCCEEDED: set(),  # Terminal state
        SubmissionState.FAILED: set()  # Terminal state
    }

    def get_valid_transitions(self, run: SubmissionRun) -> List[SubmissionState]:
        """Get list of valid next states for a run."""
        return sorted(self.TRANSITIONS.get(run.current_state, set()), key=lambda s: s.value)

    def can_transition(self, run: SubmissionRun, target_state: SubmissionState) -> bool:
        """Check if a transition to target_state is valid."""
        return target_state in self.TRANSITIONS.get(run.current_state, set())

    def is_terminal(self, run: SubmissionRun) -> bool:
        return not self.TRANSITIONS.get(run.current_state)

    def transition(self, run: SubmissionRun, target_state: SubmissionState) -> SubmissionRun:
        """
        Execute a state transition.

        Args:
            run: The run to transition
            target_state: The desired next state

        Returns:
            Updated run with new state

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(run, target_state):
            valid = self.get_valid_transitions(run)
            raise ValueError(
                f"Invalid transition from {run.current_state.value} to {target_state.value}. "
                f"Valid transitions: {[s.value for s in valid]}"
            )

        run.record_state_change(target_state)

        return run
