from .machine import SubmissionStateMachine

__all__ = ["SubmissionStateMachine"]
