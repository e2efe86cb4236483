"""
Batch status value object - lifecycle of one render batch.
"""

from enum import Enum


class BatchStatus(str, Enum):
    """
    Lifecycle of a slide render batch.

    A batch starts IDLE, moves to RUNNING while slides are rendered one by one,
    and ends either COMPLETED (every slide attempted) or ABORTED (stopped on a
    quota or permission failure).
    """

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"

    def can_transition_to(self, new_status: "BatchStatus") -> bool:
        """
        Business rule: Define valid status transitions.

        Args:
            new_status: The status to transition to

        Returns:
            bool: Whether the transition is valid
        """
        valid_transitions = {
            BatchStatus.IDLE: [BatchStatus.RUNNING],
            BatchStatus.RUNNING: [BatchStatus.COMPLETED, BatchStatus.ABORTED],
            BatchStatus.COMPLETED: [BatchStatus.RUNNING, BatchStatus.IDLE],
            BatchStatus.ABORTED: [BatchStatus.RUNNING, BatchStatus.IDLE],
        }
        return new_status in valid_transitions.get(self, [])

    def is_terminal(self) -> bool:
        return self in (BatchStatus.COMPLETED, BatchStatus.ABORTED)
