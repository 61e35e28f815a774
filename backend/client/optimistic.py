"""
Optimistic local updates.

An OptimisticAction changes local state before the server answers, then
either keeps the change (commit) or undoes it (rollback). Once it has left
PENDING it cannot move again.
"""

from enum import Enum
from typing import Awaitable, Callable

from .api import ApiResult


class ActionState(str, Enum):
    """Lifecycle of an optimistic action."""

    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class InvalidTransitionError(Exception):
    """Raised on apply/commit/rollback out of order."""

    def __init__(self, action: str, state: ActionState, applied: bool):
        super().__init__(
            f"Cannot {action} an optimistic action that is {state.value}"
            f"{'' if applied else ' and not yet applied'}"
        )
        self.action = action
        self.state = state


class OptimisticAction:
    """
    A tentative local change with a known inverse.

    Args:
        apply_change: Installs the tentative state
        revert_change: Restores the state from before ``apply_change``
    """

    def __init__(
        self,
        apply_change: Callable[[], None],
        revert_change: Callable[[], None],
    ):
        self._apply_change = apply_change
        self._revert_change = revert_change
        self.state = ActionState.PENDING
        self.applied = False

    def apply(self) -> None:
        if self.state is not ActionState.PENDING or self.applied:
            raise InvalidTransitionError("apply", self.state, self.applied)
        self._apply_change()
        self.applied = True

    def commit(self) -> None:
        if self.state is not ActionState.PENDING or not self.applied:
            raise InvalidTransitionError("commit", self.state, self.applied)
        self.state = ActionState.COMMITTED

    def rollback(self) -> None:
        if self.state is not ActionState.PENDING or not self.applied:
            raise InvalidTransitionError("rollback", self.state, self.applied)
        self._revert_change()
        self.state = ActionState.ROLLED_BACK

    async def run(self, call: Callable[[], Awaitable[ApiResult]]) -> ApiResult:
        """
        Apply, await the server call, then commit or roll back on its result.

        Exceptions from ``call`` roll back and propagate.
        """
        self.apply()
        try:
            result = await call()
        except Exception:
            self.rollback()
            raise
        if result.success:
            self.commit()
        else:
            self.rollback()
        return result
