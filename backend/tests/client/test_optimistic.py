"""Tests for OptimisticAction."""

import pytest

from client.api import ApiResult
from client.optimistic import ActionState, InvalidTransitionError, OptimisticAction


@pytest.fixture
def state():
    return {"value": "before"}


@pytest.fixture
def action(state):
    return OptimisticAction(
        lambda: state.update(value="after"),
        lambda: state.update(value="before"),
    )


def test_commit(action, state):
    action.apply()
    assert state["value"] == "after"
    action.commit()
    assert action.state is ActionState.COMMITTED
    assert state["value"] == "after"


def test_rollback(action, state):
    action.apply()
    action.rollback()
    assert action.state is ActionState.ROLLED_BACK
    assert state["value"] == "before"


def test_commit_before_apply(action):
    with pytest.raises(InvalidTransitionError, match="not yet applied"):
        action.commit()


def test_no_transition_after_settling(action):
    action.apply()
    action.commit()
    with pytest.raises(InvalidTransitionError):
        action.rollback()
    with pytest.raises(InvalidTransitionError):
        action.apply()


def test_double_apply(action):
    action.apply()
    with pytest.raises(InvalidTransitionError):
        action.apply()


@pytest.mark.asyncio
async def test_run_commits_on_success(action, state):
    async def call():
        assert state["value"] == "after"
        return ApiResult(success=True)

    result = await action.run(call)
    assert result.success
    assert action.state is ActionState.COMMITTED


@pytest.mark.asyncio
async def test_run_rolls_back_on_failure(action, state):
    async def call():
        return ApiResult(success=False, message="nope")

    result = await action.run(call)
    assert result.message == "nope"
    assert action.state is ActionState.ROLLED_BACK
    assert state["value"] == "before"


@pytest.mark.asyncio
async def test_run_rolls_back_on_exception(action, state):
    async def call():
        raise RuntimeError("lost")

    with pytest.raises(RuntimeError):
        await action.run(call)
    assert action.state is ActionState.ROLLED_BACK
    assert state["value"] == "before"
