import pytest

from task_api.exceptions import Forbidden, NotFound
from task_api.services.ownership import assert_ownership

from conftest import make_task


def test_owner_gets_task_back():
    task = make_task(owner_id=1)
    assert assert_ownership(task, 1) is task


def test_other_user_is_forbidden():
    with pytest.raises(Forbidden):
        assert_ownership(make_task(owner_id=1), 2)


def test_missing_task_is_not_found():
    with pytest.raises(NotFound):
        assert_ownership(None, 1)
