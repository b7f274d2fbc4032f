"""
Name: In-Memory Repository Tests

Responsibilities:
  - SERIAL-like id assignment (monotonic, never reused)
  - Owner scoping for get/update/delete
  - Username uniqueness
"""

import pytest

from taskboard.crosscutting.exceptions import UsernameTakenError
from taskboard.identity.users import UserRole
from taskboard.infrastructure.repositories import (
    InMemoryTaskRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


class TestInMemoryUserRepository:
    def test_create_assigns_sequential_ids(self):
        repo = InMemoryUserRepository()

        first = repo.create_user(username="alice", password_hash="h1", role=UserRole.USER)
        second = repo.create_user(username="bob", password_hash="h2", role=UserRole.ADMIN)

        assert (first.id, second.id) == (1, 2)
        assert repo.get_user_by_username("bob") == second

    def test_duplicate_username_raises(self):
        repo = InMemoryUserRepository()
        repo.create_user(username="alice", password_hash="h", role=UserRole.USER)

        with pytest.raises(UsernameTakenError):
            repo.create_user(username="alice", password_hash="x", role=UserRole.ADMIN)

    def test_lookup_is_case_sensitive(self):
        repo = InMemoryUserRepository()
        repo.create_user(username="alice", password_hash="h", role=UserRole.USER)

        assert repo.get_user_by_username("Alice") is None


class TestInMemoryTaskRepository:
    def test_ids_are_not_reused_after_delete(self):
        repo = InMemoryTaskRepository()
        first = repo.create_task(title="a", description=None, owner_user_id=1)
        repo.delete_task_for_owner(first.id, 1)

        second = repo.create_task(title="b", description=None, owner_user_id=1)

        assert second.id == 2

    def test_foreign_owner_sees_nothing(self):
        repo = InMemoryTaskRepository()
        task = repo.create_task(title="a", description="d", owner_user_id=1)

        assert repo.get_task_for_owner(task.id, 2) is None
        assert repo.update_task_for_owner(task.id, 2, title="x", description=None) is None
        assert repo.delete_task_for_owner(task.id, 2) is False
        assert repo.get_task_for_owner(task.id, 1) == task

    def test_update_replaces_fields(self):
        repo = InMemoryTaskRepository()
        task = repo.create_task(title="a", description="d", owner_user_id=1)

        updated = repo.update_task_for_owner(task.id, 1, title="b", description=None)

        assert updated.title == "b"
        assert updated.description is None
        assert repo.get_task_for_owner(task.id, 1) == updated

    def test_lists_are_ordered_by_id(self):
        repo = InMemoryTaskRepository()
        for owner in (2, 1, 2, 1):
            repo.create_task(title=f"t{owner}", description=None, owner_user_id=owner)

        assert [t.id for t in repo.list_tasks_by_owner(1)] == [2, 4]
        assert [t.id for t in repo.list_all_tasks()] == [1, 2, 3, 4]

    def test_ping(self):
        assert InMemoryTaskRepository().ping() is True
