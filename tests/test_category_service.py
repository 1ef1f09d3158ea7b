"""
tests/test_category_service.py
───────────────────────────────
Tests unitarios para services/category_service.py
"""

import logging

import pytest

from database.models import Category
from database.repositories import UniqueViolation
from services.category_service import CategoryService
from services.exceptions import ConflictError, NotFoundError, ValidationError

USER_ID = 1


def _make_cat(cat_id=3, name="Food", user_id=USER_ID) -> Category:
    return Category(id=cat_id, user_id=user_id, name=name)


@pytest.fixture
def service(user_repo, category_repo, transaction_repo):
    return CategoryService(user_repo, category_repo, transaction_repo)


class TestAdd:
    def test_add_ok(self, service, category_repo):
        category_repo.exists_by_name.return_value = False
        category_repo.create.return_value = _make_cat()

        cat = service.add(USER_ID, "  Food ")

        saved = category_repo.create.call_args[0][0]
        assert saved.name == "Food"
        assert saved.user_id == USER_ID
        assert cat.id == 3

    def test_add_unknown_user(self, service, user_repo, category_repo):
        user_repo.exists.return_value = False
        with pytest.raises(NotFoundError):
            service.add(99, "Food")
        category_repo.create.assert_not_called()

    def test_add_duplicate_name(self, service, category_repo):
        category_repo.exists_by_name.return_value = True
        with pytest.raises(ConflictError):
            service.add(USER_ID, "Food")

    def test_add_duplicate_detected_by_constraint(self, service, category_repo):
        category_repo.exists_by_name.return_value = False
        category_repo.create.side_effect = UniqueViolation("categories")
        with pytest.raises(ConflictError):
            service.add(USER_ID, "Food")

    def test_add_blank_name(self, service):
        with pytest.raises(ValidationError):
            service.add(USER_ID, "   ")


class TestQueries:
    def test_list_by_user(self, service, category_repo):
        category_repo.list_by_user.return_value = [_make_cat(1, "Food"), _make_cat(2, "Rent")]
        assert [c.name for c in service.list_by_user(USER_ID)] == ["Food", "Rent"]

    def test_list_unknown_user(self, service, user_repo):
        user_repo.exists.return_value = False
        with pytest.raises(NotFoundError):
            service.list_by_user(99)

    def test_get_category_of_other_user(self, service, category_repo):
        category_repo.get_for_user.return_value = None
        with pytest.raises(NotFoundError):
            service.get_by_id_for_user(3, 2)


class TestUpdate:
    def test_rename_ok(self, service, category_repo):
        category_repo.get_for_user.return_value = _make_cat()
        category_repo.find_by_name_ignore_case.return_value = []
        category_repo.rename.return_value = _make_cat(name="Groceries")

        assert service.update(USER_ID, 3, "Groceries").name == "Groceries"
        category_repo.rename.assert_called_once_with(3, USER_ID, "Groceries")

    def test_rename_collides_ignoring_case(self, service, category_repo):
        category_repo.get_for_user.return_value = _make_cat()
        category_repo.find_by_name_ignore_case.return_value = [_make_cat(4, "rent")]

        with pytest.raises(ConflictError):
            service.update(USER_ID, 3, "RENT")
        category_repo.rename.assert_not_called()

    def test_changing_case_of_own_name_is_allowed(self, service, category_repo):
        category_repo.get_for_user.return_value = _make_cat(name="food")
        category_repo.find_by_name_ignore_case.return_value = [_make_cat(name="food")]
        category_repo.rename.return_value = _make_cat(name="Food")

        assert service.update(USER_ID, 3, "Food").name == "Food"

    def test_rename_missing_category(self, service, category_repo):
        category_repo.get_for_user.return_value = None
        with pytest.raises(NotFoundError):
            service.update(USER_ID, 3, "X")

    def test_rename_unknown_user(self, service, user_repo):
        user_repo.exists.return_value = False
        with pytest.raises(NotFoundError):
            service.update(99, 3, "X")


class TestDelete:
    def test_delete_ok(self, service, category_repo, transaction_repo):
        category_repo.get_for_user.return_value = _make_cat()
        category_repo.delete.return_value = True
        transaction_repo.count_by_category.return_value = 0

        service.delete(USER_ID, 3)
        category_repo.delete.assert_called_once_with(3, USER_ID)

    def test_delete_with_transactions_succeeds_and_warns(
        self, service, category_repo, transaction_repo, caplog
    ):
        """
        Borrar una categoría en uso no falla: las transacciones quedan
        sin categoría. Es un hueco de integridad conocido y se deja
        registrado en el log.
        """
        category_repo.get_for_user.return_value = _make_cat()
        category_repo.delete.return_value = True
        transaction_repo.count_by_category.return_value = 2

        with caplog.at_level(logging.WARNING, logger="services.category_service"):
            service.delete(USER_ID, 3)

        category_repo.delete.assert_called_once_with(3, USER_ID)
        assert "2 transacciones" in caplog.text

    def test_delete_missing(self, service, category_repo):
        category_repo.get_for_user.return_value = None
        with pytest.raises(NotFoundError):
            service.delete(USER_ID, 3)
        category_repo.delete.assert_not_called()
