"""
트랜잭션 코디네이터 테스트
"""
import pytest

from catalog.db.transaction import Transaction, TransactionError
from catalog.models import Category


def category_names(session_factory):
    session = session_factory()
    try:
        return [category.category_name for category in session.query(Category).order_by(Category.id)]
    finally:
        session.close()


def test_commit_persists_writes(session_factory):
    session = session_factory()
    tx = Transaction(session).begin()
    session.add(Category(category_name="Lighting"))
    session.flush()
    tx.commit()
    session.close()

    assert category_names(session_factory) == ["Lighting"]
    assert not tx.is_active


def test_rollback_discards_writes(session_factory):
    session = session_factory()
    tx = Transaction(session).begin()
    session.add(Category(category_name="Lighting"))
    session.flush()
    tx.rollback()
    session.close()

    assert category_names(session_factory) == []


def test_rollback_without_begin_is_noop(db):
    tx = Transaction(db)
    tx.rollback()
    tx.rollback()
    assert not tx.is_active


def test_rollback_after_empty_transaction(db):
    tx = Transaction(db).begin()
    tx.rollback()
    assert not tx.is_active


def test_nested_begin_is_rejected(db):
    tx = Transaction(db).begin()
    with pytest.raises(TransactionError):
        tx.begin()
    with pytest.raises(TransactionError):
        Transaction(db).begin()
    tx.rollback()


def test_commit_without_begin_is_rejected(db):
    with pytest.raises(TransactionError):
        Transaction(db).commit()


def test_context_manager_rolls_back_on_error(session_factory):
    session = session_factory()
    with pytest.raises(ValueError):
        with Transaction(session):
            session.add(Category(category_name="Furniture"))
            session.flush()
            raise ValueError("boom")
    session.close()

    assert category_names(session_factory) == []


def test_context_manager_commits(session_factory):
    session = session_factory()
    with Transaction(session):
        session.add(Category(category_name="Office"))
    session.close()

    assert category_names(session_factory) == ["Office"]


def test_can_begin_again_after_commit(session_factory):
    session = session_factory()
    tx = Transaction(session)
    tx.begin()
    session.add(Category(category_name="First"))
    tx.commit()
    tx.begin()
    session.add(Category(category_name="Second"))
    tx.commit()
    session.close()

    assert category_names(session_factory) == ["First", "Second"]
