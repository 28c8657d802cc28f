"""Tests for the ledger owner: entry contract, sequence operations, undo."""
import pytest

from database.ledger_dao import LedgerDAO
from services.errors import StorageError, ValidationError
from services.transaction_service import TransactionService
from tests.conftest import make_tx


class _FailingLedgerDAO:
    def load(self):
        return []

    def save(self, transactions):
        raise StorageError("disk full")


class TestCreate:
    def test_create_puts_new_transaction_first(self, tx_svc):
        first = tx_svc.create("expense", "500", "1", "2026-10-01", "Lunch")
        second = tx_svc.create("income", 20000, "6", "2026-10-02")
        assert [t.id for t in tx_svc.get_all()] == [second.id, first.id]
        assert first.amount == 500.0
        assert first.note == "Lunch"
        assert first.id and first.created_at

    def test_create_is_persisted(self, tx_svc, ledger_dao):
        tx = tx_svc.create("expense", 12.5, "2", "2026-10-03")
        assert ledger_dao.load() == [tx]

    @pytest.mark.parametrize(
        "amount", [None, "", "   ", "abc", 0, "-5", float("nan"), "inf", "1e400", float("-inf")],
    )
    def test_invalid_amount_rejected(self, tx_svc, amount):
        with pytest.raises(ValidationError, match="valid amount"):
            tx_svc.create("expense", amount, "1", "2026-10-01")
        assert tx_svc.count() == 0

    def test_invalid_type_rejected(self, tx_svc):
        with pytest.raises(ValidationError, match="Invalid type"):
            tx_svc.create("transfer", 10, "1", "2026-10-01")

    def test_invalid_date_rejected(self, tx_svc):
        with pytest.raises(ValidationError, match="Invalid date"):
            tx_svc.create("expense", 10, "1", "October 1st")


class TestUpdate:
    def test_update_keeps_identity_and_position(self, tx_svc):
        a = tx_svc.create("expense", 10, "1", "2026-10-01")
        b = tx_svc.create("expense", 20, "2", "2026-10-02")
        updated = tx_svc.update(a.id, "income", "30", "6", "2026-10-04", "Bonus")
        assert updated.id == a.id
        assert updated.created_at == a.created_at
        assert [t.id for t in tx_svc.get_all()] == [b.id, a.id]
        assert tx_svc.get_by_id(a.id).amount == 30.0
        assert tx_svc.get_by_id(a.id).type == "income"

    def test_update_unknown_id(self, tx_svc):
        with pytest.raises(ValidationError, match="no longer exists"):
            tx_svc.update("missing", "expense", 10, "1", "2026-10-01")

    def test_update_validates_before_changing(self, tx_svc):
        a = tx_svc.create("expense", 10, "1", "2026-10-01")
        with pytest.raises(ValidationError):
            tx_svc.update(a.id, "expense", "0", "1", "2026-10-01")
        assert tx_svc.get_by_id(a.id).amount == 10.0


class TestSequenceOperations:
    def test_prepend_many_keeps_incoming_order(self, tx_svc):
        tx_svc.insert_front(make_tx("old", 1.0))
        count = tx_svc.prepend_many([make_tx("n1", 2.0), make_tx("n2", 3.0)])
        assert count == 2
        assert [t.id for t in tx_svc.get_all()] == ["n1", "n2", "old"]

    def test_replace_by_id_unknown(self, tx_svc):
        assert tx_svc.replace_by_id(make_tx("ghost", 1.0)) is False

    def test_remove_by_id_unknown(self, tx_svc):
        assert tx_svc.remove_by_id("ghost") is None

    def test_get_all_returns_a_copy(self, tx_svc):
        tx_svc.insert_front(make_tx("a", 1.0))
        tx_svc.get_all().clear()
        assert tx_svc.count() == 1

    def test_ledger_loaded_from_store(self, db, ledger_dao):
        ledger_dao.save([make_tx("a", 1.0), make_tx("b", 2.0)])
        svc = TransactionService(LedgerDAO(db))
        assert [t.id for t in svc.get_all()] == ["a", "b"]

    def test_clear_all(self, tx_svc, ledger_dao):
        tx_svc.prepend_many([make_tx("a", 1.0), make_tx("b", 2.0)])
        tx_svc.delete("a")
        tx_svc.clear_all()
        assert tx_svc.count() == 0
        assert ledger_dao.load() == []
        assert tx_svc.has_undo() is False


class TestDeleteUndo:
    def test_undo_restores_record_at_front(self, tx_svc):
        tx_svc.prepend_many([make_tx("a", 1.0), make_tx("b", 2.0), make_tx("c", 3.0)])
        removed = tx_svc.delete("b")
        assert removed.id == "b"
        assert [t.id for t in tx_svc.get_all()] == ["a", "c"]

        restored = tx_svc.undo()
        assert restored == removed
        assert [t.id for t in tx_svc.get_all()] == ["b", "a", "c"]
        assert tx_svc.has_undo() is False

    def test_undo_of_first_record_restores_prior_state(self, tx_svc):
        before = [make_tx("a", 1.0), make_tx("b", 2.0)]
        tx_svc.prepend_many(before)
        tx_svc.delete("a")
        tx_svc.undo()
        assert tx_svc.get_all() == before

    def test_undo_expires(self, tx_svc, clock):
        tx_svc.insert_front(make_tx("a", 1.0))
        tx_svc.delete("a")
        clock.advance(4.9)
        assert tx_svc.has_undo() is True
        clock.advance(0.1)
        assert tx_svc.has_undo() is False
        assert tx_svc.undo() is None
        assert tx_svc.count() == 0

    def test_second_delete_replaces_buffer(self, tx_svc):
        tx_svc.prepend_many([make_tx("a", 1.0), make_tx("b", 2.0)])
        tx_svc.delete("a")
        tx_svc.delete("b")
        assert tx_svc.undo().id == "b"
        assert tx_svc.undo() is None
        assert [t.id for t in tx_svc.get_all()] == ["b"]

    def test_delete_unknown_leaves_buffer(self, tx_svc):
        tx_svc.insert_front(make_tx("a", 1.0))
        tx_svc.delete("a")
        assert tx_svc.delete("ghost") is None
        assert tx_svc.undo().id == "a"

    def test_undo_without_delete(self, tx_svc):
        assert tx_svc.undo() is None


class TestCommitFailure:
    def test_failed_write_is_reported_and_kept_in_memory(self, clock):
        errors = []
        svc = TransactionService(_FailingLedgerDAO(), clock=clock, on_commit_error=errors.append)
        tx = svc.create("expense", 10, "1", "2026-10-01")
        assert svc.get_all() == [tx]
        assert len(errors) == 1
        assert isinstance(errors[0], StorageError)

    def test_failed_write_without_callback(self, clock):
        svc = TransactionService(_FailingLedgerDAO(), clock=clock)
        svc.create("expense", 10, "1", "2026-10-01")
        assert svc.count() == 1
