from __future__ import annotations

import threading

import pytest

from src.attendance_auth.attendance_auth.database.memory import TABLES, InMemoryDatabase


def test_tables_exist():
    db = InMemoryDatabase()
    assert set(db.tables) == set(TABLES)


def test_rollback_restores_every_table():
    db = InMemoryDatabase()
    db.tables["positions"][1] = "kept"

    with pytest.raises(RuntimeError):
        with db.transaction():
            db.tables["positions"][2] = "dropped"
            db.tables["auth_users"]["EMP001"] = "dropped"
            raise RuntimeError("boom")

    assert db.tables["positions"] == {1: "kept"}
    assert db.tables["auth_users"] == {}


def test_nested_transaction_rolls_back_with_outer():
    db = InMemoryDatabase()

    with pytest.raises(RuntimeError):
        with db.transaction():
            with db.transaction():
                db.tables["employees"]["e1"] = "row"
            assert db.tables["employees"] == {"e1": "row"}
            raise RuntimeError("boom")

    assert db.tables["employees"] == {}


def test_commit_keeps_changes_and_sequences_advance():
    db = InMemoryDatabase()

    with db.transaction():
        db.tables["attendance"][db.next_id("attendance")] = "a"

    with pytest.raises(RuntimeError):
        with db.transaction():
            db.next_id("attendance")
            raise RuntimeError("boom")

    assert db.tables["attendance"] == {1: "a"}
    assert db.next_id("attendance") == 3


def test_other_threads_only_see_committed_rows():
    db = InMemoryDatabase()
    seen = []

    def _read():
        seen.append(dict(db.tables["auth_users"]))

    with db.transaction():
        db.tables["auth_users"]["EMP001"] = "row"
        reader = threading.Thread(target=_read)
        reader.start()
        reader.join()

    _read()
    assert seen == [{}, {"EMP001": "row"}]


def test_rollback_does_not_disturb_committed_tables_held_by_readers():
    db = InMemoryDatabase()
    with db.transaction():
        db.tables["auth_users"]["EMP001"] = "row"
    held = db.tables["auth_users"]

    with pytest.raises(RuntimeError):
        with db.transaction():
            db.tables["auth_users"].clear()
            raise RuntimeError("boom")

    assert held == {"EMP001": "row"}
    assert db.tables["auth_users"] is held
