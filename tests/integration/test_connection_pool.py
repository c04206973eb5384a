"""
Integration tests for the SQLite connection pool.

Covers the overflow path taken once every pooled connection is checked out.
"""

from __future__ import annotations

import pytest

from pasteq.infrastructure.database import get_pool
from pasteq.pastes.errors import StorageUnavailableError
from pasteq.pastes.repository import PasteRepository


@pytest.fixture
def exhausted_pool(db_path):
    """The global pool with every pooled connection held by the test."""
    pool = get_pool()
    pool.pool_timeout = 0.05
    held = [pool.get_connection() for _ in range(pool.pool_size)]
    yield pool
    for conn in held:
        pool.return_connection(conn)


def test_overflow_connection_serves_call_and_releases_slot(exhausted_pool):
    assert PasteRepository().get_by_id(1) is None

    assert exhausted_pool.temp_conn_count == 0
    assert exhausted_pool._temp_conn_ids == set()


def test_overflow_slots_are_reused(exhausted_pool):
    repository = PasteRepository()

    for _ in range(exhausted_pool.temp_conn_max + 5):
        assert repository.count() == 0

    assert exhausted_pool.temp_conn_count == 0


def test_overflow_limit_surfaces_as_storage_unavailable(exhausted_pool):
    exhausted_pool.temp_conn_max = 0

    with pytest.raises(StorageUnavailableError):
        PasteRepository().get_by_id(1)


def test_pooled_connections_go_back_to_the_queue(db_path):
    pool = get_pool()
    pool.pool_timeout = 0.05
    held = [pool.get_connection() for _ in range(pool.pool_size)]
    overflow = pool.get_connection()

    pool.return_connection(overflow)
    for conn in held:
        pool.return_connection(conn)

    assert pool.pool.qsize() == pool.pool_size
    assert pool.temp_conn_count == 0
