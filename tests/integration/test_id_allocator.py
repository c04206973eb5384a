"""
Integration tests for paste ID allocation.

Verifies that allocation is strictly increasing and that concurrent callers
never receive the same ID.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from pasteq.infrastructure.database import db_transaction, init_database
from pasteq.infrastructure.id_allocator import IdentifierAllocator
from pasteq.pastes.errors import StorageUnavailableError


def test_first_id_on_fresh_database_is_one(db_path):
    allocator = IdentifierAllocator()

    assert allocator.peek() == 0
    assert allocator.allocate_next() == 1
    assert allocator.peek() == 1


def test_sequential_allocations_strictly_increase(db_path):
    allocator = IdentifierAllocator()

    ids = [allocator.allocate_next() for _ in range(10)]

    assert ids == list(range(1, 11))


def test_counter_survives_reinitialization(db_path):
    allocator = IdentifierAllocator()
    for _ in range(3):
        allocator.allocate_next()

    init_database()

    assert allocator.allocate_next() == 4


def test_concurrent_allocations_are_unique_and_contiguous(db_path):
    allocator = IdentifierAllocator()
    start = allocator.peek()

    with ThreadPoolExecutor(max_workers=8) as executor:
        ids = list(executor.map(lambda _: allocator.allocate_next(), range(50)))

    assert len(set(ids)) == 50
    assert set(ids) == set(range(start + 1, start + 51))


def test_separate_allocators_share_the_durable_counter(db_path):
    first = IdentifierAllocator()
    second = IdentifierAllocator()

    with ThreadPoolExecutor(max_workers=4) as executor:
        futures = [executor.submit(a.allocate_next) for a in (first, second) * 10]
        ids = [f.result() for f in futures]

    assert sorted(ids) == list(range(1, 21))


def test_missing_counter_raises_storage_unavailable(db_path):
    with pytest.raises(StorageUnavailableError):
        IdentifierAllocator("no_such_counter").allocate_next()


def test_failed_transaction_hands_out_nothing(db_path):
    allocator = IdentifierAllocator()
    allocator.allocate_next()

    with pytest.raises(RuntimeError), db_transaction() as conn:
        conn.execute("UPDATE counters SET value = value + 1 WHERE name = 'paste_id'")
        raise RuntimeError("abandoned")

    assert allocator.allocate_next() == 2


def test_allocators_share_one_process_lock():
    assert IdentifierAllocator()._lock is IdentifierAllocator("other_counter")._lock
