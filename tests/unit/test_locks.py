"""Unit tests for the readers/writer lock."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import threading
import time

import pytest

from html2md.utils import ReadWriteLock


@pytest.mark.unit
class TestReadWriteLock:
    """Test shared and exclusive locking."""

    def test_readers_share_the_lock(self):
        """Test that several readers hold the lock at once."""
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=5)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert not any(thread.is_alive() for thread in threads)

    def test_writer_excludes_readers(self):
        """Test that readers wait for an active writer."""
        lock = ReadWriteLock()
        events = []

        lock.acquire_write()

        def reader():
            with lock.read():
                events.append("read")

        thread = threading.Thread(target=reader)
        thread.start()
        time.sleep(0.05)
        events.append("write done")
        lock.release_write()
        thread.join(timeout=5)

        assert events == ["write done", "read"]

    def test_waiting_writer_blocks_new_readers(self):
        """Test writer preference."""
        lock = ReadWriteLock()
        events = []

        lock.acquire_read()

        def writer():
            with lock.write():
                events.append("write")

        def late_reader():
            with lock.read():
                events.append("read")

        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        time.sleep(0.05)
        reader_thread = threading.Thread(target=late_reader)
        reader_thread.start()
        time.sleep(0.05)

        assert events == []
        lock.release_read()
        writer_thread.join(timeout=5)
        reader_thread.join(timeout=5)

        assert events == ["write", "read"]

    def test_counter_consistency(self):
        """Test mutual exclusion of writers under contention."""
        lock = ReadWriteLock()
        counter = {"value": 0}

        def increment():
            for _ in range(200):
                with lock.write():
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=increment) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert counter["value"] == 1600

    def test_unbalanced_release(self):
        """Test that releasing an unheld lock is an error."""
        lock = ReadWriteLock()

        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()
