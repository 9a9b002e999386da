"""Unit tests for per-resource-key locks."""

import threading

import pytest

from coursehub.scheduling import KeyedLocks
from coursehub.scheduling.locks import course_key, lecturer_key, room_key, student_key


@pytest.mark.unit
class TestKeyedLocks:
    """Tests for KeyedLocks."""

    def test_key_helpers(self) -> None:
        assert room_key("r") == ("room", "r")
        assert lecturer_key("l") == ("lecturer", "l")
        assert course_key("c") == ("course", "c")
        assert student_key("s") == ("student", "s")

    def test_one_lock_per_key(self) -> None:
        locks = KeyedLocks()

        with locks.hold(room_key("a"), room_key("a"), course_key("c")):
            pass
        with locks.hold(room_key("a")):
            pass

        assert len(locks) == 2

    def test_lock_released_between_blocks(self) -> None:
        locks = KeyedLocks()

        with locks.hold(room_key("a")):
            pass
        with locks.hold(room_key("a")):
            pass

    def test_released_after_exception(self) -> None:
        locks = KeyedLocks()

        with pytest.raises(RuntimeError), locks.hold(room_key("a")):
            raise RuntimeError("boom")

        acquired = threading.Event()

        def worker() -> None:
            with locks.hold(room_key("a")):
                acquired.set()

        t = threading.Thread(target=worker)
        t.start()
        t.join(timeout=2)
        assert acquired.is_set()

    def test_same_key_blocks_other_thread(self) -> None:
        locks = KeyedLocks()
        entered = threading.Event()

        def worker() -> None:
            with locks.hold(course_key("c")):
                entered.set()

        with locks.hold(course_key("c"), room_key("r")):
            t = threading.Thread(target=worker)
            t.start()
            assert not entered.wait(timeout=0.2)

        t.join(timeout=2)
        assert entered.is_set()

    def test_disjoint_keys_do_not_block(self) -> None:
        locks = KeyedLocks()
        entered = threading.Event()

        def worker() -> None:
            with locks.hold(room_key("other")):
                entered.set()

        with locks.hold(room_key("r")):
            t = threading.Thread(target=worker)
            t.start()
            assert entered.wait(timeout=2)

        t.join(timeout=2)

    def test_opposite_order_does_not_deadlock(self) -> None:
        locks = KeyedLocks()
        done = []

        def forward() -> None:
            for _ in range(200):
                with locks.hold(room_key("r"), lecturer_key("l")):
                    pass
            done.append("forward")

        def backward() -> None:
            for _ in range(200):
                with locks.hold(lecturer_key("l"), room_key("r")):
                    pass
            done.append("backward")

        threads = [threading.Thread(target=forward), threading.Thread(target=backward)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert sorted(done) == ["backward", "forward"]
