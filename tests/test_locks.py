from __future__ import annotations

import threading
import time

from multifs import MemoryBackend, MultiFS
from multifs.locks import RWLock


def test_shared_holders_do_not_block_each_other() -> None:
    lock = RWLock()
    inside = threading.Barrier(3, timeout=5)

    def reader() -> None:
        with lock.shared():
            # all three readers must be inside at the same time to pass
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not any(t.is_alive() for t in threads)


def test_exclusive_waits_for_readers() -> None:
    lock = RWLock()
    order: list[str] = []
    reader_in = threading.Event()
    release_reader = threading.Event()

    def reader() -> None:
        with lock.shared():
            reader_in.set()
            release_reader.wait(timeout=5)
            order.append("reader-done")

    def writer() -> None:
        with lock.exclusive():
            order.append("writer")

    r = threading.Thread(target=reader)
    r.start()
    assert reader_in.wait(timeout=5)
    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.05)
    assert order == []
    release_reader.set()
    r.join(timeout=5)
    w.join(timeout=5)
    assert order == ["reader-done", "writer"]


def test_waiting_writer_blocks_new_readers() -> None:
    lock = RWLock()
    order: list[str] = []
    first_in = threading.Event()
    release_first = threading.Event()

    def first_reader() -> None:
        with lock.shared():
            first_in.set()
            release_first.wait(timeout=5)
            order.append("first-reader")

    def writer() -> None:
        with lock.exclusive():
            order.append("writer")

    def second_reader() -> None:
        with lock.shared():
            order.append("second-reader")

    r1 = threading.Thread(target=first_reader)
    r1.start()
    assert first_in.wait(timeout=5)

    w = threading.Thread(target=writer)
    w.start()
    deadline = time.monotonic() + 5
    while lock._writers_waiting == 0 and time.monotonic() < deadline:
        time.sleep(0.005)
    assert lock._writers_waiting == 1

    r2 = threading.Thread(target=second_reader)
    r2.start()
    time.sleep(0.05)
    # the queued writer keeps the second reader out even though only readers hold the lock
    assert order == []

    release_first.set()
    for t in (r1, w, r2):
        t.join(timeout=5)
    assert order == ["first-reader", "writer", "second-reader"]


class _BlockingBackend:
    def __init__(self) -> None:
        self.entered = threading.Event()
        self.release = threading.Event()

    def open(self, rel_path: str) -> str:
        self.entered.set()
        self.release.wait(timeout=5)
        return rel_path


def test_mount_waits_for_in_flight_backend_call() -> None:
    backend = _BlockingBackend()
    fs = MultiFS()
    fs.mount("/slow", backend)

    opened: list[str] = []
    mounted = threading.Event()

    t_open = threading.Thread(target=lambda: opened.append(fs.open("/slow/f")))
    t_open.start()
    assert backend.entered.wait(timeout=5)

    def do_mount() -> None:
        fs.mount("/other", MemoryBackend())
        mounted.set()

    t_mount = threading.Thread(target=do_mount)
    t_mount.start()
    # the lock is held across the backend call, so mount cannot finish yet
    assert not mounted.wait(timeout=0.1)

    backend.release.set()
    t_open.join(timeout=5)
    t_mount.join(timeout=5)
    assert opened == ["f"]
    assert mounted.is_set()
    assert sorted(fs.mounts()) == ["/other", "/slow"]


def test_concurrent_mounts_and_lookups_stay_consistent() -> None:
    fs = MultiFS()
    fs.mount("/base", MemoryBackend({"f.txt": "x"}))
    errors: list[BaseException] = []

    def churn(i: int) -> None:
        try:
            for n in range(50):
                prefix = f"/t{i}/{n}"
                fs.mount(prefix, MemoryBackend())
                fs.unmount(prefix)
        except BaseException as e:  # noqa: BLE001
            errors.append(e)

    def look() -> None:
        try:
            for _ in range(200):
                assert fs.read("/base/f.txt") == b"x"
                assert "base" in {e.name for e in fs.list_dir("/")}
        except BaseException as e:  # noqa: BLE001
            errors.append(e)

    threads = [threading.Thread(target=churn, args=(i,)) for i in range(4)]
    threads += [threading.Thread(target=look) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    assert errors == []
    assert fs.mounts() == ["/base"]
