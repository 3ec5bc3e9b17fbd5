"""Verification Test: search a live process tree.

Spawns a small real process tree under the test runner and checks that a
fresh snapshot plus the search lands on the deepest process, and that
processes dying around the capture never crash it.
"""

import multiprocessing
import os
import subprocess
import sys
import time

import psutil
import pytest

from focuscwd.search import DeepestDescendantFinder, ProcessIndex
from focuscwd.snapshot import capture_all

SPAWN_GRANDCHILD = "import subprocess; subprocess.run(['sleep', '30'])"


def dummy_worker(duration: float = 60.0) -> None:
    """A dummy worker process that sleeps for a given duration."""
    try:
        time.sleep(duration)
    except (KeyboardInterrupt, SystemExit):
        pass


def wait_for_children(pid: int, timeout: float = 5.0) -> list[psutil.Process]:
    """Poll until ``pid`` has at least one child or the timeout expires."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        children = psutil.Process(pid).children()
        if children:
            return children
        time.sleep(0.05)
    return []


class TestLiveTree:
    """Search over a snapshot of the real process table."""

    def test_finds_grandchild(self, tmp_path):
        """python -> sleep under the test runner resolves to sleep."""
        child = subprocess.Popen([sys.executable, "-c", SPAWN_GRANDCHILD], cwd=tmp_path)
        try:
            grandchildren = wait_for_children(child.pid)
            assert grandchildren, "grandchild never started"

            index = ProcessIndex.build(capture_all())
            result = DeepestDescendantFinder().find(index, child.pid)

            assert result.pid == grandchildren[0].pid
            assert result.depth == 1
            assert index.by_pid[result.pid].working_directory == str(tmp_path)
        finally:
            for proc in psutil.Process(child.pid).children(recursive=True):
                proc.kill()
            child.kill()
            child.wait()

    def test_current_process_is_in_snapshot(self):
        index = ProcessIndex.build(capture_all())

        assert os.getpid() in index.by_pid
        assert any(r.pid == os.getpid() for r in index.children(os.getppid()))


class TestChaosMonkey:
    """Capture while processes terminate."""

    @pytest.mark.parametrize("kill_every", [1, 2])
    def test_capture_survives_process_termination(self, kill_every):
        """No NoSuchProcess escapes when children die mid-capture."""
        processes = []
        for _ in range(20):
            p = multiprocessing.Process(target=dummy_worker, args=(60.0,))
            p.start()
            processes.append(p)

        try:
            for i, p in enumerate(processes):
                if i % kill_every == 0:
                    p.terminate()
                records = capture_all()
                assert len(records) > 0

            index = ProcessIndex.build(records)
            result = DeepestDescendantFinder().find(index, os.getpid())
            assert result.pid in index.by_pid
        finally:
            for p in processes:
                if p.is_alive():
                    p.terminate()
                p.join(timeout=5.0)
