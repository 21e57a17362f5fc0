import threading

import pytest

from sitecrawl.domain.outstanding_tasks import OutstandingTasks


def test_done_reports_reaching_zero_once():
    tasks = OutstandingTasks()
    tasks.add()
    tasks.add()
    assert tasks.done() is False
    assert tasks.done() is True
    assert tasks.completed
    assert tasks.count == 0


def test_add_after_completion_is_rejected():
    tasks = OutstandingTasks()
    tasks.add()
    tasks.done()
    with pytest.raises(RuntimeError):
        tasks.add()


def test_done_without_add_is_rejected():
    with pytest.raises(RuntimeError):
        OutstandingTasks().done()


def test_wait_times_out_while_tasks_outstanding():
    tasks = OutstandingTasks()
    tasks.add()
    assert tasks.wait(timeout=0.01) is False


def test_wait_wakes_when_last_task_finishes():
    tasks = OutstandingTasks()
    tasks.add(3)

    def finish():
        for _ in range(3):
            tasks.done()

    t = threading.Thread(target=finish)
    t.start()
    assert tasks.wait(timeout=5)
    t.join()
