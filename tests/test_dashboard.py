from datetime import date, timedelta

from task_api.services.dashboard import summarize

from conftest import local_at, make_task


TODAY = date.today()
NOW = local_at(TODAY, 12)


def test_summary_counts():
    tasks = [
        make_task("pending", deadline=local_at(TODAY, 15)),
        make_task("in-progress", deadline=local_at(TODAY - timedelta(days=1))),
        make_task("completed", deadline=local_at(TODAY, 9)),
    ]

    summary = summarize(tasks, NOW)

    assert summary.active_count == 2
    assert summary.completed_count == 1
    assert summary.overdue_count == 1
    assert summary.overdue_tasks == [tasks[1]]
    assert len(summary.today_tasks) == 2
    assert summary.progress_chart == {"pending": 1, "in-progress": 0, "completed": 1}


def test_completed_past_deadline_is_not_overdue():
    summary = summarize([make_task("completed", deadline=local_at(TODAY - timedelta(days=3)))], NOW)
    assert summary.overdue_count == 0
    assert summary.completed_count == 1


def test_earlier_today_is_not_overdue():
    # Overdue means before the start of today, not before now
    summary = summarize([make_task("pending", deadline=local_at(TODAY, 0))], NOW)
    assert summary.overdue_count == 0
    assert len(summary.today_tasks) == 1


def test_tasks_without_deadline_only_count_towards_status():
    summary = summarize([make_task("pending"), make_task("completed")], NOW)
    assert (summary.active_count, summary.completed_count) == (1, 1)
    assert summary.today_tasks == []
    assert summary.progress_chart == {"pending": 0, "in-progress": 0, "completed": 0}


def test_tomorrow_is_neither_today_nor_overdue():
    summary = summarize([make_task("pending", deadline=local_at(TODAY + timedelta(days=1), 0))], NOW)
    assert summary.today_tasks == []
    assert summary.overdue_count == 0


def test_summarize_is_deterministic():
    tasks = [
        make_task("pending", deadline=local_at(TODAY)),
        make_task("in-progress", deadline=local_at(TODAY - timedelta(days=2))),
    ]
    assert summarize(tasks, NOW) == summarize(tasks, NOW)


def test_empty_task_set():
    summary = summarize([], NOW)
    assert summary.active_count == summary.completed_count == summary.overdue_count == 0
    assert set(summary.progress_chart) == {"pending", "in-progress", "completed"}
