"""Tests for deterministic task ordering."""

from tdreport.engine.catalog import projects_by_id
from tdreport.engine.ranking import UNKNOWN_PROJECT_ORDER, sort_tasks, task_sort_key
from tdreport.models.project import Project


def _ids(tasks):
    return [task.id for task in tasks]


class TestSortKeys:
    """Keys apply in order: project order, urgency, due date, task order."""

    def test_urgent_first(self, make_task):
        tasks = [make_task(id="normal", priority=1), make_task(id="urgent", priority=4)]
        assert _ids(sort_tasks(tasks)) == ["urgent", "normal"]

    def test_earlier_due_first(self, make_task):
        tasks = [
            make_task(id="late", due={"date": "2024-07-01"}),
            make_task(id="early", due={"date": "2024-06-01"}),
        ]
        assert _ids(sort_tasks(tasks)) == ["early", "late"]

    def test_missing_due_sorts_last(self, make_task):
        tasks = [
            make_task(id="undated", due=None),
            make_task(id="far", due={"date": "9998-12-31"}),
            make_task(id="text-only", due={"string": "someday"}),
            make_task(id="soon", due={"date": "2024-01-01"}),
        ]
        assert _ids(sort_tasks(tasks)) == ["soon", "far", "undated", "text-only"]

    def test_priority_beats_due_date(self, make_task):
        tasks = [
            make_task(id="dated-normal", priority=1, due={"date": "2020-01-01"}),
            make_task(id="undated-urgent", priority=4),
        ]
        assert _ids(sort_tasks(tasks)) == ["undated-urgent", "dated-normal"]

    def test_task_order_breaks_ties(self, make_task):
        tasks = [make_task(id="second", order=2), make_task(id="first", order=1)]
        assert _ids(sort_tasks(tasks)) == ["first", "second"]

    def test_project_order_first_when_grouping(self, make_task):
        projects = projects_by_id([
            Project(id="1", name="Work", order=0),
            Project(id="2", name="Home", order=1),
        ])
        tasks = [
            make_task(id="home-urgent", project_id="2", priority=4),
            make_task(id="work-normal", project_id="1", priority=1),
        ]
        assert _ids(sort_tasks(tasks, projects)) == ["work-normal", "home-urgent"]
        assert _ids(sort_tasks(tasks)) == ["home-urgent", "work-normal"]

    def test_unknown_project_sorts_last(self, make_task):
        projects = projects_by_id([Project(id="1", name="Work", order=5)])
        tasks = [make_task(id="lost", project_id="404", priority=4), make_task(id="known", project_id="1")]
        assert _ids(sort_tasks(tasks, projects)) == ["known", "lost"]
        assert task_sort_key(tasks[0], projects)[0] == UNKNOWN_PROJECT_ORDER

    def test_key_shape(self, make_task):
        task = make_task(priority=3, order=7, due={"date": "2024-06-01"})
        assert task_sort_key(task) == (-3, "2024-06-01", 7)
        assert task_sort_key(task, {}) == (UNKNOWN_PROJECT_ORDER, -3, "2024-06-01", 7)


class TestSortProperties:
    def test_sort_is_idempotent(self, make_task):
        tasks = [
            make_task(id=str(n), priority=(n * 7) % 4 + 1, order=(n * 5) % 3,
                      due={"date": f"2024-0{(n % 3) + 1}-01"} if n % 2 else None)
            for n in range(12)
        ]
        once = sort_tasks(tasks)
        assert sort_tasks(once) == once

    def test_equal_keys_keep_input_order(self, make_task):
        tasks = [make_task(id=name) for name in ("c", "a", "b")]
        assert _ids(sort_tasks(tasks)) == ["c", "a", "b"]

    def test_input_is_not_modified(self, make_task):
        tasks = [make_task(id="b", priority=1), make_task(id="a", priority=4)]
        sort_tasks(tasks)
        assert _ids(tasks) == ["b", "a"]
