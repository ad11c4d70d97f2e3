"""
Unit tests for the in-memory TaskStore.

Covers ordering, 1-based addressing, all-or-nothing batch operations,
the stable todo/done partition used by sort, and read-only views.
"""

import copy

import pytest

from todoln.core.tasks.errors import IndexOutOfRangeError, InvalidInputError
from todoln.core.tasks.models import Task, TaskFilter
from todoln.core.tasks.store import TaskStore


def descriptions(tasks):
    return [t.description for t in tasks]


# ==============================================================================
# Add / Insert / Modify
# ==============================================================================


class TestAdd:
    """Test appending tasks."""

    def test_add_appends_in_order(self):
        store = TaskStore()
        store.add("one")
        store.add("two", "three")
        assert descriptions(store) == ["one", "two", "three"]

    def test_add_returns_new_tasks(self):
        store = TaskStore()
        added = store.add("one", "two")
        assert descriptions(added) == ["one", "two"]
        assert all(not t.done for t in added)

    def test_add_trims(self):
        store = TaskStore()
        store.add("  spaced out  ")
        assert store.get(1).description == "spaced out"

    def test_add_blank_rejects_whole_batch(self, sample_store):
        before = copy.deepcopy(sample_store)
        with pytest.raises(InvalidInputError):
            sample_store.add("fine", "   ")
        assert sample_store == before

    def test_add_nothing(self):
        with pytest.raises(InvalidInputError):
            TaskStore().add()


class TestInsert:
    """Test inserting tasks at a position."""

    def test_insert_at_top(self, sample_store):
        sample_store.insert(1, "first")
        assert sample_store.get(1).description == "first"
        assert sample_store.get(2).description == "buy milk"
        assert len(sample_store) == 6

    def test_insert_in_middle_shifts_down(self, sample_store):
        sample_store.insert(3, "new a", "new b")
        assert descriptions(sample_store) == [
            "buy milk",
            "walk dog",
            "new a",
            "new b",
            "call mom",
            "pay rent",
            "water plants",
        ]

    def test_insert_one_past_end_appends(self, sample_store):
        sample_store.insert(6, "last")
        assert sample_store.get(6).description == "last"

    def test_insert_into_empty_store(self):
        store = TaskStore()
        store.insert(1, "only")
        assert descriptions(store) == ["only"]

    @pytest.mark.parametrize("index", [0, -1, 7])
    def test_insert_out_of_range(self, sample_store, index):
        before = copy.deepcopy(sample_store)
        with pytest.raises(IndexOutOfRangeError):
            sample_store.insert(index, "nope")
        assert sample_store == before

    def test_insert_blank(self, sample_store):
        before = copy.deepcopy(sample_store)
        with pytest.raises(InvalidInputError):
            sample_store.insert(1, "")
        assert sample_store == before


class TestModify:
    """Test changing a description."""

    def test_modify_keeps_position_and_done(self, sample_store):
        task = sample_store.modify(2, "walk cat")
        assert task.description == "walk cat"
        assert task.done is True
        assert sample_store.get(2) is task
        assert len(sample_store) == 5

    def test_modify_out_of_range(self, sample_store):
        with pytest.raises(IndexOutOfRangeError, match="valid range is 1-5"):
            sample_store.modify(6, "x")

    def test_modify_blank(self, sample_store):
        with pytest.raises(InvalidInputError):
            sample_store.modify(1, "  ")
        assert sample_store.get(1).description == "buy milk"


# ==============================================================================
# Mark done / Remove
# ==============================================================================


class TestMarkDone:
    """Test marking tasks done."""

    def test_single(self, sample_store):
        sample_store.mark_done(1)
        assert sample_store.get(1).done is True

    def test_spec_and_range(self, sample_store):
        marked = sample_store.mark_done(["1,3", "5-5"])
        assert descriptions(marked) == ["buy milk", "call mom", "water plants"]
        assert all(t.done for t in sample_store)

    def test_already_done_stays_done(self, sample_store):
        sample_store.mark_done(2)
        assert sample_store.get(2).done is True

    @pytest.mark.parametrize("selection", [0, 6, "1,6", "4-9", ["1", "3", "10"]])
    def test_out_of_range_changes_nothing(self, sample_store, selection):
        before = copy.deepcopy(sample_store)
        with pytest.raises(IndexOutOfRangeError):
            sample_store.mark_done(selection)
        assert sample_store == before

    def test_malformed_changes_nothing(self, sample_store):
        before = copy.deepcopy(sample_store)
        with pytest.raises(InvalidInputError):
            sample_store.mark_done(["1", "two"])
        assert sample_store == before


class TestRemove:
    """Test removing tasks."""

    def test_remove_single(self, sample_store):
        removed = sample_store.remove(1)
        assert descriptions(removed) == ["buy milk"]
        assert len(sample_store) == 4

    def test_remove_uses_original_positions(self, sample_store):
        removed = sample_store.remove("2,4")
        assert descriptions(removed) == ["walk dog", "pay rent"]
        assert descriptions(sample_store) == ["buy milk", "call mom", "water plants"]

    def test_remove_order_of_indices_does_not_matter(self, sample_tasks):
        a = TaskStore(copy.deepcopy(sample_tasks))
        b = TaskStore(copy.deepcopy(sample_tasks))
        a.remove("2,4")
        b.remove(["4", "2"])
        assert a == b

    def test_remove_range(self, sample_store):
        sample_store.remove("2-4")
        assert descriptions(sample_store) == ["buy milk", "water plants"]

    def test_remove_duplicates_once(self, sample_store):
        sample_store.remove(["3", "3", "3-3"])
        assert len(sample_store) == 4

    @pytest.mark.parametrize("selection", [0, 6, "2,6", ["1", "99"]])
    def test_out_of_range_changes_nothing(self, sample_store, selection):
        before = copy.deepcopy(sample_store)
        with pytest.raises(IndexOutOfRangeError):
            sample_store.remove(selection)
        assert sample_store == before

    def test_remove_from_empty(self):
        with pytest.raises(IndexOutOfRangeError, match="task list is empty"):
            TaskStore().remove(1)


# ==============================================================================
# Sort / Clear / Reset
# ==============================================================================


class TestSort:
    """Test the stable todo-before-done partition."""

    def test_sort_partitions_stably(self, sample_store):
        sample_store.sort()
        assert descriptions(sample_store) == [
            "buy milk",
            "call mom",
            "water plants",
            "walk dog",
            "pay rent",
        ]

    def test_sort_is_idempotent(self, sample_store):
        sample_store.sort()
        once = copy.deepcopy(sample_store)
        sample_store.sort()
        assert sample_store == once

    def test_sort_is_not_alphabetical(self):
        store = TaskStore([Task(description="zebra"), Task(description="apple")])
        store.sort()
        assert descriptions(store) == ["zebra", "apple"]


class TestClearAndReset:
    """Test clear and reset."""

    def test_clear_removes_done_only(self, sample_store):
        cleared = sample_store.clear()
        assert descriptions(cleared) == ["walk dog", "pay rent"]
        assert descriptions(sample_store) == ["buy milk", "call mom", "water plants"]

    def test_clear_with_nothing_done(self):
        store = TaskStore([Task(description="a")])
        assert store.clear() == []
        assert len(store) == 1

    def test_reset(self, sample_store):
        assert sample_store.reset() == 5
        assert len(sample_store) == 0

    def test_reset_empty(self):
        assert TaskStore().reset() == 0


# ==============================================================================
# Views and search
# ==============================================================================


class TestViews:
    """Test list/raw views and find."""

    def test_list_yields_store_positions(self, sample_store):
        view = sample_store.list(TaskFilter.TODO)
        assert [(i, t.description) for i, t in view] == [
            (1, "buy milk"),
            (3, "call mom"),
            (5, "water plants"),
        ]

    def test_list_done_filter_from_string(self, sample_store):
        assert [i for i, _ in sample_store.list("done")] == [2, 4]

    def test_view_is_restartable(self, sample_store):
        view = sample_store.list()
        assert list(view) == list(view)
        assert len(view) == 5

    def test_view_does_not_mutate(self, sample_store):
        before = copy.deepcopy(sample_store)
        list(sample_store.list("todo"))
        list(sample_store.raw("done"))
        assert sample_store == before

    def test_raw_yields_tasks(self, sample_store):
        assert descriptions(sample_store.raw()) == descriptions(sample_store)

    def test_empty_view_is_falsy(self):
        assert not TaskStore().list()
        assert not TaskStore([Task(description="a")]).list("done")

    def test_invalid_filter(self, sample_store):
        with pytest.raises(InvalidInputError):
            sample_store.list("later")

    def test_find_case_insensitive_in_order(self):
        store = TaskStore(
            [
                Task(description="Buy milk"),
                Task(description="walk dog"),
                Task(description="milkshake", done=True),
            ]
        )
        found = store.find("MILK")
        assert [(i, t.description) for i, t in found] == [(1, "Buy milk"), (3, "milkshake")]

    def test_find_no_match(self, sample_store):
        assert sample_store.find("xyz") == []

    def test_find_empty_term_matches_all(self, sample_store):
        assert [i for i, _ in sample_store.find("")] == [1, 2, 3, 4, 5]

    def test_find_whitespace_is_a_literal_substring(self):
        store = TaskStore()
        store.add("call mom", "tidy")
        assert [i for i, _ in store.find(" ")] == [1]


class TestScenario:
    """The add → sort → clear walkthrough."""

    def test_add_sort_clear(self):
        store = TaskStore(
            [Task(description="buy milk"), Task(description="walk dog", done=True)]
        )

        store.add("call mom")
        assert descriptions(store) == ["buy milk", "walk dog", "call mom"]

        store.sort()
        assert descriptions(store) == ["buy milk", "call mom", "walk dog"]
        assert store.get(3).done is True

        store.clear()
        assert descriptions(store) == ["buy milk", "call mom"]

    def test_insertion_order_fidelity(self):
        store = TaskStore()
        store.add("b")
        store.insert(1, "a")
        store.add("d")
        store.insert(3, "c")
        assert descriptions(store.raw()) == ["a", "b", "c", "d"]
