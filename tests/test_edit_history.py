import pytest

from ecumapkit.edit_history import Edit, EditHistory


def test_identical_values_are_ignored():
    history = EditHistory()
    history.push_edit(4, 7, 7)
    assert history.undo_count == 0
    assert not history.can_undo


def test_undo_returns_pushed_edit():
    history = EditHistory()
    history.push_edit(4, 1, 2)
    assert history.can_undo
    assert history.undo() == Edit(4, 1, 2)
    assert history.undo_count == 0
    assert history.redo_count == 1


def test_redo_returns_reversed_edit_and_restores_undo():
    history = EditHistory()
    history.push_edit(4, 1, 2)
    history.undo()
    assert history.can_redo
    assert history.redo() == Edit(4, 2, 1)
    assert history.undo_count == 1
    assert history.redo_count == 0
    assert history.undo() == Edit(4, 1, 2)


def test_undo_order_is_last_in_first_out():
    history = EditHistory()
    history.push_edit(0, 1, 2)
    history.push_edit(1, 3, 4)
    assert history.undo().offset == 1
    assert history.undo().offset == 0


def test_new_edit_clears_redo():
    history = EditHistory()
    history.push_edit(0, 1, 2)
    history.undo()
    history.push_edit(1, 5, 6)
    assert history.redo_count == 0
    assert not history.can_redo


def test_empty_stacks_raise():
    history = EditHistory()
    with pytest.raises(IndexError):
        history.undo()
    with pytest.raises(IndexError):
        history.redo()


def test_clear_and_clear_redo():
    history = EditHistory()
    history.push_edit(0, 1, 2)
    history.push_edit(1, 1, 2)
    history.undo()
    history.clear_redo()
    assert history.redo_count == 0
    assert history.undo_count == 1
    history.clear()
    assert history.undo_count == 0