import pytest

from taxiroute.editor.history import PathHistory

P1 = {"lat": -26.20, "lng": 28.05}
P2 = {"lat": -26.21, "lng": 28.06}
P3 = {"lat": -26.22, "lng": 28.07}


def _history_with(*paths):
    history = PathHistory()
    for path in paths:
        history.record(path)
    return history


def test_starts_with_initial_empty_snapshot():
    history = PathHistory()
    assert len(history) == 1
    assert history.current() == []
    assert not history.can_undo
    assert history.undo() is None


def test_identical_snapshot_is_not_recorded():
    history = _history_with([P1])
    assert history.record([dict(P1)]) is False
    assert history.record([{"lat": P1["lat"] + 1e-12, "lng": P1["lng"]}]) is False
    assert len(history) == 2


def test_undo_then_redo_walks_forward():
    history = _history_with([P1], [P1, P2], [P1, P2, P3])
    assert history.undo() == [P1, P2]
    assert history.undo() == [P1]
    assert history.redo() == [P1, P2]
    assert history.redo() == [P1, P2, P3]
    assert history.redo() is None


def test_new_edit_clears_redo():
    history = _history_with([P1], [P1, P2])
    history.undo()
    assert history.can_redo
    history.record([P1, P3])
    assert not history.can_redo


def test_undo_to_empty():
    history = _history_with([P1])
    assert history.undo() == []
    assert history.undo() is None


def test_capped_at_limit_dropping_oldest():
    history = PathHistory()
    path = []
    for i in range(150):
        path = path + [{"lat": -26.0 - i * 0.001, "lng": 28.0}]
        history.record(path)
        assert len(history) <= 100
    assert len(history) == 100
    assert len(history.current()) == 150


def test_reset():
    history = _history_with([P1], [P1, P2])
    history.undo()
    history.reset()
    assert len(history) == 1
    assert history.redo_depth == 0


def test_limit_validation():
    with pytest.raises(ValueError):
        PathHistory(limit=0)
