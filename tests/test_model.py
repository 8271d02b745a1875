import math

import pytest

from tsp import Branch, InvalidInput, Point, PointSet, ProgressTracker, Tour


def test_pointset_sorts_by_id():
    points = PointSet([{'x': 1, 'y': 1, 'id': 1}, {'x': 0, 'y': 0, 'id': 0}])
    assert [p.id for p in points] == [0, 1]
    assert points[1] == Point(1.0, 1.0, 1)


@pytest.mark.parametrize("raw", [
    [],
    [{'x': 0, 'y': 0, 'id': 0}],
])
def test_fewer_than_two_points_rejected(raw):
    with pytest.raises(InvalidInput):
        PointSet(raw)


def test_non_contiguous_ids_rejected():
    with pytest.raises(InvalidInput):
        PointSet([Point(0, 0, 0), Point(1, 1, 2)])


def test_non_finite_coordinates_rejected():
    with pytest.raises(InvalidInput):
        PointSet([Point(0, 0, 0), Point(math.nan, 1, 1)])


def test_malformed_point_rejected():
    with pytest.raises(InvalidInput):
        PointSet([{'x': 0, 'id': 0}, {'x': 1, 'y': 1, 'id': 1}])


def test_from_dict_requires_points_key():
    with pytest.raises(InvalidInput):
        PointSet.from_dict({'pontos': []})


def test_coordinates_array_shape():
    points = PointSet([Point(0, 0, 0), Point(3, 4, 1), Point(1, 2, 2)])
    coords = points.coordinates()
    assert coords.shape == (3, 2)
    assert coords[1].tolist() == [3.0, 4.0]


def test_tour_copy_is_independent():
    tour = Tour([0, 1, 2], 3.0)
    other = tour.copy()
    other.route.reverse()
    assert tour.route == [0, 1, 2]
    assert tour.to_dict() == {'route': [0, 1, 2], 'distance': 3.0}


def test_branch_priority():
    assert Branch([0, 1], 2.5, 1.5).priority == 4.0


def test_tracker_keeps_best_and_gap():
    tracker = ProgressTracker()
    tracker.update(12.0, "greedy")
    tracker.update(10.0, "2-opt")
    tracker.update(11.0, "restart 1")

    assert tracker.best_length == 10.0
    assert [entry['best'] for entry in tracker.history] == [12.0, 10.0, 10.0]

    gaps = tracker.get_gap_history(10.0)
    assert gaps[0]['gap'] == pytest.approx(20.0)
    assert gaps[-1]['gap'] == 0.1


def test_tracker_summarises_best_length_per_stage():
    tracker = ProgressTracker()
    tracker.update(12.0, "greedy")
    tracker.update(11.0, "restart 1")
    tracker.update(10.5, "restart 1")
    tracker.update(10.8, "restart 1")

    summary = tracker.stage_summary()

    assert list(summary) == ["greedy", "restart 1"]
    assert summary["restart 1"]['length'] == 10.5
    assert all(info['elapsed'] >= 0 for info in summary.values())
