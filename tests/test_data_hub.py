import threading

import pytest

from maze_nav.path_planner.errors import InvalidGeometry
from maze_nav.path_planner.map_model import GridGeometry
from maze_nav.service.data_hub import DataHub


def test_empty_hub_snapshot():
    snap = DataHub().get_snapshot()
    assert snap.geometry is None
    assert snap.obstacles_x == ()
    assert snap.obstacles_y == ()
    assert snap.version == 0


def test_snapshot_is_a_copy_of_caller_buffers():
    hub = DataHub()
    xs, ys = [1, 2], [3, 4]
    hub.set_obstacles(xs, ys)
    snap = hub.get_snapshot()
    xs.append(9)
    ys[0] = 100
    assert snap.obstacles_x == (1, 2)
    assert snap.obstacles_y == (3, 4)
    assert hub.get_snapshot().obstacles_x == (1, 2)


def test_geometry_array_and_versions():
    hub = DataHub()
    hub.set_geometry_array([10, 8, 0, 0, 7, 9])
    hub.set_obstacles_x([1.0])
    hub.set_obstacles_y([2.0])
    snap = hub.get_snapshot()
    assert snap.geometry == GridGeometry(rows=8, cols=10, start_row=0, start_col=0, goal_row=7, goal_col=9)
    assert snap.version == 3

    with pytest.raises(InvalidGeometry):
        hub.set_geometry_array([1, 2])
    assert hub.get_snapshot().version == 3

    hub.reset()
    assert hub.get_snapshot().geometry is None


def test_concurrent_updates_give_consistent_pairs():
    hub = DataHub()
    stop = threading.Event()

    def writer():
        n = 0
        while not stop.is_set():
            n = n % 50 + 1
            hub.set_obstacles(range(n), range(n))

    t = threading.Thread(target=writer)
    t.start()
    try:
        for _ in range(2000):
            snap = hub.get_snapshot()
            assert len(snap.obstacles_x) == len(snap.obstacles_y)
    finally:
        stop.set()
        t.join()
