import pytest

from vimcanvas.profiler import FRAMETIMES_COUNT, FrameStats, fps_label


def test_fps_label_values():
    assert fps_label(0.5) == "2FPS"
    assert fps_label(0.25) == "4FPS"


def test_fps_label_clamps_zero_time():
    assert fps_label(0.0) == "8388608FPS"


def test_record_keeps_latest_frames():
    stats = FrameStats()
    for i in range(60):
        stats.record(i / 1000.0)
    assert len(stats.frametimes) == FRAMETIMES_COUNT
    assert list(stats.frametimes) == pytest.approx([float(i) for i in range(60 - FRAMETIMES_COUNT, 60)])


def test_summary_of_empty_raises():
    with pytest.raises(ValueError):
        FrameStats().summary()


def test_summary_single_frame():
    stats = FrameStats()
    stats.record(0.016)
    summary = stats.summary()
    assert summary.min_ms == summary.max_ms == pytest.approx(summary.avg_ms)
    assert summary.min_ms == pytest.approx(stats.frametimes[0])


def test_summary_bounds():
    stats = FrameStats()
    for dt in (0.02, 0.01, 0.05, 0.03):
        stats.record(dt)
    summary = stats.summary()
    assert summary.min_ms <= summary.avg_ms <= summary.max_ms
    assert summary.min_ms == min(stats.frametimes)
    assert summary.max_ms == max(stats.frametimes)


def test_graph_points_of_empty_stats():
    assert FrameStats().graph_points(0.0, 100.0, 100.0, 80.0) == []


def test_graph_points_shape():
    stats = FrameStats()
    dts = [0.02, 0.01, 0.05, 0.03]
    for dt in dts:
        stats.record(dt)
    left, right, bottom, height = 32.0, 232.0, 144.0, 80.0
    points = stats.graph_points(left, right, bottom, height)

    assert len(points) == len(dts)
    assert points[0].x == left
    xs = [point.x for point in points]
    assert xs == sorted(xs)
    assert all(x < right for x in xs)
    assert all(bottom - height <= point.y <= bottom for point in points)
    slowest = dts.index(max(dts))
    fastest = dts.index(min(dts))
    assert points[slowest].y == min(point.y for point in points)
    assert points[fastest].y == max(point.y for point in points)


def test_graph_points_constant_frames_are_level():
    stats = FrameStats()
    for _ in range(5):
        stats.record(0.016)
    points = stats.graph_points(0.0, 100.0, 100.0, 80.0)
    assert len({point.y for point in points}) == 1
    assert 20.0 < points[0].y < 100.0