import numpy as np

from life_bench import make_soup, run_benchmark, time_components


def test_make_soup_is_seeded():
    a = make_soup(12, 9, 0.3, seed=5)
    b = make_soup(12, 9, 0.3, seed=5)
    assert np.array_equal(a.grid(), b.grid())
    assert a.shape == (12, 9)


def test_make_soup_density_extremes():
    assert make_soup(4, 4, 0.0, seed=1).total_alive_cells == 0
    assert make_soup(4, 4, 1.0, seed=1).total_alive_cells == 16


def test_time_components_advances_one_generation():
    engine = make_soup(10, 10, 0.3, seed=2)
    timings = time_components(engine)
    assert set(timings) == {"next_generation", "num_communities", "render_text"}
    assert all(t >= 0 for t in timings.values())
    assert engine.generation == 1


def test_line_timing_run(capsys):
    timings = run_benchmark(n_steps=3, rows=16, cols=16, seed=1, line_timing=True)
    assert set(timings) == {"next_generation", "num_communities", "render_text", "total"}
    assert all(len(v) == 3 for v in timings.values())
    out = capsys.readouterr().out
    assert "Grid: 16x16" in out
    assert "Per-Step Component Breakdown" in out
