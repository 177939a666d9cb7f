# tests/sde/test_integrators.py
import numpy as np

from quant_stochastics.sde.integrators import (
    euler_maruyama_step,
    gaussian_increments,
    rng_with_seed,
    spawn_generators,
)


def test_euler_maruyama_step():
    assert euler_maruyama_step(1.0, 2.0, 3.0, 0.1, 0.5) == 1.0 + 0.2 + 1.5
    assert euler_maruyama_step(1.0, 2.0, 3.0, 0.1, 0.5, jump=-0.7) == 1.0 + 0.2 + 1.5 - 0.7


def test_spawned_streams_reproducible_and_distinct():
    a = [g.standard_normal(4) for g in spawn_generators(7, 3)]
    b = [g.standard_normal(4) for g in spawn_generators(7, 3)]
    for x, y in zip(a, b):
        assert np.array_equal(x, y)
    assert not np.array_equal(a[0], a[1])


def test_stream_i_independent_of_path_count():
    few = spawn_generators(11, 2)
    many = spawn_generators(11, 10)
    assert np.array_equal(few[1].standard_normal(5), many[1].standard_normal(5))


def test_gaussian_increments_scale():
    inc = gaussian_increments(rng_with_seed(0), 100_000, 0.04)
    assert inc.shape == (100_000,)
    assert abs(inc.var() - 0.04) < 0.002
