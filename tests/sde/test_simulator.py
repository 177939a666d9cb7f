# tests/sde/test_simulator.py
import numpy as np
import pytest

from quant_stochastics.errors import InvalidParameterError, NumericalInstabilityError
from quant_stochastics.sde.processes.base import StochasticProcess
from quant_stochastics.sde.processes.brownian import (
    BrownianMotion,
    FractionalBrownianMotion,
    GeometricBrownianMotion,
)
from quant_stochastics.sde.processes.jump_diffusion import MertonJumpDiffusion
from quant_stochastics.sde.processes.ou import (
    FractionalOrnsteinUhlenbeck,
    OrnsteinUhlenbeck,
)
from quant_stochastics.sde.schemas import SimConfig
from quant_stochastics.sde.simulators.simulator import Simulator, simulate


class CountingProcess(StochasticProcess):
    """Records how often it is evaluated."""

    def __init__(self):
        self.calls = 0

    def drift(self, x, t):
        self.calls += 1
        return 0.0

    def diffusion(self, x, t):
        self.calls += 1
        return 1.0


MODELS = [
    OrnsteinUhlenbeck(mu=1.0, sigma=0.3, theta=2.0),
    FractionalOrnsteinUhlenbeck(mu=0.15, sigma=0.45, theta=0.01, hurst=0.7),
    FractionalOrnsteinUhlenbeck(mu=0.15, sigma=0.45, theta=0.01, hurst=0.2),
    GeometricBrownianMotion(mu=0.05, sigma=0.2),
    MertonJumpDiffusion(mu=0.05, sigma=0.2, lambda_=3.0, jump_mean=-0.05, jump_std=0.1),
]


@pytest.mark.parametrize("model", MODELS)
def test_shapes_and_initial_state(model):
    out = simulate(model, x0=10.0, t0=0.0, tn=1.0, n_steps=40, n_paths=7, seed=1)
    assert out.paths.shape == (7, 41)
    assert out.times.shape == (41,)
    assert np.all(out.paths[:, 0] == 10.0)
    assert np.isfinite(out.paths).all()


def test_time_grid():
    out = simulate(BrownianMotion(), x0=0.0, t0=0.25, tn=1.75, n_steps=30, n_paths=2, seed=0)
    assert np.all(np.diff(out.times) > 0.0)
    assert out.times[0] == 0.25
    assert out.times[-1] == 1.75
    assert out.dt == pytest.approx(0.05)
    assert out.times[-1] == pytest.approx(out.times[0] + 30 * out.dt)


def test_fractional_ou_reference_scenario():
    fou = FractionalOrnsteinUhlenbeck(mu=0.15, sigma=0.45, theta=0.01, hurst=0.7)
    out = fou.simulate(10.0, 0.0, 0.5, 100, 100, parallel=False)

    assert len(out.times) == 101
    assert out.times[0] == 0.0
    assert out.times[-1] == 0.5
    assert len(out.paths) == 100
    assert all(len(path) == 101 for path in out.paths)
    assert all(path[0] == 10.0 for path in out.paths)


def test_reproducible_across_identical_constructions():
    a = FractionalOrnsteinUhlenbeck(0.15, 0.45, 0.01, 0.7).simulate(
        10.0, 0.0, 0.5, 50, 20, seed=2025
    )
    b = FractionalOrnsteinUhlenbeck(0.15, 0.45, 0.01, 0.7).simulate(
        10.0, 0.0, 0.5, 50, 20, seed=2025
    )
    assert a == b


@pytest.mark.parametrize("model", MODELS)
def test_parallel_matches_sequential_per_path(model):
    kwargs = dict(x0=1.0, t0=0.0, tn=1.0, n_steps=25, n_paths=16, seed=77)
    seq = simulate(model, parallel=False, **kwargs)
    par = simulate(model, parallel=True, max_workers=4, **kwargs)
    assert np.allclose(seq.paths, par.paths, rtol=1e-12, atol=0.0)


def test_parallel_and_sequential_statistically_equivalent():
    model = OrnsteinUhlenbeck(mu=1.0, sigma=0.3, theta=2.0)
    kwargs = dict(x0=0.0, t0=0.0, tn=1.0, n_steps=50, n_paths=2000)
    seq = simulate(model, parallel=False, seed=1, **kwargs)
    par = simulate(model, parallel=True, seed=2, **kwargs)

    assert abs(seq.terminal_values.mean() - par.terminal_values.mean()) < 0.03
    assert seq.terminal_values.var() == pytest.approx(par.terminal_values.var(), rel=0.2)


def test_ou_mean_reverts_to_long_run_level():
    model = OrnsteinUhlenbeck(mu=1.0, sigma=0.3, theta=2.0)
    out = simulate(model, x0=0.0, t0=0.0, tn=1.0, n_steps=100, n_paths=2000, seed=42)
    expected = 1.0 - (1.0 - 2.0 * 0.01) ** 100
    assert out.terminal_values.mean() == pytest.approx(expected, abs=0.02)


def test_paths_in_one_run_are_independent():
    out = simulate(
        FractionalOrnsteinUhlenbeck(0.0, 1.0, 0.0, 0.7),
        x0=0.0, t0=0.0, tn=1.0, n_steps=20, n_paths=5, seed=3,
    )
    assert len({tuple(p) for p in out.paths}) == 5


def test_shared_noise_policy_reuses_one_realisation():
    # no drift: every path is x0 + sigma * cumulative noise
    out = simulate(
        FractionalOrnsteinUhlenbeck(0.0, 1.0, 0.0, 0.7),
        x0=0.0, t0=0.0, tn=1.0, n_steps=20, n_paths=5, seed=3,
        noise_policy="shared",
    )
    assert np.all(out.paths == out.paths[0])


@pytest.mark.parametrize("method", ["cholesky", "davies_harte"])
def test_hurst_half_increment_variance_is_dt(method):
    n_steps, tn = 10, 1.0
    frac = simulate(
        FractionalBrownianMotion(hurst=0.5), x0=0.0, t0=0.0, tn=tn,
        n_steps=n_steps, n_paths=4000, seed=8, fgn_method=method,
    )
    brown = simulate(
        BrownianMotion(), x0=0.0, t0=0.0, tn=tn, n_steps=n_steps, n_paths=4000, seed=9
    )
    dt = tn / n_steps
    assert np.diff(frac.paths, axis=1).var() == pytest.approx(dt, rel=0.05)
    assert np.diff(brown.paths, axis=1).var() == pytest.approx(dt, rel=0.05)


def test_hurst_half_reduces_to_brownian_paths():
    kwargs = dict(x0=0.0, t0=0.0, tn=2.0, n_steps=30, n_paths=4, seed=123)
    frac = simulate(FractionalBrownianMotion(hurst=0.5), **kwargs)
    brown = simulate(BrownianMotion(), **kwargs)
    assert np.allclose(frac.paths, brown.paths, rtol=1e-12, atol=1e-14)


@pytest.mark.parametrize(
    "override",
    [
        {"n_steps": 0},
        {"n_paths": 0},
        {"tn": 0.0},
        {"tn": -1.0},
        {"x0": float("nan")},
        {"noise_policy": "per_step"},
        {"fgn_method": "hosking"},
        {"max_workers": 0},
    ],
)
def test_invalid_arguments_rejected_before_work(override):
    model = CountingProcess()
    kwargs = dict(x0=0.0, t0=0.0, tn=1.0, n_steps=10, n_paths=3)
    kwargs.update(override)
    with pytest.raises(InvalidParameterError):
        simulate(model, **kwargs)
    assert model.calls == 0


def test_factorisation_failure_propagates():
    model = FractionalOrnsteinUhlenbeck(mu=0.0, sigma=0.1, theta=1.0, hurst=1.0)
    with pytest.raises(NumericalInstabilityError):
        simulate(model, x0=0.0, t0=0.0, tn=1.0, n_steps=10, n_paths=2, seed=0)


def test_non_finite_path_raises():
    model = GeometricBrownianMotion(mu=1e308, sigma=0.0)
    with pytest.raises(NumericalInstabilityError, match="path 0"):
        simulate(model, x0=10.0, t0=0.0, tn=1.0, n_steps=10, n_paths=2, seed=0)


def test_simulator_requires_process():
    cfg = SimConfig(n_paths=2, n_steps=5)
    with pytest.raises(TypeError):
        Simulator(object(), cfg)  # type: ignore[arg-type]


def test_simulator_from_config():
    cfg = SimConfig(n_paths=3, n_steps=12, t0=0.0, tn=0.5, x0=0.04, seed=5, parallel=True)
    out = Simulator(OrnsteinUhlenbeck(mu=0.04, sigma=0.01, theta=0.5), cfg).euler()
    assert out.paths.shape == (3, 13)
    assert out.times[-1] == 0.5
    assert cfg.dt == pytest.approx(0.5 / 12)


def test_davies_harte_parallel_matches_sequential():
    fbm = FractionalBrownianMotion(hurst=0.3)
    kwargs = dict(n_steps=64, n_paths=6, seed=21, fgn_method="davies_harte")
    seq = simulate(fbm, 0.0, 0.0, 1.0, parallel=False, **kwargs)
    par = simulate(fbm, 0.0, 0.0, 1.0, parallel=True, max_workers=3, **kwargs)
    assert seq == par
    assert not np.allclose(seq.paths[0], seq.paths[1])


def test_thread_pool_documents_gil_limit():
    for doc in (Simulator.__doc__, simulate.__doc__):
        assert "GIL" in doc
    assert "ProcessPoolExecutor" in Simulator.__doc__
