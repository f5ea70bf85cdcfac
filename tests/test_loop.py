import json

import numpy as np
import pytest

from gpbo.bayesopt import (
    BayesOptContinuous,
    BayesOptDiscrete,
    BOptState,
    Status,
    optimize,
    optimize_discrete,
)
from gpbo.errors import DimensionMismatch, NotPositiveDefinite, NotReady
from gpbo.misc.testfunctions import (
    forrester,
    branin_normalized,
    FORRESTER_MINIMUM,
    BRANIN_MINIMUM,
)
from gpbo.parameters import BOptParams, KernelParameters, MeanParameters


def _forrester_params(**kwargs):
    defaults = dict(
        n_init_samples=10,
        n_iterations=20,
        n_iter_relearn=5,
        n_inner_iterations=200,
        init_method="sobol",
        surr_name="sStudentTProcessJef",
        l_type="empirical",
        sc_type="map",
        kernel=KernelParameters("kSEISO", hp_mean=[1.0], hp_std=[1.0]),
        random_seed=0,
        verbose_level=0,
    )
    defaults.update(kwargs)
    return BOptParams(**defaults)


def _branin_params(**kwargs):
    defaults = dict(
        n_init_samples=10,
        n_iterations=190,
        n_inner_iterations=50,
        noise=1e-10,
        random_seed=0,
        verbose_level=0,
    )
    defaults.update(kwargs)
    return BOptParams(**defaults)


def test_forrester_1d():
    bo = BayesOptContinuous(1, _forrester_params(), objective=forrester)
    x_min, y_min = bo.optimize()
    assert bo.status is Status.DONE
    assert bo.surrogate.n_samples == 30
    assert abs(y_min - FORRESTER_MINIMUM) < 0.05
    assert forrester(x_min)[0] == pytest.approx(y_min)


def test_optimize_function_and_box():
    params = _forrester_params(n_iterations=15)
    y_min, x_min = optimize(forrester, 1, [0.0], [2.0], params)
    assert x_min.shape == (1,)
    assert 0.0 <= x_min[0] <= 2.0
    assert y_min < -5.5


def test_state_machine():
    bo = BayesOptContinuous(1, _forrester_params(n_iterations=2), objective=forrester)
    assert bo.status is Status.NOT_INITIALIZED
    with pytest.raises(NotReady):
        bo.step_optimization()
    with pytest.raises(NotReady):
        bo.get_final_result()
    with pytest.raises(NotReady):
        bo.save_optimization()
    bo.initialize_optimization()
    assert bo.status is Status.RUNNING
    assert bo.surrogate.n_samples == 10
    bo.step_optimization()
    bo.step_optimization()
    assert bo.status is Status.DONE
    assert bo.current_iter == 2
    with pytest.raises(NotReady):
        bo.step_optimization()


def test_zero_iterations():
    bo = BayesOptContinuous(1, _forrester_params(n_iterations=0), objective=forrester)
    bo.initialize_optimization()
    assert bo.status is Status.DONE
    x, y = bo.get_final_result()
    assert y == pytest.approx(forrester(x)[0])


def test_seeded_runs_are_reproducible():
    runs = []
    for _ in range(2):
        bo = BayesOptContinuous(
            1, _forrester_params(n_iterations=5, init_method="lhs"), objective=forrester
        )
        bo.optimize()
        runs.append(np.array(bo.surrogate.samples.X))
    np.testing.assert_array_equal(runs[0], runs[1])


def test_save_and_restore_resume_the_run(tmp_path):
    params = _branin_params()
    half = 95

    reference = BayesOptContinuous(2, params, objective=branin_normalized)
    reference.optimize()

    first = BayesOptContinuous(2, params, objective=branin_normalized)
    first.initialize_optimization()
    for _ in range(half):
        first.step_optimization()
    state = first.save_optimization()
    filename = tmp_path / "state.json"
    state.save(filename)

    resumed = BayesOptContinuous(2, params, objective=branin_normalized)
    resumed.restore_optimization(BOptState.load(filename))
    assert resumed.current_iter == half
    assert resumed.status is Status.RUNNING
    resumed.optimize()

    np.testing.assert_allclose(resumed.surrogate.samples.X, reference.surrogate.samples.X)
    np.testing.assert_allclose(resumed.surrogate.samples.y, reference.surrogate.samples.y)
    assert resumed.get_final_result()[1] == reference.get_final_result()[1]
    assert reference.get_final_result()[1] < BRANIN_MINIMUM + 0.3


def test_state_file_round_trip(tmp_path):
    bo = BayesOptContinuous(1, _forrester_params(n_iterations=3), objective=forrester)
    bo.initialize_optimization()
    bo.step_optimization()
    state = bo.save_optimization()
    filename = tmp_path / "state.json"
    state.save(filename)
    with open(filename) as f:
        d = json.load(f)
    assert d["n_samples"] == 11
    assert d["current_iter"] == 1
    loaded = BOptState.load(filename)
    np.testing.assert_array_equal(loaded.X, state.X)
    np.testing.assert_array_equal(loaded.y, state.y)
    np.testing.assert_array_equal(loaded.kernel_hyperparameters, state.kernel_hyperparameters)
    assert loaded.rng_state == state.rng_state
    assert loaded.best_index == state.best_index
    assert loaded.regularizer == state.regularizer


def test_state_validation():
    with pytest.raises(DimensionMismatch):
        BOptState(X=np.zeros((3, 1)), y=np.zeros(2))
    with pytest.raises(ValueError):
        BOptState(X=np.zeros((3, 1)), y=np.zeros(3), n_factorized=4)
    d = BOptState(X=np.zeros((2, 1)), y=np.zeros(2)).to_dict()
    d["n_samples"] = 3
    with pytest.raises(DimensionMismatch):
        BOptState.from_dict(d)


def test_save_and_load_flags(tmp_path):
    filename = str(tmp_path / "run.json")
    params = _forrester_params(n_iterations=4, load_save_flag=2, save_filename=filename)
    bo = BayesOptContinuous(1, params, objective=forrester)
    bo.initialize_optimization()
    bo.step_optimization()
    bo.step_optimization()
    assert BOptState.load(filename).current_iter == 2

    params = _forrester_params(n_iterations=4, load_save_flag=1, load_filename=filename)
    resumed = BayesOptContinuous(1, params, objective=forrester)
    resumed.initialize_optimization()
    assert resumed.current_iter == 2
    assert resumed.surrogate.n_samples == 12


def test_missing_state_file_starts_fresh(tmp_path):
    params = _forrester_params(
        n_iterations=1, load_save_flag=1, load_filename=str(tmp_path / "missing.json")
    )
    bo = BayesOptContinuous(1, params, objective=forrester)
    bo.initialize_optimization()
    assert bo.current_iter == 0
    assert bo.surrogate.n_samples == 10


def _failing_once(surrogate):
    original = surrogate.update_surrogate_model
    calls = []

    def update(x, y):
        if not calls:
            calls.append(1)
            raise NotPositiveDefinite(surrogate.n_samples)
        return original(x, y)

    return update


def test_regularizer_escalation():
    params = _forrester_params(n_iterations=2, n_iter_relearn=0, noise=1e-8)
    bo = BayesOptContinuous(1, params, objective=forrester)
    bo.initialize_optimization()
    bo.surrogate.update_surrogate_model = _failing_once(bo.surrogate)
    bo.step_optimization()
    assert bo.surrogate.regularizer == pytest.approx(1e-7)
    assert bo.surrogate.n_samples == 11
    assert bo.surrogate.n_factorized == 11
    bo.step_optimization()
    assert bo.surrogate.n_samples == 12
    assert bo.surrogate.n_factorized == 11


def test_no_retries_fails_fast():
    params = _forrester_params(n_iterations=2, n_iter_relearn=0, regularizer_retries=0)
    bo = BayesOptContinuous(1, params, objective=forrester)
    bo.initialize_optimization()
    bo.surrogate.update_surrogate_model = _failing_once(bo.surrogate)
    with pytest.raises(NotPositiveDefinite):
        bo.step_optimization()
    assert bo.surrogate.n_samples == 10


def test_unreachable_region_is_avoided():
    params = _forrester_params(n_iterations=8)

    class Restricted(BayesOptContinuous):
        def check_reachability(self, x):
            return x[0] <= 0.6

    bo = Restricted(1, params, objective=forrester)
    bo.optimize()
    proposed = np.array(bo.surrogate.samples.X)[params.n_init_samples:]
    assert np.all(proposed[:, 0] <= 0.6)


def test_objective_must_return_a_scalar():
    bo = BayesOptContinuous(1, _forrester_params(), objective=lambda x: np.array([1.0, 2.0]))
    with pytest.raises(ValueError):
        bo.initialize_optimization()


def test_bounds_validation():
    with pytest.raises(DimensionMismatch):
        BayesOptContinuous(2, _forrester_params(), [0.0], [1.0], objective=forrester)
    with pytest.raises(ValueError):
        BayesOptContinuous(1, _forrester_params(), [1.0], [0.0], objective=forrester)


def test_discrete_optimization():
    grid = np.linspace(0.0, 1.0, 101).reshape(-1, 1)
    params = _forrester_params(
        n_iterations=15,
        n_init_samples=5,
        noise=1e-10,
        kernel=KernelParameters("kMaternISO5", hp_mean=[0.25], hp_std=[0.1]),
    )
    y_min, x_min = optimize_discrete(forrester, grid, params)
    assert x_min[0] == pytest.approx(0.76, abs=0.011)
    assert y_min == pytest.approx(forrester(x_min)[0])
    assert np.any(np.all(grid == x_min, axis=1))


def test_discrete_candidates_are_evaluated_once():
    grid = np.linspace(0.0, 1.0, 101).reshape(-1, 1)
    bo = BayesOptDiscrete(grid, _forrester_params(n_iterations=15, n_init_samples=5), objective=forrester)
    bo.optimize()
    X = np.array(bo.surrogate.samples.X)
    assert X.shape[0] == 20
    assert np.unique(X, axis=0).shape[0] == 20

    # once every candidate is evaluated, evaluated ones may be proposed again
    small = grid[::25]
    params = _forrester_params(n_iterations=3, n_init_samples=3)
    bo = BayesOptDiscrete(small, params, objective=forrester)
    bo.optimize()
    X = np.array(bo.surrogate.samples.X)
    assert X.shape[0] == 6
    assert np.unique(X[:5], axis=0).shape[0] == 5


def test_discrete_candidates_are_valid():
    rng = np.random.default_rng(1)
    candidates = rng.random((30, 2))
    params = _branin_params(n_iterations=5, n_init_samples=5, n_iter_relearn=5)
    bo = BayesOptDiscrete(candidates, params, objective=branin_normalized)
    bo.optimize()
    for x in bo.surrogate.samples.X:
        assert np.any(np.all(candidates == x, axis=1))
    with pytest.raises(ValueError):
        BayesOptDiscrete(candidates[:3], params, objective=branin_normalized)


def test_random_exploration_respects_reachability():
    params = _forrester_params(n_iterations=6, epsilon=1.0)

    class Restricted(BayesOptContinuous):
        def check_reachability(self, x):
            return x[0] >= 0.5

    bo = Restricted(1, params, objective=forrester)
    bo.optimize()
    proposed = np.array(bo.surrogate.samples.X)[params.n_init_samples:]
    assert np.all(proposed[:, 0] >= 0.5)


class _Recorder:
    """Constant objective that records the points it is evaluated at."""

    def __init__(self):
        self.points = []

    def __call__(self, x):
        self.points.append(np.array(x, dtype=float))
        return 0.0


def _stall_params(**kwargs):
    defaults = dict(
        n_init_samples=3,
        n_iterations=8,
        n_iter_relearn=0,
        n_inner_iterations=20,
        init_method="lhs",
        surr_name="sGaussianProcess",
        l_type="fixed",
        force_jump=2,
        kernel=KernelParameters("kSEISO", hp_mean=[0.3], hp_std=[1.0]),
        mean=MeanParameters("mZero"),
        random_seed=0,
        verbose_level=0,
    )
    defaults.update(kwargs)
    return BOptParams(**defaults)


def test_force_jump_on_constant_objective():
    # the value stalls from the second iteration on: jumps at iterations 4 and 7
    objective = _Recorder()
    bo = BayesOptContinuous(1, _stall_params(), objective=objective)
    bo.optimize()
    assert bo.surrogate.n_samples == 11
    assert len(objective.points) == 13
    assert bo.counter_stuck == 1

    objective = _Recorder()
    bo = BayesOptContinuous(1, _stall_params(force_jump=0), objective=objective)
    bo.optimize()
    assert len(objective.points) == 11


def test_restore_during_a_stall_jumps_at_the_same_iteration():
    reference = _Recorder()
    BayesOptContinuous(1, _stall_params(), objective=reference).optimize()

    objective = _Recorder()
    first = BayesOptContinuous(1, _stall_params(), objective=objective)
    first.initialize_optimization()
    for _ in range(5):
        first.step_optimization()
    state = first.save_optimization()
    assert state.counter_stuck == 1
    assert state.y_prev == 0.0

    resumed = BayesOptContinuous(1, _stall_params(), objective=objective)
    resumed.restore_optimization(state)
    resumed.optimize()
    assert len(objective.points) == len(reference.points)
    np.testing.assert_array_equal(np.array(objective.points), np.array(reference.points))
