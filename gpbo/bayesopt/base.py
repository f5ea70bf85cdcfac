# gpbo/bayesopt/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Sequential optimization loop shared by the continuous and discrete
variants.
"""
import os
from enum import Enum

import numpy as np

import gpbo.num as gnp
from gpbo.config import configure_logging, get_logger
from gpbo.core.factory import DEFAULT_SURROGATES, create_surrogate
from gpbo.criteria import DEFAULT_CRITERIA, create_criterion
from gpbo.errors import DimensionMismatch, NotPositiveDefinite, NotReady
from gpbo.kernel.factory import DEFAULT_KERNELS
from gpbo.mean import DEFAULT_MEANS
from gpbo.parameters import BOptParams
from .state import BOptState

_logger = get_logger()

# regularizer used when escalating from zero
MIN_REGULARIZER = 1e-10


class Status(Enum):
    NOT_INITIALIZED = "not_initialized"
    RUNNING = "running"
    DONE = "done"


class BayesOptBase:
    """Bayesian optimization loop.

    States: not initialized, running, done.

    - `initialize_optimization` evaluates an initial design, loads it
      into the surrogate and learns/fits the model (running);
    - `step_optimization` maximizes the acquisition criterion,
      evaluates the objective at the maximizer and updates the model,
      until ``params.n_iterations`` steps have been done (done);
    - `save_optimization` / `restore_optimization` checkpoint the run so
      that a new instance resumes it exactly.

    Subclasses define the search domain (`sample_initial_points`,
    `find_optimal`, `random_point`, `remap`) and may override
    `evaluate_sample` and `check_reachability`.

    Parameters
    ----------
    dim : int
        Input dimension.
    params : BOptParams, optional
    objective : callable, optional
        ``objective(x) -> float``; used by the default `evaluate_sample`.
    surrogate_registry, kernel_registry, mean_registry, criteria_registry : Mapping, optional
        Name registries.
    """

    def __init__(
        self,
        dim,
        params=None,
        objective=None,
        surrogate_registry=DEFAULT_SURROGATES,
        kernel_registry=DEFAULT_KERNELS,
        mean_registry=DEFAULT_MEANS,
        criteria_registry=DEFAULT_CRITERIA,
    ):
        self.params = BOptParams() if params is None else params
        configure_logging(self.params.verbose_level, self.params.log_filename)
        self.dim = int(dim)
        self.objective = objective
        self.rng = gnp.default_rng(self.params.random_seed)
        self.surrogate = create_surrogate(
            self.dim,
            self.params,
            registry=surrogate_registry,
            kernel_registry=kernel_registry,
            mean_registry=mean_registry,
        )
        self.criterion = create_criterion(
            self.params.crit_name, self.params.crit_params, registry=criteria_registry
        )
        self.status = Status.NOT_INITIALIZED
        self.current_iter = 0
        self.counter_stuck = 0
        self.y_prev = None

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------
    def evaluate_sample(self, x):
        """Objective at x (in the user's coordinates)."""
        if self.objective is None:
            raise NotImplementedError(
                "pass an objective or override evaluate_sample in a subclass"
            )
        return self.objective(x)

    def check_reachability(self, x):
        """Whether x (in the user's coordinates) may be evaluated."""
        return True

    def remap(self, x):
        """Map an internal point to the user's coordinates."""
        return x

    def sample_initial_points(self, n):
        raise NotImplementedError

    def find_optimal(self):
        """Internal point maximizing the acquisition criterion."""
        raise NotImplementedError

    def random_point(self):
        raise NotImplementedError

    # ------------------------------------------------------------------
    def _evaluate(self, x):
        y = np.asarray(self.evaluate_sample(self.remap(x)), dtype=float).reshape(-1)
        if y.shape[0] != 1:
            raise ValueError("the objective must return a single value")
        return float(y[0])

    def _is_reachable(self, x):
        return bool(self.check_reachability(self.remap(x)))

    def evaluation_criterion(self, q):
        """Acquisition criterion at internal points q, shape (m,)."""
        mean, variance = self.surrogate.predict(q)
        return self.criterion.score(
            mean, variance, self.surrogate.get_value_at_minimum(), self.surrogate.dof
        )

    def next_point(self):
        if self.params.epsilon > 0.0 and self.rng.random() < self.params.epsilon:
            _logger.debug("Epsilon-greedy exploration")
            return self.random_point()
        return self.find_optimal()

    # ------------------------------------------------------------------
    # Model maintenance with regularizer escalation
    # ------------------------------------------------------------------
    def _escalate_regularizer(self, exc):
        old = self.surrogate.regularizer
        self.surrogate.regularizer = max(old * self.params.regularizer_growth, MIN_REGULARIZER)
        _logger.warning(
            "%s; increasing regularizer from %.3g to %.3g and refitting",
            exc,
            old,
            self.surrogate.regularizer,
        )

    def _refit(self, learn, retries_used=0):
        while True:
            try:
                if learn:
                    self.surrogate.update_hyper_parameters()
                else:
                    self.surrogate.fit_surrogate_model()
                return
            except NotPositiveDefinite as exc:
                if retries_used >= self.params.regularizer_retries:
                    raise
                retries_used += 1
                self._escalate_regularizer(exc)

    def _update_model(self, x, y, learn):
        if learn:
            _logger.debug("Relearning kernel hyperparameters at iteration %d", self.current_iter)
            self.surrogate.add_sample(x, y)
            self._refit(learn=True)
            return
        try:
            self.surrogate.update_surrogate_model(x, y)
        except NotPositiveDefinite as exc:
            if self.params.regularizer_retries == 0:
                raise
            self._escalate_regularizer(exc)
            self.surrogate.add_sample(x, y)
            self._refit(learn=False, retries_used=1)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    def initialize_optimization(self):
        """Evaluate the initial design and fit the surrogate.

        With ``load_save_flag`` 1 or 3 and an existing ``load_filename``,
        the run is restored from that file instead.
        """
        if self.params.load_state:
            if os.path.exists(self.params.load_filename):
                _logger.info("Restoring optimization from %s", self.params.load_filename)
                self.restore_optimization(BOptState.load(self.params.load_filename))
                return
            _logger.warning(
                "State file %s not found; starting a new optimization",
                self.params.load_filename,
            )

        n = self.params.n_init_samples
        X = np.asarray(self.sample_initial_points(n), dtype=float).reshape(n, self.dim)
        y = np.array([self._evaluate(x) for x in X])
        self.surrogate.set_samples(X, y)
        self._refit(learn=True)

        self.current_iter = 0
        self.counter_stuck = 0
        self.y_prev = None
        self.status = Status.RUNNING if self.params.n_iterations > 0 else Status.DONE
        _logger.info(
            "Initial design of %d points evaluated; best value %.6g",
            n,
            self.surrogate.get_value_at_minimum(),
        )
        if self.params.save_state:
            self.save_optimization().save(self.params.save_filename)

    def step_optimization(self):
        """Run one iteration: propose, evaluate, update.

        Raises
        ------
        NotReady
            If the loop is not initialized or already done.
        """
        if self.status is not Status.RUNNING:
            raise NotReady(f"step_optimization called in state {self.status.value!r}")

        x_next = self.next_point()
        y_next = self._evaluate(x_next)

        # random jump when stuck on the same value
        if self.params.force_jump > 0:
            if self.y_prev is not None and (self.y_prev - y_next) ** 2 < self.params.noise:
                self.counter_stuck += 1
            else:
                self.counter_stuck = 0
            self.y_prev = y_next
            if self.counter_stuck > self.params.force_jump:
                _logger.info("Stuck for %d iterations; forcing a random jump", self.counter_stuck)
                x_next = self.random_point()
                y_next = self._evaluate(x_next)
                self.counter_stuck = 0

        relearn = (
            self.params.n_iter_relearn > 0
            and (self.current_iter + 1) % self.params.n_iter_relearn == 0
        )
        self._update_model(x_next, y_next, learn=relearn)

        _logger.info(
            "Iteration %d: x=%s y=%.6g best=%.6g",
            self.current_iter + 1,
            np.array2string(np.asarray(self.remap(x_next)), precision=6),
            y_next,
            self.surrogate.get_value_at_minimum(),
        )
        self.current_iter += 1
        if self.current_iter >= self.params.n_iterations:
            self.status = Status.DONE
        if self.params.save_state:
            self.save_optimization().save(self.params.save_filename)

    def optimize(self):
        """Run the remaining iterations and return ``(x_min, y_min)``."""
        if self.status is Status.NOT_INITIALIZED:
            self.initialize_optimization()
        while self.status is Status.RUNNING:
            self.step_optimization()
        return self.get_final_result()

    def get_final_result(self):
        """Best observed point (user's coordinates) and value."""
        if self.status is Status.NOT_INITIALIZED:
            raise NotReady("no result before initialize_optimization")
        x = self.surrogate.get_point_at_minimum()
        return self.remap(x), self.surrogate.get_value_at_minimum()

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------
    def save_optimization(self):
        """Return a `BOptState` (deep copy) of the current run."""
        if self.status is Status.NOT_INITIALIZED:
            raise NotReady("nothing to save before initialize_optimization")
        s = self.surrogate
        return BOptState(
            current_iter=self.current_iter,
            X=np.array(s.samples.X),
            y=np.array(s.samples.y),
            rng_state=gnp.get_rng_state(self.rng),
            best_index=s.samples.min_index,
            kernel_hyperparameters=s.get_hyperparameters(),
            regularizer=s.regularizer,
            n_factorized=s.n_factorized,
            counter_stuck=self.counter_stuck,
            y_prev=self.y_prev,
        )

    def restore_optimization(self, state):
        """Resume the run checkpointed in `state`.

        The first ``state.n_factorized`` samples are factorized with the
        saved hyperparameters and the remaining ones are replayed
        through the incremental update, which reproduces the factor of
        the checkpointed run.
        """
        state = state.copy()
        if state.n_samples == 0:
            raise ValueError("cannot restore from a state without samples")
        if state.X.shape[1] != self.dim:
            raise DimensionMismatch(
                f"state has points of dimension {state.X.shape[1]}, expected {self.dim}"
            )
        s = self.surrogate
        s.regularizer = float(state.regularizer)
        s.kernel_model.set_hyperparameters(state.kernel_hyperparameters)
        nf = state.n_factorized if state.n_factorized > 0 else state.n_samples
        s.set_samples(state.X[:nf], state.y[:nf])
        s.fit_surrogate_model()
        for i in range(nf, state.n_samples):
            s.update_surrogate_model(state.X[i], state.y[i])

        gnp.set_rng_state(self.rng, state.rng_state)
        self.current_iter = int(state.current_iter)
        self.counter_stuck = int(state.counter_stuck)
        self.y_prev = state.y_prev
        self.status = (
            Status.DONE if self.current_iter >= self.params.n_iterations else Status.RUNNING
        )
        _logger.info(
            "Restored optimization at iteration %d with %d samples",
            self.current_iter,
            state.n_samples,
        )
