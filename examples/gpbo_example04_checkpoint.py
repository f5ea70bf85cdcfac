"""
Interrupt an optimization, save its state to a file and resume it

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import os
import tempfile

import numpy as np
import gpbo as gb
from gpbo.misc.testfunctions import branin_normalized


def make_params(**kwargs):
    return gb.BOptParams(
        n_init_samples=10,
        n_iterations=30,
        n_iter_relearn=10,
        n_inner_iterations=100,
        noise=1e-10,
        random_seed=0,
        **kwargs,
    )


def main():
    with tempfile.TemporaryDirectory() as tmpdir:
        filename = os.path.join(tmpdir, "branin_state.json")

        # first session: run 15 iterations, saving the state after each one
        bo = gb.BayesOptContinuous(
            2, make_params(load_save_flag=2, save_filename=filename), objective=branin_normalized
        )
        bo.initialize_optimization()
        for _ in range(15):
            bo.step_optimization()
        print(f"Interrupted at iteration {bo.current_iter}, best value {bo.get_final_result()[1]:.6f}")

        # second session: restore from the file and finish
        resumed = gb.BayesOptContinuous(
            2, make_params(load_save_flag=1, load_filename=filename), objective=branin_normalized
        )
        x_min, y_min = resumed.optimize()
        print(f"Resumed run: best point {x_min}, value {y_min:.6f}")

        # an uninterrupted run gives the same result
        reference = gb.BayesOptContinuous(2, make_params(), objective=branin_normalized)
        x_ref, y_ref = reference.optimize()
        print(f"Uninterrupted run: best point {x_ref}, value {y_ref:.6f}")
        print(f"Same samples: {np.array_equal(resumed.surrogate.samples.X, reference.surrogate.samples.X)}")


if __name__ == "__main__":
    main()
