"""
Minimize over a finite set of candidates, with an unreachable region

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpbo as gb
from gpbo.misc.designs import regulargrid
from gpbo.misc.testfunctions import branin_normalized


class RestrictedBranin(gb.BayesOptDiscrete):
    """Candidates in the upper-left corner may not be evaluated."""

    def evaluate_sample(self, x):
        return branin_normalized(x)

    def check_reachability(self, x):
        return not (x[0] < 0.3 and x[1] > 0.7)


def main():
    # jittered 21 x 21 grid
    rng = np.random.default_rng(0)
    candidates = regulargrid(2, 21, [[0.0, 0.0], [1.0, 1.0]])
    candidates = np.clip(candidates + 0.01 * rng.standard_normal(candidates.shape), 0.0, 1.0)

    params = gb.BOptParams(
        n_init_samples=10,
        n_iterations=30,
        n_iter_relearn=10,
        surr_name="sStudentTProcessNIG",
        crit_name="cLCB",
        crit_params=[2.0],
        random_seed=1,
    )
    bo = RestrictedBranin(candidates, params)
    x_min, y_min = bo.optimize()

    print(f"Best candidate: {x_min}, value: {y_min:.6f}")
    print(f"Exhaustive minimum over the candidates: {branin_normalized(candidates).min():.6f}")


if __name__ == "__main__":
    main()
