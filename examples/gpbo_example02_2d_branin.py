"""
Minimize the Branin-Hoo function on its usual box [-5, 10] x [0, 15]

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpbo as gb
from gpbo.misc import designs
from gpbo.misc.plotutils import Figure
from gpbo.misc.testfunctions import braninhoo, BRANIN_MINIMUM


def main():
    params = gb.BOptParams(
        n_init_samples=10,
        n_iterations=40,
        n_iter_relearn=10,
        n_inner_iterations=200,
        surr_name="sGaussianProcessML",
        kernel=gb.parameters.KernelParameters("kMaternARD5", hp_mean=[0.5], hp_std=[1.0]),
        crit_name="cEI",
        noise=1e-10,
        random_seed=42,
    )
    y_min, x_min = gb.optimize(braninhoo, 2, [-5.0, 0.0], [10.0, 15.0], params)
    print(f"Best point: {x_min}, value: {y_min:.6f} (known minimum {BRANIN_MINIMUM})")

    # random search with the same budget
    box = [[-5.0, 0.0], [10.0, 15.0]]
    X = designs.scale(designs.randunif(2, 50, np.random.default_rng(42)), box)
    print(f"Random search best value: {braninhoo(X).min():.6f}")

    bo = gb.BayesOptContinuous(
        2, params, lower_bound=[-5.0, 0.0], upper_bound=[10.0, 15.0], objective=braninhoo
    )
    bo.optimize()
    fig = Figure(isinteractive=True)
    fig.plot_history(bo.surrogate.samples.y, known_minimum=BRANIN_MINIMUM)
    fig.title("Branin-Hoo, best value found")
    fig.show(grid=True, legend=True)


if __name__ == "__main__":
    main()
