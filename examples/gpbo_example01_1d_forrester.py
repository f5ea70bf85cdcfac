"""
Minimize the Forrester function on [0, 1] and plot the final posterior

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpbo as gb
from gpbo.misc.plotutils import Figure
from gpbo.misc.testfunctions import forrester, FORRESTER_MINIMUM


def visualize_results(bo):
    xt = np.linspace(0.0, 1.0, 300).reshape(-1, 1)
    zpm, zpv = bo.surrogate.predict(xt)
    X = np.array(bo.surrogate.samples.X)
    y = np.array(bo.surrogate.samples.y)

    fig = Figure(nrows=1, ncols=2, isinteractive=True, figsize=(10, 4))
    fig.subplot(1)
    fig.plot(xt, forrester(xt), "k", linewidth=1, linestyle=(0, (5, 5)))
    fig.plotdata(X, y)
    fig.plotgp(xt, zpm, zpv, dof=bo.surrogate.dof)
    fig.xylabels("$x$", "$f$")
    fig.title("Student-t posterior after optimization")
    fig.legend(fontsize=8)
    fig.subplot(2)
    fig.plot_history(y, known_minimum=FORRESTER_MINIMUM)
    fig.title("Best value")
    fig.show(grid=True)


def main():
    params = gb.BOptParams(
        n_init_samples=10,
        n_iterations=20,
        n_iter_relearn=5,
        init_method="sobol",
        surr_name="sStudentTProcessJef",
        kernel=gb.parameters.KernelParameters("kSEISO", hp_mean=[1.0], hp_std=[1.0]),
        random_seed=0,
    )
    bo = gb.BayesOptContinuous(1, params, objective=forrester)
    x_min, y_min = bo.optimize()

    print(f"Best point: {x_min}, value: {y_min:.6f} (known minimum {FORRESTER_MINIMUM})")
    print(f"Kernel hyperparameters: {bo.surrogate.get_hyperparameters()}")
    visualize_results(bo)


if __name__ == "__main__":
    main()
