## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import sys
import numpy as np
import scipy.stats as stats
import matplotlib.pyplot as plt
from matplotlib import interactive


class Figure:
    """Figures manager class.

    Thin wrapper around a matplotlib figure with one or several axes,
    with helpers to draw a 1-D posterior and an optimization history.
    """

    def __init__(self, nrows=1, ncols=1, isinteractive=True, boxoff=True, **kargs):
        # interpreter mode
        self.interpreter = False
        try:
            if sys.ps1:
                self.interpreter = True
        except AttributeError:
            if sys.flags.interactive:
                self.interpreter = True

        if isinteractive and self.interpreter:
            interactive(True)

        self.boxoff = boxoff
        self.fig = plt.figure(**kargs)
        self.axes = [
            self.fig.add_subplot(nrows, ncols, i + 1) for i in range(nrows * ncols)
        ]
        self.ax = self.axes[0]
        if self.boxoff:
            self.set_boxoff()

    def set_boxoff(self):
        self.ax.spines["right"].set_visible(False)
        self.ax.spines["top"].set_visible(False)
        self.ax.tick_params(direction="in")

    def subplot(self, i):
        self.ax = self.axes[i - 1]
        if self.boxoff:
            self.set_boxoff()

    def show(self, grid=None, legend=None):
        if grid:
            self.grid()
        if legend:
            self.legend()
        plt.show()

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kargs):
        self.ax.plot(x, z, *args, **kargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(x, z, "rs", markerfacecolor="none", markersize=6, label=label)

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def legend(self, **kwargs):
        self.ax.legend(**kwargs)

    def grid(self, visible=True, which="major", linestyle=(0, (1, 5)), linewidth=0.5):
        self.ax.grid(visible, which, linestyle=linestyle, linewidth=linewidth)

    def plotgp(
        self,
        x,
        mean,
        variance,
        dof=None,
        mean_label="posterior mean",
        ci=(0.95, 0.99),
        fillcol=("#D8D8D8", "#BFBFBF"),
    ):
        """Posterior mean with coverage intervals.

        For a Student-t posterior, `variance` is the squared scale and
        the intervals use the quantiles of the t distribution with
        `dof` degrees of freedom.
        """
        x = np.asarray(x).flatten()
        mean = np.asarray(mean).flatten()
        s = np.sqrt(np.asarray(variance).flatten())
        dist = stats.norm if dof is None else stats.t(dof)

        self.ax.plot(x, mean, "#F2404C", linewidth=2.0, label=mean_label)
        for level, col in sorted(zip(ci, fillcol), reverse=True):
            delta = dist.ppf((1 + level) / 2)
            upper = mean + delta * s
            lower = mean - delta * s
            self.ax.fill(
                np.hstack((x, x[::-1])),
                np.hstack((upper, lower[::-1])),
                color=col,
                alpha=0.8,
                linewidth=0.5,
                label=f"CI {100 * level:g}%",
            )

    def plot_history(self, y, label="best value", known_minimum=None):
        """Best value found so far versus the number of evaluations."""
        y = np.asarray(y).flatten()
        best = np.minimum.accumulate(y)
        n = np.arange(1, y.shape[0] + 1)
        self.ax.plot(n, y, "k.", markersize=3, label="evaluations")
        self.ax.step(n, best, where="post", color="#F2404C", linewidth=2.0, label=label)
        if known_minimum is not None:
            self.ax.axhline(known_minimum, linestyle="dashed", color="k", linewidth=0.5)
        self.xylabels("evaluations", "f")
