import os
import sys
import unittest

import matplotlib

matplotlib.use("Agg")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from examples import (  # noqa: E402
    gpbo_example01_1d_forrester,
    gpbo_example02_2d_branin,
    gpbo_example03_discrete,
    gpbo_example04_checkpoint,
)


class TestExamples(unittest.TestCase):
    def tearDown(self):
        import matplotlib.pyplot as plt

        plt.close("all")

    def test_01(self):
        gpbo_example01_1d_forrester.main()

    def test_02(self):
        gpbo_example02_2d_branin.main()

    def test_03(self):
        gpbo_example03_discrete.main()

    def test_04(self):
        gpbo_example04_checkpoint.main()


if __name__ == "__main__":
    unittest.main()
