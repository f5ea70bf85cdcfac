# gpbo/core/factory.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
from types import MappingProxyType

from gpbo.errors import UnsupportedName
from gpbo.kernel.factory import DEFAULT_KERNELS
from gpbo.mean import DEFAULT_MEANS
from gpbo.parameters import BOptParams
from .gaussian_process import GaussianProcess, GaussianProcessML, GaussianProcessNormal
from .student_t import StudentTProcessJeffreys, StudentTProcessNIG

DEFAULT_SURROGATES = MappingProxyType(
    {
        cls.name: cls
        for cls in (
            GaussianProcess,
            GaussianProcessML,
            GaussianProcessNormal,
            StudentTProcessJeffreys,
            StudentTProcessNIG,
        )
    }
)


def create_surrogate(
    dim,
    params=None,
    registry=DEFAULT_SURROGATES,
    kernel_registry=DEFAULT_KERNELS,
    mean_registry=DEFAULT_MEANS,
):
    """Instantiate the surrogate named by ``params.surr_name``.

    Raises
    ------
    UnsupportedName
        If the name is not in the registry.
    """
    params = BOptParams() if params is None else params
    try:
        cls = registry[params.surr_name]
    except KeyError:
        raise UnsupportedName("surrogate", params.surr_name, registry.keys()) from None
    return cls(dim, params, kernel_registry=kernel_registry, mean_registry=mean_registry)
