"""
quant_stochastics: Monte Carlo simulation of continuous-time stochastic
processes (Brownian, fractional and jump-driven) with an Euler-Maruyama
engine.
"""

from quant_stochastics.errors import (
    InvalidParameterError,
    NumericalInstabilityError,
    QuantStochasticsError,
)
from quant_stochastics.sde.noise import (
    DaviesHarteNoise,
    FractionalGaussianNoise,
    generate_fgn,
)
from quant_stochastics.sde.processes.base import StochasticProcess
from quant_stochastics.sde.processes.brownian import (
    ArithmeticBrownianMotion,
    BrownianMotion,
    FractionalBrownianMotion,
    GeometricBrownianMotion,
)
from quant_stochastics.sde.processes.cir import (
    CoxIngersollRoss,
    FractionalCoxIngersollRoss,
)
from quant_stochastics.sde.processes.jump_diffusion import MertonJumpDiffusion
from quant_stochastics.sde.processes.ou import (
    FractionalOrnsteinUhlenbeck,
    OrnsteinUhlenbeck,
)
from quant_stochastics.sde.simulators.simulator import Simulator, simulate
from quant_stochastics.sde.trajectories import Trajectories

__version__ = "0.1.0"

__all__ = [
    "ArithmeticBrownianMotion",
    "BrownianMotion",
    "CoxIngersollRoss",
    "DaviesHarteNoise",
    "FractionalBrownianMotion",
    "FractionalCoxIngersollRoss",
    "FractionalGaussianNoise",
    "FractionalOrnsteinUhlenbeck",
    "GeometricBrownianMotion",
    "InvalidParameterError",
    "MertonJumpDiffusion",
    "NumericalInstabilityError",
    "OrnsteinUhlenbeck",
    "QuantStochasticsError",
    "Simulator",
    "StochasticProcess",
    "Trajectories",
    "generate_fgn",
    "simulate",
    "__version__",
]
