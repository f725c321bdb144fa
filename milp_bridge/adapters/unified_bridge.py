"""Registers every built-in solver adapter with the adapter registry."""

from . import gurobi  # noqa: F401
from . import mosek  # noqa: F401
from . import cplex  # noqa: F401
from . import scip  # noqa: F401
from . import lp_solve  # noqa: F401
