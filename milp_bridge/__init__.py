"""
MILP Solver Interface

This package hands a block of LP-format constraints to whichever external
MILP solver is installed locally and turns the solver's output into one
normalized result. Supported solvers:
- Gurobi (JSON result file)
- MOSEK (text solution files)
- CPLEX (XML solution file)
- SCIP (log and solution file)
- LP_solve (console output)
"""

__version__ = "0.1.0"
__author__ = "Linny-R Solver Team"
