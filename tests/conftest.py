import pytest
from cobra import Configuration
from fluxlp.names import *

cobra_conf = Configuration()
bound_thres = max((abs(cobra_conf.lower_bound), abs(cobra_conf.upper_bound)))

# Initialize the list of solvers with GLPK, which is always installed
solvers = [GLPK]

# Add GUROBI to the list if the gurobipy package is installed
try:
    import gurobipy
    solvers.append(GUROBI)
except ImportError:
    pass  # GUROBI is not installed

# Add CPLEX to the list if the cplex package is installed
try:
    import cplex
    solvers.append(CPLEX)
except ImportError:
    pass  # CPLEX is not installed


@pytest.fixture(params=solvers, scope="session")
def curr_solver(request: pytest.FixtureRequest) -> str:
    """Provide session-level fixture for parametrized solver names."""
    return request.param


@pytest.fixture(params=[1, 2, 3], scope="session")
def num_processes(request: pytest.FixtureRequest) -> int:
    """Provide session-level fixture for FVA worker counts."""
    return request.param
