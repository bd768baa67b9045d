#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Selection of the optlang solver backend and solving of LPs"""

from importlib import import_module
from math import ceil, isinf
from re import search
from cobra import Configuration
from fluxlp import avail_solvers
from fluxlp.errors import FluxLPError, SolverError
from fluxlp.names import *
import logging

OPTLANG_INTERFACES = {
    GLPK: 'optlang.glpk_interface',
    CPLEX: 'optlang.cplex_interface',
    GUROBI: 'optlang.gurobi_interface',
}


def select_solver(solver=None) -> str:
    """Select a solver for subsequent LP computations
    
    If a solver is requested and available, it is used. Otherwise the solver set in the
    COBRA configuration is used, if available. As a last resort, the first available
    solver in the order 'glpk', 'cplex', 'gurobi' is returned.
    
    Example:
        solver = select_solver('cplex')
    
    Args:
        solver (optional (str)):
            A user preferred solver: 'glpk', 'cplex' or 'gurobi'.
            
    Returns:
        (str):
            The selected solver name.
    """
    if not avail_solvers:
        raise FluxLPError('No solver available. Please ensure that one of the following '
                          'solvers is available in your Python environment: GLPK, CPLEX, Gurobi')
    if solver:
        if solver in avail_solvers:
            return solver
        logging.warning('Selected solver ' + solver + ' not available. Using ' + avail_solvers[0] + ' instead.')
        return avail_solvers[0]
    cobra_conf = Configuration()
    if hasattr(cobra_conf, 'solver'):
        conf_solver = search('(' + '|'.join(avail_solvers) + ')', cobra_conf.solver.__name__)
        if conf_solver is not None:
            return conf_solver[0]
        logging.warning('Solver specified in cobra config (' + cobra_conf.solver.__name__ + ') unavailable')
    return avail_solvers[0]


def solver_interface(solver=None):
    """Return the optlang interface module of a solver"""
    return import_module(OPTLANG_INTERFACES[select_solver(solver)])


def optimize(problem, time_limit=None) -> str:
    """Solve an optlang problem to optimality
    
    Args:
        problem (optlang.interface.Model):
            The problem to be solved.
            
        time_limit (optional (float)):
            Time limit in seconds for this solve. None or inf mean no limit.
            
    Returns:
        (str):
            The optlang status, which is always 'optimal'. Any other outcome raises
            SolverError carrying the status.
    """
    if time_limit is not None and not isinf(time_limit):
        problem.configuration.timeout = max(1, int(ceil(time_limit)))
    status = problem.optimize()
    if status != OPTIMAL:
        raise SolverError(status)
    return status
