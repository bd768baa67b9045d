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
"""Translation of a metabolic model into an optlang linear program"""

from typing import Dict, List, Tuple
from optlang.symbolics import add
from fluxlp.errors import InconsistentObjective
from fluxlp.model import Model
from fluxlp.names import *
from fluxlp.solver_interface import optimize, select_solver, solver_interface


class ModelLP(object):
    """LP problem as a Flux Balance Analysis formulation
    
    See: What is flux balance analysis?, Orth et al., 2010
    
    Being f(z) a function to optimize (typically biomass or ATP maintenance), S the
    stoichiometric matrix and v the flux vector of the reactions in the model:
    
        maximize f(z),
        subject to:
        S * v = 0,
        lb <= v <= ub
    
    The problem is populated once at construction. Every instance owns a fresh set of
    optlang variables and constraints, so instances never share solver state.
        
    Example:
        lp = ModelLP(model, solver='glpk')
        lp.set_objective()
        fluxes = lp.solve()
                
    Args:
        model (fluxlp.Model):
            The metabolic model to be translated.
            
        solver (optional (str)):
            Solver backend: 'glpk', 'cplex' or 'gurobi'.
    """

    def __init__(self, model: Model, solver=None):
        self.model = model
        self.solver = select_solver(solver)
        self.interface = solver_interface(self.solver)
        self.problem = self.interface.Model(name=model.id or None)
        self.variables = {}
        self.stoichiometry = {}
        self.constraints = []
        self.objective_reaction = None
        self.sense = MAXIMIZE
        self.populate_model()

    def populate_model(self):
        """Build variables, stoichiometry table and steady-state constraints"""
        self.add_vars()
        self.stoichiometry = self.build_stoichiometry()
        self.add_constraints()

    def add_vars(self):
        """Add one continuous variable per reaction, bounded by [lb, ub]"""
        self.variables = {
            reac_id: self.interface.Variable(reac.var_name, lb=reac.lower_bound, ub=reac.upper_bound)
            for reac_id, reac in self.model.reactions.items()
        }
        self.problem.add(list(self.variables.values()))

    def build_stoichiometry(self) -> Dict[str, List]:
        """Group the signed flux terms of all reactions by metabolite
        
        Each entry is one row of the stoichiometric matrix: reactants contribute
        -coefficient * v, products +coefficient * v."""
        stoichiometry = {}
        for reac_id, reac in self.model.reactions.items():
            var = self.variables[reac_id]
            for sref in reac.reactants:
                stoichiometry.setdefault(sref.species, []).append(var * (-1.0 * sref.coefficient))
            for sref in reac.products:
                stoichiometry.setdefault(sref.species, []).append(var * (1.0 * sref.coefficient))
        return stoichiometry

    def add_constraints(self):
        """Add one equality constraint sum(terms) = 0 per metabolite"""
        self.constraints = [
            self.interface.Constraint(add(terms), lb=0, ub=0, name=met_id, sloppy=True)
            for met_id, terms in self.stoichiometry.items()
            if terms
        ]
        self.problem.add(self.constraints)

    def get_objective(self):
        """Get the variable of the objective reaction"""
        if self.model.objective not in self.variables:
            raise InconsistentObjective(self.model.objective)
        return self.variables[self.model.objective]

    def set_objective(self, reaction=None, sense=MAXIMIZE):
        """Optimize the flux through a reaction
        
        Args:
            reaction (optional (str)):
                Reaction id, by default the model objective.
                
            sense (optional (str)): (Default: 'maximize')
                'maximize' (or 'max') or 'minimize' (or 'min').
        """
        if reaction is None:
            var = self.get_objective()
        elif reaction in self.variables:
            var = self.variables[reaction]
        else:
            raise KeyError('Reaction not found in model: ' + reaction)
        self.objective_reaction = reaction or self.model.objective
        self.sense = MINIMIZE if sense in ['min', MINIMIZE] else MAXIMIZE
        direction = 'min' if self.sense == MINIMIZE else 'max'
        self.problem.objective = self.interface.Objective(1.0 * var, direction=direction)

    def solve(self, time_limit=None) -> Dict[str, float]:
        """Solve the LP and return the flux of every reaction
        
        Raises SolverError if the problem is not solved to optimality."""
        optimize(self.problem, time_limit)
        fluxes = {reac_id: var.primal for reac_id, var in self.variables.items()}
        return {k: v if abs(v) >= 1e-11 else 0.0 for k, v in fluxes.items()}  # cut off very small values

    @property
    def objective_value(self) -> float:
        return self.problem.objective.value

    def shape(self) -> Tuple[int, int]:
        """Number of (constraints, variables)"""
        return len(self.constraints), len(self.variables)
