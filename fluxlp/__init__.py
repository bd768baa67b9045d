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
"""fluxlp: Flux Balance and Flux Variability Analysis of SBML models

Quick start:

    import fluxlp

    model = fluxlp.Model.read_sbml('e_coli_core.xml')
    fluxes = fluxlp.fba(model)
    flux_ranges = fluxlp.fva(model, processes=4)
"""

from importlib.util import find_spec as module_exists
from .names import *

# in order of preference
avail_solvers = []
if module_exists("swiglpk"):
    avail_solvers.append(GLPK)
if module_exists("cplex"):
    avail_solvers.append(CPLEX)
if module_exists("gurobipy"):
    avail_solvers.append(GUROBI)

from .errors import *
from .sbml import *
from .model import *
from .solver_interface import *
from .formulation import *
from .pool import *
from .lptools import *
from .networktools import *
