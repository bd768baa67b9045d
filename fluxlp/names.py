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
"""Static strings used in the fluxlp package

    Model defaults

        DEFAULT_LB_PARAM = 'cobra_default_lb'

        DEFAULT_UB_PARAM = 'cobra_default_ub'

    Solvers and status codes

        SOLVER = 'solver'

        CPLEX = 'cplex'

        GUROBI = 'gurobi'

        GLPK = 'glpk'

        OPTIMAL = 'optimal' # from optlang interface

        INFEASIBLE ='infeasible' # from optlang interface

        TIME_LIMIT = 'time_limit' # from optlang interface

        UNBOUNDED = 'unbounded' # from optlang interface

    Analysis

        OBJ = 'obj'

        OBJ_SENSE = 'obj_sense'

        MAXIMIZE = 'maximize'

        MINIMIZE = 'minimize'

        PROCESSES = 'processes'

        T_LIMIT = 'time_limit'

        TIMEOUT = 'timeout'
"""

# Model defaults
DEFAULT_LB_PARAM = 'cobra_default_lb'
DEFAULT_UB_PARAM = 'cobra_default_ub'

# Solvers and status codes
SOLVER = 'solver'
CPLEX = 'cplex'
GUROBI = 'gurobi'
GLPK = 'glpk'
from optlang.interface import OPTIMAL,    \
                              INFEASIBLE, \
                              TIME_LIMIT, \
                              UNBOUNDED

# Analysis
OBJ = 'obj'
OBJ_SENSE = 'obj_sense'
MAXIMIZE = 'maximize'
MINIMIZE = 'minimize'
PROCESSES = 'processes'
T_LIMIT = 'time_limit'
TIMEOUT = 'timeout'
