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
"""Exceptions raised while loading and optimizing metabolic models"""


class FluxLPError(Exception):
    """Base class of all fluxlp errors"""


class SBMLError(FluxLPError):
    """Inconsistency in a parsed model document"""


class InconsistentModel(SBMLError):
    """A reaction points to a parameter that does not exist"""

    def __init__(self, param):
        self.param = param
        super().__init__(f"reaction points to {param} but it does not exist in model.parameters")


class EmptyParameter(SBMLError):
    """A parameter is referenced but holds no value"""

    def __init__(self, param):
        self.param = param
        super().__init__(f"the parameter {param} exists but it holds no value")


class InconsistentObjective(SBMLError):
    """The objective reaction could not be found in the model"""

    def __init__(self, obj):
        self.obj = obj
        super().__init__(f"model.objective points to {obj}, which could not be found in the model.")


class InconsistentBounds(SBMLError):
    """A reaction resolves to a lower bound above its upper bound"""

    def __init__(self, reaction, lb, ub):
        self.reaction = reaction
        self.lb = lb
        self.ub = ub
        super().__init__(f"reaction {reaction} has lower bound {lb} above its upper bound {ub}")


class SBMLParseError(FluxLPError):
    """The SBML reader reported errors"""

    def __init__(self, messages):
        self.messages = list(messages)
        super().__init__("SBML document could not be read:\n" + "\n".join(self.messages))


class SolverError(FluxLPError):
    """An LP was not solved to optimality

    The optlang status (e.g. 'infeasible', 'unbounded', 'time_limit') is kept in
    the attribute status."""

    def __init__(self, status, message=None):
        self.status = status
        super().__init__(message or f"LP could not be solved to optimality (status: {status})")
