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
"""Metabolic models with resolved flux bounds"""

from copy import copy
from dataclasses import dataclass, replace
from math import copysign, isinf, isnan
from typing import Dict, Optional, Tuple
from cobra import Configuration
from fluxlp.errors import EmptyParameter, InconsistentBounds, InconsistentModel, InconsistentObjective
from fluxlp.names import DEFAULT_LB_PARAM, DEFAULT_UB_PARAM
from fluxlp.sbml import Parameter, ParsedModel, ParsedReaction, SpeciesReference, parse_sbml, read_sbml
import logging


def resolve_bound(reference: Optional[str], parameters: Dict[str, Parameter], default_id: str, fallback: float) -> float:
    """Resolve a reaction flux bound to a finite number
    
    A bound either names a parameter explicitly or falls back to the model-wide default
    parameter (cobra_default_lb/cobra_default_ub). When the model defines no default
    parameter, the universal default is used.
    
    Example:
        lb = resolve_bound('R_ATPM_lower_bound', parsed.parameters, 'cobra_default_lb', -1000.0)
    
    Args:
        reference (str or None):
            Id of the parameter that holds the bound.
            
        parameters (dict of Parameter):
            The parameter table of the model.
            
        default_id (str):
            Id of the model-wide default parameter.
            
        fallback (float):
            Universal default. Infinite bounds are also clipped to its magnitude.
            
    Returns:
        (float):
            The resolved bound.
    """
    if reference is not None:
        if reference not in parameters:
            raise InconsistentModel(reference)
        value = parameters[reference].value
        if value is None or isnan(value):
            raise EmptyParameter(reference)
    elif default_id in parameters:
        value = parameters[default_id].value
        if value is None or isnan(value):
            raise EmptyParameter(default_id)
    else:
        value = fallback
    return _finite(value, fallback)


def _finite(value, fallback) -> float:
    if isinf(value):
        return copysign(abs(fallback), value)
    return float(value)


@dataclass(frozen=True)
class Metabolite:
    id: str
    compartment: str = ''


@dataclass(frozen=True)
class ReactionRecord:
    """Reaction with numeric bounds, ready for the LP formulation

    Bounds are resolved once. Changing them creates a new record (see Model.with_bounds)."""
    id: str
    lower_bound: float
    upper_bound: float
    reactants: Tuple[SpeciesReference, ...] = ()
    products: Tuple[SpeciesReference, ...] = ()
    compartment: Optional[str] = None

    @classmethod
    def from_reaction(cls, reaction: ParsedReaction, parameters: Dict[str, Parameter]) -> 'ReactionRecord':
        """Build the record from a parsed reaction and resolve its bounds"""
        conf = Configuration()
        lb = resolve_bound(reaction.lower_bound, parameters, DEFAULT_LB_PARAM, conf.lower_bound)
        ub = resolve_bound(reaction.upper_bound, parameters, DEFAULT_UB_PARAM, conf.upper_bound)
        if lb > ub:
            raise InconsistentBounds(reaction.id, lb, ub)
        return cls(reaction.id, lb, ub, tuple(reaction.reactants), tuple(reaction.products), reaction.compartment)

    @property
    def var_name(self) -> str:
        """Name of the LP variable, disambiguated by compartment"""
        if self.compartment:
            return self.id + '_' + self.compartment
        return self.id

    def stoichiometry(self) -> Dict[str, float]:
        """Net signed coefficients of all metabolites touched by this reaction"""
        coeffs = {}
        for ref in self.reactants:
            coeffs[ref.species] = coeffs.get(ref.species, 0.0) - ref.coefficient
        for ref in self.products:
            coeffs[ref.species] = coeffs.get(ref.species, 0.0) + ref.coefficient
        return coeffs


class Model(object):
    """Metabolic model for constraint-based analysis
    
    Holds metabolites, reactions with resolved flux bounds, the parameters of the source
    document and the id of the objective reaction. The structure is not changed after
    construction. Methods that need different bounds work on views created by with_bounds.
    
    A model is usually loaded from SBML:
        model = Model.read_sbml('e_coli_core.xml')
        
    or adapted from COBRApy:
        model = Model.from_cobra(cobra_model)
    
    Args:
        id, name (str):
            Identifier and name of the model.
            
        metabolites (dict of Metabolite):
            Metabolites by id.
            
        reactions (dict of ReactionRecord):
            Reactions by id.
            
        config (dict of Parameter):
            The parameter table of the source document.
            
        objective (str):
            Id of the reaction that is maximized by default. A missing reaction is
            reported by get_objective_reaction, not here.
    """

    def __init__(self, id='', name='', metabolites=None, reactions=None, config=None, objective=''):
        self.id = id
        self.name = name
        self.metabolites = metabolites if metabolites is not None else {}
        self.reactions = reactions if reactions is not None else {}
        self.config = config if config is not None else {}
        self.objective = objective

    @classmethod
    def from_parsed(cls, parsed: ParsedModel) -> 'Model':
        """Build a model from parsed SBML records, resolving all reaction bounds"""
        if not parsed.objectives:
            raise InconsistentObjective('')
        metabolites = {k: Metabolite(s.id, s.compartment) for k, s in parsed.species.items()}
        reactions = {k: ReactionRecord.from_reaction(r, parsed.parameters) for k, r in parsed.reactions.items()}
        if len(parsed.objectives) > 1:
            logging.info('Model ' + parsed.id + ' defines several objective reactions. Using ' + parsed.objectives[0] + '.')
        return cls(parsed.id, parsed.name, metabolites, reactions, dict(parsed.parameters), parsed.objectives[0])

    @classmethod
    def read_sbml(cls, path) -> 'Model':
        """Load a model from an SBML file"""
        return cls.from_parsed(read_sbml(path))

    @classmethod
    def from_string(cls, text: str) -> 'Model':
        """Load a model from an SBML document string"""
        return cls.from_parsed(parse_sbml(text))

    @classmethod
    def from_cobra(cls, cobra_model) -> 'Model':
        """Adapt a cobra.Model
        
        Bounds are taken as they are (infinite bounds are clipped to the cobra default
        bound magnitude). The objective is the first reaction with a nonzero objective
        coefficient.
        """
        conf = Configuration()
        metabolites = {m.id: Metabolite(m.id, m.compartment or '') for m in cobra_model.metabolites}
        reactions = {}
        for r in cobra_model.reactions:
            reactants = tuple(SpeciesReference(m.id, -c) for m, c in r.metabolites.items() if c < 0)
            products = tuple(SpeciesReference(m.id, c) for m, c in r.metabolites.items() if c > 0)
            lb = _finite(r.lower_bound, conf.lower_bound)
            ub = _finite(r.upper_bound, conf.upper_bound)
            if lb > ub:
                raise InconsistentBounds(r.id, lb, ub)
            reactions[r.id] = ReactionRecord(r.id, lb, ub, reactants, products)
        objective = [r.id for r in cobra_model.reactions if r.objective_coefficient != 0]
        if not objective:
            raise InconsistentObjective('')
        return cls(cobra_model.id or '', cobra_model.name or '', metabolites, reactions, {}, objective[0])

    def get_objective_reaction(self) -> ReactionRecord:
        """Return the objective reaction record or raise InconsistentObjective"""
        if self.objective not in self.reactions:
            raise InconsistentObjective(self.objective)
        return self.reactions[self.objective]

    def with_bounds(self, bounds: Dict[str, Tuple[float, float]]) -> 'Model':
        """Constrained view of the model
        
        Returns a new model in which the given reactions have the given (lb, ub). All
        other records, metabolites and parameters are shared with this model, which
        itself stays untouched.
        
        Example:
            frozen = model.with_bounds({model.objective: (0.87, 0.87)})
        """
        reactions = dict(self.reactions)
        for reac_id, (lb, ub) in bounds.items():
            reactions[reac_id] = replace(self.reactions[reac_id], lower_bound=float(lb), upper_bound=float(ub))
        view = copy(self)
        view.reactions = reactions
        return view

    def __repr__(self):
        return f"<Model {self.id} ({len(self.metabolites)} metabolites, {len(self.reactions)} reactions)>"
