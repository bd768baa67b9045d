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
"""Read SBML documents (Level 3, fbc package) into plain records

The records returned here are solver agnostic and still carry the raw bound
references of every reaction. They are turned into a fluxlp.Model, which
resolves the bounds, by Model.from_parsed.
"""

from dataclasses import dataclass, field
from os.path import isfile
from typing import Dict, List, Optional
from fluxlp.errors import SBMLParseError
import libsbml
import logging


@dataclass(frozen=True)
class SpeciesReference:
    """A metabolite id and an optional stoichiometric coefficient"""
    species: str
    stoichiometry: Optional[float] = None

    @property
    def coefficient(self) -> float:
        """Stoichiometric coefficient, 1.0 if unspecified"""
        return 1.0 if self.stoichiometry is None else self.stoichiometry


@dataclass(frozen=True)
class Parameter:
    id: str
    value: Optional[float] = None
    constant: bool = True


@dataclass(frozen=True)
class ParsedSpecies:
    id: str
    compartment: str = ''
    name: str = ''


@dataclass(frozen=True)
class ParsedReaction:
    """A reaction as written in the document

    lower_bound and upper_bound are parameter ids (or None), not values."""
    id: str
    lower_bound: Optional[str] = None
    upper_bound: Optional[str] = None
    reactants: List[SpeciesReference] = field(default_factory=list)
    products: List[SpeciesReference] = field(default_factory=list)
    compartment: Optional[str] = None
    name: str = ''


@dataclass
class ParsedModel:
    id: str = ''
    name: str = ''
    species: Dict[str, ParsedSpecies] = field(default_factory=dict)
    reactions: Dict[str, ParsedReaction] = field(default_factory=dict)
    parameters: Dict[str, Parameter] = field(default_factory=dict)
    objectives: List[str] = field(default_factory=list)


def read_sbml(path) -> ParsedModel:
    """Read an SBML file (plain or gzip-compressed)
    
    Example:
        parsed = read_sbml('e_coli_core.xml')
    
    Args:
        path (str or pathlib.Path):
            Location of the SBML document.
            
    Returns:
        (ParsedModel):
            The parsed records.
    """
    path = str(path)
    if not isfile(path):
        raise SBMLParseError(['File ' + path + ' does not exist.'])
    return _parse_document(libsbml.readSBMLFromFile(path))


def parse_sbml(text: str) -> ParsedModel:
    """Parse an SBML document given as a string"""
    return _parse_document(libsbml.readSBMLFromString(text))


def _parse_document(doc) -> ParsedModel:
    errors = []
    for i in range(doc.getNumErrors()):
        err = doc.getError(i)
        if err.getSeverity() >= libsbml.LIBSBML_SEV_ERROR:
            errors.append(f"line {err.getLine()}: {err.getMessage().strip()}")
        else:
            logging.debug('SBML reader: ' + err.getMessage().strip())
    if errors:
        raise SBMLParseError(errors)
    model = doc.getModel()
    if model is None:
        raise SBMLParseError(['Document contains no model.'])
    if model.getPlugin('fbc') is None:
        logging.warning('Model ' + model.getId() + ' does not use the fbc package. '
                        'All reactions will get default bounds and no objective is defined.')

    parsed = ParsedModel(id=model.getId(), name=model.getName())
    for p in model.getListOfParameters():
        value = p.getValue() if p.isSetValue() else None
        parsed.parameters[p.getId()] = Parameter(p.getId(), value, p.getConstant())
    for s in model.getListOfSpecies():
        parsed.species[s.getId()] = ParsedSpecies(s.getId(), s.getCompartment(), s.getName())
    for r in model.getListOfReactions():
        parsed.reactions[r.getId()] = _parse_reaction(r)
    parsed.objectives = _objective_reactions(model)
    logging.info(f"Read SBML model '{parsed.id}' with {len(parsed.species)} species, "
                 f"{len(parsed.reactions)} reactions and {len(parsed.parameters)} parameters.")
    return parsed


def _species_refs(ref_list) -> List[SpeciesReference]:
    return [SpeciesReference(sr.getSpecies(), sr.getStoichiometry() if sr.isSetStoichiometry() else None) for sr in ref_list]


def _parse_reaction(reaction) -> ParsedReaction:
    lower_bound = None
    upper_bound = None
    fbc = reaction.getPlugin('fbc')
    if fbc is not None:
        if fbc.isSetLowerFluxBound():
            lower_bound = fbc.getLowerFluxBound()
        if fbc.isSetUpperFluxBound():
            upper_bound = fbc.getUpperFluxBound()
    compartment = reaction.getCompartment() if reaction.isSetCompartment() else None
    return ParsedReaction(id=reaction.getId(),
                          lower_bound=lower_bound,
                          upper_bound=upper_bound,
                          reactants=_species_refs(reaction.getListOfReactants()),
                          products=_species_refs(reaction.getListOfProducts()),
                          compartment=compartment,
                          name=reaction.getName())


def _objective_reactions(model) -> List[str]:
    """Reactions of all flux objectives, the active objective first"""
    fbc = model.getPlugin('fbc')
    if fbc is None:
        return []
    objectives = list(fbc.getListOfObjectives())
    active = fbc.getActiveObjectiveId()
    objectives.sort(key=lambda o: o.getId() != active)
    reactions = []
    for objective in objectives:
        for flux_objective in objective.getListOfFluxObjectives():
            if flux_objective.getReaction() not in reactions:
                reactions.append(flux_objective.getReaction())
    return reactions
