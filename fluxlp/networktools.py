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
"""Matrix views of metabolic models"""

from typing import Dict, List, Tuple
from numpy import array
from scipy import sparse
from fluxlp.model import Model


def stoichiometric_matrix(model: Model) -> Tuple[sparse.csr_matrix, List[str], List[str]]:
    """Build the sparse stoichiometric matrix of a model
    
    Rows follow the metabolites of the model. Metabolites that are referenced by reactions
    but missing from model.metabolites are appended at the end. Columns follow the
    reactions of the model.
    
    Example:
        S, met_ids, reac_ids = stoichiometric_matrix(model)
    
    Returns:
        (Tuple[sparse.csr_matrix, list of str, list of str]):
            The matrix, the row (metabolite) ids and the column (reaction) ids.
    """
    met_ids = list(model.metabolites)
    met_idx = {m: i for i, m in enumerate(met_ids)}
    reac_ids = list(model.reactions)
    rows, cols, data = [], [], []
    for j, reac in enumerate(model.reactions.values()):
        for met_id, coeff in reac.stoichiometry().items():
            if met_id not in met_idx:
                met_idx[met_id] = len(met_ids)
                met_ids.append(met_id)
            rows.append(met_idx[met_id])
            cols.append(j)
            data.append(coeff)
    S = sparse.coo_matrix((data, (rows, cols)), shape=(len(met_ids), len(reac_ids)))
    return S.tocsr(), met_ids, reac_ids


def steady_state_residual(model: Model, fluxes: Dict[str, float]) -> Dict[str, float]:
    """Net production rate S * v of every metabolite for a given flux vector
    
    For a steady-state flux vector (e.g. an FBA solution) all values are zero within the
    solver tolerance."""
    S, met_ids, reac_ids = stoichiometric_matrix(model)
    v = array([fluxes[r] for r in reac_ids], dtype=float)
    return dict(zip(met_ids, S.dot(v).tolist()))
