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
"""Flux Balance Analysis and Flux Variability Analysis"""

from contextlib import redirect_stdout, redirect_stderr
from io import StringIO
from multiprocessing import TimeoutError, cpu_count
from time import monotonic
from typing import Dict, List, Tuple
from cobra import Configuration
from numpy import nan
from optlang.exceptions import SolverError as OptlangSolverError
from pandas import DataFrame
from fluxlp.errors import SolverError
from fluxlp.formulation import ModelLP
from fluxlp.model import Model
from fluxlp.names import *
from fluxlp.pool import FluxPool
from fluxlp.solver_interface import select_solver
import logging


def fba(model: Model, **kwargs) -> Dict[str, float]:
    """Flux Balance Analysis (FBA)
    
    Flux Balance Analysis optimizes the flux through the objective reaction in the space
    of steady-state flux vectors given by the model. A fresh LP is built for every call.
    
    Example:
        fluxes = fba(model, solver='glpk')
        growth = fluxes[model.objective]
    
    Args:
        model (fluxlp.Model):
            The metabolic model.
            
        obj (optional (str)):
            Id of a reaction to be optimized instead of the model objective. An unknown id
            raises KeyError.
            
        obj_sense (optional (str)): (Default: 'maximize')
            The optimization direction can be set either to 'maximize' (or 'max') or
            'minimize' (or 'min').
            
        solver (optional (str)):
            The solver that should be used for FBA.
            
        time_limit (optional (float)):
            Time limit for the solve in seconds.
            
    Returns:
        (dict):
            The optimal flux of every reaction, by reaction id. If the LP cannot be solved
            to optimality, SolverError is raised with the solver status.
    """
    lp = ModelLP(model, solver=kwargs.get(SOLVER))
    lp.set_objective(kwargs.get(OBJ), kwargs.get(OBJ_SENSE, MAXIMIZE))
    return lp.solve(kwargs.get(T_LIMIT))


def flux_bound(model: Model, reaction: str, sense: str, solver=None, time_limit=None) -> float:
    """Optimal flux of a single reaction, or nan if the LP cannot be solved"""
    try:
        lp = ModelLP(model, solver=solver)
        lp.set_objective(reaction, sense)
        return lp.solve(time_limit)[reaction]
    except (SolverError, OptlangSolverError) as e:
        logging.debug('FVA step for ' + reaction + ' (' + sense + ') failed: ' + str(e))
        return nan


def fva_worker_init(model, solver, time_limit):
    """Helper function for parallel FVA
    
    Store the model with the frozen objective and the solver settings. Is executed on
    workers, not on main thread (unless FVA runs with a single process).
    
    Args:
        model (fluxlp.Model):
            The constrained view of the model.
        solver (str):
            Solver to be used.
        time_limit (float or None):
            Time limit of each solve.
    """
    global fva_glob
    fva_glob = {'model': model, 'solver': solver, 'time_limit': time_limit}


def fva_worker_compute(chunk) -> List[Tuple[str, Tuple[float, float]]]:
    """Helper function for parallel FVA
    
    Minimize and maximize the flux of every reaction in a chunk. Each bound is an
    independent LP solve.
    
    Args:
        chunk (list of str):
            Reaction ids.
    """
    global fva_glob
    model = fva_glob['model']
    solver = fva_glob['solver']
    time_limit = fva_glob['time_limit']
    result = []
    # keep solver console output out of the worker streams
    with redirect_stdout(StringIO()), redirect_stderr(StringIO()):
        for reac_id in chunk:
            max_flux = flux_bound(model, reac_id, MAXIMIZE, solver, time_limit)
            min_flux = flux_bound(model, reac_id, MINIMIZE, solver, time_limit)
            result.append((reac_id, (min_flux, max_flux)))
    return result


def split_chunks(reactions, num) -> List[List[str]]:
    """Split reactions into num contiguous chunks, the last one takes the remainder"""
    num = max(1, min(num, len(reactions)))
    size = len(reactions) // num
    chunks = [reactions[i * size:(i + 1) * size] for i in range(num - 1)]
    chunks.append(reactions[(num - 1) * size:])
    return chunks


def fva(model: Model, reactions=None, **kwargs) -> Dict[str, Tuple[float, float]]:
    """Flux Variability Analysis (FVA)
    
    Flux Variability Analysis determines the flux ranges of reactions while the network
    keeps its optimal objective value:
    
    1. FBA for the model objective; its flux is fixed to the optimum v*.
    2. For each reaction, maximize and minimize its flux in separate LPs.
    3. Report (minimum, maximum) for each reaction.
    
    The model itself is not modified: the fixed objective lives in a constrained view
    (Model.with_bounds). With more than one process, the reactions are split into one
    contiguous chunk per worker process and every worker receives its own copy of the
    constrained view.
    
    Example:
        flux_ranges = fva(model, processes=4)
        lo, hi = flux_ranges['R_PGI']
    
    Args:
        model (fluxlp.Model):
            The metabolic model.
            
        reactions (optional (list of str)):
            Reactions to be analyzed. Default: all reactions of the model.
            
        solver (optional (str)):
            The solver that should be used for FVA.
            
        processes (optional (int)): (Default: cobra.Configuration().processes)
            Number of worker processes. Never more than the available cores
            or the number of reactions.
            
        time_limit (optional (float)):
            Time limit in seconds for every single LP. A bound whose LP hits the limit
            is reported as nan.
            
        timeout (optional (float)):
            Time limit in seconds for the whole analysis. Reactions that are not done
            when it expires are reported as (nan, nan).
            
    Returns:
        (dict):
            (minimum, maximum) flux by reaction id, for exactly the requested reactions.
            A bound whose LP could not be solved is nan.
            If the initial FBA cannot be solved, its SolverError is raised unchanged.
    """
    if reactions is None:
        reactions = list(model.reactions)
    reactions = list(dict.fromkeys(reactions))
    unknown = [r for r in reactions if r not in model.reactions]
    if unknown:
        raise KeyError('Reactions not found in model: ' + ', '.join(unknown))
    objective = model.get_objective_reaction()
    solver = select_solver(kwargs.get(SOLVER))
    time_limit = kwargs.get(T_LIMIT)
    timeout = kwargs.get(TIMEOUT)
    deadline = None if timeout is None else monotonic() + timeout

    opt = fba(model, solver=solver, time_limit=time_limit)[objective.id]
    frozen = model.with_bounds({objective.id: (opt, opt)})

    processes = kwargs.get(PROCESSES) or Configuration().processes
    processes = max(1, min(processes, cpu_count(), len(reactions)))
    fluxes = {}

    if processes > 1:
        chunks = split_chunks(reactions, processes)
        logging.info(f"Running FVA for {len(reactions)} reactions on {processes} processes.")
        with FluxPool(processes, initializer=fva_worker_init, initargs=(frozen, solver, time_limit)) as pool:
            results = pool.imap_unordered(fva_worker_compute, chunks)
            try:
                for _ in chunks:
                    remaining = None if deadline is None else max(0.0, deadline - monotonic())
                    for reac_id, limits in results.next(remaining):
                        fluxes[reac_id] = limits
            except TimeoutError:
                logging.warning('FVA timed out after ' + str(timeout) + ' s. Terminating workers.')
                pool.terminate()
    else:
        with redirect_stdout(StringIO()), redirect_stderr(StringIO()):
            for reac_id in reactions:
                if deadline is not None and monotonic() > deadline:
                    logging.warning('FVA timed out after ' + str(timeout) + ' s.')
                    break
                max_flux = flux_bound(frozen, reac_id, MAXIMIZE, solver, time_limit)
                min_flux = flux_bound(frozen, reac_id, MINIMIZE, solver, time_limit)
                fluxes[reac_id] = (min_flux, max_flux)

    missing = [r for r in reactions if r not in fluxes]
    if missing:
        logging.warning(f"No flux range computed for {len(missing)} reaction(s).")
    return {r: fluxes.get(r, (nan, nan)) for r in reactions}


def fva_to_frame(flux_ranges) -> DataFrame:
    """Arrange an FVA result as a data frame with the columns 'minimum' and 'maximum'"""
    return DataFrame(
        {
            "minimum": [v[0] for v in flux_ranges.values()],
            "maximum": [v[1] for v in flux_ranges.values()],
        },
        index=list(flux_ranges),
    )
