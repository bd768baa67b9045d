"""Test the translation of models into LPs."""
from .test_01_load_models_and_solvers import *


def test_lp_shape(curr_solver, model_small):
    lp = fl.ModelLP(model_small, solver=curr_solver)
    # M_D_c takes part in no reaction and gets no constraint
    assert (lp.shape() == (3, 5))
    assert (set(lp.stoichiometry) == {'M_A_c', 'M_B_c', 'M_C_c'})
    assert (len(lp.stoichiometry['M_A_c']) == 3)
    assert (len(lp.problem.constraints) == 3)


def test_lp_variable_bounds(curr_solver, model_small):
    lp = fl.ModelLP(model_small, solver=curr_solver)
    var = lp.variables['R_EX_A']
    assert ((var.lb, var.ub) == (-10.0, 1000.0))
    assert (lp.get_objective() is lp.variables['R_BIOMASS'])


def test_lp_idempotent(curr_solver, model_core):
    lp1 = fl.ModelLP(model_core, solver=curr_solver)
    lp2 = fl.ModelLP(model_core, solver=curr_solver)
    assert (lp1.shape() == lp2.shape())
    assert (lp1.variables['R_ATPM'] is not lp2.variables['R_ATPM'])
    touched = {s.species for r in model_core.reactions.values() for s in r.reactants + r.products}
    assert (len(lp1.constraints) == len(touched))


def test_lp_objective(curr_solver, model_small):
    lp = fl.ModelLP(model_small, solver=curr_solver)
    lp.set_objective('R_R2', 'min')
    assert (lp.sense == MINIMIZE)
    assert (lp.problem.objective.direction == 'min')
    fluxes = lp.solve()
    assert (round(fluxes['R_R2'], 6) == 0.0)
    with pytest.raises(KeyError):
        lp.set_objective('R_nothing')


def test_stoichiometric_matrix(model_small):
    S, met_ids, reac_ids = fl.stoichiometric_matrix(model_small)
    assert (S.shape == (4, 5))
    assert (met_ids == ['M_A_c', 'M_B_c', 'M_C_c', 'M_D_c'])
    assert (S[met_ids.index('M_B_c'), reac_ids.index('R_BIOMASS')] == -2.0)
    assert (S[met_ids.index('M_A_c'), reac_ids.index('R_EX_A')] == -1.0)
    assert (S[met_ids.index('M_D_c')].nnz == 0)
