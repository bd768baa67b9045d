"""Test bound resolution and load-time errors."""
from .test_01_load_models_and_solvers import *
from fluxlp.sbml import Parameter, ParsedModel, ParsedReaction, ParsedSpecies, SpeciesReference

PARAMS = {
    'cobra_default_lb': Parameter('cobra_default_lb', -500.0),
    'cobra_default_ub': Parameter('cobra_default_ub', 500.0),
    'atpm_lb': Parameter('atpm_lb', 8.39),
    'empty': Parameter('empty', None),
    'inf_ub': Parameter('inf_ub', float('inf')),
}


def parsed_model(reactions, parameters=PARAMS, objectives=('R1',)):
    return ParsedModel(id='m',
                       name='test',
                       species={'A': ParsedSpecies('A', 'c')},
                       reactions={r.id: r for r in reactions},
                       parameters=dict(parameters),
                       objectives=list(objectives))


def test_resolve_named():
    assert (fl.resolve_bound('atpm_lb', PARAMS, DEFAULT_LB_PARAM, -1000.0) == 8.39)


def test_resolve_default_parameter():
    assert (fl.resolve_bound(None, PARAMS, DEFAULT_LB_PARAM, -1000.0) == -500.0)
    assert (fl.resolve_bound(None, PARAMS, DEFAULT_UB_PARAM, 1000.0) == 500.0)


def test_resolve_universal_default():
    assert (fl.resolve_bound(None, {}, DEFAULT_LB_PARAM, -1000.0) == -1000.0)
    assert (fl.resolve_bound(None, {}, DEFAULT_UB_PARAM, 1000.0) == 1000.0)


def test_resolve_infinite():
    assert (fl.resolve_bound('inf_ub', PARAMS, DEFAULT_UB_PARAM, 1000.0) == 1000.0)


def test_resolve_missing_parameter():
    with pytest.raises(fl.InconsistentModel) as e:
        fl.resolve_bound('nothing', PARAMS, DEFAULT_LB_PARAM, -1000.0)
    assert (e.value.param == 'nothing')


def test_resolve_empty_parameter():
    with pytest.raises(fl.EmptyParameter) as e:
        fl.resolve_bound('empty', PARAMS, DEFAULT_LB_PARAM, -1000.0)
    assert (e.value.param == 'empty')


def test_resolve_empty_default():
    params = {'cobra_default_lb': Parameter('cobra_default_lb')}
    with pytest.raises(fl.EmptyParameter) as e:
        fl.resolve_bound(None, params, DEFAULT_LB_PARAM, -1000.0)
    assert (e.value.param == 'cobra_default_lb')


def test_model_defaults_from_cobra_config():
    model = fl.Model.from_parsed(parsed_model([ParsedReaction('R1', reactants=[SpeciesReference('A')])], parameters={}))
    assert (model.reactions['R1'].lower_bound == -bound_thres)
    assert (model.reactions['R1'].upper_bound == bound_thres)


def test_model_inconsistent():
    with pytest.raises(fl.InconsistentModel):
        fl.Model.from_parsed(parsed_model([ParsedReaction('R1', lower_bound='nothing')]))


def test_model_empty_parameter():
    with pytest.raises(fl.EmptyParameter):
        fl.Model.from_parsed(parsed_model([ParsedReaction('R1', upper_bound='empty')]))


def test_model_inconsistent_bounds():
    with pytest.raises(fl.InconsistentBounds) as e:
        fl.Model.from_parsed(parsed_model([ParsedReaction('R1', lower_bound='atpm_lb', upper_bound='atpm_lb'),
                                           ParsedReaction('R2', lower_bound='cobra_default_ub', upper_bound='atpm_lb')]))
    assert (e.value.reaction == 'R2')


def test_model_without_objective():
    with pytest.raises(fl.InconsistentObjective):
        fl.Model.from_parsed(parsed_model([ParsedReaction('R1')], objectives=[]))


def test_objective_checked_lazily():
    model = fl.Model.from_parsed(parsed_model([ParsedReaction('R1')], objectives=['R_missing']))
    assert (model.objective == 'R_missing')
    with pytest.raises(fl.InconsistentObjective) as e:
        model.get_objective_reaction()
    assert (e.value.obj == 'R_missing')


def test_compartment_var_name():
    model = fl.Model.from_parsed(parsed_model([ParsedReaction('R1', compartment='c'), ParsedReaction('R2')]))
    assert (model.reactions['R1'].var_name == 'R1_c')
    assert (model.reactions['R2'].var_name == 'R2')


def test_with_bounds_is_a_view(model_small):
    view = model_small.with_bounds({'R_BIOMASS': (2.0, 2.0)})
    assert (view.reactions['R_BIOMASS'].lower_bound == 2.0)
    assert (model_small.reactions['R_BIOMASS'].lower_bound == 0.0)
    assert (view.reactions['R_R1'] is model_small.reactions['R_R1'])
    assert (view.metabolites is model_small.metabolites)
