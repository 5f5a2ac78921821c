"""
Tests for type translator.
"""
import pytest
import z3
from fieldcheck.translator import TypeTranslator, VariableKind


def test_declare_int():
    """Integer fields become Z3 Int variables named by field id."""
    translator = TypeTranslator()

    var = translator.declare('term_length', VariableKind.INT)

    assert z3.is_int(var)
    assert str(var) == 'term_length'


def test_declare_real():
    translator = TypeTranslator()

    var = translator.declare('amount', 'real')

    assert z3.is_real(var)
    assert str(var) == 'amount'


def test_declare_bool_and_string():
    """Boolean and existence (string) fields are both Z3 Bools."""
    translator = TypeTranslator()

    flag = translator.declare('auto_renewal', VariableKind.BOOL)
    present = translator.declare('governing_law', VariableKind.STRING)

    assert isinstance(flag, z3.BoolRef)
    assert isinstance(present, z3.BoolRef)
    assert str(present) == 'governing_law'


def test_declare_date_is_int():
    translator = TypeTranslator()

    var = translator.declare('start_date', VariableKind.DATE)

    assert z3.is_int(var)


def test_declare_unknown_kind():
    translator = TypeTranslator()

    with pytest.raises(ValueError):
        translator.declare('x', 'bitvector')


def test_declare_all():
    translator = TypeTranslator()

    variables = translator.declare_all({'a': 'int', 'b': 'real', 'c': 'bool'})

    assert list(variables) == ['a', 'b', 'c']
    assert z3.is_int(variables['a'])
    assert z3.is_real(variables['b'])


def test_bind_real_value_is_exact():
    """Reals are bound as exact decimal rationals."""
    translator = TypeTranslator()

    pct = translator.declare('pct', VariableKind.REAL)

    solver = z3.Solver()
    solver.add(translator.bind_value(pct, 0.15, VariableKind.REAL))
    solver.add(pct * 100 == 15)
    assert solver.check() == z3.sat


def test_bind_values():
    """Bound values constrain variables to the concrete value."""
    translator = TypeTranslator()

    term = translator.declare('term', VariableKind.INT)
    flag = translator.declare('flag', VariableKind.BOOL)

    solver = z3.Solver()
    solver.add(translator.bind_value(term, 24, VariableKind.INT))
    solver.add(translator.bind_value(flag, False, VariableKind.BOOL))
    assert solver.check() == z3.sat
    model = solver.model()
    assert model[term].as_long() == 24
    assert z3.is_false(model[flag])

    solver.add(term > 30)
    assert solver.check() == z3.unsat
