import math
import pytest
from calc_core import Calculator, CalcError, CalcErrorKind, Operation, CalculationHistory, powf

def test_new_calculator(calc):
    assert calc.get_value() == 0.0
    assert calc.get_memory() == 0.0
    assert calc.history_count() == 0

def test_default_constructor_matches_new():
    calc = Calculator.default()
    assert calc.get_value() == 0.0
    assert calc.get_memory() == 0.0
    assert calc.get_history() == []

def test_add(calc):
    calc.set_value(10.0)
    assert calc.add(5.0) == 15.0
    assert calc.get_value() == 15.0

def test_add_twice_from_zero(calc):
    calc.add(2.5)
    calc.add(-7.0)
    assert calc.get_value() == -4.5
    assert calc.history_count() == 2

def test_subtract_negative_result(calc):
    calc.set_value(5.0)
    assert calc.subtract(10.0) == -5.0
    # Can still operate on negative result
    calc.add(20.0)
    assert calc.get_value() == 15.0

@pytest.mark.parametrize("start, factor, expected", [
    (4.0, 3.0, 12.0),
    (5.0, 0.0, 0.0),
    (-4.0, 3.0, -12.0),
])
def test_multiply(calc, start, factor, expected):
    calc.set_value(start)
    assert calc.multiply(factor) == expected

def test_divide(calc):
    calc.set_value(10.0)
    assert calc.divide(2.0) == 5.0
    assert calc.get_value() == 5.0

def test_divide_by_zero_leaves_state(calc):
    calc.set_value(10.0)
    with pytest.raises(CalcError) as exc_info:
        calc.divide(0.0)
    assert exc_info.value.kind == CalcErrorKind.DIVISION_BY_ZERO
    assert calc.get_value() == 10.0
    assert calc.history_count() == 0

def test_divide_by_negative_zero_fails(calc):
    calc.set_value(1.0)
    with pytest.raises(CalcError):
        calc.divide(-0.0)

def test_divide_after_error(calc):
    calc.set_value(10.0)
    with pytest.raises(CalcError):
        calc.divide(0.0)
    assert calc.divide(2.0) == 5.0
    assert calc.history_count() == 1

def test_divide_by_tiny_value_gives_infinity(calc):
    calc.set_value(1e308)
    result = calc.divide(1e-308)
    assert math.isinf(result)
    assert calc.history_count() == 1

def test_sqrt(calc):
    calc.set_value(16.0)
    assert calc.sqrt() == 4.0
    assert calc.history_count() == 0

def test_sqrt_zero_and_one(calc):
    calc.set_value(0.0)
    assert calc.sqrt() == 0.0
    calc.set_value(1.0)
    assert calc.sqrt() == 1.0

def test_sqrt_after_error(calc):
    calc.set_value(-4.0)
    with pytest.raises(CalcError) as exc_info:
        calc.sqrt()
    assert exc_info.value.kind == CalcErrorKind.NEGATIVE_SQRT
    assert calc.get_value() == -4.0

    calc.set_value(16.0)
    assert calc.sqrt() == 4.0

@pytest.mark.parametrize("base, exponent, expected", [
    (2.0, 3.0, 8.0),
    (5.0, 0.0, 1.0),
    (2.0, -2.0, 0.25),
    (16.0, 0.5, 4.0),
    (2.0, 10.0, 1024.0),
    (99.0, 1.0, 99.0),
    (0.0, 0.0, 1.0),
    (-2.0, 3.0, -8.0),
])
def test_power(calc, base, exponent, expected):
    calc.set_value(base)
    assert calc.power(exponent) == expected
    assert calc.history_count() == 0

def test_power_negative_base_fractional_exponent_is_nan(calc):
    calc.set_value(-8.0)
    assert math.isnan(calc.power(1.0 / 3.0))

def test_power_overflow_is_infinite(calc):
    calc.set_value(10.0)
    assert calc.power(400.0) == math.inf
    calc.set_value(-10.0)
    assert calc.power(401.0) == -math.inf

def test_powf_zero_negative_exponent():
    assert powf(0.0, -1.0) == math.inf
    assert powf(-0.0, -1.0) == -math.inf
    assert powf(-0.0, -2.0) == math.inf

def test_clear_keeps_memory(calc):
    calc.set_value(42.0)
    calc.add(10.0)
    calc.memory_store()

    calc.clear()

    assert calc.get_value() == 0.0
    # Memory should persist after clear
    assert calc.get_memory() == 52.0
    assert calc.history_count() == 1

def test_memory_store_and_recall(calc):
    calc.set_value(20.0)
    calc.memory_store()
    calc.set_value(5.0)
    assert calc.memory_recall() == 20.0
    assert calc.get_value() == 20.0

def test_memory_clear(calc):
    calc.set_value(30.0)
    calc.memory_store()
    calc.memory_clear()
    assert calc.get_memory() == 0.0

def test_memory_add_multiple_times(calc):
    for value in (10.0, 5.0, 3.0):
        calc.set_value(value)
        calc.memory_add()
    assert calc.get_memory() == 18.0

def test_memory_with_negative(calc):
    calc.set_value(-50.0)
    calc.memory_store()
    calc.set_value(25.0)
    calc.memory_add()
    assert calc.get_memory() == -25.0

def test_memory_operations_do_not_touch_history(calc):
    calc.set_value(3.0)
    calc.memory_store()
    calc.memory_add()
    calc.memory_recall()
    calc.memory_clear()
    calc.sqrt()
    calc.power(2.0)
    calc.clear()
    assert calc.history_count() == 0

def test_chained_operations(seeded_calc):
    assert seeded_calc.get_value() == 5.0
    assert seeded_calc.history_count() == 4

def test_history_entries_in_order(seeded_calc):
    history = seeded_calc.get_history()
    assert [h["operation"] for h in history] == ["Add", "Multiply", "Subtract", "Divide"]
    assert history[0] == {"operand1": 10.0, "operand2": 5.0, "operation": "Add", "result": 15.0}
    assert history[-1] == {"operand1": 20.0, "operand2": 4.0, "operation": "Divide", "result": 5.0}

def test_get_history_is_a_snapshot(seeded_calc):
    snapshot = seeded_calc.get_history()
    snapshot.clear()
    seeded_calc.add(1.0)
    assert seeded_calc.history_count() == 5
    assert snapshot == []

def test_clear_history(seeded_calc):
    seeded_calc.clear_history()
    assert seeded_calc.history_count() == 0
    assert seeded_calc.get_value() == 5.0
    seeded_calc.add(1.0)
    assert seeded_calc.history_count() == 1

def test_floating_point_precision(calc):
    calc.set_value(0.1)
    calc.add(0.2)
    assert abs(calc.get_value() - 0.3) < 0.0000001

def test_large_and_small_numbers(calc):
    calc.set_value(1e100)
    assert calc.multiply(2.0) == 2e100
    calc.set_value(1e-100)
    assert calc.multiply(2.0) == 2e-100
    calc.set_value(1e150)
    result = calc.multiply(1e150)
    assert 9e299 < result < 1.1e300

def test_operations_with_infinity(calc):
    calc.set_value(math.inf)
    assert math.isinf(calc.add(100.0))
    calc.set_value(1.0)
    with pytest.raises(CalcError):
        calc.divide(0.0)

def test_nan_propagates_without_error(calc):
    calc.set_value(math.inf)
    assert math.isnan(calc.subtract(math.inf))
    assert math.isnan(calc.multiply(2.0))
    assert calc.history_count() == 2

def test_operation_enum_equality():
    assert Operation.ADD == Operation.ADD
    assert Operation.ADD != Operation.SUBTRACT
    assert Operation.MULTIPLY.symbol == '×'
    assert Operation.DIVIDE.value == "Divide"

def test_calculation_history_is_frozen():
    entry = CalculationHistory(10.0, 5.0, Operation.ADD, 15.0)
    with pytest.raises(AttributeError):
        entry.result = 0.0
    assert entry == CalculationHistory(10.0, 5.0, Operation.ADD, 15.0)

def test_calc_error_messages():
    assert CalcError(CalcErrorKind.DIVISION_BY_ZERO).as_str() == "Division by zero"
    assert CalcError(CalcErrorKind.NEGATIVE_SQRT).as_str() == "Cannot take square root of negative number"
    assert str(CalcError(CalcErrorKind.OVERFLOW)) == "Factorial overflow: n must be <= 20"

def test_calc_error_equality():
    assert CalcError(CalcErrorKind.DIVISION_BY_ZERO) == CalcError(CalcErrorKind.DIVISION_BY_ZERO)
    assert CalcError(CalcErrorKind.DIVISION_BY_ZERO) != CalcError(CalcErrorKind.NEGATIVE_SQRT)
    assert len({CalcError(CalcErrorKind.OVERFLOW), CalcError(CalcErrorKind.OVERFLOW)}) == 1

@pytest.mark.parametrize("kind", list(CalcErrorKind))
def test_calc_error_survives_copy_and_pickle(kind):
    import copy
    import pickle
    err = CalcError(kind)
    for clone in (copy.copy(err), copy.deepcopy(err), pickle.loads(pickle.dumps(err))):
        assert clone == err
        assert clone.kind is kind
        assert str(clone) == kind.value
