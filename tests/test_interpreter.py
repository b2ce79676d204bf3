from decimal import Decimal

import pytest

from douro.environment import Environment
from douro.errors import (
    ArityError, DivisionByZeroError, DouroArithmeticError, OperandTypeError,
    UnboundNameError,
)
from douro.interpreter import Interpreter, parse_program, run_file, run_program
from douro.types import Number, Function


def run(source):
    lines = []
    env = run_program(source, output=lines.append)
    return lines, env


def test_precedence():
    lines, _ = run('print 1 + 2 * 3\nprint (1 + 2) * 3')
    assert lines == ['7', '9']


def test_decimal_arithmetic_is_exact():
    lines, env = run('x = 0.1 + 0.2\nprint x')
    assert lines == ['0.3']
    assert env.lookup('x') == Number(Decimal('0.3'))


def test_division_keeps_28_significant_digits():
    lines, _ = run('print 1 / 3\nprint 6 / 2\nprint 1 - 0.75')
    assert lines == ['0.3333333333333333333333333333', '3', '0.25']


def test_assignment_round_trip():
    lines, env = run('n = (4 - 1) * 2.5\nprint n\nprint (4 - 1) * 2.5')
    assert lines[0] == lines[1] == '7.5'
    assert env.lookup('n') == Number(Decimal('7.5'))


def test_print_yields_its_value():
    lines, env = run('y = print 2 * 4\nz = 1 + print 10')
    assert lines == ['8', '10']
    assert env.lookup('y') == Number(Decimal(8))
    assert env.lookup('z') == Number(Decimal(11))


def test_sequential_side_effects():
    lines, _ = run('print 1\nprint 2; print 3')
    assert lines == ['1', '2', '3']


def test_default_output_is_stdout(capsys):
    run_program('print 42')
    assert capsys.readouterr().out == '42\n'


def test_unbound_lookup_fails():
    with pytest.raises(UnboundNameError) as excinfo:
        run('print x')
    assert (excinfo.value.line, excinfo.value.column) == (1, 7)


def test_unbound_function_fails():
    with pytest.raises(UnboundNameError):
        run('g(1)')


def test_division_by_zero_fails():
    with pytest.raises(DivisionByZeroError):
        run('1 / 0')
    with pytest.raises(DivisionByZeroError):
        run('z = 0.0\n5 / z')


def test_function_scoping():
    lines, env = run('a = 100\nf = function(a) ( a + 1 )\nprint f(5)')
    assert lines == ['6']
    assert env.lookup('a') == Number(Decimal(100))


def test_function_sees_globals_but_not_caller_locals():
    source = '\n'.join([
        'base = 10',
        'inner = function() ( base + hidden )',
        'outer = function(hidden) ( inner() )',
        'outer(1)',
    ])
    with pytest.raises(UnboundNameError) as excinfo:
        run(source)
    assert 'hidden' in excinfo.value.message


def test_assignment_inside_function_is_local():
    lines, env = run('x = 1\nf = function() (\n  x = 2\n  x * 10\n)\nprint f()\nprint x')
    assert lines == ['20', '1']


def test_function_result_is_last_statement():
    lines, _ = run('f = function(a) (\n  print a\n  b = a * 3\n)\nprint f(2)')
    assert lines == ['2', '6']


def test_empty_function_body_yields_zero():
    lines, _ = run('f = function() ()\nprint f()')
    assert lines == ['0']


def test_arity_mismatch_fails():
    with pytest.raises(ArityError) as excinfo:
        run('f = function(a) ( a )\nf(1, 2)')
    assert excinfo.value.kind == 'ArityError'
    with pytest.raises(ArityError):
        run('f = function(a, b) ( a )\nf(1)')


def test_arguments_evaluated_left_to_right_in_caller_scope():
    lines, _ = run('f = function(a, b) ( a - b )\nprint f(print 5, print 3)')
    assert lines == ['5', '3', '2']


def test_calling_a_number_fails():
    with pytest.raises(OperandTypeError) as excinfo:
        run('n = 3\nn(1)')
    assert excinfo.value.kind == 'TypeError'


def test_arithmetic_on_function_fails():
    with pytest.raises(OperandTypeError):
        run('f = function() ( 1 )\nprint f + 1')


def test_functions_are_values():
    lines, env = run('f = function(a, b) ( a )\ng = f\nprint g\nprint g(7, 8)')
    assert lines == ['<function(a, b)>', '7']
    assert isinstance(env.lookup('g'), Function)


def test_failed_call_leaves_no_scope_behind():
    env = Environment()
    interp = Interpreter(output=lambda s: None)
    program = parse_program('f = function(a) ( t = a\n a / 0 )\nf(1)')
    with pytest.raises(DivisionByZeroError):
        interp.run(program, env)
    assert env.depth == 0
    assert 't' not in env and 'a' not in env


def test_run_against_explicit_environment():
    env = Environment()
    env.define('seed', Number(Decimal('1.5')))
    out = []
    Interpreter(output=out.append).run(parse_program('print seed * 2'), env)
    assert out == ['3.0']


def test_debug_trace_is_written(tmp_path):
    trace = tmp_path / 'trace.txt'
    interp = Interpreter(output=lambda s: None, debug_level=3, debug_file=str(trace))
    interp.run(parse_program('f = function(a) ( a * 2 )\nx = f(4)'))
    interp.close()
    text = trace.read_text(encoding='utf-8')
    assert 'call f(4)' in text
    assert '4 * 2 -> 8' in text
    assert 'define x = 8 (depth 0)' in text


def test_values_evaluate_to_themselves():
    interp = Interpreter(output=lambda s: None)
    three = Number(Decimal(3))
    assert interp.evaluate(three, Environment()) is three


def test_run_file_returns_interpreter(tmp_path):
    path = tmp_path / 'area.douro'
    path.write_text('w = 3\nh = 0.5\narea = w * h\n', encoding='utf-8')
    interp = run_file(str(path))
    assert interp.global_env.lookup('area') == Number(Decimal('1.5'))


def test_decimal_overflow_is_an_arithmetic_error():
    nested = 'sq(' * 21 + '10' + ')' * 21
    with pytest.raises(DouroArithmeticError) as excinfo:
        run('sq = function(x) ( x * x )\nprint ' + nested)
    assert excinfo.value.kind == 'ArithmeticError'
    assert (excinfo.value.line, excinfo.value.column) == (1, 22)


def test_calling_a_number_evaluates_no_arguments():
    out = []
    with pytest.raises(OperandTypeError):
        run_program('n = 3\nn(print 1)', output=out.append)
    assert out == []


def test_debug_after_close_stays_off_stdout(tmp_path, capsys):
    interp = Interpreter(debug_level=1, debug_file=str(tmp_path / 'trace.txt'))
    interp.close()
    interp.run(parse_program('x = 1'))
    assert capsys.readouterr().out == ''
