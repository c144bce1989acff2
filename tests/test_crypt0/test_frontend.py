import pytest

from crypt0 import abstract_syntax as ast, examples
from crypt0.abstract_syntax import Double, Integer, Op, String
from crypt0.environment import empty_env
from crypt0.examples import ADD_THREE, lit
from crypt0.frontend import Context, Err, Ok, run
from crypt0.interpreter import DivisionByZero
from crypt0.options import Options
from crypt0.sugar import decrement, for_loop, increment
from crypt0.type_checker import TypeCheckError


def test_good_examples_run():
    for name, program in examples.GOOD_PROGRAMS.items():
        assert isinstance(run(program), Ok), name


def test_example_results():
    assert run(examples.BIN_OP).env.lookup("Result") == Integer(23)
    assert run(examples.ADD_STR).env.lookup("Result") == String("asd123")
    assert run(examples.SUB_STR).env.lookup("Result") == String("aswe")
    assert run(examples.ITER).env.lookup("i") == Double(1.0)
    assert run(examples.FUN).env.lookup("result") == Integer(8)

    env = run(examples.FOR).env
    assert env.lookup("i") == Integer(10)
    assert env.lookup("z") == Double(0.0)


def test_type_errors_are_reported():
    assert isinstance(run(examples.TYPE_ERR), Err)

    result = run(examples.NULL_VAR)
    assert isinstance(result, Err)
    assert "'null'" in result.message

    result = run(examples.FUN_TYPE_ERR)
    assert isinstance(result, Err)
    assert "'fun'" in result.message


def test_runtime_faults_propagate():
    with pytest.raises(DivisionByZero):
        run(examples.DIV_ZERO)


def test_rejected_program_does_not_run():
    result = run([*examples.DIV_ZERO, ast.Declare("bad", ast.Get("nope"))])
    assert isinstance(result, Err)


def test_initial_environment():
    env = empty_env().extend("n", Integer(41)).extend("f", ADD_THREE)
    result = run(
        [
            ast.Declare("m", ast.BinOp(Op.ADD, ast.Get("n"), lit(1))),
            ast.Declare("r", ast.Call("f", [lit(1)])),
        ],
        env,
    )
    assert result.env.lookup("m") == Integer(42)
    assert result.env.lookup("r") == Integer(4)
    assert "m" not in env


def test_options_are_passed_through():
    sign = ast.Function(
        ast.IntType(),
        [(ast.IntType(), "n")],
        [ast.If(ast.LessThan(ast.Get("n"), lit(0)), [ast.Return(lit(-1))], [ast.Return(lit(1))])],
    )
    program = [ast.Declare("sign", lit(sign)), ast.Declare("s", ast.Call("sign", [lit(-3)]))]

    assert isinstance(run(program), Err)

    result = run(program, options=Options.default().with_scan_nested_returns())
    assert result.env.lookup("s") == Integer(-1)


def test_context_accumulates_state():
    ctx = Context()
    ctx.define("x", Integer(1))

    ctx2 = ctx.run([ast.Declare("y", ast.BinOp(Op.ADD, ast.Get("x"), lit(1)))])
    assert ctx2.lookup("y") == Integer(2)
    assert "y" not in ctx.env

    with pytest.raises(TypeCheckError):
        ctx2.run([ast.Declare("z", ast.Get("nope"))])


def test_for_loop_steps_before_body():
    program = for_loop(
        "i",
        lit(0),
        ast.LessThan(ast.Get("i"), lit(3)),
        ast.BinOp(Op.ADD, ast.Get("i"), lit(1)),
        [ast.Declare("last", ast.Get("i"))],
    )
    env = run([ast.Declare("last", lit(-1)), *program]).env
    assert env.lookup("i") == Integer(3)
    assert env.lookup("last") == Integer(3)


def test_increment_and_decrement():
    env = run([ast.Declare("n", lit(5)), increment("n"), increment("n"), decrement("n")]).env
    assert env.lookup("n") == Integer(6)
