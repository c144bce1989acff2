from __future__ import annotations

import dataclasses
import logging
from typing import Any, TypeAlias

from crypt0 import abstract_syntax as ast
from crypt0.environment import Env, empty_env
from crypt0.options import Options

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

State: TypeAlias = Env[ast.Value]


class RuntimeFault(Exception):
    """A condition the type checker should have ruled out."""


@dataclasses.dataclass
class UnboundVariable(RuntimeFault):
    var: str


@dataclasses.dataclass
class OperandMismatch(RuntimeFault):
    op: Any
    lhs: ast.Value
    rhs: ast.Value


@dataclasses.dataclass
class NonBooleanCondition(RuntimeFault):
    val: ast.Value


@dataclasses.dataclass
class DivisionByZero(RuntimeFault):
    def __str__(self):
        return "attempt to divide by 0"


@dataclasses.dataclass
class ArgumentMismatch(RuntimeFault):
    message: str

    def __str__(self):
        return self.message


@dataclasses.dataclass
class NotCallable(RuntimeFault):
    name: str


@dataclasses.dataclass
class MissingReturn(RuntimeFault):
    name: str

    def __str__(self):
        return f"no return statement in body of {self.name!r}"


@dataclasses.dataclass
class UnexpectedReturn(RuntimeFault):
    def __str__(self):
        return "unexpected return statement outside of a function"


@dataclasses.dataclass
class Proceed:
    env: State


@dataclasses.dataclass
class Returned:
    val: ast.Value


Signal: TypeAlias = Proceed | Returned


def drive(program: ast.Program, env: State, options: Options = Options()) -> State:
    match execute_block(program, env, options):
        case Proceed(env):
            return env
        case Returned():
            raise UnexpectedReturn()


def execute_block(program: ast.Program, env: State, options: Options) -> Signal:
    for stmt in program:
        match execute(stmt, env, options):
            case Proceed(env):
                pass
            case Returned() as ret:
                return ret
    return Proceed(env)


def execute(stmt: ast.Statement, env: State, options: Options) -> Signal:
    match stmt:
        case ast.Declare(var, exp):
            return Proceed(env.extend(var, evaluate(exp, env, options)))
        case ast.If(cond, then, orelse):
            branch = then if truth(evaluate(cond, env, options)) else orelse
            return execute_scoped(branch, env, options)
        case ast.While(cond, body):
            iterations = 0
            while truth(evaluate(cond, env, options)):
                match execute_scoped(body, env, options):
                    case Proceed(env):
                        iterations += 1
                    case Returned() as ret:
                        return ret
            logger.debug("loop finished after %d iterations", iterations)
            return Proceed(env)
        case ast.Return(exp):
            return Returned(evaluate(exp, env, options))
        case _:
            raise NotImplementedError(stmt)


def execute_scoped(program: ast.Program, env: State, options: Options) -> Signal:
    signal = execute_block(program, env, options)
    match signal:
        case Proceed(inner) if options.block_scope:
            return Proceed(inner.retain(env.names()))
        case _:
            return signal


def truth(val: ast.Value) -> bool:
    match val:
        case ast.Boolean(b):
            return b
        case _:
            raise NonBooleanCondition(val)


def evaluate(expr: ast.Expression, env: State, options: Options = Options()) -> ast.Value:
    match expr:
        case ast.Literal(val):
            return val
        case ast.Get(var):
            try:
                return env.lookup(var)
            except LookupError:
                raise UnboundVariable(var) from None
        case ast.BinOp(op, lhs, rhs):
            return binop(op, evaluate(lhs, env, options), evaluate(rhs, env, options))
        case ast.LessThan(lhs, rhs):
            match evaluate(lhs, env, options), evaluate(rhs, env, options):
                case (ast.Integer(a), ast.Integer(b)) | (ast.Double(a), ast.Double(b)):
                    return ast.Boolean(a < b)
                case a, b:
                    raise OperandMismatch("<", a, b)
        case ast.GreaterThan(lhs, rhs):
            match evaluate(lhs, env, options), evaluate(rhs, env, options):
                case (ast.Integer(a), ast.Integer(b)) | (ast.Double(a), ast.Double(b)):
                    return ast.Boolean(a > b)
                case a, b:
                    raise OperandMismatch(">", a, b)
        case ast.Equals(lhs, rhs):
            match evaluate(lhs, env, options), evaluate(rhs, env, options):
                case (
                    (ast.Integer(a), ast.Integer(b))
                    | (ast.Double(a), ast.Double(b))
                    | (ast.Boolean(a), ast.Boolean(b))
                    | (ast.String(a), ast.String(b))
                ):
                    return ast.Boolean(a == b)
                case a, b:
                    raise OperandMismatch("==", a, b)
        case ast.Call(name, args):
            return call_function(name, args, env, options)
        case _:
            raise NotImplementedError(expr)


def binop(op: ast.Op, lhs: ast.Value, rhs: ast.Value) -> ast.Value:
    match op, lhs, rhs:
        case ast.Op.DIV, ast.Integer(), ast.Integer(0):
            raise DivisionByZero()
        case ast.Op.DIV, ast.Double(), ast.Double(0.0):
            raise DivisionByZero()
        case ast.Op.DIV, ast.Integer(a), ast.Integer(b):
            return ast.Integer(a // b)
        case _, ast.Integer(a), ast.Integer(b):
            return ast.Integer(arithmetic(op, a, b))
        case _, ast.Double(a), ast.Double(b):
            return ast.Double(arithmetic(op, float(a), float(b)))
        case ast.Op.ADD | ast.Op.SUB, ast.Integer(a), ast.Double(b):
            return ast.Double(arithmetic(op, float(a), float(b)))
        case ast.Op.ADD | ast.Op.SUB, ast.Double(a), ast.Integer(b):
            return ast.Double(arithmetic(op, float(a), float(b)))
        case ast.Op.ADD, ast.String(a), ast.String(b):
            return ast.String(a + b)
        case ast.Op.SUB, ast.String(a), ast.String(b):
            return ast.String(subtract_strings(a, b))
        case _:
            raise OperandMismatch(op, lhs, rhs)


def arithmetic(op: ast.Op, a, b):
    match op:
        case ast.Op.ADD:
            return a + b
        case ast.Op.SUB:
            return a - b
        case ast.Op.MUL:
            return a * b
        case ast.Op.DIV:
            return a / b
        case _:
            raise NotImplementedError(op)


def subtract_strings(s: str, sub: str) -> str:
    """Remove every occurrence of `sub` from `s`, scanning left to right.

    >>> subtract_strings("asdqwe", "dq")
    'aswe'
    """
    if not sub:
        return s
    out = []
    i = 0
    while i < len(s):
        if s.startswith(sub, i):
            i += len(sub)
        else:
            out.append(s[i])
            i += 1
    return "".join(out)


def call_function(name: str, args: list[ast.Expression], env: State, options: Options) -> ast.Value:
    try:
        func = env.lookup(name)
    except LookupError:
        raise UnboundVariable(name) from None
    if not isinstance(func, ast.Function):
        raise NotCallable(name)

    vals = [evaluate(arg, env, options) for arg in args]
    frame = bind_parameters(name, func.params, vals)
    logger.debug("calling %s(%s)", name, ", ".join(map(str, vals)))

    match execute_block(func.body, frame, options):
        case Returned(val):
            return val
        case Proceed():
            raise MissingReturn(name)


def bind_parameters(name: str, params: list[tuple[ast.Type, str]], vals: list[ast.Value]) -> State:
    if len(vals) > len(params):
        raise ArgumentMismatch(f"too many arguments passed to {name!r}")
    if len(vals) < len(params):
        raise ArgumentMismatch(f"too few arguments passed to {name!r}")

    frame = empty_env()
    for (ty, var), val in zip(params, vals):
        if ast.type_of(val) != ty:
            raise ArgumentMismatch(f"argument {var!r} of {name!r} must be {ty}, not {ast.type_of(val)}")
        frame = frame.extend(var, val)
    return frame
