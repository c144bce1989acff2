from __future__ import annotations

import dataclasses
import logging
from typing import Iterator, Optional, TypeAlias

from crypt0 import abstract_syntax as ast
from crypt0.environment import Env, empty_env
from crypt0.options import Options

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

TEnv: TypeAlias = Env[ast.Type]


@dataclasses.dataclass
class TypeCheckError(Exception):
    message: str

    def __str__(self):
        return self.message


class FunctionTypeError(TypeCheckError):
    pass


def expr_error(expr: ast.Expression, reason: str) -> TypeCheckError:
    return TypeCheckError(f"Type error in expression {expr}: {reason}")


def type_check(
    program: ast.Program, tenv: Optional[TEnv] = None, options: Optional[Options] = None
) -> Optional[str]:
    """Check a program; return the error message, or None if it is well typed."""
    try:
        check_program(program, tenv or empty_env(), options or Options.default())
    except TypeCheckError as e:
        return e.message
    return None


def check_program(program: ast.Program, tenv: TEnv, options: Options) -> TEnv:
    for stmt in program:
        tenv = check_stmt(stmt, tenv, options)
    return tenv


def check_stmt(stmt: ast.Statement, tenv: TEnv, options: Options) -> TEnv:
    match stmt:
        case ast.Declare(var, ast.Literal(ast.Function() as func)):
            return tenv.extend(var, check_function(var, func, options))
        case ast.Declare(var, exp):
            return tenv.extend(var, infer_expr(exp, tenv))
        case ast.If(cond, then, orelse):
            check_condition(cond, tenv)
            errors = []
            for branch in (then, orelse):
                try:
                    check_block(branch, tenv, options)
                except TypeCheckError as e:
                    errors.append(e)
            match errors:
                case []:
                    return tenv
                case [error]:
                    raise error
                case _ if all(isinstance(e, FunctionTypeError) for e in errors):
                    raise FunctionTypeError(", ".join(e.message for e in errors))
                case _:
                    raise TypeCheckError(", ".join(e.message for e in errors))
        case ast.While(cond, body):
            check_condition(cond, tenv)
            check_block(body, tenv, options)
            return tenv
        case ast.Return(exp):
            infer_expr(exp, tenv)
            return tenv
        case _:
            raise NotImplementedError(stmt)


def check_condition(cond: ast.Expression, tenv: TEnv):
    ty = infer_expr(cond, tenv)
    if ty != ast.BoolType():
        raise expr_error(cond, f"condition is {ty}, expected Bool")


def check_block(program: ast.Program, tenv: TEnv, options: Options):
    """Check the body of an if or while statement.

    The body sees the enclosing bindings but its own declarations do not
    flow back out. Since the enclosing code cannot know whether the body
    ran, a body may not rebind an enclosing name to a value of another type.
    """
    inner = check_program(program, tenv, options)
    for var, ty in tenv.items():
        rebound = inner.lookup(var)
        if rebound != ty:
            raise TypeCheckError(f"Type error in block: {var!r} changes type from {ty} to {rebound}")


def infer_expr(expr: ast.Expression, tenv: TEnv) -> ast.Type:
    match expr:
        case ast.Literal(val):
            return ast.type_of(val)
        case ast.Get(var) | ast.Call(var, _):
            # arguments of a call are checked at runtime
            try:
                return tenv.lookup(var)
            except LookupError:
                raise expr_error(expr, f"unbound variable {var!r}") from None
        case ast.LessThan(lhs, rhs) | ast.GreaterThan(lhs, rhs):
            match infer_expr(lhs, tenv), infer_expr(rhs, tenv):
                case (ast.IntType(), ast.IntType()) | (ast.DoubleType(), ast.DoubleType()):
                    return ast.BoolType()
                case lhs_t, rhs_t:
                    raise expr_error(expr, f"cannot compare {lhs_t} and {rhs_t}")
        case ast.Equals(lhs, rhs):
            lhs_t = infer_expr(lhs, tenv)
            rhs_t = infer_expr(rhs, tenv)
            if lhs_t != rhs_t or lhs_t == ast.FunctionType():
                raise expr_error(expr, f"cannot test {lhs_t} and {rhs_t} for equality")
            return ast.BoolType()
        case ast.BinOp(op, lhs, rhs):
            lhs_t = infer_expr(lhs, tenv)
            rhs_t = infer_expr(rhs, tenv)
            ty = operator_type(op, lhs_t, rhs_t)
            if ty is None:
                raise expr_error(expr, f"cannot apply {op.value} to {lhs_t} and {rhs_t}")
            return ty
        case _:
            raise NotImplementedError(expr)


def operator_type(op: ast.Op, lhs: ast.Type, rhs: ast.Type) -> Optional[ast.Type]:
    """The result type of an arithmetic operator, or None if the operands don't fit.

    The interpreter's `binop` dispatches on exactly the same table."""
    match op, lhs, rhs:
        case _, ast.IntType(), ast.IntType():
            return ast.IntType()
        case _, ast.DoubleType(), ast.DoubleType():
            return ast.DoubleType()
        case ast.Op.ADD | ast.Op.SUB, ast.IntType() | ast.DoubleType(), ast.IntType() | ast.DoubleType():
            return ast.DoubleType()
        case ast.Op.ADD | ast.Op.SUB, ast.StringType(), ast.StringType():
            return ast.StringType()
        case _:
            return None


def param_tenv(params: list[tuple[ast.Type, str]]) -> TEnv:
    return empty_env().extend_many((var, ty) for ty, var in params)


def check_function(name: str, func: ast.Function, options: Options) -> ast.Type:
    """Validate a function literal bound to `name` and return its declared return type."""
    tenv = param_tenv(func.params)

    try:
        check_program(func.body, tenv, options)
    except TypeCheckError as e:
        raise FunctionTypeError(f"Type error in function declaration {name!r}: {e.message}") from e

    found = scan_return_type(func.body, tenv, options)
    if found is None:
        raise FunctionTypeError(f"Type error in function declaration {name!r}: no reachable return statement")
    if found != func.ret:
        raise FunctionTypeError(
            f"Type error in function declaration {name!r}: returns {found}, declared {func.ret}"
        )

    for stmt, ty in iter_returns(func.body, tenv, options):
        if ty != func.ret:
            raise FunctionTypeError(
                f"Type error in function declaration {name!r}: {stmt} returns {ty}, declared {func.ret}"
            )

    logger.debug("function %r returns %s", name, func.ret)
    return func.ret


def declared_type(exp: ast.Expression, tenv: TEnv) -> ast.Type:
    """The type a declaration binds in a body that `check_program` already accepted.

    Function literals in such a body have been validated, so they are not checked again.
    """
    match exp:
        case ast.Literal(ast.Function(ret)):
            return ret
        case _:
            return infer_expr(exp, tenv)


def scan_return_type(program: ast.Program, tenv: TEnv, options: Options) -> Optional[ast.Type]:
    """Find the type of the first reachable return statement of a checked function body.

    If and while bodies are only searched with `options.scan_nested_returns`.
    """
    for stmt in program:
        match stmt:
            case ast.Return(exp):
                return infer_expr(exp, tenv)
            case ast.Declare(var, exp):
                tenv = tenv.extend(var, declared_type(exp, tenv))
            case ast.If(_, then, orelse) if options.scan_nested_returns:
                for branch in (then, orelse):
                    ty = scan_return_type(branch, tenv, options)
                    if ty is not None:
                        return ty
            case ast.While(_, body) if options.scan_nested_returns:
                ty = scan_return_type(body, tenv, options)
                if ty is not None:
                    return ty
    return None


def iter_returns(
    program: ast.Program, tenv: TEnv, options: Options
) -> Iterator[tuple[ast.Return, ast.Type]]:
    """Yield every return statement that can be reached, with its type."""
    for stmt in program:
        match stmt:
            case ast.Return(exp):
                yield stmt, infer_expr(exp, tenv)
                return
            case ast.Declare(var, exp):
                tenv = tenv.extend(var, declared_type(exp, tenv))
            case ast.If(_, then, orelse):
                yield from iter_returns(then, tenv, options)
                yield from iter_returns(orelse, tenv, options)
            case ast.While(_, body):
                yield from iter_returns(body, tenv, options)


def binding_type(val: ast.Value) -> ast.Type:
    """The type a declaration of `val` binds; functions are known by their return type."""
    match val:
        case ast.Function(ret):
            return ret
        case _:
            return ast.type_of(val)


def tenv_from_env(env: Env[ast.Value]) -> TEnv:
    return Env({var: binding_type(val) for var, val in env.items()})
