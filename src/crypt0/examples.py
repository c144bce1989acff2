"""Sample programs.

The first group runs to completion; of the second group, some are rejected
by the type checker and some fault at runtime.
"""

from crypt0 import abstract_syntax as ast
from crypt0.abstract_syntax import Op
from crypt0.sugar import decrement, for_loop, increment


def lit(x) -> ast.Literal:
    match x:
        case bool():
            return ast.Literal(ast.Boolean(x))
        case int():
            return ast.Literal(ast.Integer(x))
        case float():
            return ast.Literal(ast.Double(x))
        case str():
            return ast.Literal(ast.String(x))
        case ast.Value():
            return ast.Literal(x)
        case _:
            raise NotImplementedError(x)


BIN_OP = [
    ast.Declare("num", lit(23)),
    ast.Declare("num2", lit(24)),
    ast.Declare("Result", ast.BinOp(Op.ADD, ast.Get("num"), ast.Get("num2"))),
    ast.Declare("Result", ast.BinOp(Op.SUB, ast.Get("Result"), ast.Get("num2"))),
    ast.Declare("Result", ast.BinOp(Op.MUL, ast.Get("Result"), ast.Get("num2"))),
    ast.Declare("Result", ast.BinOp(Op.DIV, ast.Get("Result"), ast.Get("num2"))),
]

ADD_STR = [
    ast.Declare("str", lit("asd")),
    ast.Declare("str2", lit("123")),
    ast.Declare("Result", ast.BinOp(Op.ADD, ast.Get("str"), ast.Get("str2"))),
]

SUB_STR = [
    ast.Declare("str", lit("asdqwe")),
    ast.Declare("str2", lit("dq")),
    ast.Declare("Result", ast.BinOp(Op.SUB, ast.Get("str"), ast.Get("str2"))),
]

ITER = [
    ast.Declare("i", lit(0.0)),
    increment("i"),
    increment("i"),
    decrement("i"),
]

FOR = for_loop(
    "i",
    lit(0),
    ast.LessThan(ast.Get("i"), lit(10)),
    ast.BinOp(Op.ADD, ast.Get("i"), lit(1)),
    [ast.Declare("z", lit(0.0))],
)

ADD_THREE = ast.Function(
    ast.IntType(),
    [(ast.IntType(), "x")],
    [ast.Return(ast.BinOp(Op.ADD, ast.Get("x"), lit(3)))],
)

FUN = [
    ast.Declare("fun", lit(ADD_THREE)),
    ast.Declare("result", ast.Call("fun", [lit(5)])),
]

GOOD_PROGRAMS = {
    "bin_op": BIN_OP,
    "add_str": ADD_STR,
    "sub_str": SUB_STR,
    "iter": ITER,
    "for": FOR,
    "fun": FUN,
}


DIV_ZERO = [
    ast.Declare("num", lit(23)),
    ast.Declare("num2", lit(0)),
    ast.Declare("Result", ast.BinOp(Op.DIV, ast.Get("num"), ast.Get("num2"))),
]

NULL_VAR = [ast.Declare("i", ast.Get("null"))]

TYPE_ERR = [
    ast.Declare("int", lit(10)),
    ast.Declare("Bul", lit(True)),
    ast.Declare("result", ast.BinOp(Op.ADD, ast.Get("int"), ast.Get("Bul"))),
]

FUN_TYPE_ERR = [
    ast.Declare(
        "fun",
        lit(
            ast.Function(
                ast.IntType(),
                [(ast.IntType(), "x")],
                [ast.Return(ast.BinOp(Op.ADD, ast.Get("x"), lit(3.0)))],
            )
        ),
    ),
    ast.Declare("result", ast.Call("fun", [lit(5)])),
]

BAD_PROGRAMS = {
    "div_zero": DIV_ZERO,
    "null_var": NULL_VAR,
    "type_err": TYPE_ERR,
    "fun_type_err": FUN_TYPE_ERR,
}
