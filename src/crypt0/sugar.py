from crypt0 import abstract_syntax as ast


def for_loop(
    var: str, init: ast.Expression, cond: ast.Expression, step: ast.Expression, body: ast.Program
) -> ast.Program:
    """for (var = init; cond; var = step) { body }

    The step is applied at the top of each iteration, before the body runs.
    """
    return [
        ast.Declare(var, init),
        ast.While(cond, [ast.Declare(var, step), *body]),
    ]


def increment(var: str) -> ast.Statement:
    return ast.Declare(var, ast.BinOp(ast.Op.ADD, ast.Get(var), ast.Literal(ast.Integer(1))))


def decrement(var: str) -> ast.Statement:
    return ast.Declare(var, ast.BinOp(ast.Op.SUB, ast.Get(var), ast.Literal(ast.Integer(1))))
