from __future__ import annotations

import abc
import dataclasses
import enum
from typing import TypeAlias


class Type(abc.ABC):
    def __str__(self):
        return self.__class__.__name__.removesuffix("Type")


@dataclasses.dataclass(frozen=True)
class IntType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class DoubleType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class BoolType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class StringType(Type):
    pass


@dataclasses.dataclass(frozen=True)
class FunctionType(Type):
    pass


class Value(abc.ABC):
    pass


@dataclasses.dataclass(frozen=True)
class Integer(Value):
    val: int


@dataclasses.dataclass(frozen=True)
class Double(Value):
    val: float


@dataclasses.dataclass(frozen=True)
class Boolean(Value):
    val: bool


@dataclasses.dataclass(frozen=True)
class String(Value):
    val: str


@dataclasses.dataclass(frozen=True)
class Function(Value):
    ret: Type
    params: list[tuple[Type, str]]
    body: Program


def type_of(value: Value) -> Type:
    match value:
        case Integer():
            return IntType()
        case Double():
            return DoubleType()
        case Boolean():
            return BoolType()
        case String():
            return StringType()
        case Function():
            return FunctionType()
        case _:
            raise NotImplementedError(value)


class Op(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class Expression(abc.ABC):
    pass


@dataclasses.dataclass(frozen=True)
class Literal(Expression):
    val: Value


@dataclasses.dataclass(frozen=True)
class Get(Expression):
    var: str


@dataclasses.dataclass(frozen=True)
class BinOp(Expression):
    op: Op
    lhs: Expression
    rhs: Expression


@dataclasses.dataclass(frozen=True)
class LessThan(Expression):
    lhs: Expression
    rhs: Expression


@dataclasses.dataclass(frozen=True)
class GreaterThan(Expression):
    lhs: Expression
    rhs: Expression


@dataclasses.dataclass(frozen=True)
class Equals(Expression):
    lhs: Expression
    rhs: Expression


@dataclasses.dataclass(frozen=True)
class Call(Expression):
    name: str
    args: list[Expression]


class Statement(abc.ABC):
    pass


@dataclasses.dataclass(frozen=True)
class Declare(Statement):
    var: str
    exp: Expression


@dataclasses.dataclass(frozen=True)
class If(Statement):
    cond: Expression
    then: Program
    orelse: Program


@dataclasses.dataclass(frozen=True)
class While(Statement):
    cond: Expression
    body: Program


@dataclasses.dataclass(frozen=True)
class Return(Statement):
    exp: Expression


Program: TypeAlias = list[Statement]
