from __future__ import annotations

import dataclasses
import logging
from typing import Optional, TypeAlias

from crypt0 import abstract_syntax as ast, interpreter, type_checker
from crypt0.environment import empty_env
from crypt0.interpreter import State
from crypt0.options import Options

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclasses.dataclass
class Ok:
    env: State


@dataclasses.dataclass
class Err:
    message: str


Result: TypeAlias = Ok | Err


def run(program: ast.Program, env: Optional[State] = None, options: Optional[Options] = None) -> Result:
    """Type check a program and, if it is well typed, run it.

    A program rejected by the type checker yields `Err` and is not run at
    all. Runtime faults are not caught here; they propagate to the caller
    as `interpreter.RuntimeFault` exceptions.
    """
    env = empty_env() if env is None else env
    options = options or Options.default()

    logger.debug("checking program of %d statements", len(program))
    message = type_checker.type_check(program, type_checker.tenv_from_env(env), options)
    if message is not None:
        logger.debug("program rejected: %s", message)
        return Err(message)

    return Ok(interpreter.drive(program, env, options))


class Context:
    """Global state that is carried across several programs."""

    def __init__(self, env: Optional[State] = None, options: Optional[Options] = None):
        self.env = empty_env() if env is None else env
        self.options = options or Options.default()

    def define(self, name: str, val: ast.Value):
        self.env = self.env.extend(name, val)

    def lookup(self, name: str) -> ast.Value:
        return self.env.lookup(name)

    def run(self, program: ast.Program) -> Context:
        tenv = type_checker.tenv_from_env(self.env)
        type_checker.check_program(program, tenv, self.options)
        env = interpreter.drive(program, self.env, self.options)
        return Context(env, self.options)
