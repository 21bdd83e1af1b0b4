# file eulquery\exceptions.py
#
#   Copyright 2010 Emory University General Library
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Exceptions raised while compiling and evaluating queries.

Callers only ever see two kinds of failure from a compiled query:
:class:`InvalidExpression` when an expression can not be compiled, and
:class:`EvaluationFailed` when it can not be evaluated against a context.
Both keep the original engine failure as their :attr:`~ExpressionError.cause`.
"""

from contextlib import contextmanager

__all__ = [
    'QueryException', 'ExpressionError', 'InvalidExpression',
    'EvaluationFailed', 'UnresolvableVariable',
    'compile_failures', 'evaluation_failures',
]


class QueryException(Exception):
    """A handy wrapper for errors that need to be re-raised by a higher
    level without losing the original diagnostic.

    When a ``root_cause`` is given, the reported :attr:`message` is the
    message of the root cause rather than the one passed in. The message
    is worked out every time it is asked for.
    """

    default_message = 'Error occurred while processing a query.'

    def __init__(self, message=None, root_cause=None):
        if message is None:
            message = self.default_message
        super(QueryException, self).__init__(message)
        self._message = message
        self.root_cause = root_cause
        if root_cause is not None:
            self.__cause__ = root_cause

    @property
    def message(self):
        if self.root_cause is not None:
            return str(self.root_cause)
        return self._message

    def __str__(self):
        return self.message


class ExpressionError(Exception):
    "Base class for failures compiling or evaluating an expression."

    def __init__(self, message, cause=None):
        super(ExpressionError, self).__init__(message)
        self.__cause__ = cause

    @property
    def cause(self):
        "The original failure reported by the engine or a resolver."
        return self.__cause__


class InvalidExpression(ExpressionError, ValueError):
    "The expression text could not be compiled."

    def __init__(self, expression, cause=None):
        super(InvalidExpression, self).__init__(
            "Unable to compile '%s'. See cause." % expression, cause)
        self.expression = expression


class EvaluationFailed(ExpressionError, RuntimeError):
    "A compiled expression could not be evaluated against a context."

    def __init__(self, message='Unable to evaluate expression. See cause.', cause=None):
        super(EvaluationFailed, self).__init__(message, cause)


class UnresolvableVariable(LookupError):
    """Raised by variable resolution when no value is bound for a variable.

    Never reaches callers directly; evaluation wraps it in
    :class:`EvaluationFailed`.
    """

    def __init__(self, namespace_uri, local_name):
        super(UnresolvableVariable, self).__init__(
            "Unable to resolve variable %s in namespace '%s' to a value." %
            (local_name, namespace_uri))
        self.namespace_uri = namespace_uri
        self.local_name = local_name


@contextmanager
def compile_failures(expression, *kinds):
    "Re-raise any of ``kinds`` raised in the block as :class:`InvalidExpression`."
    try:
        yield
    except kinds as e:
        raise InvalidExpression(expression, e) from e


@contextmanager
def evaluation_failures(expression, *kinds):
    "Re-raise any of ``kinds`` raised in the block as :class:`EvaluationFailed`."
    try:
        yield
    except kinds as e:
        raise EvaluationFailed("Unable to evaluate '%s'. See cause." % expression, e) from e
