from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from douro.errors import UnboundNameError


class Environment:
    """Variable bindings: a global scope plus one scope per active function call.

    Lookups see the innermost scope and then the global scope, never the
    scope of a calling function. Definitions always go to the innermost
    scope.
    """
    def __init__(self):
        self.scopes: List[Dict[str, Any]] = [{}]

    @property
    def globals(self) -> Mapping[str, Any]:
        return MappingProxyType(self.scopes[0])

    @property
    def depth(self) -> int:
        """Number of active call scopes."""
        return len(self.scopes) - 1

    def lookup(self, name: str, line=None, column=None) -> Any:
        if name in self.scopes[-1]:
            return self.scopes[-1][name]
        if name in self.scopes[0]:
            return self.scopes[0][name]
        raise UnboundNameError(f'undefined variable {name}', line, column)

    def define(self, name: str, value: Any):
        self.scopes[-1][name] = value

    def push_scope(self):
        self.scopes.append({})

    def pop_scope(self):
        if len(self.scopes) == 1:
            raise RuntimeError('cannot pop the global scope')
        self.scopes.pop()

    @contextmanager
    def scope(self):
        self.push_scope()
        try:
            yield self
        finally:
            self.pop_scope()

    def __contains__(self, name: str) -> bool:
        return name in self.scopes[-1] or name in self.scopes[0]
