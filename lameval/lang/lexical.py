"""Top-level statements of the lameval language, a shallow wrapper around pure lambda calculus.

```
<assignment> ::= <name> "=" <λ-term>   ; value is reduced before it is bound, overwrites previous bindings
<exec_stmt>  ::= <λ-term>              ; reduced and outputted when the session runs
```

Assignments are statements, not λ-terms: they can only appear at the top level, so substitution and reduction never
meet one. A namespace (dict of name: normalized λ-term) is threaded through inline and execute.
"""

from abc import ABC, abstractmethod

from lameval.lang.error import GenericException
from lameval.pure.lexical import Application, Variable, fresh_name, punctuate


def inline(term, namespace):
    """Returns term with every free name found in namespace replaced by its value. namespace is left untouched.

    Names are first swapped for unused placeholders, so that free names inside an inlined value are not replaced by a
    later substitution.
    """
    names = sorted(term.free_vars() & namespace.keys())
    avoid = term.all_vars().union(*(namespace[name].free_vars() for name in names))

    placeholders = {}
    for name in names:
        placeholders[name] = fresh_name(name, avoid)
        avoid.add(placeholders[name])
        term = term.sub(name, Variable(placeholders[name]))

    for name in names:
        term = term.sub(placeholders[name], namespace[name])
    return term


def check_function(term):
    """An application left at the top of a normal form has a name in function position, which cannot be applied."""
    if isinstance(term, Application):
        raise GenericException("expected a function, found '{}' in '{}'", (str(term.head), str(term)), diagnosis=False)
    return term


class Statement(ABC):
    """Superclass for top-level statements."""

    def __init__(self, term):
        self.term = term

    @abstractmethod
    def inline(self, namespace):
        """Returns a copy of this statement whose term has names from namespace resolved."""

    @abstractmethod
    def execute(self, namespace, reducer, error_handler=None):
        """Inlines, reduces and returns the resulting λ-term. May update namespace."""

    @abstractmethod
    def render(self, color=False):
        """Canonical concrete syntax."""

    def __str__(self):
        return self.render()

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self).__name__, *vars(self).values()))


class ExecStmt(Statement):
    """A bare λ-term. Running it is equivalent to beta-reducing it."""

    def inline(self, namespace):
        return ExecStmt(inline(self.term, namespace))

    def execute(self, namespace, reducer, error_handler=None):
        term = reducer.normalize(inline(self.term, namespace), error_handler)
        return check_function(term)

    def render(self, color=False):
        return self.term.render(color)

    def __repr__(self):
        return f"ExecStmt({self.term!r})"


class Assignment(Statement):
    """Assignments bind the normal form of term to name: <name> = <λ-term>."""

    def __init__(self, name, term):
        super().__init__(term)
        self.name = name

    def inline(self, namespace):
        return Assignment(self.name, inline(self.term, namespace))

    def execute(self, namespace, reducer, error_handler=None):
        term = check_function(reducer.normalize(inline(self.term, namespace), error_handler))
        namespace[self.name] = term
        return term

    def render(self, color=False):
        value = self.term.render(color, top=False)
        return f"{self.name}{punctuate(' = ', color)}{value}{punctuate(';', color)}"

    def __repr__(self):
        return f"Assignment(name={self.name!r}, term={self.term!r})"
