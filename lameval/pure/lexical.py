"""Pure lambda calculus terms, substitution and normal-order beta reduction.

The `pure` directory contains pure lambda calculus only- assignments and the environment live in `lang`.

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <var>                      ; "variable"
                                        ; - identifier, may contain digits, '_' and the prime marker "'"
           | "λ" <var> "." <λ-term>     ; "abstraction"
                                        ; - abstraction bodies are greedy: λx.x y = λx.(x y) != (λx.x) (y)
           | <λ-term> <λ-term>          ; "application"
                                        ; - associating by left: a b c d = (((a b) c) d)
```

Terms are immutable: every operation below builds and returns a new tree. Bound variables keep their names, so
substitution renames a binder (by appending primes) whenever it would capture a free variable of the substituted term.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from termcolor import colored

from lameval.lang.error import GenericException


MARKER = "'"


def fresh_name(name, avoid):
    """Returns name with enough primes appended that it is not in avoid."""
    new_name = name + MARKER
    while new_name in avoid:
        new_name += MARKER
    return new_name


def punctuate(text, color):
    """Punctuation is dark grey when colored."""
    return colored(text, "dark_grey") if color else text


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application. Every traversal is abstract, so a new variant
    cannot be instantiated until it implements all of them.
    """

    @abstractmethod
    def free_vars(self):
        """Returns the set of variable names that are not bound by an enclosing abstraction."""

    @abstractmethod
    def all_vars(self):
        """Returns the set of every name in this term, whether referenced or bound."""

    @abstractmethod
    def rename(self, old, new):
        """Replaces every occurrence of old (as a reference or as a binder) with new. This does not look at scope:
        only call it on a body whose binder is being renamed to a name that does not occur in it.
        """

    @abstractmethod
    def sub(self, var, value):
        """Capture-avoiding substitution of value for every free occurrence of var."""

    @abstractmethod
    def beta_step(self):
        """Performs one leftmost-outermost step. Returns (new term, whether a redex was contracted)."""

    @abstractmethod
    def alpha_equals(self, other, mapping=None, other_mapping=None):
        """Whether or not two LambdaTerms are equal up to renaming of bound variables. mapping maps bound names of self
        to bound names of other, other_mapping is the reverse.
        """

    @abstractmethod
    def render(self, color=False, top=True):
        """Canonical concrete syntax. top is only True for the outermost call."""

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """A symbolic reference to a bound parameter or to a free name."""
    name: str

    def free_vars(self):
        return {self.name}

    def all_vars(self):
        return {self.name}

    def rename(self, old, new):
        if self.name == old:
            return Variable(new)
        return self

    def sub(self, var, value):
        if self.name == var:
            return value
        return self

    def beta_step(self):
        return self, False

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Variable):
            return False

        if self.name in mapping or other.name in other_mapping:
            return mapping.get(self.name) == other.name and other_mapping.get(other.name) == self.name
        return self.name == other.name  # both free

    def render(self, color=False, top=True):
        return self.name


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Abstraction: the basic datatype in lambda calculus. param is bound within body."""
    param: str
    body: LambdaTerm

    def free_vars(self):
        return self.body.free_vars() - {self.param}

    def all_vars(self):
        return self.body.all_vars() | {self.param}

    def rename(self, old, new):
        param = new if self.param == old else self.param
        return Abstraction(param, self.body.rename(old, new))

    def sub(self, var, value):
        if self.param == var or var not in self.body.free_vars():
            return self  # var is shadowed or absent

        if self.param in value.free_vars():
            new_param = fresh_name(self.param, value.free_vars() | self.body.all_vars())
            body = self.body.rename(self.param, new_param)
            return Abstraction(new_param, body.sub(var, value))

        return Abstraction(self.param, self.body.sub(var, value))

    def beta_step(self):
        body, reduced = self.body.beta_step()
        return Abstraction(self.param, body), reduced

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if not isinstance(other, Abstraction):
            return False

        # copies, so that the binding only holds inside this body
        mapping = {**(mapping or {}), self.param: other.param}
        other_mapping = {**(other_mapping or {}), other.param: self.param}

        return self.body.alpha_equals(other.body, mapping, other_mapping)

    def render(self, color=False, top=True):
        body = self.body.render(color, top=False)
        if isinstance(self.body, Application):
            body = punctuate("(", color) + body + punctuate(")", color)

        lam = colored("λ", "yellow") if color else "λ"
        return f"{lam}{self.param}{punctuate('.', color)}{body}"


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of function to argument."""
    function: LambdaTerm
    argument: LambdaTerm

    def free_vars(self):
        return self.function.free_vars() | self.argument.free_vars()

    def all_vars(self):
        return self.function.all_vars() | self.argument.all_vars()

    def rename(self, old, new):
        return Application(self.function.rename(old, new), self.argument.rename(old, new))

    def sub(self, var, value):
        return Application(self.function.sub(var, value), self.argument.sub(var, value))

    def beta_step(self):
        if isinstance(self.function, Abstraction):
            return self.function.body.sub(self.function.param, self.argument), True

        function, function_reduced = self.function.beta_step()
        argument, argument_reduced = self.argument.beta_step()
        return Application(function, argument), function_reduced or argument_reduced

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if not isinstance(other, Application):
            return False

        return (self.function.alpha_equals(other.function, mapping, other_mapping)
                and self.argument.alpha_equals(other.argument, mapping, other_mapping))

    def render(self, color=False, top=True):
        parts = []
        for node in (self.function, self.argument):
            if isinstance(node, Variable):
                parts.append(node.render(color, top=False))
            else:
                parts.append(punctuate("(", color) + node.render(color, top=False) + punctuate(")", color))

        expr = " ".join(parts)
        if top:
            return punctuate("(", color) + expr + punctuate(")", color)
        return expr

    @property
    def head(self):
        """Leftmost term of the application spine."""
        node = self
        while isinstance(node, Application):
            node = node.function
        return node


class NormalOrderReducer:
    """Drives beta reduction to a normal form. Reduction is unbounded unless max_steps is given: a term without a
    normal form (ex: (λx.x x) λx.x x) keeps the reducer busy forever.
    """

    def __init__(self, max_steps=None):
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")
        self.max_steps = max_steps
        self.steps = 0

    def normalize(self, term, error_handler=None):
        """Applies beta_step until no redex is contracted. error_handler, if given, gets every step registered."""
        self.steps = 0

        while True:
            reduced_term, reduced = term.beta_step()
            if not reduced:
                return term

            self.steps += 1
            if self.max_steps is not None and self.steps > self.max_steps:
                msg = "no beta-normal form found for '{}' within " + str(self.max_steps) + " steps"
                raise GenericException(msg, str(term), diagnosis=False)

            term = reduced_term
            if error_handler is not None:
                error_handler.register_step("β", term)
