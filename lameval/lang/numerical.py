"""Natural numbers encoded as Church numerals. Note that arithmetic is not implemented here: numerals are plain
λ-terms, so + and * are ordinary definitions in a session.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lameval.lang.error import GenericException
from lameval.pure.lexical import Abstraction, Application, Variable


def cnumber(num):
    """Returns λf.λx.f (f (... x)) for num (cnum = Church numeral)."""
    try:
        assert not isinstance(num, (float, bool))
        num = int(num)
        assert num >= 0
    except (AssertionError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Variable("x")
    for _ in range(num):
        body = Application(Variable("f"), body)
    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns the int that cnum encodes. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    f, x, nth_body = cnum.param, cnum.body.param, cnum.body.body
    if f == x:
        return None

    num = 0
    while isinstance(nth_body, Application):
        if nth_body.function != Variable(f):
            return None
        nth_body = nth_body.argument
        num += 1

    return num if nth_body == Variable(x) else None


def numberify(term):
    """Returns term with every Church numeral subterm replaced by a Variable named after its number."""
    num = number(term)
    if num is not None:
        return Variable(str(num))

    if isinstance(term, Abstraction):
        return Abstraction(term.param, numberify(term.body))
    elif isinstance(term, Application):
        return Application(numberify(term.function), numberify(term.argument))
    return term
