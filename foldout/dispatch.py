"""
Value commit dispatcher.

commit(option, candidate) is the only code path that changes Option.value:

1. the candidate is installed provisionally;
2. every validator runs in order; the first rejection restores the previous
   value and the commit stops (no unlocker runs);
3. otherwise every unlocker runs with the committed value; those returning
   True are consumed and mark the commit as having revealed new options.

The return value tells the pass executor whether another pass is needed.
attempt() performs the same commit and also reports whether the candidate
was accepted, which a rolled-back value cannot tell by itself.
"""
from typing import NamedTuple

from .options import Option


class Outcome(NamedTuple):
    accepted: bool
    unlocked: bool


def attempt(option, candidate, /):
    """
    Apply `candidate` to `option`; return Outcome(accepted, unlocked).

    Raises
    - TypeError: when option is not an Option or candidate is not a string.
    """
    if not isinstance(option, Option):
        raise TypeError("attempt() first argument must be an option")
    if not isinstance(candidate, str):
        raise TypeError("attempt() second argument must be a string")

    previous = option._value
    option._value = candidate

    for validator in tuple(option._validators):
        if not validator(candidate):
            option._value = previous
            return Outcome(False, False)

    unlocked = False
    # Unlockers may register options (and add unlockers) while we iterate.
    for unlocker in tuple(option._unlockers):
        if unlocker(option._value):
            unlocked = True
            option._unlockers.remove(unlocker)
    return Outcome(True, unlocked)


def commit(option, candidate, /):
    """
    Apply `candidate` to `option`; return True when an unlocker revealed new options.

    Raises
    - TypeError: when option is not an Option or candidate is not a string.
    """
    if not isinstance(option, Option):
        raise TypeError("commit() first argument must be an option")
    if not isinstance(candidate, str):
        raise TypeError("commit() second argument must be a string")
    return attempt(option, candidate).unlocked


__all__ = (
    "Outcome",
    "attempt",
    "commit",
)
