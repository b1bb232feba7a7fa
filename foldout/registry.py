"""
Option registry: known options, short aliases, and documentation entries.

The registry is a plain insertion-ordered table keyed by canonical long name.
It never deletes options: re-registering a name replaces the previous Option
(value and callbacks included) in place, keeping its position. Its
documentation entry follows the new option: added when it becomes visible,
dropped when it becomes hidden. Short aliases map to canonical names; the
last registration of an alias wins and a collision is surfaced as an
AliasCollisionWarning.
"""
from types import MappingProxyType
from typing import NamedTuple, Literal

from . import faults
from .faults import AliasCollisionWarning, FaultCode, getdoc
from .options import Option
from .utils import *


class Entry(NamedTuple):
    """
    One line of the usage layout: a reference to an option by name, or free text.
    """
    kind: Literal["option", "text"]
    text: str


class Registry:
    """
    Owns the option table, the alias table and the ordered documentation entries.

    Faults raised while registering go through `trigger`, which defaults to
    foldout.faults.trigger; the parser passes its own bound trigger so that
    shell/fancy/colorful settings apply.
    """

    def __init__(self, *, trigger=Unset):
        self._options = {}
        self._aliases = {}
        self._entries = []
        self._trigger = coalesce(trigger, faults.trigger)

    aliases = property(lambda self: MappingProxyType(self._aliases))
    entries = property(lambda self: tuple(self._entries))

    def register(self, option, /):
        """
        Insert or replace `option` under its name and update the alias table.

        Returns the option, so unlock callbacks can register and keep a handle
        in one expression.
        """
        if not isinstance(option, Option):
            raise TypeError("register() argument must be an option")

        entry = Entry("option", option.name)
        if option.hidden:
            if entry in self._entries:
                self._entries.remove(entry)
        elif entry not in self._entries:
            self._entries.append(entry)
        self._options[option.name] = option

        if option.alias is not None:
            owner = self._aliases.get(option.alias)
            if owner is not None and owner != option.name:
                self._trigger(AliasCollisionWarning(
                    "short alias '-%s' moved from %r to %r" % (option.alias, owner, option.name),
                    title="alias collision",
                    code=FaultCode.ALIAS_COLLISION,
                    input=option.alias,
                    hint="'-%s' now resolves to '--%s'; pick another alias to keep both reachable" % (
                        option.alias, option.name
                    ),
                    docs=getdoc(FaultCode.ALIAS_COLLISION),
                ))
            self._aliases[option.alias] = option.name
        return option

    def document(self, text, /):
        """
        Append a free-text line to the documentation entries.
        """
        if not isinstance(text, str):
            raise TypeError("document() argument must be a string")
        self._entries.append(Entry("text", text))

    def resolve(self, token, /):
        """
        Map a raw flag token to its Option, or None when nothing matches.

        - "--name": looked up by long name.
        - "-x": looked up through the alias table.
        """
        if token.startswith("--"):
            return self._options.get(token[2:])
        if token.startswith("-"):
            try:
                return self._options[self._aliases[token[1:]]]
            except KeyError:
                return None
        return None

    def snapshot(self):
        """
        Names registered right now, in registration order.

        Taken before a pass starts; options registered while the pass runs are
        not part of it.
        """
        return tuple(self._options)

    def get(self, name, default=None, /):
        return self._options.get(name, default)

    def __getitem__(self, name):
        return self._options[name]

    def __contains__(self, name):
        return name in self._options

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._options))


__all__ = (
    "Entry",
    "Registry",
)
