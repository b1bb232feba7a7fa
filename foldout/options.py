r"""
Foldout option definitions.

Overview
- Option: a named, string-valued parameter with an optional short alias, a
  default, a current value and two callback lists:
  • validators: run on every commit attempt; any rejection rolls the value back.
  • unlockers: run after a successful commit; an unlocker that returns True
    has revealed new options and is consumed (it never runs again).

- OptionType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields declared in __introspectable__ as read-only properties (see mirror()).

Metadata (sanitized on construction)
- name: long name without dashes, matching r"[^\W\d]\w*(-\w+)*".
- alias: Unset | short name without the leading dash (no whitespace, no dash prefix).
- default: canonical string used when the option is not given on the command line.
- descr: Unset | str (short help), non-empty when provided.
- choices: Iterable[str] shown in usage; duplicates rejected.
- type: Callable used by Option.parsed to convert the canonical string.
- hidden: bool (registered and parsed, but left out of the documentation entries).

Quick example:
    >>> mode = Option("mode", "basic", alias="m", choices=("basic", "advanced"))
    >>> @mode.unlocker
    ... def reveal(value):
    ...     if value != "advanced":
    ...         return False
    ...     parser.add_option("level", "1")
    ...     return True
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable, Set

from rich.text import Text

from .utils import *


class OptionType(type):
    """
    Metaclass that makes option definitions introspectable.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - option(name='mode', alias='m', default='basic', value=None, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate option metadata in place.

    Raises
    - TypeError: wrong types (non-string name/alias/default/descr, non-callable
      type or callbacks, non-iterable choices).
    - ValueError: malformed name or alias, empty descr, duplicate choices.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"[^\W\d]\w*(-\w+)*", name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid long option name without dashes (unicodes are allowed)")
    metadata["name"] = name

    if not isinstance(alias := metadata["alias"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'alias' must be a string")
    elif isinstance(alias, str) and not re.fullmatch(r"[^\s-]\S*", alias):
        raise ValueError(f"{cls.__typename__} 'alias' must be a non-empty short name without a leading dash")
    metadata["alias"] = coalesce(alias)

    if not isinstance(metadata["default"], str):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    sanitized = []
    for choice in sorted(choices) if isinstance(choices, Set) else choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
        if choice in sanitized:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    metadata["choices"] = tuple(sanitized)

    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    for field in ("validators", "unlockers"):
        callbacks = list(metadata[field])
        if not all(map(callable, callbacks)):
            raise TypeError(f"{cls.__typename__} {field!r} must contain callables")
        metadata[field] = callbacks


class Option(metaclass=OptionType):
    """
    Named, string-valued option with validation and unlock callbacks.

    The canonical value is always a string (or None while unset); `parsed`
    applies the option's converter on demand. The value is only ever changed
    through foldout.dispatch.commit().
    """

    __introspectable__ = (
        "name",
        "alias",
        "default",
        "descr",
        "choices",
        "type",
        "hidden",
        "value",
        "validators",
        "unlockers",
    )

    __displayable__ = (
        "name",
        "alias",
        "default",
        "value",
        "descr",
        "choices",
        "hidden",
    )

    def __init__(
            self,
            name,
            default="",
            /,
            *,
            alias=Unset,
            descr=Unset,
            choices=(),
            type=str,
            hidden=False,
            validators=(),
            unlockers=(),
    ):
        """
        Construct an Option with the provided metadata.

        Parameters
        - name: str
          Canonical long name, referenced on the command line as --name.
        - default: str
          Canonical default committed when the option is absent from a pass.
        - alias: Unset | str
          Short name, referenced on the command line as -alias.
        - descr: Unset | str
          Short description for usage output. If Unset, becomes None.
        - choices: Iterable[str]
          Values listed in usage output. Not enforced; add a validator for that.
        - type: Callable[[str], Any]
          Converter applied by `parsed`.
        - hidden: bool
          Leave the option out of usage output.
        - validators / unlockers: Iterable[Callable[[str], bool]]
          Initial callback lists (more can be added with the decorators).
        """
        metadata = {
            "name": name,
            "alias": alias,
            "default": default,
            "descr": descr,
            "choices": choices,
            "type": type,
            "hidden": bool(hidden),
            "validators": validators,
            "unlockers": unlockers,
        }
        _sanitize_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._value = None

    @property
    def parsed(self):
        """
        The current value (or the default while unset) run through the option's converter.
        """
        return self._type(self._default if self._value is None else self._value)

    def validator(self, callback, /):
        """
        Append a validator (decorator-friendly); validators run on every commit.
        """
        if not callable(callback):
            raise TypeError("@validator must be applied to a callable")
        self._validators.append(callback)
        return callback

    def unlocker(self, callback, /):
        """
        Append an unlocker (decorator-friendly); it is dropped after its first True.
        """
        if not callable(callback):
            raise TypeError("@unlocker must be applied to a callable")
        self._unlockers.append(callback)
        return callback

    @property
    def spelling(self):
        """
        Usage form of the option: "--name (-x) [default]".
        """
        if self._alias is None:
            return "--%s [%s]" % (self._name, self._default)
        return "--%s (-%s) [%s]" % (self._name, self._alias, self._default)


__all__ = (
    "Option",
)

del OptionType
