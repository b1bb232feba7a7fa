"""
Foldout parser: fixed-point parsing of command lines with revealed options.

What this module provides
- Parser: owns the raw tokens, an option Registry and the faults of the
  current pass, and drives the parse:
  • _scan(): one left-to-right pass over tokens[1:] that resolves flags,
    commits values, collects positionals and finally commits the defaults
    of every option the pass did not mention.
  • parse(): repeats _scan() over the full token list until no commit
    reveals new options (a fixed point), bounded by `limit` passes.

Why rescan everything
- An unlocker triggered by a flag late in the input may register an option
  referenced earlier in the input. Only a full rescan from the start resolves
  that earlier reference, so passes never work on a filtered remainder.

Token grammar
    arg      := flag-arg | positional
    flag-arg := "--" long-name [value] | "-" short-alias [value] | "--"
    value    := any token not starting with "-"

- A flag followed by nothing or by another flag receives "true".
- "--" alone is a no-op separator.
- An unknown flag is reported and swallows the next token when that token
  does not look like a flag (its presumed value).

Faults
- Unknown options and rejected typed values are collected per pass; only the
  faults of the final pass are surfaced, so an option that becomes known in a
  later pass is not reported as unknown.
- Exceeding `limit` passes raises RegistrationLoopError.

Quick start
    from foldout import Parser

    parser = Parser(["prog", "--mode", "advanced", "--level", "5"])
    mode = parser.add_option("mode", "basic", alias="m")

    @mode.unlocker
    def reveal(value):
        if value != "advanced":
            return False
        parser.add_option("level", "1", type=int)
        return True

    parser.parse()
    parser["level"].parsed  # 5
"""
import difflib
import sys
from collections.abc import Iterable

from rich.console import Console

from . import render
from .dispatch import attempt, commit
from .faults import *
from .options import Option
from .registry import Registry
from .utils import *


class Parser:
    """
    Command-line parser whose option set may grow while it parses.

    Parameters
    - tokens: Unset | Iterable[str]
      Raw argv-like tokens; tokens[0] is the program path. Defaults to sys.argv.
    - shell: bool
      Print faults to stderr with rich instead of using the warnings module.
    - fancy: bool
      Render faults inside a rich Panel.
    - colorful: bool
      Style rendered faults, usage and values.
    - limit: int
      Maximum number of passes before RegistrationLoopError is raised.
    """

    def __init__(self, tokens=Unset, /, *, shell=False, fancy=False, colorful=True, limit=64):
        if not isinstance(limit, int) or isinstance(limit, bool):
            raise TypeError("Parser() 'limit' must be an integer")
        if limit < 1:
            raise ValueError("Parser() 'limit' must be a positive integer")

        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.limit = limit

        self._tokens = []
        self._args = []
        self._faults = []
        self._passes = 0
        self._registry = Registry(trigger=self.trigger)

        self.set_args(sys.argv if tokens is Unset else tokens)

    registry = property(lambda self: self._registry)
    tokens = property(lambda self: tuple(self._tokens))
    args = property(lambda self: list(self._args))
    passes = property(lambda self: self._passes)

    @property
    def exe(self):
        """
        Program name: the part of tokens[0] after the last '/' or '\\'.
        """
        if not self._tokens:
            return ""
        return self._tokens[0].replace("\\", "/").rpartition("/")[2]

    def set_args(self, tokens, /):
        """
        Append raw tokens to the parser's input.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("set_args() argument must be an iterable of strings")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("set_args() argument must be an iterable of strings")
        self._tokens.extend(tokens)

    def register(self, option, /):
        """
        Register a ready-made Option (see Registry.register).
        """
        return self._registry.register(option)

    def add_option(
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
        Build and register an Option; returns it.

        When `type` is not str, a first validator is installed that rejects
        values the converter cannot handle (ValueError/TypeError) and records
        a RejectedValueWarning for the current pass.
        """
        if type is not str:
            validators = (self._converter(name, type), *validators)
        return self._registry.register(Option(
            name,
            default,
            alias=alias,
            descr=descr,
            choices=choices,
            type=type,
            hidden=hidden,
            validators=validators,
            unlockers=unlockers,
        ))

    def add_documentation(self, text, /):
        """
        Add a free-text line to the usage layout.
        """
        self._registry.document(text)

    def _converter(self, name, type, /):
        @rename("converts")
        def converts(candidate):
            try:
                type(candidate)
            except (TypeError, ValueError) as exception:
                self._faults.append(RejectedValueWarning(
                    "value %r for option '--%s' was rejected: %s" % (candidate, name, exception),
                    title="rejected value",
                    code=FaultCode.REJECTED_VALUE,
                    input=candidate,
                    hint="pass a value accepted by %s; the previous value was kept" % getattr(type, "__name__", repr(type)),
                    docs=getdoc(FaultCode.REJECTED_VALUE),
                ))
                return False
            return True
        return converts

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's shell/fancy/colorful settings.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        trigger(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def _unknown(self, token, index):
        visible = [name for name in self._registry if not self._registry[name].hidden]
        spellings = ["--" + name for name in visible]
        spellings += ["-" + alias for alias, name in self._registry.aliases.items() if name in visible]
        suggestions = difflib.get_close_matches(token, spellings, 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "check the spelling; unknown options and their values are skipped"
        return UnknownOptionWarning(
            "unknown option %r at %s position, skipping" % (token, ordinal(index)),
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            input=token,
            index=index,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        )

    def _scan(self):
        """
        Run one pass over tokens[1:]; return (positionals, needs_reparse).

        phases
        - snapshot: every option registered now starts out unset. Options
          revealed while the pass runs stay unknown until the next pass.
        - scan: positionals are kept in order, "--" is skipped, flags are
          resolved and committed ("true" when no value follows). A flag whose
          value is rejected stays unset.
        - defaults: each option still unset gets its default committed, in
          registration order, looked up by name in the live registry.
        """
        self._faults.clear()

        snapshot = self._registry.snapshot()
        known = frozenset(snapshot)
        unset = dict.fromkeys(snapshot)
        args = []
        needs_reparse = False

        tokens = self._tokens
        index = 1
        while index < len(tokens):
            token = tokens[index]
            following = tokens[index + 1] if index + 1 < len(tokens) else None

            if not token.startswith("-"):
                args.append(token)
                index += 1
                continue

            if token == "--":
                index += 1
                continue

            option = self._registry.resolve(token)
            if option is None or option.name not in known:
                self._faults.append(self._unknown(token, index))
                # skip the presumed value as well, unless it is itself a flag
                index += 2 if following is not None and not following.startswith("-") else 1
                continue

            if following is None or following.startswith("-"):
                value, index = "true", index + 1
            else:
                value, index = following, index + 2

            accepted, unlocked = attempt(option, value)
            needs_reparse |= unlocked
            if accepted:
                unset.pop(option.name, None)

        for name in unset:
            if (option := self._registry.get(name)) is not None:
                needs_reparse |= commit(option, option.default)

        return args, needs_reparse

    def parse(self):
        """
        Parse the tokens until a fixed point; return the positional arguments.

        Each pass starts from a fresh positional list, so the result holds the
        positionals of the final pass only.

        Raises
        - RegistrationLoopError: when `limit` passes did not reach a fixed point.
        """
        self._passes = 0
        self._args = []
        if not self._tokens:
            return []

        needs_reparse = True
        while needs_reparse:
            if self._passes == self.limit:
                self.trigger(RegistrationLoopError(
                    "options kept being revealed after %d passes" % self.limit,
                    title="registration loop",
                    code=FaultCode.REGISTRATION_LOOP,
                    passes=self._passes,
                    hint="make sure every unlocker eventually returns True only once "
                         "and does not reveal options forever (or raise 'limit')",
                    docs=getdoc(FaultCode.REGISTRATION_LOOP),
                ))
            self._passes += 1
            self._args, needs_reparse = self._scan()

        for fault in self._faults:
            self.trigger(fault)
        self._faults.clear()

        return list(self._args)

    def num_args(self):
        return len(self._args)

    def get_arg(self, index, /):
        return self._args[index]

    def has_option(self, name, /):
        return name in self._registry

    def get_option(self, name, /):
        return self._registry[name]

    def __getitem__(self, name):
        return self._registry[name]

    def __contains__(self, name):
        return name in self._registry

    def print_usage(self, file=None):
        """
        Print the usage listing (see foldout.render.usage).
        """
        Console(file=file, highlight=False).print(render.usage(self, colorful=self.colorful))

    def print_values(self, file=None):
        """
        Print the current-values dump (see foldout.render.values).
        """
        Console(file=file, highlight=False).print(render.values(self, colorful=self.colorful))

    def __repr__(self):
        return "parser(exe=%r, options=%d, args=%r)" % (self.exe, len(self._registry), self._args)


__all__ = (
    "Parser",
)
