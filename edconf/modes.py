#!/usr/bin/env python3
"""Named minor modes.

A minor mode is a composable feature switched on or off with a numeric
flag. Rules in the auto-mode table hold a mode's bound ``enable`` method,
so modes are looked up by name once, when configuration is read.

Example:
    >>> modes = ModeRegistry()
    >>> modes.define("whitespace", on_enable=show_whitespace)
    >>> table.add(r"\\.txt$", modes.action("whitespace"))
"""

from typing import Callable, Dict, List, Optional, Union

from edconf.core.constants import ErrorCode, ModeAction
from edconf.core.validators import validate_mode_name

Hook = Callable[["MinorMode"], object]


class UnknownModeError(KeyError):
    """Raised when a mode name is not defined."""

    def __init__(self, name: str):
        self.name = name
        self.error_code = ErrorCode.NOT_FOUND
        super().__init__(f"Unknown minor mode: {name}")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateModeError(ValueError):
    """Raised when a mode name is defined twice."""

    def __init__(self, name: str):
        self.name = name
        self.error_code = ErrorCode.CONFLICT
        super().__init__(f"Minor mode already defined: {name}")


class MinorMode:
    """A single toggleable mode.

    ``enable(flag)`` turns the mode on for a positive flag (or None) and off
    for zero, negative or False. Enabling an enabled mode, or disabling a
    disabled one, runs no hooks.
    """

    def __init__(self, name: str, on_enable: Optional[Hook] = None, on_disable: Optional[Hook] = None):
        self.name = name
        self.active = False
        self.activations = 0
        self._on_enable = on_enable
        self._on_disable = on_disable

    def enable(self, flag: Union[int, bool, None] = 1) -> bool:
        """Switch the mode according to flag.

        Returns:
            The mode's state after the call
        """
        turn_on = flag is None or (flag is not False and flag > 0)
        if turn_on and not self.active:
            self.active = True
            self.activations += 1
            if self._on_enable:
                self._on_enable(self)
        elif not turn_on and self.active:
            self.active = False
            if self._on_disable:
                self._on_disable(self)
        return self.active

    def disable(self) -> bool:
        """Shorthand for ``enable(0)``."""
        return self.enable(0)

    def __repr__(self) -> str:
        state = "on" if self.active else "off"
        return f"MinorMode({self.name!r}, {state})"


class ModeRegistry:
    """Registry of minor modes by name."""

    def __init__(self) -> None:
        self._modes: Dict[str, MinorMode] = {}

    def define(
        self,
        name: str,
        on_enable: Optional[Hook] = None,
        on_disable: Optional[Hook] = None,
    ) -> MinorMode:
        """Create and register a mode.

        Raises:
            ValidationError: If name is not a valid mode name
            DuplicateModeError: If a mode with this name already exists
        """
        validate_mode_name(name)
        if name in self._modes:
            raise DuplicateModeError(name)
        mode = MinorMode(name, on_enable=on_enable, on_disable=on_disable)
        self._modes[name] = mode
        return mode

    def get(self, name: str) -> MinorMode:
        """Look up a mode.

        Raises:
            UnknownModeError: If name is not defined
        """
        try:
            return self._modes[name]
        except KeyError:
            raise UnknownModeError(name) from None

    def action(self, name: str) -> ModeAction:
        """Return the bound enable method of a mode, for use in rules."""
        return self.get(name).enable

    def active_modes(self) -> List[str]:
        """Names of enabled modes, in definition order."""
        return [name for name, mode in self._modes.items() if mode.active]

    def names(self) -> List[str]:
        return list(self._modes)

    def __contains__(self, name: object) -> bool:
        return name in self._modes

    def __len__(self) -> int:
        return len(self._modes)
