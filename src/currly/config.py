import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TIMEOUT = 5.0

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class NamedValueFromEnvironment:
    """A setting that is either given explicitly or read from an environment
    variable. The name reported in error messages is the one the value came
    from."""

    _envvar: str
    _name: str
    _value: Optional[str]
    _from_envvar: bool

    def __init__(self, envvar: str, name: str, value: Optional[str] = None):
        self._envvar = envvar
        self._name = name
        if value is None:
            self._value = os.environ.get(envvar) or None
            self._from_envvar = True
        else:
            self._value = value
            self._from_envvar = False

    @property
    def name(self) -> str:
        return self._envvar if self._from_envvar else self._name

    @property
    def value(self) -> Optional[str]:
        return self._value


class Settings:
    """Settings of the default connector.

    Each setting can be passed explicitly, otherwise it is read from the
    environment:

        CURRLY_TLS_VERIFY: set to "false", "0", "no" or "off" to disable TLS
            certificate verification (verification is on by default).

        CURRLY_TIMEOUT: network timeout in seconds (default 5.0).

        CURRLY_USER_AGENT: User-Agent header sent by default.

    Raises:
        ValueError: if the timeout is not a non-negative number.
    """

    __slots__ = ("verify", "timeout", "user_agent", "_sources")

    def __init__(
        self,
        verify: Optional[bool] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        verify_value = NamedValueFromEnvironment(
            "CURRLY_TLS_VERIFY",
            "verify",
            None if verify is None else str(verify),
        )
        timeout_value = NamedValueFromEnvironment(
            "CURRLY_TIMEOUT",
            "timeout",
            None if timeout is None else str(timeout),
        )
        user_agent_value = NamedValueFromEnvironment(
            "CURRLY_USER_AGENT", "user_agent", user_agent
        )
        self._sources = {
            "verify": verify_value.name,
            "timeout": timeout_value.name,
            "user_agent": user_agent_value.name,
        }

        self.verify = (
            verify_value.value is None
            or verify_value.value.strip().lower() not in _FALSE_VALUES
        )

        if timeout_value.value is None:
            self.timeout = DEFAULT_TIMEOUT
        else:
            try:
                self.timeout = float(timeout_value.value)
            except ValueError:
                raise ValueError(
                    f"invalid timeout: {timeout_value.name} must be a number of seconds, got '{timeout_value.value}'"
                ) from None
            if self.timeout < 0:
                raise ValueError(
                    f"invalid timeout: {timeout_value.name} must not be negative"
                )

        self.user_agent = user_agent_value.value

    def name_of(self, field: str) -> str:
        """Returns the name the setting was read from: the environment
        variable, or the keyword argument when it was passed explicitly."""
        return self._sources[field]

    def __repr__(self):
        return f"Settings(verify={self.verify!r}, timeout={self.timeout!r}, user_agent={self.user_agent!r})"
