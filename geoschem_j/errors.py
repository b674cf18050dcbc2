"""
Exceptions raised while computing J-values.

All of them abort the whole calculation; no partial set of J-values is
ever returned.
"""

from typing import Any, Optional


class JValueError(Exception):
    """Base class for J-value calculation errors."""


class InvalidStrategy(JValueError, ValueError):
    """
    Photolysis strategy is not one of the recognized codes or names.

    Attributes
    ----------
    value : object
        The offending strategy as supplied by the caller.
    """

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f'Invalid Jmethod "{value}". '
            'Valid options are "MCM" (0), "BOTTOMUP" (1), "HYBRID" (2).'
        )


class MissingInput(JValueError, ValueError):
    """
    A state field required by the selected strategy was not supplied.

    Attributes
    ----------
    field : str
        Name of the missing AtmosphericState field.
    strategy : str or None
        Strategy that required it.
    """

    def __init__(self, field: str, strategy: Optional[str] = None):
        self.field = field
        self.strategy = strategy
        msg = f"Missing required input '{field}'"
        if strategy is not None:
            msg += f" for Jmethod {strategy}"
        super().__init__(msg)


class UnknownChannel(JValueError, LookupError):
    """
    A mapping entry refers to a channel the engine did not produce.

    This means the mapping table and the engine disagree on channel
    numbering. It is never treated as zero.

    Attributes
    ----------
    channel : str
        The missing channel identifier (e.g. "Jn14").
    output : str
        The named J-value that required it (e.g. "JPAN").
    """

    def __init__(self, channel: str, output: str, source: Optional[str] = None):
        self.channel = channel
        self.output = output
        self.source = source
        where = f" in {source} set" if source else ""
        super().__init__(
            f"Channel '{channel}' required by '{output}' not found{where}"
        )
