"""Exception types raised by habitnet."""


class HabitNetError(Exception):
    """Base class for habitnet errors."""


class MalformedModelError(HabitNetError, ValueError):
    """A serialized model buffer does not match the expected layout."""
