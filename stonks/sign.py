"""Two-valued polarity used as a directional multiplier in stock equations."""

from enum import Enum

from .exceptions import InvalidStateError


class Sign(Enum):
    POSITIVE = 1
    NEGATIVE = -1

    @classmethod
    def from_value(cls, value) -> "Sign":
        """Return the member matching ``1`` or ``-1``.

        Members are passed through unchanged, so persisted integers and
        in-memory signs can be mixed freely.
        """
        if isinstance(value, Sign):
            return value
        # bool is an int subclass; True would otherwise map to POSITIVE
        if isinstance(value, bool):
            raise InvalidStateError(f"'{value}' is not a valid sign, it must be 1 or -1")
        for member in cls:
            if value == member.value:
                return member
        raise InvalidStateError(f"'{value}' is not a valid sign, it must be 1 or -1")

    def negative(self) -> "Sign":
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
