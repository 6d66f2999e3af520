import logging

from geometry.GeometryErrors import ImmutableViolationError

logger = logging.getLogger(__name__)


class Freezable:
    """Mixin adding a one-way `frozen` capability flag.

    Once frozen, attribute assignment raises ImmutableViolationError. Subclasses
    must provide a `frozen` slot or field.
    """

    __slots__ = ()

    def freeze(self):
        object.__setattr__(self, "frozen", True)
        return self

    def _check_mutable(self, what: str) -> None:
        if getattr(self, "frozen", False):
            logger.debug("rejected %s on frozen %s", what, type(self).__name__)
            raise ImmutableViolationError(
                f"Cannot call mutable method '{what}' on immutable {type(self).__name__}")

    def __setattr__(self, name, value):
        self._check_mutable(name)
        object.__setattr__(self, name, value)
