class GameError(Exception):
    """Base class for everything the game core raises."""


class InvalidState(GameError):
    """Operation is not allowed in the session's current state."""


class ValidationError(GameError):
    """User supplied input that cannot be accepted."""


class TreeIntegrityError(GameError):
    """Tree structure is malformed or a mutation precondition does not hold."""
