from __future__ import annotations


class GameError(ValueError):
    """A command was rejected; the server state is unchanged."""

    message = "Invalid command."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidPhase(GameError):
    message = "Invalid phase."


class NotYourTurn(GameError):
    message = "Not your turn."


class PlayerEliminated(GameError):
    message = "You are dead."


class IndexOutOfRange(GameError):
    message = "Index out of range."


class BlockedByAnchor(GameError):
    message = "Blocked by anchor."


class AlreadyOccupied(GameError):
    message = "Already occupied."


class Recurrence(GameError):
    message = "Recurrence."


class NoValidMove(GameError):
    message = "No valid moves."
