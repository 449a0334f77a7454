"""Error taxonomy for the four factors pipeline.

Every error carries the game and/or team it implicates so a caller can
report exactly which input was rejected.
"""

from __future__ import annotations

from typing import Optional


class FourFactorsError(ValueError):
    """Base class for all pipeline errors."""

    def __init__(self, message: str, *, game_id: Optional[str] = None, team: Optional[str] = None):
        self.game_id = game_id
        self.team = team
        context = []
        if game_id is not None:
            context.append(f"game={game_id}")
        if team is not None:
            context.append(f"team={team}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class ParseError(FourFactorsError):
    """Raised when a box-score cell is not a count or a made-attempted pair."""

    def __init__(
        self,
        message: str,
        *,
        game_id: Optional[str] = None,
        team: Optional[str] = None,
        stat: Optional[str] = None,
        cell: Optional[str] = None,
    ):
        self.stat = stat
        self.cell = cell
        if stat is not None:
            message = f"{message} [stat={stat!r}, cell={cell!r}]"
        super().__init__(message, game_id=game_id, team=team)


class MalformedGameTableError(FourFactorsError):
    """Raised when a raw game table does not hold exactly two team columns."""


class UndefinedFactorError(FourFactorsError):
    """Raised when a four factors denominator is zero."""

    def __init__(self, team: str, factor: str):
        self.factor = factor
        super().__init__(f"{factor} is undefined: denominator is zero", team=team)


class TieGameError(FourFactorsError):
    """Raised when both teams finish with the same score."""


class RetrievalError(FourFactorsError):
    """Raised by a table provider that cannot supply a game table."""


class RegressionError(FourFactorsError):
    """Raised for degenerate regression inputs."""

    def __init__(self, message: str, *, model: Optional[str] = None):
        self.model = model
        if model is not None:
            message = f"{message} (model={model})"
        super().__init__(message)


class TeamNotInGameError(FourFactorsError):
    """Raised when a roster assigns a team a game it did not play."""


class RosterError(FourFactorsError):
    """Raised when a roster payload fails validation."""
