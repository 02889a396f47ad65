# -*- coding: utf-8 -*-

from typing import NamedTuple
from enum import Enum

from .core import DataError
from .team import normalize_team_name

######################
# Week-related stuff #
######################

# regular season week number (1 through `MAX_WEEK`); pools only cover the
# regular season
Week = int

MIN_WEEK = 1
MAX_WEEK = 18

def WeekStr(week: int) -> str:
    """Return a human-readable string representing the week number, used for
    reporting
    """
    return f"Week {week}"

def valid_week(week: int) -> bool:
    return isinstance(week, int) and not isinstance(week, bool) and MIN_WEEK <= week <= MAX_WEEK

##############
# GameStatus #
##############

class GameStatus(Enum):
    SCHEDULED   = 'scheduled'
    IN_PROGRESS = 'in_progress'
    FINAL       = 'final'

# feed values seen for in-progress games (ESPN and otherwise), compared after
# lower-casing; anything containing "final" is final
IN_PROGRESS_VALUES = {'in_progress', 'in progress', 'status_in_progress', 'live',
                      'halftime', 'status_halftime', 'end_period', 'status_end_period'}
SCHEDULED_VALUES   = {'scheduled', 'status_scheduled', 'pre', 'pregame', 'tbd'}

def parse_status(value: GameStatus | str) -> GameStatus:
    if isinstance(value, GameStatus):
        return value
    if not isinstance(value, str):
        raise DataError(f"Bad game status '{value}'")
    norm = value.strip().lower()
    if 'final' in norm:
        return GameStatus.FINAL
    if norm in IN_PROGRESS_VALUES:
        return GameStatus.IN_PROGRESS
    if norm in SCHEDULED_VALUES:
        return GameStatus.SCHEDULED
    raise DataError(f"Unknown game status '{value}'")

###############
# GameOutcome #
###############

# explicit marker for `GameOutcome.winner` in the case of a tie (a final game
# with no winner is also considered a tie)
TIE = 'TIE'

class GameOutcome(NamedTuple):
    """Result of one completed (or scheduled/in-progress) game; team values are
    canonical team names, see `make_outcome()` for validation
    """
    week:      Week
    home_team: str
    away_team: str
    status:    GameStatus
    winner:    str | None = None  # team, `TIE`, or `None` if not final
    game_id:   str | None = None

    @property
    def matchup(self) -> str:
        return f"{self.away_team} @ {self.home_team}"

    @property
    def key(self) -> str:
        """Game identity used for reporting and indexing pick results
        """
        return self.game_id or self.matchup

    @property
    def is_final(self) -> bool:
        return self.status == GameStatus.FINAL

    @property
    def is_tie(self) -> bool:
        return self.is_final and self.winner in (None, TIE)

    @property
    def loser(self) -> str | None:
        if not self.is_final or self.is_tie:
            return None
        return self.away_team if self.winner == self.home_team else self.home_team

    def has_team(self, team: str) -> bool:
        return team in (self.home_team, self.away_team)

def make_outcome(week: Week, home_team: str, away_team: str, status: GameStatus | str,
                 winner: str | None = None, game_id: str | None = None) -> GameOutcome:
    """Build a validated `GameOutcome` from external (e.g. results feed or database)
    values; team names are normalized here, so that the evaluators never have to
    guess at spelling.

    :raises DataError: if the values are inconsistent (unrecognized status, winner
        not playing in the game, or winner reported for a game not yet final)
    """
    if not valid_week(week):
        raise DataError(f"Bad week value '{week}'")
    home = normalize_team_name(home_team)
    away = normalize_team_name(away_team)
    if not home or not away or home == away:
        raise DataError(f"Bad matchup '{away_team}' @ '{home_team}'")
    game_status = parse_status(status)

    if isinstance(winner, str) and winner.strip().upper() == TIE:
        winner = TIE
    elif winner is not None:
        winner = normalize_team_name(winner)
        if winner == '':
            winner = None
    if winner is not None:
        if game_status != GameStatus.FINAL:
            raise DataError(f"Winner '{winner}' reported for game not final ({away} @ {home})")
        if winner not in (home, away, TIE):
            raise DataError(f"Winner '{winner}' not a participant in game ({away} @ {home})")

    return GameOutcome(week, home, away, game_status, winner,
                       str(game_id) if game_id is not None else None)

def outcomes_by_week(outcomes: list[GameOutcome]) -> dict[Week, list[GameOutcome]]:
    week_games = {}
    for outcome in outcomes:
        week_games.setdefault(outcome.week, []).append(outcome)
    return week_games

def find_outcome(outcomes: list[GameOutcome], team: str,
                 game_id: str | None = None) -> GameOutcome | None:
    """Locate the game (among `outcomes`) that the specified team played in,
    preferring a match on `game_id`, if specified
    """
    if game_id is not None:
        for outcome in outcomes:
            if outcome.game_id == game_id and outcome.has_team(team):
                return outcome
    return next((o for o in outcomes if o.has_team(team)), None)
