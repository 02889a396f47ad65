# -*- coding: utf-8 -*-

from typing import NamedTuple
from collections.abc import Iterable
from collections import Counter
from enum import Enum

from .core import log
from .team import normalize_team_name
from .game import Week, GameOutcome, find_outcome
from .pick import Pick
from .rules import ConfidenceRules

##############
# PickResult #
##############

class PickStatus(Enum):
    CORRECT        = 'CORRECT'
    INCORRECT      = 'INCORRECT'
    TIE            = 'TIE'
    PENDING        = 'PENDING'
    TEAM_NOT_FOUND = 'TEAM_NOT_FOUND'

class PickResult(NamedTuple):
    team:       str
    confidence: int
    status:     PickStatus
    correct:    bool | None  # `None` if not yet decided
    points:     int
    winner:     str | None = None

###############
# WeeklyScore #
###############

class WeeklyScore(NamedTuple):
    """Confidence pool score for one participant for one week.  `total_picks`
    excludes picks whose team could not be matched to a game (these are still
    counted in `submitted_picks`).
    """
    total_points:    int
    correct_picks:   int
    total_picks:     int
    submitted_picks: int
    pick_results:    dict[str, PickResult]  # indexed by game key
    participant_id:  str | None = None
    week:            Week | None = None

    @property
    def decided_picks(self) -> int:
        return sum(1 for r in self.pick_results.values() if r.correct is not None)

    @property
    def accuracy(self) -> float:
        """Percentage of decided picks that were correct (0.0 if none decided)
        """
        decided = self.decided_picks
        if not decided:
            return 0.0
        return round(self.correct_picks / decided * 100.0, 2)

DFLT_RULES = ConfidenceRules()

def is_scorable(pick) -> bool:
    """Pick has a team and a positive integer confidence value
    """
    if not isinstance(pick, Pick) or not pick.is_valid:
        return False
    conf = pick.confidence
    return isinstance(conf, int) and not isinstance(conf, bool) and conf > 0

def score_pick(pick: Pick, outcome: GameOutcome | None, team: str,
               rules: ConfidenceRules) -> PickResult:
    conf = pick.confidence
    if outcome is None:
        return PickResult(team, conf, PickStatus.TEAM_NOT_FOUND, None, 0)
    if not outcome.is_final:
        return PickResult(team, conf, PickStatus.PENDING, None, 0)
    if outcome.is_tie:
        # everyone who picked either side of a tied game gets credit
        points = conf if rules.tie_credit else 0
        return PickResult(team, conf, PickStatus.TIE, rules.tie_credit, points, outcome.winner)
    if team == outcome.winner:
        return PickResult(team, conf, PickStatus.CORRECT, True, conf, outcome.winner)
    return PickResult(team, conf, PickStatus.INCORRECT, False, 0, outcome.winner)

##############
# score_week #
##############

def score_week(picks: Iterable[Pick], outcomes: Iterable[GameOutcome],
               rules: ConfidenceRules = None) -> WeeklyScore:
    """Compute a participant's confidence pool points for one week.  Picks with
    no team or no confidence value are skipped (not counted as submitted); a
    second pick for the same game is also skipped.  Never raises for malformed
    individual picks.
    """
    rules = rules or DFLT_RULES
    outcomes = list(outcomes)
    participant_id = None
    week = None
    pick_results = {}
    submitted = 0
    for pick in picks:
        if not is_scorable(pick):
            log.debug(f"Skipping malformed pick: {pick}")
            continue
        participant_id = participant_id or pick.participant_id
        week = week or pick.week
        team = normalize_team_name(pick.team)
        week_outcomes = [o for o in outcomes if o.week == pick.week]
        outcome = find_outcome(week_outcomes, team, pick.game_id)
        key = outcome.key if outcome else (pick.game_id or team)
        if key in pick_results:
            log.warning(f"Multiple picks for game '{key}' (participant '{pick.participant_id}'), "
                        f"ignoring {team} ({pick.confidence})")
            continue
        submitted += 1
        pick_results[key] = score_pick(pick, outcome, team, rules)
        if outcome is None:
            log.info(f"Team '{team}' not found in week {pick.week} results "
                     f"(participant '{pick.participant_id}')")

    results = pick_results.values()
    total_points = sum(r.points for r in results)
    correct = sum(1 for r in results if r.correct)
    total = sum(1 for r in results if r.status != PickStatus.TEAM_NOT_FOUND)
    return WeeklyScore(total_points, correct, total, submitted, pick_results,
                       participant_id, week)

##############
# Validation #
##############

def confidence_problems(picks: Iterable[Pick], num_games: int) -> list[str]:
    """Check a week's confidence values against the 1..N rule (N being the
    number of games in the week); returns a list of problem descriptions, which
    is empty if all is well.  Note that this is for reporting only, scoring does
    not depend on it.
    """
    values = [p.confidence for p in picks if is_scorable(p)]
    problems = []
    for value, count in sorted(Counter(values).items()):
        if count > 1:
            problems.append(f"Confidence value {value} used {count} times")
    for value in sorted(set(values)):
        if value > num_games:
            problems.append(f"Confidence value {value} out of range (1-{num_games})")
    if len(values) == num_games:
        missing = sorted(set(range(1, num_games + 1)) - set(values))
        if missing:
            problems.append(f"Confidence values missing: {', '.join(str(v) for v in missing)}")
    return problems

###############
# SeasonScore #
###############

class SeasonScore(NamedTuple):
    total_points:  int
    correct_picks: int
    total_picks:   int
    weeks:         int
    decided_picks: int = 0

    @property
    def accuracy(self) -> float:
        """Same as `WeeklyScore.accuracy`, for the season
        """
        if not self.decided_picks:
            return 0.0
        return round(self.correct_picks / self.decided_picks * 100.0, 2)

def season_total(scores: Iterable[WeeklyScore]) -> SeasonScore:
    """Sum weekly scores (for a single participant) for the season
    """
    points = correct = total = weeks = decided = 0
    for score in scores:
        points  += score.total_points
        correct += score.correct_picks
        total   += score.total_picks
        decided += score.decided_picks
        weeks   += 1
    return SeasonScore(points, correct, total, weeks, decided)
