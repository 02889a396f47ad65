# -*- coding: utf-8 -*-

from typing import NamedTuple
from collections.abc import Iterable
from collections import Counter
from enum import Enum

from .core import log
from .team import normalize_team_name
from .game import Week, WeekStr, MAX_WEEK, GameOutcome, outcomes_by_week, find_outcome
from .pick import Pick
from .rules import SurvivorRules

##################
# SurvivorStatus #
##################

class SurvivorState(Enum):
    ALIVE      = 'ALIVE'
    ELIMINATED = 'ELIMINATED'

class EliminationReason(Enum):
    NO_PICK        = 'NO_PICK'
    DUPLICATE_TEAM = 'DUPLICATE_TEAM'
    GAME_LOSS      = 'GAME_LOSS'

class SurvivorVerdict(NamedTuple):
    """Alive/eliminated status for one participant, as of `through_week`.  Always
    derived fresh from the full pick history and all known outcomes, so a stored
    verdict should be overwritten by a new one (never merged).
    """
    is_alive:           bool
    eliminated_week:    Week | None
    elimination_reason: EliminationReason | None
    message:            str
    participant_id:     str | None = None
    through_week:       Week | None = None

    @property
    def state(self) -> SurvivorState:
        return SurvivorState.ALIVE if self.is_alive else SurvivorState.ELIMINATED

DFLT_RULES = SurvivorRules()

def eliminated(week: Week, reason: EliminationReason, message: str,
               participant_id: str | None, through_week: Week) -> SurvivorVerdict:
    log.debug(f"Participant '{participant_id}' eliminated in week {week}: {message}")
    return SurvivorVerdict(False, week, reason, message, participant_id, through_week)

def week_team(picks: list[Pick]) -> str | None:
    """Return the team picked for a week, given all pick records for that week;
    `None` if there is no valid pick, or if the records name different teams
    """
    teams = set(normalize_team_name(p.team) for p in picks if p.is_valid)
    if len(teams) != 1:
        return None
    return teams.pop()

#####################
# evaluate_survivor #
#####################

def evaluate_survivor(picks: Iterable[Pick], outcomes: Iterable[GameOutcome],
                      through_week: Week, rules: SurvivorRules = None,
                      participant_id: str = None) -> SurvivorVerdict:
    """Determine whether a participant is still alive in a survivor pool, scanning
    weeks 1 through `through_week` and stopping at the first eliminating week:
      - no (valid) pick for the week
      - team already used in an earlier week
      - picked team lost its game (a tie is survived, by default)

    Games not yet final (or not found) for a week do not eliminate; the scan
    continues, so the returned verdict is the best known as of the outcomes
    passed in.  `through_week` is capped at `MAX_WEEK`.
    """
    rules = rules or DFLT_RULES
    through_week = min(through_week, MAX_WEEK)
    picks = [p for p in picks if isinstance(p, Pick)]
    if participant_id is None and picks:
        participant_id = picks[0].participant_id
    week_picks = {}
    for pick in picks:
        week_picks.setdefault(pick.week, []).append(pick)
    week_games = outcomes_by_week(outcomes)

    used_weeks = {}  # team -> week first picked
    pending = []
    for week in range(1, through_week + 1):
        team = week_team(week_picks.get(week, []))
        if team is None:
            if rules.no_pick_eliminates:
                return eliminated(week, EliminationReason.NO_PICK,
                                  f"No pick submitted for {WeekStr(week)}",
                                  participant_id, through_week)
            continue

        if team in used_weeks and rules.duplicate_team_eliminates:
            first = used_weeks[team]
            return eliminated(week, EliminationReason.DUPLICATE_TEAM,
                              f"Picked {team} in {WeekStr(first)} and {WeekStr(week)}",
                              participant_id, through_week)
        used_weeks.setdefault(team, week)

        outcome = find_outcome(week_games.get(week, []), team)
        if outcome is None:
            log.debug(f"No game found for {team} in week {week} (participant '{participant_id}')")
            pending.append(week)
            continue
        if not outcome.is_final:
            pending.append(week)
            continue
        if outcome.is_tie:
            if not rules.tie_survives:
                return eliminated(week, EliminationReason.GAME_LOSS,
                                  f"{team} tied in {WeekStr(week)}",
                                  participant_id, through_week)
            continue
        if outcome.winner != team:
            return eliminated(week, EliminationReason.GAME_LOSS,
                              f"{team} lost to {outcome.winner} in {WeekStr(week)}",
                              participant_id, through_week)

    if pending:
        weeks_str = ', '.join(str(w) for w in pending)
        message = f"Alive through {WeekStr(through_week)} (pending: week {weeks_str})"
    else:
        message = f"Alive through {WeekStr(through_week)}"
    return SurvivorVerdict(True, None, None, message, participant_id, through_week)

###################
# SurvivorSummary #
###################

class SurvivorSummary(NamedTuple):
    total:      int
    alive:      int
    eliminated: int
    by_week:    dict[Week, int]
    by_reason:  dict[EliminationReason, int]

def survivor_summary(verdicts: Iterable[SurvivorVerdict]) -> SurvivorSummary:
    """Tabulate alive/eliminated counts across participants
    """
    verdicts = list(verdicts)
    out = [v for v in verdicts if not v.is_alive]
    by_week = Counter(v.eliminated_week for v in out)
    by_reason = Counter(v.elimination_reason for v in out)
    return SurvivorSummary(len(verdicts),
                           len(verdicts) - len(out),
                           len(out),
                           dict(sorted(by_week.items())),
                           dict(by_reason))
