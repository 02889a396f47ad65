#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
from datetime import datetime

import yaml
from peewee import *

from .utils import parse_argv
from .core import DataFile, log, DataError
from .db_core import db, BaseModel
from .game import Week, GameOutcome, make_outcome
from .pick import Pick, make_pick, parse_pick_history
from .survivor import SurvivorVerdict
from .confidence import WeeklyScore

##########
# Models #
##########

class Member(BaseModel):
    """Participant in a pool (a participant with no picks at all is still a
    member, and therefore subject to elimination)
    """
    pool           = TextField()
    participant_id = TextField()
    display_name   = TextField(null=True)

    class Meta:
        table_name = 'member'
        indexes = (
            (('pool', 'participant_id'), True),
        )

class GameRecord(BaseModel):
    """Game schedule and result, as reported by the results feed
    """
    season    = IntegerField()
    week      = IntegerField()
    game_id   = TextField(null=True)
    home_team = TextField()
    away_team = TextField()
    status    = TextField()
    winner    = TextField(null=True)  # team name, 'TIE', or null if not final

    class Meta:
        table_name = 'game'
        indexes = (
            # make sure games are not double-loaded
            (('season', 'week', 'home_team', 'away_team'), True),
        )

    def to_outcome(self) -> GameOutcome:
        return make_outcome(self.week, self.home_team, self.away_team, self.status,
                            self.winner, self.game_id)

class PickRecord(BaseModel):
    """Raw pick as submitted; `team` and `confidence` may be missing (these are
    passed through to the pool logic, which knows how to deal with them)
    """
    pool           = TextField()
    participant_id = TextField()
    week           = IntegerField()
    team           = TextField(null=True)
    confidence     = IntegerField(null=True)
    game_id        = TextField(null=True)

    class Meta:
        table_name = 'pick'
        indexes = (
            (('pool', 'participant_id', 'week'), False),
        )

    def to_pick(self) -> Pick:
        return make_pick(self.participant_id, self.week, self.team, self.confidence,
                         self.game_id)

class VerdictRecord(BaseModel):
    """Most recently computed survivor verdict; replaced (not updated) whenever
    the verdict is recomputed
    """
    pool            = TextField()
    participant_id  = TextField()
    through_week    = IntegerField()
    is_alive        = BooleanField()
    eliminated_week = IntegerField(null=True)
    reason          = TextField(null=True)
    message         = TextField()
    computed_at     = DateTimeField()

    class Meta:
        table_name = 'verdict'
        indexes = (
            (('pool', 'participant_id'), True),
        )

class ScoreRecord(BaseModel):
    """Most recently computed weekly confidence score
    """
    pool            = TextField()
    participant_id  = TextField()
    week            = IntegerField()
    total_points    = IntegerField()
    correct_picks   = IntegerField()
    total_picks     = IntegerField()
    submitted_picks = IntegerField()
    computed_at     = DateTimeField()

    class Meta:
        table_name = 'weekly_score'
        indexes = (
            (('pool', 'participant_id', 'week'), True),
        )

MODELS = [Member, GameRecord, PickRecord, VerdictRecord, ScoreRecord]

#########
# Store #
#########

class Store:
    """Data source for a pool backed by the database; this is the boundary where
    stored records are validated and converted to `Pick` and `GameOutcome`
    """
    pool:   str
    season: int

    def __init__(self, pool: str, season: int):
        self.pool   = pool
        self.season = season

    def get_members(self) -> list[str]:
        query = (Member
                 .select(Member.participant_id)
                 .where(Member.pool == self.pool)
                 .order_by(Member.participant_id))
        return [m.participant_id for m in query]

    def get_picks(self, participant_id: str) -> list[Pick]:
        query = (PickRecord
                 .select()
                 .where((PickRecord.pool == self.pool) &
                        (PickRecord.participant_id == participant_id))
                 .order_by(PickRecord.week, PickRecord.id))
        return [rec.to_pick() for rec in query]

    def get_outcomes(self, week: Week) -> list[GameOutcome]:
        """Return outcomes for the specified week.

        :raises DataError: if any stored game record is inconsistent
        """
        query = (GameRecord
                 .select()
                 .where((GameRecord.season == self.season) &
                        (GameRecord.week == week))
                 .order_by(GameRecord.id))
        return [rec.to_outcome() for rec in query]

    def save_verdict(self, verdict: SurvivorVerdict) -> None:
        """Store the verdict, replacing any previous verdict for the participant
        """
        reason = verdict.elimination_reason
        (VerdictRecord
         .replace(pool            = self.pool,
                  participant_id  = verdict.participant_id,
                  through_week    = verdict.through_week,
                  is_alive        = verdict.is_alive,
                  eliminated_week = verdict.eliminated_week,
                  reason          = reason.value if reason else None,
                  message         = verdict.message,
                  computed_at     = datetime.now())
         .execute())

    def save_score(self, score: WeeklyScore) -> None:
        """Store the weekly score, replacing any previous score for the participant
        and week
        """
        (ScoreRecord
         .replace(pool            = self.pool,
                  participant_id  = score.participant_id,
                  week            = score.week,
                  total_points    = score.total_points,
                  correct_picks   = score.correct_picks,
                  total_picks     = score.total_picks,
                  submitted_picks = score.submitted_picks,
                  computed_at     = datetime.now())
         .execute())

    def get_verdict(self, participant_id: str) -> VerdictRecord | None:
        return (VerdictRecord
                .get_or_none((VerdictRecord.pool == self.pool) &
                             (VerdictRecord.participant_id == participant_id)))

################
# OutcomeCache #
################

class OutcomeCache:
    """Caller-owned cache of outcomes by week, wrapping another data source (e.g.
    `Store`); members and picks are passed through uncached.  Call `invalidate()`
    when new results are loaded.
    """
    source:        object
    week_outcomes: dict[Week, list[GameOutcome]]

    def __init__(self, source):
        self.source        = source
        self.week_outcomes = {}

    def get_members(self) -> list[str]:
        return self.source.get_members()

    def get_picks(self, participant_id: str) -> list[Pick]:
        return self.source.get_picks(participant_id)

    def get_outcomes(self, week: Week) -> list[GameOutcome]:
        if week not in self.week_outcomes:
            self.week_outcomes[week] = self.source.get_outcomes(week)
        return self.week_outcomes[week]

    def invalidate(self, week: Week = None) -> None:
        if week is None:
            self.week_outcomes.clear()
        else:
            self.week_outcomes.pop(week, None)

#############
# load_data #
#############

def load_data(data_file: str, pool: str = None, season: int = None) -> int:
    """Load members, games, and picks from a YAML data file into the database.
    `pool` and `season` may be specified in the file, or overridden by the
    arguments.  Game and pick values are validated (and team names normalized)
    before anything is written.  Picks loaded for a participant and week replace
    any previously loaded picks for that week (e.g. for corrections).

    File layout (all sections optional, except as noted):
      pool: <pool_name>
      season: <year>
      members: [{id: <participant_id>, name: <display_name>}, ...]
      games: [{week, home, away, status, winner, id}, ...]
      picks: [{participant, week, team, confidence, game}, ...]
      history: {<participant_id>: "<team>, <team>, ...", ...}
    """
    with open(DataFile(data_file)) as f:
        data = yaml.safe_load(f) or {}
    pool = pool or data.get('pool')
    season = season or data.get('season')
    if not pool or not season:
        raise DataError("`pool` and `season` must be specified")

    members_data = []
    for member in data.get('members') or []:
        members_data.append({'pool'          : pool,
                             'participant_id': str(member['id']),
                             'display_name'  : member.get('name')})

    games_data = []
    for game in data.get('games') or []:
        outcome = make_outcome(game['week'], game['home'], game['away'], game['status'],
                               game.get('winner'), game.get('id'))
        games_data.append({'season'   : season,
                           'week'     : outcome.week,
                           'game_id'  : outcome.game_id,
                           'home_team': outcome.home_team,
                           'away_team': outcome.away_team,
                           'status'   : outcome.status.value,
                           'winner'   : outcome.winner})

    picks = []
    for pick in data.get('picks') or []:
        picks.append(make_pick(pick['participant'], pick['week'], pick.get('team'),
                               pick.get('confidence'), pick.get('game')))
    for participant_id, history in (data.get('history') or {}).items():
        picks.extend(parse_pick_history(str(participant_id), history))
    picks_data = [{'pool': pool} | p._asdict() for p in picks]

    if db.is_closed():
        db.connect()
    with db.atomic():
        if members_data:
            Member.insert_many(members_data).on_conflict_replace().execute()
        if games_data:
            GameRecord.insert_many(games_data).on_conflict_replace().execute()
        # reloaded picks replace all existing records for the participant/week
        for participant_id, week in sorted({(p.participant_id, p.week) for p in picks}):
            (PickRecord
             .delete()
             .where((PickRecord.pool == pool) &
                    (PickRecord.participant_id == participant_id) &
                    (PickRecord.week == week))
             .execute())
        if picks_data:
            PickRecord.insert_many(picks_data).execute()

    log.info(f"Loaded {len(members_data)} members, {len(games_data)} games, "
             f"{len(picks_data)} picks for pool '{pool}'")
    return 0

########
# Main #
########

def main() -> int:
    """Built-in driver to invoke various utility functions for the module

    Usage: store.py <util_func> [<args> ...]

    Functions/usage:
      - load_data <data_file> [pool=<pool_name>] [season=<year>]
    """
    if len(sys.argv) < 2:
        print(f"Utility function not specified", file=sys.stderr)
        return -1
    elif sys.argv[1] not in ('load_data',):
        print(f"Unknown utility function '{sys.argv[1]}'", file=sys.stderr)
        return -1

    util_func = globals()[sys.argv[1]]
    args, kwargs = parse_argv(sys.argv[2:])

    return util_func(*args, **kwargs)

if __name__ == '__main__':
    sys.exit(main())
