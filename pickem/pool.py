#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
from os import environ
from typing import TextIO
from collections.abc import Iterable
from itertools import groupby

from .utils import parse_argv
from .core import cfg, log, ConfigError, LogicError, ImplementationError
from .game import Week, WeekStr, GameOutcome, valid_week
from .pick import Pick
from .rules import PoolType, PoolRules, rules_from_config
from .survivor import SurvivorVerdict, SurvivorSummary, evaluate_survivor, survivor_summary
from .confidence import WeeklyScore, SeasonScore, score_week, season_total, confidence_problems
from .store import Store, OutcomeCache

POOL_CONFIG = environ.get('PICKEM_POOL_CONFIG') or 'pools.yml'
cfg.load(POOL_CONFIG)

# used in reporting
PART_COL   = "Participant"
STATUS_COL = "Status"
WEEK_COL   = "Week Out"
REASON_COL = "Reason"
TOTAL_COL  = "Total"
ACC_PCT    = "Accuracy"

DATA_SOURCE_METHODS = ('get_members', 'get_picks', 'get_outcomes')

########
# Pool #
########

class Pool:
    """Survivor or confidence pool, computed from scratch (for all members) from
    the picks and outcomes provided by the data source.  The data source is any
    object implementing `get_members()`, `get_picks(participant_id)`, and
    `get_outcomes(week)` (see `store.Store` and `store.OutcomeCache`).
    """
    name:         str
    season:       int
    pool_type:    PoolType
    rules:        PoolRules
    source:       object
    through_week: Week | None

    # survivor pools
    verdicts:     dict[str, SurvivorVerdict]
    # confidence pools
    week_scores:  dict[Week, dict[str, WeeklyScore]]
    part_scores:  dict[str, dict[Week, WeeklyScore]]
    tot_scores:   dict[str, SeasonScore]

    def __init__(self, name: str, source: object = None, **kwargs):
        """Note that the rules for this pool are generally specified in the config
        file entry, but may be overridden in `kwargs`
        """
        pools = cfg.config('pools') or {}
        if name not in pools:
            raise ConfigError(f"Pool '{name}' is not known")
        pool_info = pools[name]
        if source is not None:
            for method in DATA_SOURCE_METHODS:
                if not callable(getattr(source, method, None)):
                    raise ImplementationError(f"Data source must implement `{method}()`")
        # if `rules` specified in `kwargs`, replaces config file entry (no merging)
        rules = kwargs.pop('rules', None)
        if rules is None:
            rules = pool_info.get('rules')
        if kwargs:
            raise RuntimeError(f"Unexpected argument(s): {', '.join(kwargs)}")

        self.name      = name
        self.season    = pool_info.get('season')
        try:
            self.pool_type = PoolType(pool_info.get('pool_type'))
        except ValueError:
            raise ConfigError(f"Bad `pool_type` for pool '{name}'") from None
        if isinstance(rules, dict) or rules is None:
            rules = rules_from_config(self.pool_type, rules)
        self.rules     = rules
        self.source    = source
        # populated by `compute_results()`
        self.through_week = None
        self.verdicts     = {}
        self.week_scores  = {}
        self.part_scores  = {}
        self.tot_scores   = {}

    def run(self, through_week: Week) -> None:
        """Fetch picks and outcomes from the data source, and compute results for
        weeks 1 through `through_week`
        """
        if self.source is None:
            raise LogicError("Data source not specified")
        if not valid_week(through_week):
            raise RuntimeError(f"Bad week value '{through_week}'")

        outcomes = []
        for week in range(1, through_week + 1):
            outcomes.extend(self.source.get_outcomes(week))
        member_picks = {}
        for participant_id in self.source.get_members():
            member_picks[participant_id] = self.source.get_picks(participant_id)
        log.debug(f"Pool '{self.name}': {len(member_picks)} members, {len(outcomes)} games")

        self.compute_results(member_picks, outcomes, through_week)

    def compute_results(self, member_picks: dict[str, list[Pick]],
                        outcomes: Iterable[GameOutcome], through_week: Week) -> None:
        """Recompute all results (any previous results are discarded):
          `self.verdicts`    - survivor pools
          `self.week_scores` - confidence pools, by week
          `self.part_scores` - confidence pools, by participant
          `self.tot_scores`  - confidence pools, season totals by participant
        """
        outcomes = list(outcomes)
        self.through_week = through_week
        self.verdicts     = {}
        self.week_scores  = {}
        self.part_scores  = {}
        self.tot_scores   = {}

        if self.pool_type == PoolType.SURVIVOR:
            for participant_id, picks in member_picks.items():
                verdict = evaluate_survivor(picks, outcomes, through_week, self.rules,
                                            participant_id=participant_id)
                self.verdicts[participant_id] = verdict
            return

        num_games = {}
        for outcome in outcomes:
            num_games[outcome.week] = num_games.get(outcome.week, 0) + 1
        for participant_id, picks in member_picks.items():
            self.part_scores[participant_id] = {}
            by_week = {w: list(p) for w, p in groupby(sorted(picks, key=lambda p: p.week),
                                                       key=lambda p: p.week)}
            for week in range(1, through_week + 1):
                week_picks = by_week.get(week, [])
                for problem in confidence_problems(week_picks, num_games.get(week, 0)):
                    log.warning(f"{participant_id} ({WeekStr(week)}): {problem}")
                score = score_week(week_picks, outcomes, self.rules)
                score = score._replace(participant_id=participant_id, week=week)
                self.week_scores.setdefault(week, {})[participant_id] = score
                self.part_scores[participant_id][week] = score
            self.tot_scores[participant_id] = season_total(self.part_scores[participant_id].values())

    def is_computed(self) -> bool:
        return self.through_week is not None

    def get_standings(self) -> list[tuple[str, SurvivorVerdict | SeasonScore]]:
        """Return (participant_id, result) pairs, ordered by standing: for survivor
        pools, alive participants first, then by latest elimination; for confidence
        pools, by total points
        """
        if not self.is_computed():
            raise LogicError("Results not yet computed")
        if self.pool_type == PoolType.SURVIVOR:
            def surv_key(item: tuple[str, SurvivorVerdict]) -> tuple:
                part_id, verdict = item
                return (not verdict.is_alive, -(verdict.eliminated_week or 0), part_id)
            return sorted(self.verdicts.items(), key=surv_key)

        return sorted(self.tot_scores.items(), key=lambda s: (-s[1].total_points, s[0]))

    def get_winner(self) -> list[str]:
        """Return participant(s) currently in first place.  Note that we always return
        a list, even in the case of a single leader, to keep the interface simpler.
        """
        standings = self.get_standings()
        if not standings:
            return []
        if self.pool_type == PoolType.SURVIVOR:
            key = lambda s: (s[1].is_alive, s[1].eliminated_week)
        else:
            key = lambda s: s[1].total_points
        _, leaders = next(groupby(standings, key=key))
        return [part_id for part_id, _ in leaders]

    def get_summary(self) -> SurvivorSummary:
        if self.pool_type != PoolType.SURVIVOR:
            raise LogicError("Summary only available for survivor pools")
        return survivor_summary(self.verdicts.values())

    def save_results(self, store: object) -> None:
        """Write results to the store, overwriting previously stored results (which
        may be stale or incorrect)
        """
        if not self.is_computed():
            raise LogicError("Results not yet computed")
        for verdict in self.verdicts.values():
            store.save_verdict(verdict)
        for week_scores in self.week_scores.values():
            for score in week_scores.values():
                store.save_score(score)

    #############
    # Reporting #
    #############

    def report_hdr(self) -> list[str]:
        if self.pool_type == PoolType.SURVIVOR:
            return [PART_COL, STATUS_COL, WEEK_COL, REASON_COL]
        week_names = [WeekStr(w) for w in range(1, self.through_week + 1)]
        return [PART_COL] + week_names + [TOTAL_COL, ACC_PCT]

    def report_iter(self) -> Iterable[dict[str, str]]:
        for part_id, result in self.get_standings():
            if self.pool_type == PoolType.SURVIVOR:
                yield {PART_COL:   part_id,
                       STATUS_COL: result.state.value,
                       WEEK_COL:   result.eliminated_week or '',
                       REASON_COL: result.message}
                continue
            weeks = {WeekStr(w): s.total_points for w, s in self.part_scores[part_id].items()}
            acc = f"{result.accuracy:.0f}%" if result.decided_picks else '-'
            yield {PART_COL: part_id} | weeks | {TOTAL_COL: result.total_points, ACC_PCT: acc}

    def title(self) -> str:
        return f"{self.name} ({self.pool_type.value}, through {WeekStr(self.through_week)})"

    def print_results(self, file: TextIO = None) -> None:
        """Print standings as tab-separated text
        """
        winner = self.get_winner()
        plural = 's' if len(winner) > 1 else ''
        print(f"Leader{plural}: {', '.join(winner) or '-'}", file=file)

        title = self.title()
        print(f"\n{title}\n{'-' * len(title)}", file=file)
        header = self.report_hdr()
        print("\t".join(header), file=file)
        for report_data in self.report_iter():
            iter_data = (str(report_data.get(key, '')) for key in header)
            print("\t".join(iter_data), file=file)

    def print_results_md(self, file: TextIO = None) -> None:
        """Same as `print_results()` except in markdown format
        """
        winner = self.get_winner()
        plural = 's' if len(winner) > 1 else ''
        print(f"\n## Leader{plural} ##", file=file)
        print(', '.join(winner) or '-', file=file)

        print(f"\n## {self.title()} ##", file=file)
        header = self.report_hdr()
        print("| ", " | ".join(header), " |", file=file)
        print("| ", " --- |" * len(header), file=file)
        for report_data in self.report_iter():
            iter_data = (str(report_data.get(key, '')) for key in header)
            print("| ", " | ".join(iter_data), " |", file=file)

########
# Main #
########

def main() -> int:
    """Built-in driver to compute (and optionally save) pool results through the
    specified week, using data from the database.

    Usage: pool.py <pool_name> <through_week> [save=<bool>] [fmt=<txt|md>]
    """
    if len(sys.argv) < 3:
        print(f"Usage: pool.py <pool_name> <through_week> [save=<bool>] [fmt=<txt|md>]",
              file=sys.stderr)
        return -1

    name = sys.argv[1]
    args, kwargs = parse_argv(sys.argv[2:])
    if len(args) != 1 or set(kwargs) - {'save', 'fmt'}:
        print(f"Incorrect number of arguments, or bad value", file=sys.stderr)
        return -1
    through_week = args[0]

    pools = cfg.config('pools') or {}
    if name not in pools:
        print(f"Unknown pool '{name}'", file=sys.stderr)
        return -1
    store = Store(name, pools[name].get('season'))
    pool = Pool(name, OutcomeCache(store))
    pool.run(through_week)
    if kwargs.get('fmt') == 'md':
        pool.print_results_md()
    else:
        pool.print_results()
    if kwargs.get('save'):
        pool.save_results(store)
        log.info(f"Results saved for pool '{name}' through week {through_week}")

    return 0

if __name__ == '__main__':
    sys.exit(main())
