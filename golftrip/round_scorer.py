"""Round-level scoring with explicit result values.

RoundScorer holds one round's snapshot and configuration and answers every
query by recomputing from scratch. Missing configuration, invalid
configuration and incomplete scoring come back as EngineResult statuses
instead of exceptions.
"""

import logging
from typing import List, Optional, Sequence

from .formats import AnyStandings, compute_format_standings
from .junk import JunkClaim, calculate_junk_settlement
from .leaderboard import aggregate_player_totals, build_leaderboard
from .match_play import compute_round_match_state, match_money_results
from .models import (
    EngineResult,
    FormatRound,
    Match,
    MoneyLine,
    Press,
    ResultStatus,
    RoundSnapshot,
)
from .nassau import NassauStandings, calculate_nassau_settlement
from .scramble import ScrambleStandings
from .settlement import build_money_totals, net_settlements, player_net_totals
from .skins import SkinsStandings, calculate_skins_settlement
from .validators import validate_format_round, validate_holes, validate_match, validate_scores
from .wolf import WolfStandings, calculate_wolf_settlement

logger = logging.getLogger('golftrip.round_scorer')


def _format_finished(standings: AnyStandings, total_holes: int) -> bool:
    if isinstance(standings, ScrambleStandings):
        return standings.holes_completed == total_holes
    if isinstance(standings, NassauStandings):
        return all(sub.state.completed for sub in standings.sub_matches)
    return standings.holes_played == total_holes


class RoundScorer:
    """
    Scoring engine for a single round.

    Holds the round snapshot plus optional match/format/junk configuration.
    Every method is a pure function of that state.
    """

    def __init__(
        self,
        snapshot: RoundSnapshot,
        match: Optional[Match] = None,
        presses: Sequence[Press] = (),
        format_round: Optional[FormatRound] = None,
        junk_claims: Sequence[JunkClaim] = (),
        snake_value: Optional[float] = None,
    ):
        """
        Initialize scorer.

        Args:
            snapshot: Holes, players and scores of the round
            match: Match-play configuration, if the round has one
            presses: Presses on the match in creation order
            format_round: Alternate format configuration, if any
            junk_claims: Junk side-bet claims for the round
            snake_value: Snake value per player; None when snake is off
        """
        self.snapshot = snapshot
        self.match = match
        self.presses = list(presses)
        self.format_round = format_round
        self.junk_claims = list(junk_claims)
        self.snake_value = snake_value

    @property
    def round_name(self) -> str:
        return self.snapshot.name or self.snapshot.round_id

    def _round_errors(self) -> List[str]:
        return validate_holes(self.snapshot.holes) + validate_scores(self.snapshot)

    def match_state(self) -> EngineResult:
        """
        Match state for the round's match.

        Returns:
            EngineResult with a MatchState value; NOT_CONFIGURED when the
            round has no match, PARTIAL until the match is completed
        """
        if self.match is None:
            return EngineResult(ResultStatus.NOT_CONFIGURED, errors=[f'Round {self.snapshot.round_id} has no match'])

        errors = self._round_errors() + validate_match(self.match, self.snapshot)
        if errors:
            logger.warning(f'Match {self.match.id} is misconfigured: {errors}')
            return EngineResult(ResultStatus.INVALID_CONFIGURATION, errors=errors)

        state = compute_round_match_state(self.match, self.presses, self.snapshot)
        status = ResultStatus.OK if state.completed else ResultStatus.PARTIAL
        return EngineResult(status, value=state)

    def format_standings(self) -> EngineResult:
        """
        Standings for the round's format.

        Returns:
            EngineResult with the format's standings; NOT_CONFIGURED when
            the round has no format, PARTIAL until every hole is scored
        """
        if self.format_round is None:
            return EngineResult(ResultStatus.NOT_CONFIGURED, errors=[f'Round {self.snapshot.round_id} has no format'])

        errors = self._round_errors() + validate_format_round(self.format_round, self.snapshot)
        if errors:
            logger.warning(f'{self.format_round.kind.value} round is misconfigured: {errors}')
            return EngineResult(ResultStatus.INVALID_CONFIGURATION, errors=errors)

        standings = compute_format_standings(self.format_round, self.snapshot)
        finished = _format_finished(standings, self.snapshot.total_holes)
        return EngineResult(ResultStatus.OK if finished else ResultStatus.PARTIAL, value=standings)

    def leaderboard(self, mode: str = 'net') -> EngineResult:
        """Ranked leaderboard for this round alone."""
        errors = self._round_errors()
        if errors:
            return EngineResult(ResultStatus.INVALID_CONFIGURATION, errors=errors)
        ranked = build_leaderboard(aggregate_player_totals([self.snapshot]), mode=mode)
        return EngineResult(ResultStatus.OK, value=ranked)

    def money_lines(self) -> List[MoneyLine]:
        """
        Signed money lines from every bet in the round.

        Unconfigured or misconfigured bets contribute nothing.
        """
        lines: List[MoneyLine] = []

        match_result = self.match_state()
        if match_result.ok:
            lines += match_money_results(match_result.value, self.round_name)

        format_result = self.format_standings()
        if format_result.ok:
            standings = format_result.value
            if isinstance(standings, NassauStandings):
                lines += calculate_nassau_settlement(standings, self.round_name)
            elif isinstance(standings, SkinsStandings):
                lines += calculate_skins_settlement(standings, self.round_name)
            elif isinstance(standings, WolfStandings):
                lines += calculate_wolf_settlement(standings, self.round_name)

        if self.junk_claims or self.snake_value is not None:
            player_ids = [p.id for p in self.snapshot.players]
            lines += calculate_junk_settlement(
                self.junk_claims, player_ids, self.snake_value, self.round_name
            )

        return lines

    def settlement(self) -> EngineResult:
        """
        Money totals and the payer -> payee plan for the round.

        Returns:
            EngineResult whose value is a dict with 'totals'
            (PlayerMoneyTotal list) and 'transactions'
        """
        lines = self.money_lines()
        names = {p.id: p.name for p in self.snapshot.players}
        totals = build_money_totals(lines, names)
        transactions = net_settlements(player_net_totals(lines))
        return EngineResult(ResultStatus.OK, value={'totals': totals, 'transactions': transactions})
