# Area: Session
"""
trivia_client._session.scores — Roster and winner computation
=============================================================

Keeps the latest roster pushed by the coordinator and computes the final
standings when the game ends. Roster pushes are total: each one replaces
the previous roster, nothing is patched incrementally.
"""

import logging
from typing import Iterable, Optional, Tuple

from ..models import GameOutcome, Player

logger = logging.getLogger("trivia_client.session.scores")


def compute_outcome(players: Iterable[Player]) -> GameOutcome:
    """
    Compute the winners of a roster.

    Every player holding the maximum score is a winner; winners keep
    roster order. An empty roster has no winners.
    """
    roster = tuple(players)
    if not roster:
        return GameOutcome()
    max_score = max(p.score for p in roster)
    winners = tuple(p for p in roster if p.score == max_score)
    return GameOutcome(max_score=max_score, winners=winners)


class ScoreAggregator:
    """
    Roster holder and end-of-game winner computation.

    Attributes:
        players: Latest roster, in coordinator order
        outcome: Standings for the current finished-state entry, if any
    """

    def __init__(self) -> None:
        self.players: Tuple[Player, ...] = ()
        self.outcome: Optional[GameOutcome] = None
        self._celebrated = False

    def replace(self, players: Iterable[Player]) -> None:
        """Replace the roster. Recomputes standings if already finished."""
        self.players = tuple(players)
        logger.debug("Roster replaced: %d players", len(self.players))
        if self.outcome is not None:
            self.outcome = compute_outcome(self.players)

    def find(self, player_id) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def enter_finished(self) -> GameOutcome:
        """Compute standings on entry to the finished phase."""
        self.outcome = compute_outcome(self.players)
        if self.outcome.is_tie:
            logger.info("Game finished in a tie: %s", [p.name for p in self.outcome.winners])
        elif self.outcome.sole_winner is not None:
            logger.info("Game finished, winner: %s", self.outcome.sole_winner.name)
        return self.outcome

    def claim_celebration(self) -> Optional[Player]:
        """
        Claim the celebration for the current standings.

        Returns:
            The sole winner, at most once per finished-state entry. None while
            not finished, on a tie, or once already claimed.
        """
        if self.outcome is None or self._celebrated:
            return None
        winner = self.outcome.sole_winner
        if winner is not None:
            self._celebrated = True
        return winner

    def leave_finished(self) -> None:
        """Drop standings and re-arm the celebration for the next finish."""
        self.outcome = None
        self._celebrated = False

    def clear(self) -> None:
        self.players = ()
        self.leave_finished()
