"""Player-level OpenSkill replay for two-team table-soccer matches."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from openskill.models import PlackettLuce, ThurstoneMostellerFull

from domain.ratings.common import Belief, HistoryEntry, MatchResult, MatchSummary
from domain.ratings.protocol import Outcome, outcome_for_scores

logger = logging.getLogger(__name__)

MODEL_CLASSES = {
    "thurstone_mosteller_full": ThurstoneMostellerFull,
    "plackett_luce": PlackettLuce,
}


@dataclass(frozen=True)
class OpenSkillParameters:
    initial_mu: float = 25.0
    initial_sigma: float = 25.0 / 3.0
    beta: float = 25.0 / 6.0
    kappa: float = 0.0001
    tau: float = 25.0 / 300.0
    limit_sigma: bool = False
    balance: bool = False
    ordinal_z: float = 3.0
    model: str = "thurstone_mosteller_full"


@dataclass
class RatingReplay:
    """Final beliefs and per-player history produced by one full replay."""

    ratings: dict[str, Belief] = field(default_factory=dict)
    history: dict[str, list[HistoryEntry]] = field(default_factory=dict)
    skipped_matches: list[int] = field(default_factory=list)
    ordinal_z: float = 3.0

    def skill_of(self, player: str) -> float:
        belief = self.ratings.get(player)
        if belief is None:
            return 0.0
        return belief.mu - self.ordinal_z * belief.sigma

    def export(self) -> dict[str, dict[str, float]]:
        """Return ``{player: {"skill", "mu", "sigma"}}`` for every rated player."""
        return {
            player: {
                "skill": self.skill_of(player),
                "mu": belief.mu,
                "sigma": belief.sigma,
            }
            for player, belief in self.ratings.items()
        }


class PlayerOpenSkillCalculator:
    """OpenSkill engine rating individual players inside two-team matches."""

    def __init__(self, params: OpenSkillParameters | None = None) -> None:
        self.params = params or OpenSkillParameters()
        model_cls = MODEL_CLASSES.get(self.params.model)
        if model_cls is None:
            raise ValueError(
                f"Unknown openskill model '{self.params.model}', "
                f"expected one of {sorted(MODEL_CLASSES)}"
            )
        self._model = model_cls(
            mu=self.params.initial_mu,
            sigma=self.params.initial_sigma,
            beta=self.params.beta,
            kappa=self.params.kappa,
            tau=self.params.tau,
            limit_sigma=self.params.limit_sigma,
            balance=self.params.balance,
        )

    def initialize(self) -> Belief:
        return Belief(mu=self.params.initial_mu, sigma=self.params.initial_sigma)

    def conservative_skill(self, belief: Belief | None) -> float:
        if belief is None:
            return 0.0
        return belief.mu - self.params.ordinal_z * belief.sigma

    def _to_model_team(self, team: Sequence[Belief]) -> list[object]:
        return [self._model.rating(mu=belief.mu, sigma=belief.sigma) for belief in team]

    def rate_pair(
        self,
        team1: Sequence[Belief],
        team2: Sequence[Belief],
        outcome: Outcome,
    ) -> tuple[list[Belief], list[Belief]]:
        if not team1 or not team2:
            raise ValueError(
                f"cannot rate a match with an empty team (sizes {len(team1)}/{len(team2)})"
            )

        updated = self._model.rate(
            [self._to_model_team(team1), self._to_model_team(team2)],
            ranks=outcome.ranks,
        )
        team1_post = [Belief(mu=float(rating.mu), sigma=float(rating.sigma)) for rating in updated[0]]
        team2_post = [Belief(mu=float(rating.mu), sigma=float(rating.sigma)) for rating in updated[1]]
        if len(team1_post) != len(team1) or len(team2_post) != len(team2):
            raise ValueError("rating update returned mismatched team sizes")
        return team1_post, team2_post

    def compute_all(self, matches: Sequence[MatchResult]) -> RatingReplay:
        """Replay ``matches`` in the given order and return ratings plus history.

        Matches must already be sorted chronologically. A match that cannot be
        rated is logged and skipped; ratings stay as they were before it.
        """
        replay = RatingReplay(ordinal_z=self.params.ordinal_z)
        if not matches:
            return replay

        prior = self.initialize()
        prior_skill = self.conservative_skill(prior)
        first_time = matches[0].event_time
        for match in matches:
            for player in match.players:
                if player not in replay.history:
                    replay.history[player] = [
                        HistoryEntry(
                            match_index=-1,
                            event_time=first_time,
                            belief=prior,
                            skill=prior_skill,
                        )
                    ]

        for match_index, match in enumerate(matches):
            try:
                self._validate_match(match)
                team1_pre = [self._belief_for(replay, player) for player in match.team1_players]
                team2_pre = [self._belief_for(replay, player) for player in match.team2_players]
                outcome = outcome_for_scores(match.team1_score, match.team2_score)
                team1_post, team2_post = self.rate_pair(team1_pre, team2_pre, outcome)
            except (ValueError, ArithmeticError) as exc:
                logger.warning(
                    "skipping match_index=%d at %s (%s vs %s): %s",
                    match_index,
                    match.event_time.isoformat(),
                    list(match.team1_players),
                    list(match.team2_players),
                    exc,
                )
                replay.skipped_matches.append(match_index)
                continue

            self._record(replay, match_index, match, match.team1_players, team1_post, outcome is Outcome.TEAM1_WINS)
            self._record(replay, match_index, match, match.team2_players, team2_post, outcome is Outcome.TEAM2_WINS)

        logger.debug(
            "replayed matches=%d skipped=%d tracked_players=%d",
            len(matches),
            len(replay.skipped_matches),
            len(replay.ratings),
        )
        return replay

    def _belief_for(self, replay: RatingReplay, player: str) -> Belief:
        belief = replay.ratings.get(player)
        if belief is None:
            return self.initialize()
        return belief

    @staticmethod
    def _validate_match(match: MatchResult) -> None:
        if not match.team1_players or not match.team2_players:
            raise ValueError("match is missing players for one or both teams")
        shared = set(match.team1_players) & set(match.team2_players)
        if shared:
            raise ValueError(f"players {sorted(shared)} appear on both teams")
        if len(set(match.players)) != len(match.players):
            raise ValueError("a player is listed twice on the same team")

    def _record(
        self,
        replay: RatingReplay,
        match_index: int,
        match: MatchResult,
        players: tuple[str, ...],
        post: list[Belief],
        won: bool,
    ) -> None:
        summary = MatchSummary(
            team1_players=match.team1_players,
            team2_players=match.team2_players,
            team1_score=match.team1_score,
            team2_score=match.team2_score,
            won=won,
        )
        for player, belief in zip(players, post):
            replay.ratings[player] = belief
            replay.history[player].append(
                HistoryEntry(
                    match_index=match_index,
                    event_time=match.event_time,
                    belief=belief,
                    skill=self.conservative_skill(belief),
                    match=summary,
                )
            )
