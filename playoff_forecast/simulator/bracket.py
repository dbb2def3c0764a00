"""
Single-elimination playoff bracket.

Qualifiers arrive seeded best to worst. Rounds are built from immutable
tuples so no round ever aliases another.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from .models import SimulatedTeamState
from .random_source import RandomSource
from .ratings import simulate_game


@dataclass(frozen=True)
class BracketOutcome:
    """Team ids credited at each bracket milestone in one trial."""

    semifinalists: Tuple[int, ...] = ()
    finalists: Tuple[int, ...] = ()
    champion: Tuple[int, ...] = ()


def semifinal_cohort_size(n_qualifiers: int) -> int:
    """
    Number of teams in the semifinal round for a bracket of n qualifiers.

    Two thirds of the field, rounded up (6 teams: 4 with 2 byes, 12: 8 with 4).
    The opening round does not always fill the open slots: with 5 or 8
    qualifiers it produces fewer winners than there are slots, so the
    semifinal round ends up with 3 or 5 teams and its trailing entry advances.
    """
    if n_qualifiers <= 4:
        return n_qualifiers
    return min(n_qualifiers, -(-2 * n_qualifiers // 3))


def bye_count(n_qualifiers: int) -> int:
    """Top seeds that skip the opening round."""
    if n_qualifiers < 4:
        return 0
    return max(0, n_qualifiers - semifinal_cohort_size(n_qualifiers))


def _play(a: SimulatedTeamState, b: SimulatedTeamState, rng: RandomSource) -> SimulatedTeamState:
    return a if simulate_game(a.rating, b.rating, rng) else b


def play_round(
    entries: Tuple[SimulatedTeamState, ...],
    rng: RandomSource
) -> Tuple[SimulatedTeamState, ...]:
    """
    Pair entries sequentially (0v1, 2v3, ...) and return the winners.

    A trailing entry with no opponent advances without playing.
    """
    winners = []
    for i in range(0, len(entries), 2):
        if i + 1 >= len(entries):
            winners.append(entries[i])
            continue
        winners.append(_play(entries[i], entries[i + 1], rng))
    return tuple(winners)


def _ids(entries: Sequence[SimulatedTeamState]) -> Tuple[int, ...]:
    return tuple(e.team_id for e in entries)


def simulate_bracket(
    qualifiers: Sequence[SimulatedTeamState],
    rng: RandomSource
) -> BracketOutcome:
    """
    Play out the bracket for one trial.

    Args:
        qualifiers: Playoff teams in seed order (best first)
        rng: Random source for game outcomes

    Returns:
        BracketOutcome with semifinalists, finalists and the champion
    """
    field = tuple(qualifiers)
    n = len(field)

    if n < 2:
        return BracketOutcome()

    if n < 4:
        top_two = field[:2]
        champion = _play(top_two[0], top_two[1], rng)
        return BracketOutcome(
            semifinalists=_ids(top_two),
            finalists=_ids(top_two),
            champion=(champion.team_id,)
        )

    cohort = semifinal_cohort_size(n)
    if n > cohort:
        # At most open_slots winners join the byes; may be fewer (5 or 8 qualifiers)
        byes = bye_count(n)
        open_slots = cohort - byes
        opening_winners = play_round(field[byes:], rng)[:open_slots]
        semifinal_round = field[:byes] + opening_winners
    else:
        semifinal_round = field

    # Halve until two finalists remain; an odd round's last entry advances
    finalists = semifinal_round
    while len(finalists) > 2:
        finalists = play_round(finalists, rng)

    if len(finalists) >= 2:
        champion = _play(finalists[0], finalists[1], rng)
    else:
        champion = finalists[0]

    return BracketOutcome(
        semifinalists=_ids(semifinal_round),
        finalists=_ids(finalists),
        champion=(champion.team_id,)
    )
