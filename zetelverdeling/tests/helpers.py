from zetelverdeling.quota import PoliticalGroup


def groups_with_default_candidates(votes, candidates=50):
    "one group per entry of `votes', numbered from 1, each with `candidates' candidates"
    return [PoliticalGroup(number, v, candidates) for number, v in enumerate(votes, 1)]


def groups_from_candidate_votes(candidate_votes, numbers=None):
    """
    one group per list of votes per candidate; the group's votes are the sum,
    and it has as many candidates as entries in the list
    """
    if numbers is None:
        numbers = range(1, len(candidate_votes) + 1)
    return [PoliticalGroup(number, sum(votes), len(votes)) for number, votes in zip(numbers, candidate_votes)]


def total_seats(result):
    return [t.total_seats for t in result.final_standing]