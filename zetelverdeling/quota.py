from collections import namedtuple

from .common import logger, InvalidInput, ZeroVotesCast
from .fraction import Fraction, ZERO, display

# a group meets the largest remainder threshold when its votes reach
# three quarters of the quota (Kieswet, article P 8)
REMAINDER_THRESHOLD = Fraction(3, 4)

# PoliticalGroup: the finalised input for a political group (list)
#  - number: the list number, unique within the election
#  - votes_cast: the total number of valid votes cast for the list
#  - candidate_count: the number of eligible candidates on the list
PoliticalGroup = namedtuple("PoliticalGroup", ("number", "votes_cast", "candidate_count"))


def votes_per_seat(votes_cast, seats):
    return Fraction(votes_cast, seats)


class GroupStanding(namedtuple("GroupStanding", (
        "group_number",
        "votes_cast",
        "full_seats",
        "residual_seats",
        "remainder_votes",
        "meets_remainder_threshold",
        "next_votes_per_seat"))):
    """
    The standing of one political group at a point in the seat assignment.

    Standings are immutable: every change of seats produces a new instance,
    with `next_votes_per_seat` recomputed as the average number of votes per
    seat the group would have if it were awarded one more seat.
    """
    __slots__ = ()

    @property
    def total_seats(self):
        return self.full_seats + self.residual_seats

    def with_seats(self, full_seats, residual_seats):
        return self._replace(
            full_seats=full_seats,
            residual_seats=residual_seats,
            next_votes_per_seat=votes_per_seat(self.votes_cast, full_seats + residual_seats + 1))

    def add_residual_seat(self):
        return self.with_seats(self.full_seats, self.residual_seats + 1)

    def remove_residual_seat(self):
        assert(self.residual_seats > 0)
        return self.with_seats(self.full_seats, self.residual_seats - 1)

    def remove_seat(self):
        """
        remove the most recently assigned seat: a residual seat if the group
        holds one, otherwise a full seat. returns the new standing, and whether
        a full seat was removed.
        """
        if self.residual_seats > 0:
            return self.remove_residual_seat(), False
        assert(self.full_seats > 0)
        return self.with_seats(self.full_seats - 1, 0), True


def _check_count(value, what):
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise InvalidInput("%s must be a non-negative integer, got %r" % (what, value))


def check_groups(groups):
    if not groups:
        raise InvalidInput("at least one political group is required")
    seen = set()
    for group in groups:
        _check_count(group.votes_cast, "votes cast for group %s" % (group.number, ))
        _check_count(group.candidate_count, "candidate count for group %s" % (group.number, ))
        if group.number in seen:
            raise InvalidInput("duplicate group number: %s" % (group.number, ))
        seen.add(group.number)


class QuotaCalculator:
    """
    Determines the electoral quota (kiesdeler), and the number of full seats
    and the remainder of votes for each political group (Kieswet, articles
    P 5 and P 6).
    """

    def __init__(self, seats, groups):
        """
        seats: the number of seats in the council, a positive integer
        groups: a list of PoliticalGroup instances
        """
        if not isinstance(seats, int) or isinstance(seats, bool) or seats <= 0:
            raise InvalidInput("number of seats must be a positive integer, got %r" % (seats, ))
        check_groups(groups)
        self.seats = seats
        self.groups = list(groups)
        self.total_votes = sum(group.votes_cast for group in self.groups)
        if self.total_votes == 0:
            logger.info("No votes on candidates cast")
            raise ZeroVotesCast()
        self.quota = Fraction(self.total_votes, self.seats)
        logger.info("Quota: %s" % (display(self.quota)))

    def group_standing(self, group):
        votes_cast = Fraction(group.votes_cast)
        # floor(votes / quota), in integers
        full_seats = (group.votes_cast * self.seats) // self.total_votes
        remainder_votes = votes_cast - full_seats * self.quota
        assert(ZERO <= remainder_votes < self.quota)
        logger.debug("Group %s has %d full seats with %d votes" % (group.number, full_seats, group.votes_cast))
        return GroupStanding(
            group_number=group.number,
            votes_cast=group.votes_cast,
            full_seats=full_seats,
            residual_seats=0,
            remainder_votes=remainder_votes,
            meets_remainder_threshold=votes_cast >= self.quota * REMAINDER_THRESHOLD,
            next_votes_per_seat=votes_per_seat(group.votes_cast, full_seats + 1))

    def initial_standing(self):
        return tuple(self.group_standing(group) for group in self.groups)
