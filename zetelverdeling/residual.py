"""
Assignment of residual seats: the seats left over once every political group
has received its full seats.

Councils of 19 seats or more assign every residual seat by highest averages
(Kieswet, article P 7). Smaller councils first assign residual seats by
largest remainders to the groups which reached the remainder threshold, then
by highest averages with at most one such seat per group, and finally by
highest averages among all groups (Kieswet, article P 8).

Each allocator selects a single seat. Ties are never broken here: when more
groups share the decisive value than there are seats left, a drawing of lots
is required.
"""

from .common import logger, DrawingOfLotsRequired, AllListsExhausted
from .fraction import display
from .results import HighestAverageAssignment, LargestRemainderAssignment, \
    AbsoluteMajorityReassignment

LARGE_COUNCIL_THRESHOLD = 19


def group_numbers(standing):
    return tuple(s.group_number for s in standing)


def groups_with_highest(standing, value_fn, seats_available):
    """
    determine the groups in `standing' sharing the highest value of `value_fn'.
    returns the value and the groups, in input order. raises
    DrawingOfLotsRequired if there are more such groups than seats available.
    """
    best, tied = None, []
    for s in standing:
        value = value_fn(s)
        if best is None or value > best:
            best, tied = value, [s]
        elif value == best:
            tied.append(s)
    assert(tied)
    logger.debug("Found %s as the maximum for groups: %s" % (display(best), list(group_numbers(tied))))
    if len(tied) > seats_available:
        logger.info("Drawing of lots is required for groups: %s, only %d seat(s) available" % (
            list(group_numbers(tied)), seats_available))
        raise DrawingOfLotsRequired(group_numbers(tied), seats_available)
    return best, tied


def count_assignments(steps, group_number, matcher):
    return sum(1 for step in steps if matcher(step.change) and step.change.selected_group == group_number)


def is_largest_remainder(change):
    return isinstance(change, LargestRemainderAssignment)


def is_unique_highest_average(change):
    return isinstance(change, HighestAverageAssignment) and change.unique


def is_highest_average(change):
    return isinstance(change, HighestAverageAssignment) and not change.unique


def has_retracted_seat(steps, group_number):
    return any(
        isinstance(step.change, AbsoluteMajorityReassignment) and step.change.retracted_from == group_number
        for step in steps)


def tied_assigned(steps, selected, matcher):
    """
    the groups of a tie which have been assigned a seat, including `selected'.
    a tie may be resolved over consecutive rounds of the same method.
    """
    if steps:
        previous = steps[-1].change
        if matcher(previous) and selected.group_number in previous.tied_options:
            return previous.tied_assigned + (selected.group_number, )
    return (selected.group_number, )


class LargestRemainderAllocator:
    """
    Assigns residual seats to the groups with the largest remainder of votes.
    Only groups meeting the remainder threshold take part, and each group may
    win a single seat this way; a group which lost its seat to an absolute
    majority correction may win one again.
    """

    def __init__(self, steps, exhausted_groups=()):
        """
        steps: the steps of the assignment so far
        exhausted_groups: groups without candidates left to take a seat
        """
        self.steps = steps
        self.exhausted_groups = frozenset(exhausted_groups)

    def qualifies(self, s):
        if not s.meets_remainder_threshold or s.group_number in self.exhausted_groups:
            return False
        assigned = count_assignments(self.steps, s.group_number, is_largest_remainder)
        return assigned == 0 or (assigned == 1 and has_retracted_seat(self.steps, s.group_number))

    def select(self, standing, seats_available):
        """
        returns a LargestRemainderAssignment, or None if no group qualifies
        """
        qualifying = [s for s in standing if self.qualifies(s)]
        if not qualifying:
            return None
        remainder_votes, tied = groups_with_highest(qualifying, lambda s: s.remainder_votes, seats_available)
        selected = tied[0]
        return LargestRemainderAssignment(
            selected_group=selected.group_number,
            tied_options=group_numbers(tied),
            tied_assigned=tied_assigned(self.steps, selected, is_largest_remainder),
            remainder_votes=remainder_votes)


class HighestAverageAllocator:
    """
    Assigns residual seats to the groups with the highest average number of
    votes per seat, were they to be assigned one more seat.

    With `unique' set, a group may win only a single seat this way (unless it
    lost a residual seat to an absolute majority correction), so that every
    group gets a chance at a residual seat before any group gets a second.
    """

    def __init__(self, steps, exhausted_groups=(), unique=False):
        self.steps = steps
        self.exhausted_groups = frozenset(exhausted_groups)
        self.unique = unique

    def qualifies(self, s):
        if s.group_number in self.exhausted_groups:
            return False
        if not self.unique:
            return True
        assigned = count_assignments(self.steps, s.group_number, is_unique_highest_average)
        if assigned == 0:
            return True
        return (
            assigned == 1 and
            count_assignments(self.steps, s.group_number, is_largest_remainder) <= 1 and
            has_retracted_seat(self.steps, s.group_number))

    def select(self, standing, seats_available):
        """
        returns a HighestAverageAssignment, or None if no group qualifies
        """
        qualifying = [s for s in standing if self.qualifies(s)]
        if not qualifying:
            return None
        # the averages change with every seat assigned, so these are
        # read fresh from the standing for every seat
        votes_per_seat, tied = groups_with_highest(qualifying, lambda s: s.next_votes_per_seat, seats_available)
        selected = tied[0]
        matcher = is_unique_highest_average if self.unique else is_highest_average
        return HighestAverageAssignment(
            selected_group=selected.group_number,
            tied_options=group_numbers(tied),
            tied_assigned=tied_assigned(self.steps, selected, matcher),
            votes_per_seat=votes_per_seat,
            exhausted_groups=tuple(sorted(self.exhausted_groups)),
            unique=self.unique)


def select_residual_seat(seats, standing, steps, seats_available, exhausted_groups=()):
    """
    select the group to receive the next residual seat, using the method the
    statute prescribes for a council of `seats' seats.

    seats_available: the number of residual seats still to be assigned,
        including this one
    exhausted_groups: groups which must not receive a seat

    raises AllListsExhausted if no group is eligible for the seat
    """
    if seats >= LARGE_COUNCIL_THRESHOLD:
        logger.debug("Assign residual seat using highest averages method")
        change = HighestAverageAllocator(steps, exhausted_groups).select(standing, seats_available)
    else:
        change = LargestRemainderAllocator(steps, exhausted_groups).select(standing, seats_available)
        if change is not None:
            logger.debug("Assign residual seat using largest remainders method")
        else:
            # every qualifying group has had a largest remainder seat; now every
            # group may get one seat by highest average, before any group gets a
            # second one
            change = HighestAverageAllocator(steps, exhausted_groups, unique=True).select(standing, seats_available)
            if change is not None:
                logger.debug("Assign residual seat using unique highest averages method")
            else:
                logger.debug("Assign residual seat using highest averages method")
                change = HighestAverageAllocator(steps, exhausted_groups).select(standing, seats_available)
    if change is None:
        logger.info("Seat cannot be (re)assigned because all lists are exhausted")
        raise AllListsExhausted()
    return change
