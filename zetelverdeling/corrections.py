from .common import logger, DrawingOfLotsRequired
from .fraction import display
from .results import AbsoluteMajorityReassignment, ListExhaustionRemoval


def replace_group(standing, new):
    return tuple(new if s.group_number == new.group_number else s for s in standing)


class AbsoluteMajorityCorrector:
    """
    A group which received an absolute majority of the votes must be assigned
    an absolute majority of the seats. If it was not, one residual seat is
    taken from the group holding the weakest residual seat (the lowest
    average were it to get one more seat) and given to the majority group
    (Kieswet, article P 9).
    """

    def __init__(self, seats, total_votes):
        self.seats = seats
        self.total_votes = total_votes

    def majority_group(self, standing):
        for s in standing:
            if 2 * s.votes_cast > self.total_votes:
                return s
        return None

    def correct(self, standing):
        """
        returns the corrected standing and the AbsoluteMajorityReassignment made,
        or the unmodified standing and None
        """
        majority = self.majority_group(standing)
        if majority is None or 2 * majority.total_seats > self.seats:
            return standing, None

        holders = [s for s in standing if s.residual_seats > 0 and s.group_number != majority.group_number]
        # some other group must hold a residual seat
        assert(holders)

        lowest = min(s.next_votes_per_seat for s in holders)
        tied = [s for s in holders if s.next_votes_per_seat == lowest]
        if len(tied) > 1:
            numbers = [s.group_number for s in tied]
            logger.info(
                "Drawing of lots is required for groups: %s to pick a group which the residual seat gets retracted from" % (
                    numbers))
            raise DrawingOfLotsRequired(numbers, 1)
        retracted = tied[0]
        logger.debug("Weakest residual seat held by group %s, at %s votes per seat" % (
            retracted.group_number, display(lowest)))

        standing = replace_group(standing, retracted.remove_residual_seat())
        standing = replace_group(standing, majority.add_residual_seat())
        logger.info(
            "Seat first assigned to group %s has been reassigned to group %s in accordance with Article P 9 Kieswet" % (
                retracted.group_number, majority.group_number))
        return standing, AbsoluteMajorityReassignment(
            retracted_from=retracted.group_number,
            assigned_to=majority.group_number)


class ListExhaustionHandler:
    """
    A group cannot take more seats than it has candidates. Excess seats are
    removed, most recently assigned first, and assigned again by the residual
    seat procedure among the groups which still have candidates (Kieswet,
    article P 10).
    """

    def __init__(self, counter, candidate_counts):
        """
        counter: the SeatAssigner, which records steps and assigns residual seats
        candidate_counts: a dictionary mapping group number to number of candidates
        """
        self.counter = counter
        self.candidate_counts = candidate_counts

    def over_assigned(self, standing):
        "[(group_number, excess seats), ...] for every group with more seats than candidates"
        return [
            (s.group_number, s.total_seats - self.candidate_counts[s.group_number])
            for s in standing
            if s.total_seats > self.candidate_counts[s.group_number]]

    def exhausted_groups(self, standing):
        "groups which have no candidates left to take another seat"
        return frozenset(
            s.group_number for s in standing
            if s.total_seats >= self.candidate_counts[s.group_number])

    def remove_excess_seats(self, standing):
        """
        remove every excess seat, one at a time. returns the new standing and
        the number of seats removed.
        """
        removed = 0
        for group_number, excess in self.over_assigned(standing):
            for _ in range(excess):
                current = next(s for s in standing if s.group_number == group_number)
                new, full_seat = current.remove_seat()
                standing = replace_group(standing, new)
                logger.info(
                    "Seat first assigned to group %s has been removed and will be assigned to another group in accordance with Article P 10 Kieswet" % (
                        group_number))
                self.counter.record_step(
                    None,
                    ListExhaustionRemoval(retracted_from=group_number, full_seat=full_seat),
                    standing)
                removed += 1
        return standing, removed

    def resolve(self, standing):
        while True:
            standing, removed = self.remove_excess_seats(standing)
            if removed == 0:
                return standing
            standing = self.counter.assign_residual_seats(standing, removed, self.exhausted_groups)
