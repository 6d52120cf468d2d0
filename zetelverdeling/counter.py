from .common import logger
from .corrections import AbsoluteMajorityCorrector, ListExhaustionHandler, replace_group
from .quota import QuotaCalculator
from .residual import select_residual_seat
from .results import SeatChangeStep, SeatAssignmentResult, GroupSeatAssignment

# the states of a seat assignment, in order
START = "start"
FULL_SEATS_COMPUTED = "full seats computed"
RESIDUAL_SEATS_ASSIGNED = "residual seats assigned"
MAJORITY_CHECKED = "majority checked"
EXHAUSTION_RESOLVED = "exhaustion resolved"
DONE = "done"

STATES = (START, FULL_SEATS_COMPUTED, RESIDUAL_SEATS_ASSIGNED, MAJORITY_CHECKED, EXHAUSTION_RESOLVED, DONE)


class SeatAssigner:
    """
    Implementation of the assignment of seats to political groups in a
    municipal council, as defined by chapter P of the Dutch Elections Act
    (Kieswet).

    An instance runs a single seat assignment; its state is local to that
    run, and the result it returns is immutable.
    """

    def __init__(self, seats, groups, results=None):
        """
        seats: the number of seats in the council
        groups: a list of PoliticalGroup instances, holding the finalised
            vote totals and the number of candidates of each group
        results: optionally, an instance of a subclass of BaseResults
            which is informed of each step
        """
        self.seats = seats
        self.groups = list(groups)
        self.results = results
        self.state = START
        self.steps = []
        self.next_residual_seat_number = 1

    def transition(self, state):
        assert(STATES.index(state) == STATES.index(self.state) + 1)
        logger.debug("Seat assignment: %s" % (state))
        self.state = state

    def record_step(self, residual_seat_number, change, standing):
        step = SeatChangeStep(residual_seat_number, change, standing)
        self.steps.append(step)
        if self.results is not None:
            self.results.seat_changed(step)
        return step

    def assign_residual_seats(self, standing, count, exhausted_groups_fn=None):
        """
        assign `count' residual seats, one at a time, recording a step for
        each. the seats are numbered on from any residual seats assigned
        earlier in this run.

        exhausted_groups_fn: called with the current standing, returns the
            groups which may not receive a seat
        """
        last = self.next_residual_seat_number + count - 1
        for number in range(self.next_residual_seat_number, last + 1):
            exhausted_groups = exhausted_groups_fn(standing) if exhausted_groups_fn is not None else ()
            change = select_residual_seat(self.seats, standing, self.steps, last - number + 1, exhausted_groups)
            current = next(s for s in standing if s.group_number == change.selected_group)
            standing = replace_group(standing, current.add_residual_seat())
            logger.info("Residual seat %d assigned to group %s" % (number, change.selected_group))
            self.record_step(number, change, standing)
        self.next_residual_seat_number = last + 1
        return standing

    def run(self):
        assert(self.state == START)
        logger.info("Seat assignment")
        logger.info("Seats: %d" % (self.seats))

        # Kieswet, articles P 5 and P 6
        calculator = QuotaCalculator(self.seats, self.groups)
        standing = calculator.initial_standing()
        full_seats = sum(s.full_seats for s in standing)
        residual_seats = self.seats - full_seats
        if self.results is not None:
            self.results.started(self.seats, calculator.total_votes, calculator.quota)
        self.transition(FULL_SEATS_COMPUTED)

        # Kieswet, articles P 7 and P 8
        if residual_seats > 0:
            standing = self.assign_residual_seats(standing, residual_seats)
        else:
            logger.info("All seats have been assigned without any residual seats")
        self.transition(RESIDUAL_SEATS_ASSIGNED)

        # Kieswet, article P 9
        corrector = AbsoluteMajorityCorrector(self.seats, calculator.total_votes)
        standing, change = corrector.correct(standing)
        if change is not None:
            self.record_step(None, change, standing)
        self.transition(MAJORITY_CHECKED)

        # Kieswet, article P 10
        candidate_counts = dict((group.number, group.candidate_count) for group in self.groups)
        standing = ListExhaustionHandler(self, candidate_counts).resolve(standing)
        self.transition(EXHAUSTION_RESOLVED)

        final_standing = tuple(GroupSeatAssignment.from_standing(s) for s in standing)
        # paranoid cross-check of the whole procedure
        assert(sum(t.total_seats for t in final_standing) == self.seats)
        final_full_seats = sum(t.full_seats for t in final_standing)
        result = SeatAssignmentResult(
            seats=self.seats,
            full_seats=final_full_seats,
            residual_seats=self.seats - final_full_seats,
            quota=calculator.quota,
            steps=tuple(self.steps),
            final_standing=final_standing)
        self.transition(DONE)
        if self.results is not None:
            self.results.finished(result)
        return result


def seat_assignment(seats, groups, results=None):
    """
    assign `seats' seats to `groups' (a list of PoliticalGroup), returning a
    SeatAssignmentResult. raises a subclass of ApportionmentException if the
    seats cannot be assigned.
    """
    return SeatAssigner(seats, groups, results).run()
