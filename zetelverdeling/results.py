"""
This module defines the record of a seat assignment: each change made to the
seats of the political groups, the standing after each change, and the final
result. It also provides a base class for observers of an assignment, to be
implemented by callers for reporting.

Every record is immutable. A result can be rendered losslessly as JSON by
``result_json``; fractions are written as three integers, never as floats.
"""

import abc
import datetime
import json
from collections import namedtuple

from .common import logger
from .fraction import fraction_json


class HighestAverageAssignment(namedtuple("HighestAverageAssignment", (
        "selected_group",
        "tied_options",
        "tied_assigned",
        "votes_per_seat",
        "exhausted_groups",
        "unique"), defaults=((), False))):
    """
    A residual seat assigned through the highest averages method.

    selected_group: the group which was assigned the seat
    tied_options: every group with the same average as the selected group
    tied_assigned: the groups of this tie which have been assigned a seat so far
    votes_per_seat: the average achieved by the selected group
    exhausted_groups: groups excluded because they have no candidates left
    unique: True if only groups without a seat from this highest averages
        round were eligible (councils of less than 19 seats)
    """
    __slots__ = ()
    kind = "highest_average_assignment"


class LargestRemainderAssignment(namedtuple("LargestRemainderAssignment", (
        "selected_group",
        "tied_options",
        "tied_assigned",
        "remainder_votes"))):
    """
    A residual seat assigned through the largest remainders method.
    """
    __slots__ = ()
    kind = "largest_remainder_assignment"


class AbsoluteMajorityReassignment(namedtuple("AbsoluteMajorityReassignment", (
        "retracted_from",
        "assigned_to"))):
    """
    A residual seat reassigned to the group with an absolute majority of the
    votes (Kieswet, article P 9).
    """
    __slots__ = ()
    kind = "absolute_majority_reassignment"


class ListExhaustionRemoval(namedtuple("ListExhaustionRemoval", (
        "retracted_from",
        "full_seat"), defaults=(False, ))):
    """
    A seat removed from a group with more seats than candidates (Kieswet,
    article P 10). full_seat is True if the removed seat was a full seat.
    """
    __slots__ = ()
    kind = "list_exhaustion_removal"


# SeatChangeStep: a change of seats, and the standing immediately after it
#  - residual_seat_number: the number of the residual seat assigned, or None
#    for corrections
#  - change: one of the seat change classes above
#  - standing: a tuple of GroupStanding, in input order
SeatChangeStep = namedtuple("SeatChangeStep", ("residual_seat_number", "change", "standing"))


class GroupSeatAssignment(namedtuple("GroupSeatAssignment", (
        "group_number",
        "votes_cast",
        "full_seats",
        "residual_seats",
        "remainder_votes",
        "meets_remainder_threshold",
        "total_seats"))):
    """
    The final number of seats assigned to a political group.
    """
    __slots__ = ()

    @classmethod
    def from_standing(cls, standing):
        return cls(
            group_number=standing.group_number,
            votes_cast=standing.votes_cast,
            full_seats=standing.full_seats,
            residual_seats=standing.residual_seats,
            remainder_votes=standing.remainder_votes,
            meets_remainder_threshold=standing.meets_remainder_threshold,
            total_seats=standing.total_seats)


# SeatAssignmentResult: the outcome of one seat assignment
#  - seats: the number of seats in the council
#  - full_seats, residual_seats: seats assigned as full and residual seats
#  - quota: the electoral quota (a Fraction)
#  - steps: a tuple of SeatChangeStep, in the order the changes were made
#  - final_standing: a tuple of GroupSeatAssignment, in input order
SeatAssignmentResult = namedtuple("SeatAssignmentResult", (
    "seats", "full_seats", "residual_seats", "quota", "steps", "final_standing"))


def total_seats_per_group(result):
    "[(group_number, total_seats), ...] for the candidate nomination"
    return [(t.group_number, t.total_seats) for t in result.final_standing]


def change_json(change):
    if isinstance(change, HighestAverageAssignment):
        r = {
            'selected_group': change.selected_group,
            'tied_options': list(change.tied_options),
            'tied_assigned': list(change.tied_assigned),
            'exhausted_groups': list(change.exhausted_groups),
            'votes_per_seat': fraction_json(change.votes_per_seat),
            'unique': change.unique,
        }
    elif isinstance(change, LargestRemainderAssignment):
        r = {
            'selected_group': change.selected_group,
            'tied_options': list(change.tied_options),
            'tied_assigned': list(change.tied_assigned),
            'remainder_votes': fraction_json(change.remainder_votes),
        }
    elif isinstance(change, AbsoluteMajorityReassignment):
        r = {
            'retracted_from': change.retracted_from,
            'assigned_to': change.assigned_to,
        }
    elif isinstance(change, ListExhaustionRemoval):
        r = {
            'retracted_from': change.retracted_from,
            'full_seat': change.full_seat,
        }
    else:
        raise TypeError("unknown seat change: %r" % (change, ))
    r['type'] = change.kind
    return r


def standing_json(standing):
    return {
        'group_number': standing.group_number,
        'votes_cast': standing.votes_cast,
        'full_seats': standing.full_seats,
        'residual_seats': standing.residual_seats,
        'remainder_votes': fraction_json(standing.remainder_votes),
        'meets_remainder_threshold': standing.meets_remainder_threshold,
        'next_votes_per_seat': fraction_json(standing.next_votes_per_seat),
    }


def result_json(result):
    def final_json(t):
        return {
            'group_number': t.group_number,
            'votes_cast': t.votes_cast,
            'full_seats': t.full_seats,
            'residual_seats': t.residual_seats,
            'remainder_votes': fraction_json(t.remainder_votes),
            'meets_remainder_threshold': t.meets_remainder_threshold,
            'total_seats': t.total_seats,
        }

    return {
        'seats': result.seats,
        'full_seats': result.full_seats,
        'residual_seats': result.residual_seats,
        'quota': fraction_json(result.quota),
        'steps': [{
            'residual_seat_number': step.residual_seat_number,
            'change': change_json(step.change),
            'standing': [standing_json(t) for t in step.standing],
        } for step in result.steps],
        'final_standing': [final_json(t) for t in result.final_standing],
    }


class BaseResults(metaclass=abc.ABCMeta):
    """
    Base class, with callback hooks for each event of a seat assignment.

    The concrete implementation is responsible for tracking events.
    """

    @abc.abstractmethod
    def started(self, seats, total_votes, quota):
        """
        Called when the seat assignment begins, once the quota is known.
        """
        pass

    @abc.abstractmethod
    def seat_changed(self, step):
        """
        Called each time seats change. ``step`` is an instance of
        SeatChangeStep.
        """
        pass

    @abc.abstractmethod
    def finished(self, result):
        """
        Called when the seat assignment has completed. ``result`` is an
        instance of SeatAssignmentResult.
        """
        pass


class JSONResults(BaseResults):
    def __init__(self, filename, **kwargs):
        self.filename = filename
        self.template_variables = kwargs
        self.total_votes = None
        self.steps_seen = 0
        self._start_time = datetime.datetime.now()

    def started(self, seats, total_votes, quota):
        self.total_votes = total_votes

    def seat_changed(self, step):
        self.steps_seen += 1

    def finished(self, result):
        self._end_time = datetime.datetime.now()
        # the observer must have seen every step of the result
        assert(self.steps_seen == len(result.steps))
        self.write_json(result)

    def write_json(self, result):
        params = {
            'total_votes': self.total_votes,
            'started': self._start_time.strftime("%Y-%m-%d %H:%M"),
            'finished': self._end_time.strftime("%Y-%m-%d %H:%M")
        }
        params.update(self.template_variables)
        obj = {
            'parameters': params,
            'result': result_json(result),
            'summary': dict((str(number), seats) for number, seats in total_seats_per_group(result)),
        }
        with open(self.filename, 'w') as fd:
            try:
                json.dump(obj, fd)
            except TypeError:
                logger.error("failed to serialise data")
                logger.error("%s" % (repr(obj)))
                raise
