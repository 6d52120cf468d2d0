import unittest

from zetelverdeling.common import DrawingOfLotsRequired, AllListsExhausted
from zetelverdeling.counter import seat_assignment
from zetelverdeling.fraction import Fraction
from zetelverdeling.quota import QuotaCalculator
from zetelverdeling.residual import LARGE_COUNCIL_THRESHOLD, groups_with_highest, \
    LargestRemainderAllocator, HighestAverageAllocator, select_residual_seat
from zetelverdeling.results import HighestAverageAssignment, LargestRemainderAssignment

from helpers import groups_with_default_candidates


def initial_standing(seats, votes):
    return QuotaCalculator(seats, groups_with_default_candidates(votes)).initial_standing()


class GroupsWithHighestTests(unittest.TestCase):
    def setUp(self):
        self.standing = initial_standing(15, [480, 240, 240, 55, 50, 45, 45, 45])

    def test_single_highest(self):
        best, tied = groups_with_highest(self.standing, lambda s: s.votes_cast, 1)
        self.assertEqual(best, 480)
        self.assertEqual([s.group_number for s in tied], [1])

    def test_tie_in_input_order(self):
        best, tied = groups_with_highest(self.standing[1:], lambda s: s.votes_cast, 2)
        self.assertEqual(best, 240)
        self.assertEqual([s.group_number for s in tied], [2, 3])

    def test_tie_exceeding_seats(self):
        with self.assertRaises(DrawingOfLotsRequired) as cm:
            groups_with_highest(self.standing[5:], lambda s: s.votes_cast, 2)
        self.assertEqual(cm.exception.group_numbers, [6, 7, 8])
        self.assertEqual(cm.exception.seats_available, 2)


class LargestRemainderAllocatorTests(unittest.TestCase):
    def setUp(self):
        # quota 80, remainders of 0 for groups 1 to 3; groups 4 to 8 are
        # below the remainder threshold of 60 votes
        self.standing = initial_standing(15, [480, 240, 240, 55, 50, 45, 45, 45])

    def test_qualifies(self):
        allocator = LargestRemainderAllocator([])
        self.assertEqual([allocator.qualifies(s) for s in self.standing], [True] * 3 + [False] * 5)

    def test_exhausted_group_does_not_qualify(self):
        allocator = LargestRemainderAllocator([], exhausted_groups=[2])
        self.assertEqual([allocator.qualifies(s) for s in self.standing[:3]], [True, False, True])

    def test_select(self):
        change = LargestRemainderAllocator([]).select(self.standing, 3)
        self.assertIsInstance(change, LargestRemainderAssignment)
        self.assertEqual(change.selected_group, 1)
        self.assertEqual(change.tied_options, (1, 2, 3))
        self.assertEqual(change.tied_assigned, (1, ))
        self.assertEqual(change.remainder_votes, 0)

    def test_select_tie_exceeding_seats(self):
        with self.assertRaises(DrawingOfLotsRequired) as cm:
            LargestRemainderAllocator([]).select(self.standing, 2)
        self.assertEqual(cm.exception.group_numbers, [1, 2, 3])

    def test_select_without_qualifying_groups(self):
        self.assertIsNone(LargestRemainderAllocator([], exhausted_groups=[1, 2, 3]).select(self.standing, 3))


class HighestAverageAllocatorTests(unittest.TestCase):
    def setUp(self):
        self.standing = initial_standing(19, [808, 57, 56, 55, 54, 53, 52, 51, 14])

    def test_select(self):
        change = HighestAverageAllocator([]).select(self.standing, 4)
        self.assertIsInstance(change, HighestAverageAssignment)
        self.assertEqual(change.selected_group, 1)
        self.assertEqual(change.tied_options, (1, ))
        self.assertEqual(change.votes_per_seat, Fraction(808, 13))
        self.assertFalse(change.unique)
        self.assertEqual(change.exhausted_groups, ())

    def test_exhausted_groups_are_recorded(self):
        change = HighestAverageAllocator([], exhausted_groups=[2, 1]).select(self.standing, 4)
        self.assertEqual(change.selected_group, 3)
        self.assertEqual(change.exhausted_groups, (1, 2))

    def test_all_exhausted(self):
        allocator = HighestAverageAllocator([], exhausted_groups=range(1, 10))
        self.assertIsNone(allocator.select(self.standing, 4))

    def test_select_residual_seat_all_exhausted(self):
        with self.assertRaises(AllListsExhausted):
            select_residual_seat(19, self.standing, [], 4, exhausted_groups=range(1, 10))


class MethodThresholdTests(unittest.TestCase):
    def test_threshold(self):
        self.assertEqual(LARGE_COUNCIL_THRESHOLD, 19)

    def test_eighteen_seats_uses_largest_remainders(self):
        # quota 52 7/9, without an absolute majority
        result = seat_assignment(18, groups_with_default_candidates([400, 300, 150, 100]))
        self.assertEqual(len(result.steps), 3)
        self.assertEqual(
            [(type(step.change), step.change.selected_group) for step in result.steps],
            [(LargestRemainderAssignment, 4), (LargestRemainderAssignment, 3), (LargestRemainderAssignment, 2)])

    def test_nineteen_seats_uses_highest_averages(self):
        result = seat_assignment(19, groups_with_default_candidates([500, 300, 100, 51]))
        changes = [step.change for step in result.steps]
        self.assertTrue(all(isinstance(c, HighestAverageAssignment) and not c.unique for c in changes))
        self.assertEqual([c.selected_group for c in changes], [1, 2, 3])

    def test_tie_resolved_over_consecutive_seats(self):
        # groups 1 to 3 share an average of 50 votes per seat, and there are
        # exactly three residual seats
        result = seat_assignment(19, groups_with_default_candidates([500, 300, 100, 51]))
        changes = [step.change for step in result.steps]
        self.assertEqual([c.tied_options for c in changes], [(1, 2, 3), (2, 3), (3, )])
        self.assertEqual([c.tied_assigned for c in changes], [(1, ), (1, 2), (1, 2, 3)])
        self.assertEqual([c.votes_per_seat for c in changes], [Fraction(50)] * 3)


class UniqueHighestAverageTests(unittest.TestCase):
    def setUp(self):
        self.result = seat_assignment(15, groups_with_default_candidates([808, 59, 58, 57, 56, 55, 54, 53]))

    def test_methods(self):
        changes = [step.change for step in self.result.steps]
        self.assertIsInstance(changes[0], LargestRemainderAssignment)
        for change in changes[1:]:
            self.assertIsInstance(change, HighestAverageAssignment)
            self.assertTrue(change.unique)

    def test_one_seat_per_group(self):
        self.assertEqual([step.change.selected_group for step in self.result.steps], [1, 1, 2, 3, 4])

    def test_votes_per_seat(self):
        self.assertEqual(
            [step.change.votes_per_seat for step in self.result.steps[1:]],
            [Fraction(808, 12), Fraction(59), Fraction(58), Fraction(57)])
