import os
import tempfile
import unittest

from zetelverdeling.common import InvalidInput
from zetelverdeling.groupdata import groups_from_csv, groups_from_json, int_or_invalid
from zetelverdeling.quota import PoliticalGroup


def test_int_or_invalid():
    assert(int_or_invalid("12", "votes") == 12)
    assert(int_or_invalid(" 7", "votes") == 7)
    assert(int_or_invalid(0, "votes") == 0)


class IntOrInvalidTests(unittest.TestCase):
    def test_rejects(self):
        for value in ("", "abc", "1.5", None, 1.0, True, -1, "-4"):
            with self.assertRaises(InvalidInput):
                int_or_invalid(value, "votes")


class GroupsFromJSONTests(unittest.TestCase):
    def test_groups(self):
        groups = groups_from_json([
            {"number": 1, "votes": 2571, "candidates": 7},
            {"number": 3, "votes": 977, "candidates": 4},
        ])
        self.assertEqual(groups, [PoliticalGroup(1, 2571, 7), PoliticalGroup(3, 977, 4)])

    def test_missing_key(self):
        with self.assertRaises(InvalidInput):
            groups_from_json([{"number": 1, "votes": 2571}])

    def test_negative_votes(self):
        with self.assertRaises(InvalidInput):
            groups_from_json([{"number": 1, "votes": -1, "candidates": 7}])


class GroupsFromCSVTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.csv_file = os.path.join(self.tmpdir.name, 'groups.csv')

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        with open(self.csv_file, 'w') as fd:
            fd.write(text)

    def test_groups(self):
        self.write("number,votes,candidates\n1,2571,7\n2,977,4\n\n4,536,2\n")
        self.assertEqual(
            groups_from_csv(self.csv_file),
            [PoliticalGroup(1, 2571, 7), PoliticalGroup(2, 977, 4), PoliticalGroup(4, 536, 2)])

    def test_header_whitespace(self):
        self.write("number, votes, candidates\n1,10,1\n")
        self.assertEqual(groups_from_csv(self.csv_file), [PoliticalGroup(1, 10, 1)])

    def test_unknown_header(self):
        self.write("list,votes,candidates\n1,10,1\n")
        with self.assertRaises(InvalidInput):
            groups_from_csv(self.csv_file)

    def test_empty_file(self):
        self.write("")
        with self.assertRaises(InvalidInput):
            groups_from_csv(self.csv_file)

    def test_bad_value(self):
        self.write("number,votes,candidates\n1,ten,1\n")
        with self.assertRaises(InvalidInput):
            groups_from_csv(self.csv_file)

    def test_too_few_fields(self):
        self.write("number,votes,candidates\n1,100\n")
        with self.assertRaises(InvalidInput) as cm:
            groups_from_csv(self.csv_file)
        self.assertIn("line 2", str(cm.exception))

    def test_too_many_fields(self):
        self.write("number,votes,candidates\n1,100,5\n2,50,3,1\n")
        with self.assertRaises(InvalidInput) as cm:
            groups_from_csv(self.csv_file)
        self.assertIn("line 3", str(cm.exception))
