"""
Reading the finalised vote totals of the political groups, either inline in
a count configuration or from a CSV file with the header
``number,votes,candidates``.
"""

import csv
from collections import namedtuple

from .common import InvalidInput
from .quota import PoliticalGroup

CSV_HEADER = ['number', 'votes', 'candidates']


def int_or_invalid(s, what):
    if isinstance(s, (bool, float)):
        raise InvalidInput("%s is not an integer: %r" % (what, s))
    try:
        value = int(s)
    except (TypeError, ValueError):
        raise InvalidInput("%s is not an integer: %r" % (what, s))
    if value < 0:
        raise InvalidInput("%s must not be negative: %r" % (what, s))
    return value


def named_tuple_iter(name, reader, header, source):
    field_names = [t for t in [t.strip().replace('-', '_')
                               for t in header] if t]
    typ = namedtuple(name, field_names)
    for row in reader:
        if not row:
            continue
        if len(row) != len(field_names):
            raise InvalidInput("`%s' line %d: expected %d fields, got %d" % (
                source, reader.line_num, len(field_names), len(row)))
        yield typ(*row)


def make_group(number, votes, candidates):
    what = "group %s" % (number, )
    return PoliticalGroup(
        number=int_or_invalid(number, "%s number" % (what)),
        votes_cast=int_or_invalid(votes, "%s votes" % (what)),
        candidate_count=int_or_invalid(candidates, "%s candidates" % (what)))


def groups_from_json(entries):
    """
    entries: a list of objects {"number": .., "votes": .., "candidates": ..}
    """
    groups = []
    for entry in entries:
        try:
            groups.append(make_group(entry['number'], entry['votes'], entry['candidates']))
        except KeyError as e:
            raise InvalidInput("group entry is missing `%s': %r" % (e.args[0], entry))
    return groups


def groups_from_csv(csv_file):
    with open(csv_file, 'rt', newline='') as fd:
        reader = csv.reader(fd)
        header = [t.strip() for t in next(reader, [])]
        if header != CSV_HEADER:
            raise InvalidInput("unknown header in `%s': %s" % (csv_file, header))
        return [make_group(row.number, row.votes, row.candidates)
                for row in named_tuple_iter('GroupRow', reader, header, csv_file)]
