#!/usr/bin/env python3

import argparse
import logging
import difflib
import glob
import json
import sys
import os
from pprint import pformat

from .common import logger, InvalidInput, DrawingOfLotsRequired, AllListsExhausted, \
    ApportionmentNotAvailableUntilDataEntryFinalised
from .counter import seat_assignment
from .groupdata import groups_from_csv, groups_from_json
from .results import JSONResults, total_seats_per_group


def read_config(config_file):
    with open(config_file) as fd:
        return json.load(fd)


def check_config(config):
    "basic checks that the configuration file is valid"
    shortnames = [count['shortname'] for count in config['count']]
    if len(shortnames) != len(set(shortnames)):
        logger.error("error: duplicate `shortname' in count configuration.")
        return False
    for count in config['count']:
        if 'groups' not in count and 'groups_csv' not in count:
            logger.error("error: count `%s' has neither `groups' nor `groups_csv'." % (count['shortname']))
            return False
    return True


def cleanup_json(out_dir):
    for fname in glob.glob(out_dir + '/*.json'):
        logger.debug("cleanup: removing `%s'" % (fname))
        os.unlink(fname)


def write_index_json(config, out_dir):
    json_f = os.path.join(out_dir, 'count.json')
    with open(json_f, 'w') as fd:
        obj = {
            'title': config.get('title')
        }
        obj['counts'] = [{
            'name': count['name'],
            'description': count.get('description'),
            'path': count['shortname']}
            for count in config['count']]
        json.dump(obj, fd, sort_keys=True, indent=4, separators=(',', ': '))


def json_count_path(out_dir, shortname):
    return os.path.join(out_dir, shortname + '.json')


def get_groups(count, base_dir):
    if not count.get('finalised', True):
        raise ApportionmentNotAvailableUntilDataEntryFinalised(count['name'])
    if 'groups_csv' in count:
        return groups_from_csv(os.path.join(base_dir, count['groups_csv']))
    return groups_from_json(count['groups'])


def read_verified(verified_file):
    with open(verified_file) as fd:
        data = json.load(fd)
    return dict((str(number), seats) for number, seats in data['total_seats'].items())


def verify_outcome(verified_file, result):
    "compare the seats of each group in `result' with those in the verified file"
    expected = read_verified(verified_file)
    actual = dict((str(number), seats) for number, seats in total_seats_per_group(result))
    if expected != actual:
        logger.error("Verification against `%s': FAIL" % (verified_file))
        logger.error("Seats should be:")
        logger.error(pformat(expected))
        logger.error("Seats are:")
        logger.error(pformat(actual))
        logger.error("Diff:")
        logger.error(
            '\n'.join(
                difflib.unified_diff(
                    pformat(expected).split('\n'),
                    pformat(actual).split('\n'))))
        return False
    logger.debug("Verification against `%s': OK" % (verified_file))
    return True


def error_json(exc):
    if isinstance(exc, DrawingOfLotsRequired):
        return {
            'type': 'drawing_of_lots_required',
            'message': str(exc),
            'group_numbers': exc.group_numbers,
            'seats_available': exc.seats_available,
        }
    elif isinstance(exc, AllListsExhausted):
        return {
            'type': 'all_lists_exhausted',
            'message': str(exc),
        }
    elif isinstance(exc, ApportionmentNotAvailableUntilDataEntryFinalised):
        return {
            'type': 'apportionment_not_available_until_data_entry_finalised',
            'message': str(exc),
        }
    raise TypeError("no JSON representation for %r" % (exc, ))


def write_error(outf, count, exc):
    obj = {
        'parameters': {
            'name': count.get('name'),
            'description': count.get('description'),
            'seats': count.get('seats'),
        },
        'error': error_json(exc),
    }
    with open(outf, 'w') as fd:
        json.dump(obj, fd)


def get_outcome(count, base_dir, out_dir):
    """
    run the seat assignment for `count', writing the outcome to the output
    directory. returns the SeatAssignmentResult, or None if the assignment is
    blocked (eg. a drawing of lots is required.)
    """
    outf = json_count_path(out_dir, count['shortname'])
    logger.info("assigning seats for `%s'. output written to `%s'" % (count['name'], outf))
    result_writer = JSONResults(
        outf,
        name=count.get('name'),
        description=count.get('description'),
        seats=count['seats'])
    try:
        groups = get_groups(count, base_dir)
        result = seat_assignment(count['seats'], groups, result_writer)
    except (DrawingOfLotsRequired, AllListsExhausted, ApportionmentNotAvailableUntilDataEntryFinalised) as exc:
        logger.error("`%s': %s" % (count['name'], exc))
        write_error(outf, count, exc)
        return None
    return result


def parse_args(args=None):
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '-q', '--quiet',
        action='store_true', help="Disable informational output")
    parser.add_argument(
        '-v', '--verbose',
        action='store_true', help="Enable debug output")
    parser.add_argument(
        '--only',
        type=str, help="Only run the count with this shortname")
    parser.add_argument(
        '--only-verified',
        action='store_true', help="Only run verified counts")
    parser.add_argument(
        'config_file',
        type=str,
        help='JSON config file for counts')
    parser.add_argument(
        'out_dir',
        type=str,
        help='Output directory')
    return parser.parse_args(args)


def execute_counts(out_dir, config_file, only=None, only_verified=False):
    """
    run every count in the configuration file. returns True if every count
    produced a result, and every verified count matched.
    """
    base_dir = os.path.dirname(os.path.abspath(config_file))
    config = read_config(config_file)
    if not check_config(config):
        return False

    cleanup_json(out_dir)
    write_index_json(config, out_dir)
    ok = True
    for count in config['count']:
        if only is not None and count['shortname'] != only:
            continue
        if only_verified and 'verified' not in count:
            continue
        logger.debug("determining outcome for count: `%s'" % (count['name']))
        try:
            result = get_outcome(count, base_dir, out_dir)
        except InvalidInput as exc:
            logger.error("** invalid input for count `%s': %s **" % (count['name'], exc))
            sys.exit(1)
        if result is None:
            ok = False
            continue
        if 'verified' in count and not verify_outcome(os.path.join(base_dir, count['verified']), result):
            logger.error("** TESTS FAILED **")
            ok = False
    return ok


def main(args=None):
    args = parse_args(args)
    if args.quiet:
        logger.setLevel(logging.ERROR)
    elif args.verbose:
        logger.setLevel(logging.DEBUG)
    if not execute_counts(args.out_dir, args.config_file, args.only, args.only_verified):
        sys.exit(1)


if __name__ == '__main__':
    main()
