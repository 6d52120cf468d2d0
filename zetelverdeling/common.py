import logging


def make_logger(name):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s [%(levelname)-5.5s]  %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger

# this is a common, global logger instance for zetelverdeling
logger = make_logger("zetelverdeling")
logger.setLevel(logging.INFO)


class ApportionmentException(Exception):
    """
    base class for every condition which stops a seat assignment
    """
    pass


class InvalidInput(ApportionmentException):
    pass


class ZeroVotesCast(InvalidInput):
    def __init__(self):
        super().__init__("no valid votes have been cast")


class DrawingOfLotsRequired(ApportionmentException):
    """
    a tie which may only be broken by drawing lots, outside of this package
    """

    def __init__(self, group_numbers, seats_available):
        """
        group_numbers: the groups tied for the decisive value
        seats_available: the number of seats which could be given to them
        """
        self.group_numbers = list(group_numbers)
        self.seats_available = seats_available
        super().__init__(
            "drawing of lots is required for groups %s, only %d seat(s) available" % (
                self.group_numbers, seats_available))


class AllListsExhausted(ApportionmentException):
    def __init__(self):
        super().__init__("seat cannot be (re)assigned because all lists are exhausted")


class ApportionmentNotAvailableUntilDataEntryFinalised(ApportionmentException):
    def __init__(self, name):
        self.name = name
        super().__init__("apportionment of `%s' is not available until data entry is finalised" % (name))
