from .counter import SeatAssigner, seat_assignment
from .common import ApportionmentException, InvalidInput, ZeroVotesCast, \
    DrawingOfLotsRequired, AllListsExhausted, \
    ApportionmentNotAvailableUntilDataEntryFinalised
from .quota import PoliticalGroup

__all__ = [
    "AllListsExhausted",
    "ApportionmentException",
    "ApportionmentNotAvailableUntilDataEntryFinalised",
    "DrawingOfLotsRequired",
    "InvalidInput",
    "PoliticalGroup",
    "SeatAssigner",
    "ZeroVotesCast",
    "seat_assignment",
]
