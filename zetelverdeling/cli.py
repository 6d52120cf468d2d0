from .seatcount import main as count_main


def main():
    count_main()
