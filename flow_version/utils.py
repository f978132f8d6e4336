"Various utilities"

import sys


class Color:
    "Colors for the console"
    @staticmethod
    def red(text):
        "red"
        return f"\033[31m{text}\033[0m"
    @staticmethod
    def yellow(text):
        "yellow"
        return f"\033[33m{text}\033[0m"
    @staticmethod
    def bold(text):
        "bold"
        return f"\033[1m{text}\033[0m"


def warning(msg: str):
    "Writes a warning on stderr"
    sys.stderr.write(f"{Color.yellow('flow-version WARNING')}: {msg}")
