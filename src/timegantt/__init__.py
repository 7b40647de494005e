# SPDX-License-Identifier: MIT

from timegantt.cleanup import register_cleanup
from timegantt.initialize import initialize
from timegantt.terminal.app import run
from timegantt.terminal.configuration import run as run_configuration


def main() -> None:
    initialize()
    register_cleanup()
    run()


def config_main() -> None:
    initialize()
    register_cleanup()
    run_configuration()


if __name__ == "__main__":
    main()
