"""Interface-level constants for the todoist CLI."""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

PACKAGE_NAME = "todoist-cli"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
