"""
Console Errors

Errors raised while interpreting one console invocation. The
interpreter prints the message; reprint_usage tells the console
front-end to show the command's usage again.
"""


class ConsoleError(Exception):
    """Error interpreting a console invocation."""

    def __init__(self, message: str, reprint_usage: bool = False):
        super().__init__(message)
        self.message = message
        self.reprint_usage = reprint_usage


class TooFewArgumentsError(ConsoleError):
    """At least one criterion and a command are needed."""

    def __init__(self):
        super().__init__("Expected at least one criterion and a command.", reprint_usage=True)


class CriterionError(ConsoleError):
    """A criterion token could not be parsed."""


class InapplicableMatchError(CriterionError):
    """A criterion names a field that does not exist for this target."""

    def __init__(self, key: str):
        super().__init__("You have specified invalid match type for this query.")
        self.key = key


class MissingCommandError(ConsoleError):
    """The criteria are not followed by a command."""

    def __init__(self):
        super().__init__("You have to specify a command after the criteria.", reprint_usage=True)


class UnknownCommandError(ConsoleError):
    """The command name is unknown or ambiguous."""

    def __init__(self, name: str):
        super().__init__("You have specified invalid command.", reprint_usage=True)
        self.name = name


class MissingParametersError(ConsoleError):
    """The command needs more parameters than were given."""

    def __init__(self, command: str, required: int):
        super().__init__("This command requires additional parameter(s).")
        self.command = command
        self.required = required


class InapplicableCommandError(ConsoleError):
    """The command cannot be applied to this kind of target."""

    def __init__(self, command: str, target_name: str):
        super().__init__(
            f"ERROR: The command you have specified cannot be applied to {target_name}."
        )
        self.command = command


class NoCompanyError(ConsoleError):
    """Vehicle commands need a local company."""

    def __init__(self):
        super().__init__("You have to own a company to make use of this command.")


class EditorOnlyError(ConsoleError):
    """The command is restricted to the scenario editor."""

    def __init__(self):
        super().__init__("This command can be used only in scenario editor")
