"""Custom exception hierarchy for chatcmd."""


class ChatCmdError(Exception):
    """Base error type."""


class PrefixMismatch(ChatCmdError):
    """Raised when a message does not start with any configured prefix."""

    def __init__(self, message: str = "Message does not start with a valid prefix") -> None:
        super().__init__(message)


class CommandNotFound(ChatCmdError):
    """Raised by the registry when no command matches a parsed name."""

    def __init__(self, command_name: str) -> None:
        self.command_name = command_name
        super().__init__(f"Command '{command_name}' does not exist")


class InvalidCommandSpec(ChatCmdError):
    pass


class ConfigError(ChatCmdError):
    pass
