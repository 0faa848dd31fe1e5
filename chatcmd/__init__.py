"""chatcmd - command text parsing for chat bots."""
