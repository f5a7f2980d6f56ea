"""Custom exceptions used across PartyFlow."""


class PartyFlowError(Exception):
    """Base error for the application."""


class ConfigError(PartyFlowError):
    """Configuration related error."""


class InputError(PartyFlowError):
    """Raised when the booking table cannot be read."""


class TemplateLoadError(PartyFlowError):
    """Raised when a template cannot be read, parsed or filled.

    Fatal for the whole artifact family built from that template.
    """

    def __init__(self, artifact: str, stage: str, message: str) -> None:
        super().__init__(f"{artifact} template failed at {stage}: {message}")
        self.artifact = artifact
        self.stage = stage
