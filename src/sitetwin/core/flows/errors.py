"""Failure types raised by LLM flows."""


class FlowError(Exception):
    """Base class for every flow failure."""

    def __init__(self, flow: str, message: str):
        super().__init__(f"[{flow}] {message}")
        self.flow = flow
        self.message = message


class FlowInputError(FlowError):
    """The request did not match the flow's input schema."""


class FlowOutputError(FlowError):
    """The model answered, but the answer did not match the output schema."""


class FlowTransportError(FlowError):
    """The text-generation service could not be reached or returned an error."""
