class CallLoggerError(Exception):
    """Base class for errors raised by the call logger."""


class CallLogNotFound(CallLoggerError):
    def __init__(self, call_id: str):
        self.call_id = call_id
        super().__init__(f"Call log {call_id} not found")


class UpstreamFailure(CallLoggerError):
    """The backing store could not be reached or rejected the request."""


class ConfigurationMissing(CallLoggerError):
    """Required store location or credentials are not configured."""
