class ResponderError(Exception):
    """Base class for responder-side errors."""
    pass

class MalformedEventData(ResponderError):
    """Raised when an event's data does not have the shape its type requires."""
    pass

class CloudEventParseError(ResponderError):
    """Raised when an HTTP request cannot be decoded into a CloudEvent."""
    pass
