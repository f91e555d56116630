class IGDError(Exception):
    """
    Base class for every error raised by igdclient.
    """

    pass


class TransportError(IGDError):
    """
    A socket or HTTP connection couldn't be set up, or timed out.
    """

    pass


class MalformedResponseError(IGDError):
    """
    A discovery datagram or a description document couldn't be parsed.
    """

    pass


class ProtocolDecodeError(IGDError):
    """
    A successful response didn't contain the XML we expected.
    """

    pass


class RemoteFault(IGDError):
    """
    The remote end answered with a non-200 HTTP status.
    """

    def __init__(self, status, body, url=None):
        super(RemoteFault, self).__init__(status, body, url)
        self.status = status
        self.body = body
        self.url = url

    def __str__(self):
        msg = "HTTP %s: %s" % (self.status, self.body)
        if self.url:
            msg = "%s: %s" % (self.url, msg)
        return msg


class ValidationError(IGDError):
    """
    Given value didn't validate with the given data type.
    """

    def __init__(self, reasons):
        super(ValidationError, self).__init__(reasons)
        self.reasons = reasons

    def __str__(self):
        return "; ".join(
            "%s: %s" % (name, ", ".join(sorted(reasons)))
            for name, reasons in sorted(self.reasons.items())
        )


class AggregateError(IGDError):
    """
    Carries every error collected while trying several candidates. The
    individual errors are kept in `errors` and only joined into one message
    when the exception is rendered.
    """

    message = "All candidates failed"

    def __init__(self, errors=None, message=None):
        self.errors = list(errors or [])
        if message is not None:
            self.message = message
        super(AggregateError, self).__init__(self.message, self.errors)

    def __str__(self):
        if not self.errors:
            return self.message
        return "%s: %s" % (
            self.message,
            "; ".join("%s: %s" % (type(e).__name__, e) for e in self.errors),
        )


class DiscoveryError(AggregateError):
    """
    No valid SSDP reply arrived before the network went quiet.
    """

    message = "No gateway answered the SSDP search"


class ServiceNotFoundError(AggregateError):
    """
    No discovered device exposed a port mapping service.
    """

    message = "No port mapping service found"
