"""
Typed payloads of the port mapping actions.

Each request class lists its SOAP arguments in `argsdef_in` as
(argument name, attribute, state variable), in the order WANIPConnection
defines them, which is also the order they are sent in. Response classes do
the same with `argsdef_out`.
"""
from collections import OrderedDict

from .const import (
    ADD_PORT_MAPPING,
    DELETE_PORT_MAPPING,
    GET_EXTERNAL_IP_ADDRESS,
    PROTOCOLS,
)
from .errors import ValidationError
from .marshal import marshal_value, zero_value

REMOTE_HOST = dict(datatype="string", allowed_values=set())
PORT = dict(datatype="ui2", allowed_values=set())
PROTOCOL = dict(datatype="string", allowed_values=set(PROTOCOLS))
INTERNAL_CLIENT = dict(datatype="string", allowed_values=set())
ENABLED = dict(datatype="boolean", allowed_values=set())
DESCRIPTION = dict(datatype="string", allowed_values=set())
LEASE_DURATION = dict(datatype="ui4", allowed_values=set())
EXTERNAL_IP_ADDRESS = dict(datatype="string", allowed_values=set())

RANGES = {
    "ui2": (0, 65535),
    "ui4": (0, 4294967295),
}


def validate_arg(arg, argdef):
    """
    Validate an argument according to its UPnP datatype. Returns
    (valid, reasons).
    """
    datatype = argdef["datatype"]
    reasons = set()
    if datatype in RANGES:
        v_min, v_max = RANGES[datatype]
        if isinstance(arg, bool):
            reasons.add("%r datatype must be a number, not a boolean" % datatype)
        elif isinstance(arg, float) and not arg.is_integer():
            reasons.add("%r datatype must be a whole number, not %r" % (datatype, arg))
        else:
            try:
                if not v_min <= int(arg) <= v_max:
                    reasons.add(
                        "%r datatype must be a number in the range %s to %s"
                        % (datatype, v_min, v_max)
                    )
            except (TypeError, ValueError) as exc:
                reasons.add(str(exc))

    elif datatype == "boolean":
        valid = {"true", "yes", "1", "false", "no", "0"}
        if not isinstance(arg, (bool, int)) and str(arg).lower() not in valid:
            reasons.add("%r datatype must be one of %s" % (datatype, ",".join(sorted(valid))))
        elif isinstance(arg, int) and arg not in (0, 1):
            reasons.add("%r datatype must be 0 or 1" % datatype)

    elif datatype == "string":
        if not isinstance(arg, str):
            reasons.add("%r datatype must be a string" % datatype)
        elif argdef["allowed_values"] and arg not in argdef["allowed_values"]:
            reasons.add("Value %r not in allowed values list" % arg)

    else:
        reasons.add("%r datatype is unrecognised." % datatype)

    return not bool(len(reasons)), reasons


def serialize_arg(arg, argdef):
    if argdef["datatype"] == "boolean":
        if isinstance(arg, str):
            return "1" if arg.lower() in ("true", "yes", "1") else "0"
        return "1" if arg else "0"
    if argdef["datatype"] in RANGES:
        return str(int(arg))
    return str(arg)


class ActionRequest(object):
    name = None
    argsdef_in = []

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, dict(self.__dict__))

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def arguments(self):
        """
        Validate the request and return its SOAP arguments, in order, as
        strings. Raises ValidationError.
        """
        arg_reasons = {}
        call_kwargs = OrderedDict()
        for arg_name, attr, statevar in self.argsdef_in:
            value = getattr(self, attr)
            valid, reasons = validate_arg(value, statevar)
            if not valid:
                arg_reasons[attr] = reasons
                continue
            call_kwargs[arg_name] = serialize_arg(value, statevar)
        if arg_reasons:
            raise ValidationError(arg_reasons)
        return call_kwargs


class ActionResponse(object):
    argsdef_out = []

    def __init__(self, **kwargs):
        for arg_name, attr, statevar in self.argsdef_out:
            setattr(self, attr, kwargs.pop(attr, zero_value(statevar["datatype"])))
        if kwargs:
            raise TypeError("Unexpected arguments: %s" % ", ".join(sorted(kwargs)))

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, dict(self.__dict__))

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    @classmethod
    def from_params(cls, params_out):
        """
        Marshal the out arguments of a SOAP response. Arguments the gateway
        left out get their datatype's zero value.
        """
        out = {}
        for arg_name, attr, statevar in cls.argsdef_out:
            _, out[attr] = marshal_value(statevar["datatype"], params_out.get(arg_name))
        return cls(**out)


class AddPortMappingRequest(ActionRequest):
    name = ADD_PORT_MAPPING
    argsdef_in = [
        ("NewRemoteHost", "remote_host", REMOTE_HOST),
        ("NewExternalPort", "external_port", PORT),
        ("NewProtocol", "protocol", PROTOCOL),
        ("NewInternalPort", "internal_port", PORT),
        ("NewInternalClient", "internal_client", INTERNAL_CLIENT),
        ("NewEnabled", "enabled", ENABLED),
        ("NewPortMappingDescription", "description", DESCRIPTION),
        ("NewLeaseDuration", "lease_duration", LEASE_DURATION),
    ]

    def __init__(
        self,
        external_port,
        protocol,
        internal_port,
        internal_client="",
        enabled=True,
        description="",
        lease_duration=0,
        remote_host="",
    ):
        self.remote_host = remote_host
        self.external_port = external_port
        self.protocol = protocol.upper() if isinstance(protocol, str) else protocol
        self.internal_port = internal_port
        self.internal_client = internal_client
        self.enabled = enabled
        self.description = description
        self.lease_duration = lease_duration


class AddPortMappingResponse(ActionResponse):
    pass


class DeletePortMappingRequest(ActionRequest):
    name = DELETE_PORT_MAPPING
    argsdef_in = [
        ("NewRemoteHost", "remote_host", REMOTE_HOST),
        ("NewExternalPort", "external_port", PORT),
        ("NewProtocol", "protocol", PROTOCOL),
    ]

    def __init__(self, external_port, protocol, remote_host=""):
        self.remote_host = remote_host
        self.external_port = external_port
        self.protocol = protocol.upper() if isinstance(protocol, str) else protocol


class DeletePortMappingResponse(ActionResponse):
    pass


class GetExternalIPAddressRequest(ActionRequest):
    name = GET_EXTERNAL_IP_ADDRESS


class GetExternalIPAddressResponse(ActionResponse):
    argsdef_out = [
        ("NewExternalIPAddress", "external_ip_address", EXTERNAL_IP_ADDRESS),
    ]
