import socket
from datetime import datetime, timedelta

from requests.structures import CaseInsensitiveDict

from .client import Client
from .const import (
    HTTP_TIMEOUT,
    MULTICAST_TTL,
    READ_TIMEOUT,
    SSDP_MX,
    SSDP_TARGET,
    ST_ALL,
    USER_AGENT,
)
from .errors import DiscoveryError, MalformedResponseError, TransportError
from .resolver import resolve
from .util import _getLogger

_log = _getLogger("igdclient.ssdp")


def ssdp_request(ssdp_st=ST_ALL, ssdp_mx=SSDP_MX, user_agent=USER_AGENT):
    """Return request bytes for given st and mx."""
    lines = [
        "M-SEARCH * HTTP/1.1",
        "HOST: {}:{}".format(*SSDP_TARGET),
        "ST: {}".format(ssdp_st),
        'MAN: "ssdp:discover"',
        "MX: {:d}".format(ssdp_mx),
    ]
    if user_agent:
        lines.append("USER-AGENT: {}".format(user_agent))
    return "\r\n".join(lines + ["", ""]).encode("utf-8")


def parse_reply(data):
    """
    Parse an SSDP reply datagram into a case insensitive dict of its headers.
    Raises MalformedResponseError unless it's a "200" reply with a LOCATION.
    """
    try:
        response = data.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedResponseError("Invalid unicode in response: %r" % data)

    status_line, sep, header_block = response.partition("\n")
    if not sep:
        raise MalformedResponseError("Invalid response: %r" % response)
    status = status_line.split()
    if len(status) < 3:
        raise MalformedResponseError("Invalid status line: %r" % status_line)
    if status[1] != "200":
        raise MalformedResponseError("Not OK: %r" % status_line.strip())

    headers = CaseInsensitiveDict()
    last_key = None
    for line in header_block.split("\n"):
        line = line.rstrip("\r")
        if not line:
            break
        if line[0] in " \t" and last_key is not None:
            # Folded header, continues the previous value.
            headers[last_key] = "%s %s" % (headers[last_key], line.strip())
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            raise MalformedResponseError("Invalid header line: %r" % line)
        if key in headers:
            last_key = None
            continue
        headers[key] = value.strip()
        last_key = key

    if not headers.get("LOCATION"):
        raise MalformedResponseError("No LOCATION in response: %r" % status_line.strip())
    return headers


def scan(
    read_timeout=READ_TIMEOUT,
    ssdp_st=ST_ALL,
    ssdp_mx=SSDP_MX,
    timeout=None,
    source_address=None,
    user_agent=USER_AGENT,
):
    """
    Send a single M-SEARCH and collect replies until nothing has arrived for
    `read_timeout` seconds (or, if given, `timeout` seconds have passed in
    total). Returns the header dicts of the valid replies in arrival order.

    Raises TransportError if the search can't be sent, and DiscoveryError
    listing every rejected datagram if no valid reply came back.
    """
    replies = []
    errors = []
    stop_wait = None
    if timeout is not None:
        stop_wait = datetime.now() + timedelta(seconds=timeout)

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except socket.error as exc:
        raise TransportError("Unable to open UDP socket: %s" % exc)
    try:
        try:
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, MULTICAST_TTL)
            sock.bind(source_address or ("", 0))
            sock.sendto(ssdp_request(ssdp_st, ssdp_mx, user_agent), SSDP_TARGET)
        except socket.error as exc:
            raise TransportError(
                "Unable to send SSDP search to %s:%s: %s" % (SSDP_TARGET + (exc,))
            )
        _log.debug("Sent M-SEARCH for %s", ssdp_st)

        while True:
            wait = read_timeout
            if stop_wait is not None:
                seconds_left = (stop_wait - datetime.now()).total_seconds()
                if seconds_left <= 0:
                    break
                wait = min(wait, seconds_left)
            sock.settimeout(wait)
            try:
                data, address = sock.recvfrom(4096)
            except socket.timeout:
                break
            except socket.error as exc:
                _log.debug("Socket error while collecting SSDP replies: %s", exc)
                errors.append(TransportError(str(exc)))
                break
            try:
                headers = parse_reply(data)
            except MalformedResponseError as exc:
                _log.debug("Ignoring response from %s: %s", address, exc)
                errors.append(exc)
                continue
            _log.debug("%s: LOCATION %s", address, headers["LOCATION"])
            replies.append(headers)
    finally:
        sock.close()

    if not replies:
        raise DiscoveryError(errors)
    return replies


def discover(
    read_timeout=READ_TIMEOUT,
    timeout=None,
    http_timeout=HTTP_TIMEOUT,
    ignore_urlbase=False,
    local_ip=None,
):
    """
    Convenience method to find a gateway on the network. Searches with SSDP,
    resolves the port mapping service of the first gateway that has one, and
    returns a `client.Client` bound to it.
    """
    replies = scan(read_timeout=read_timeout, timeout=timeout)
    service = resolve(replies, timeout=http_timeout, ignore_urlbase=ignore_urlbase)
    return Client(service, local_ip=local_ip, timeout=http_timeout)
