import logging
import re
import socket

import ifaddr
from lxml import etree
from requests.compat import urlparse

from .const import LOCAL_IP_PROBE
from .errors import MalformedResponseError, TransportError

_ABSOLUTE_URL = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")


def _getLogger(name):
    """
    Retrieve a logger instance. Checks if a handler is defined so we avoid the
    'No handlers could be found' message.
    """
    logger = logging.getLogger(name)
    # if not logging.root.handlers:
    #     logger.disabled = 1
    return logger


def join_path(*parts):
    """
    Join URL parts with exactly one '/' between them, whatever leading or
    trailing slashes each part carries. A part which is an absolute URL
    replaces everything before it.

    >>> join_path("http://10.0.0.1:1234/desc/", "/ctl/1")
    'http://10.0.0.1:1234/desc/ctl/1'
    """
    joined = []
    for part in parts:
        if _ABSOLUTE_URL.match(part):
            joined = []
        part = part.strip("/")
        if part:
            joined.append(part)
    return "/".join(joined)


def base_location(location):
    """
    Return the scheme://host:port portion of a LOCATION URL.
    """
    url = urlparse(location)
    if not url.scheme or not url.netloc:
        raise MalformedResponseError("Invalid location: %r" % location)
    return "%s://%s" % (url.scheme, url.netloc)


def _XMLLocalName(node):
    # Recovered documents can hold tags with an undeclared "prefix:".
    tag = node.tag.rsplit("}", 1)[-1]
    return tag.rsplit(":", 1)[-1]


def _XMLChildren(node, name):
    """
    Child elements of `node` called `name`, whatever their namespace.
    """
    return [
        child
        for child in node.iterchildren(etree.Element)
        if _XMLLocalName(child) == name
    ]


def _XMLFindAll(node, path):
    """
    Namespace agnostic version of `node.findall("a/b/c")`.
    """
    nodes = [node]
    for name in path.split("/"):
        nodes = [child for n in nodes for child in _XMLChildren(n, name)]
    return nodes


def _XMLFind(node, path):
    found = _XMLFindAll(node, path)
    if found:
        return found[0]
    return None


def _XMLGetNodeText(node, path=None, default=""):
    """
    Stripped text of `node`, or of the first element at `path` below it.
    """
    if path is not None:
        node = _XMLFind(node, path)
    if node is None or node.text is None:
        return default
    return node.text.strip()


def get_addresses_ipv4():
    # Get all adapters on current machine
    adapters = ifaddr.get_adapters()
    # Get the ip from the found adapters
    # Ignore localhost und IPv6 addresses
    return sorted(
        set(
            addr.ip
            for iface in adapters
            for addr in iface.ips
            if addr.is_IPv4 and not addr.ip.startswith("127.")
        )
    )


def get_local_ip():
    """
    Return the local IPv4 address the OS would use for outbound traffic.

    A UDP socket is connected to an unreachable address, which makes the OS
    pick a route and a source address without sending anything. The timeout
    is set to zero straight away so no blocking exchange can take place, and
    the local end of the socket is read back. When there's no route at all,
    the first non-loopback interface address is used instead.
    """
    log = _getLogger("igdclient.util")
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except socket.error as exc:
        raise TransportError("Unable to open UDP socket: %s" % exc)
    try:
        sock.connect(LOCAL_IP_PROBE)
        sock.settimeout(0)
        return sock.getsockname()[0]
    except socket.error as exc:
        log.debug("No outbound route (%s), falling back to interface list", exc)
    finally:
        sock.close()

    addresses = get_addresses_ipv4()
    if not addresses:
        raise TransportError("Unable to find a local IPv4 address")
    return addresses[0]
