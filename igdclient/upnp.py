from collections import namedtuple

import requests
from lxml import etree

from .const import HTTP_TIMEOUT
from .errors import MalformedResponseError, RemoteFault, TransportError
from .util import (
    _getLogger,
    _XMLFind,
    _XMLFindAll,
    _XMLGetNodeText,
    base_location,
    join_path,
)

_log = _getLogger("igdclient.upnp")


class Service(
    namedtuple(
        "Service",
        [
            "service_type",
            "service_id",
            "control_url",
            "event_sub_url",
            "scpd_url",
            "base_location",
        ],
    )
):
    """
    A service as listed in a device description, together with the base
    location its relative URLs are resolved against. Immutable.
    """

    __slots__ = ()

    def __repr__(self):
        return "<Service service_id='%s'>" % (self.service_id)

    @property
    def name(self):
        try:
            return self.service_id[self.service_id.rindex(":") + 1:]
        except ValueError:
            return self.service_id

    @property
    def scpd_location(self):
        return join_path(self.base_location, self.scpd_url)

    @property
    def control_location(self):
        return join_path(self.base_location, self.control_url)

    @property
    def event_sub_location(self):
        return join_path(self.base_location, self.event_sub_url)


class Device(object):
    """
    One node of a device description tree. `services` and `devices` keep the
    order in which they appear in the document.
    """

    def __init__(
        self,
        device_type="",
        friendly_name="",
        serial_number="",
        udn="",
        services=None,
        devices=None,
    ):
        self.device_type = device_type
        self.friendly_name = friendly_name
        self.serial_number = serial_number
        self.udn = udn
        self.services = services if services is not None else []
        self.devices = devices if devices is not None else []

    def __repr__(self):
        return "<Device '%s'>" % (self.friendly_name or self.udn)

    @classmethod
    def from_xml(cls, node, url_base):
        device = cls(
            device_type=_XMLGetNodeText(node, "deviceType"),
            friendly_name=_XMLGetNodeText(node, "friendlyName"),
            serial_number=_XMLGetNodeText(node, "serialNumber"),
            udn=_XMLGetNodeText(node, "UDN"),
        )
        for service_node in _XMLFindAll(node, "serviceList/service"):
            device.services.append(
                Service(
                    _XMLGetNodeText(service_node, "serviceType"),
                    _XMLGetNodeText(service_node, "serviceId"),
                    _XMLGetNodeText(service_node, "controlURL"),
                    _XMLGetNodeText(service_node, "eventSubURL"),
                    _XMLGetNodeText(service_node, "SCPDURL"),
                    url_base,
                )
            )
        # Recursion depth isn't limited here. The resolver guards the walk.
        for device_node in _XMLFindAll(node, "deviceList/device"):
            device.devices.append(cls.from_xml(device_node, url_base))
        return device


class DeviceDescription(object):
    """
    A parsed device description document, as retrieved from the LOCATION URL
    of an SSDP reply.
    """

    def __init__(self, location, data, ignore_urlbase=False):
        self.location = location
        parser = etree.XMLParser(recover=True, resolve_entities=False)
        try:
            root = etree.fromstring(data, parser=parser)
        except etree.XMLSyntaxError as exc:
            raise MalformedResponseError(
                "%s: unable to parse device description: %s" % (location, exc)
            )
        if root is None:
            raise MalformedResponseError(
                "%s: empty device description" % location
            )
        device_node = _XMLFind(root, "device")
        if device_node is None:
            raise MalformedResponseError(
                "%s: device description has no device element" % location
            )

        self.spec_version = (
            _parse_int(_XMLGetNodeText(root, "specVersion/major")),
            _parse_int(_XMLGetNodeText(root, "specVersion/minor")),
        )
        self.url_base = _XMLGetNodeText(root, "URLBase") or None
        if self.url_base is None or ignore_urlbase:
            # Many gateways leave URLBase out, in which case everything is
            # relative to the host that served the description.
            self.base_location = base_location(location)
        else:
            self.base_location = self.url_base
        self.device = Device.from_xml(device_node, self.base_location)

    def __repr__(self):
        return "<DeviceDescription '%s'>" % (self.location)


def _parse_int(value):
    try:
        return int(value)
    except ValueError:
        return 0


def _http_get(url, timeout):
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        raise TransportError("%s: %s" % (url, exc))
    if resp.status_code != 200:
        raise RemoteFault(resp.status_code, resp.text, url=url)
    return resp.content


def get_device_description(location, timeout=HTTP_TIMEOUT, ignore_urlbase=False):
    """
    Retrieve and parse the device description found at `location`.
    """
    _log.debug("Reading device description %s", location)
    data = _http_get(location, timeout)
    return DeviceDescription(location, data, ignore_urlbase=ignore_urlbase)


def get_action_names(url, timeout=HTTP_TIMEOUT):
    """
    Retrieve the SCPD at `url` and return the names of the actions it lists,
    in document order.
    """
    _log.debug("Reading %s", url)
    data = _http_get(url, timeout)
    try:
        scpd_xml = etree.fromstring(
            data.strip(), parser=etree.XMLParser(resolve_entities=False)
        )
    except etree.XMLSyntaxError as exc:
        raise MalformedResponseError("%s: unable to parse SCPD: %s" % (url, exc))
    return [
        name
        for name in (
            _XMLGetNodeText(action_node, "name")
            for action_node in _XMLFindAll(scpd_xml, "actionList/action")
        )
        if name
    ]
