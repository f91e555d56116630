"""
Locate the port mapping service of a gateway.

Vendors are inconsistent about device and service types, so a service is
only accepted once its SCPD has been fetched and found to list at least one
of the port mapping actions. The device tree is walked depth-first: every
service of a device is probed, in order, before its child devices are
visited. The first service that validates wins and nothing after it is
probed.

Failures along the way (unreachable SCPDs, HTTP errors, broken XML) are
collected rather than raised, and only surface in a ServiceNotFoundError if no
service validates at all.
"""
from .const import HTTP_TIMEOUT, MAX_DEVICE_DEPTH, REQUIRED_ACTIONS
from .errors import IGDError, MalformedResponseError, ServiceNotFoundError
from .upnp import get_action_names, get_device_description
from .util import _getLogger

_log = _getLogger("igdclient.resolver")


def is_port_mapping_service(service, errors, timeout=HTTP_TIMEOUT):
    """
    Probe the service's SCPD. Returns True if it lists any of the required
    actions. Errors are appended to `errors`.
    """
    url = service.scpd_location
    try:
        action_names = get_action_names(url, timeout=timeout)
    except IGDError as exc:
        _log.debug("%s: %s", url, exc)
        errors.append(exc)
        return False
    found = REQUIRED_ACTIONS.intersection(action_names)
    _log.debug("%s: %r lists %s", url, service.service_type, sorted(found) or "nothing")
    return bool(found)


def find_port_mapping_service(
    device, errors, timeout=HTTP_TIMEOUT, depth=0, seen=None
):
    """
    Walk the device tree and return the first port mapping service, or None.
    """
    if seen is None:
        seen = set()
    if device.udn:
        if device.udn in seen:
            errors.append(
                MalformedResponseError("Device %s appears more than once" % device.udn)
            )
            return None
        seen.add(device.udn)

    for service in device.services:
        if is_port_mapping_service(service, errors, timeout=timeout):
            return service

    if device.devices and depth >= MAX_DEVICE_DEPTH:
        errors.append(
            MalformedResponseError(
                "Device tree deeper than %d below %r" % (MAX_DEVICE_DEPTH, device)
            )
        )
        return None

    for child in device.devices:
        service = find_port_mapping_service(
            child, errors, timeout=timeout, depth=depth + 1, seen=seen
        )
        if service is not None:
            return service
    return None


def resolve(replies, timeout=HTTP_TIMEOUT, ignore_urlbase=False):
    """
    Try each SSDP reply in turn and return the first port mapping service
    found. Replies pointing at a LOCATION that was already tried are skipped.

    Raises ServiceNotFoundError carrying every error met on the way if none of
    the replies lead to one.
    """
    errors = []
    tried = set()
    for reply in replies:
        location = reply["LOCATION"]
        if location in tried:
            continue
        tried.add(location)
        try:
            description = get_device_description(
                location, timeout=timeout, ignore_urlbase=ignore_urlbase
            )
        except IGDError as exc:
            _log.warning("Error '%s' for %s", exc, location)
            errors.append(exc)
            continue
        service = find_port_mapping_service(description.device, errors, timeout=timeout)
        if service is not None:
            _log.debug("%s: using %r at %s", location, service, service.control_location)
            return service
    raise ServiceNotFoundError(errors)
