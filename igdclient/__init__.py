# Copyright (c) 2012-2016, Ferry Boender <ferry.boender@gmail.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Todo:
#  - GetGenericPortMappingEntry, to list the mappings a gateway holds.
#  - Decode the UPnPError detail of SOAP faults into an error code and
#    description instead of passing the body through.

"""
This module provides a UPnP Internet Gateway Device (IGD) client. It finds the
NAT gateway of the local network with no address or credentials given, and
uses it to open and close port forwards and to learn the public IP address.

The usual flow is:

- Discover gateways using SSDP.

  SSDP is a simple HTTP-over-UDP protocol. An M-SEARCH request is multicast
  over the network and any UPnP device should respond with an HTTP response
  which includes a LOCATION URL. `ssdp.scan()` returns the headers of every
  valid response, in the order they arrived.

- Find the port mapping service.

  The XML file at each LOCATION describes a tree of devices, each with a list
  of services. `resolver.resolve()` walks the tree and fetches the SCPD of each
  service until one lists AddPortMapping, DeletePortMapping or
  GetExternalIPAddress. Device and service types are never trusted, only the
  SCPD.

- Call actions using SOAP.

  A `Client` is bound to the service found. Its methods send SOAP requests to
  the service's control URL and decode the responses.

`discover()` does all of the above and returns a `Client`:

------------------------------------------------------------------------------
import igdclient

client = igdclient.discover()
print(client.get_external_ip_address().external_ip_address)
client.add_port_mapping(6881, "TCP", 6881, description="torrent")
client.delete_port_mapping(6881, "TCP")
------------------------------------------------------------------------------

Useful Links:

* http://upnp.org/specs/arch/UPnP-arch-DeviceArchitecture-v1.1.pdf
* http://upnp.org/specs/gw/UPnP-gw-WANIPConnection-v1-Service.pdf
"""
from igdclient import actions, client, const, errors, marshal, resolver, soap, ssdp, upnp, util  # noqa: F401
from .actions import (
    AddPortMappingRequest, AddPortMappingResponse, DeletePortMappingRequest,
    DeletePortMappingResponse, GetExternalIPAddressRequest, GetExternalIPAddressResponse)
from .client import Client
from .errors import (
    IGDError, TransportError, MalformedResponseError, ProtocolDecodeError, RemoteFault,
    ValidationError, AggregateError, DiscoveryError, ServiceNotFoundError)
from .resolver import resolve
from .ssdp import discover, scan
from .upnp import Device, DeviceDescription, Service
from .util import get_local_ip, join_path

__all__ = [
    "Client", "discover", "scan", "resolve", "get_local_ip", "join_path",
    "Device", "DeviceDescription", "Service",
    "AddPortMappingRequest", "AddPortMappingResponse", "DeletePortMappingRequest",
    "DeletePortMappingResponse", "GetExternalIPAddressRequest", "GetExternalIPAddressResponse",
    "IGDError", "TransportError", "MalformedResponseError", "ProtocolDecodeError", "RemoteFault",
    "ValidationError", "AggregateError", "DiscoveryError", "ServiceNotFoundError",
]
