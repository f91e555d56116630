from .actions import (
    AddPortMappingRequest,
    AddPortMappingResponse,
    DeletePortMappingRequest,
    DeletePortMappingResponse,
    GetExternalIPAddressRequest,
    GetExternalIPAddressResponse,
)
from .const import HTTP_TIMEOUT
from .soap import SOAP
from .util import _getLogger, get_local_ip


class Client(object):
    """
    Port mapping client bound to the service of one gateway.

    `service` is an `upnp.Service`, normally found with `resolver.resolve()`
    or `ssdp.discover()`. It stays bound for the life of the client: calls
    which fail are not retried and the service is never looked up again.

    Example:

    >>> client = igdclient.discover()
    >>> client.get_external_ip_address().external_ip_address
    '203.0.113.7'
    >>> client.add_port_mapping(8080, "TCP", 8080, description="web")
    <AddPortMappingResponse {}>
    """

    def __init__(self, service, local_ip=None, timeout=HTTP_TIMEOUT):
        self.service = service
        self.local_ip = local_ip if local_ip else get_local_ip()
        self._soap = SOAP(service.control_location, service.service_type, timeout=timeout)
        self._log = _getLogger("igdclient.client")

    def __repr__(self):
        return "<Client '%s' local_ip='%s'>" % (self.service.control_location, self.local_ip)

    def call(self, request, response_class):
        """
        Send a typed request and return the typed response.
        """
        params_out = self._soap.call(request.name, request.arguments())
        return response_class.from_params(params_out)

    def add_port_mapping(
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
        """
        Forward `external_port` on the gateway to `internal_client`:`internal_port`.
        `internal_client` defaults to this host's address. A `lease_duration`
        of 0 asks for a permanent mapping.
        """
        request = AddPortMappingRequest(
            external_port,
            protocol,
            internal_port,
            internal_client=internal_client or self.local_ip,
            enabled=enabled,
            description=description,
            lease_duration=lease_duration,
            remote_host=remote_host,
        )
        self._log.debug(
            "Mapping %s %s -> %s:%s",
            request.protocol,
            external_port,
            request.internal_client,
            internal_port,
        )
        return self.call(request, AddPortMappingResponse)

    def delete_port_mapping(self, external_port, protocol, remote_host=""):
        request = DeletePortMappingRequest(external_port, protocol, remote_host=remote_host)
        return self.call(request, DeletePortMappingResponse)

    def get_external_ip_address(self):
        return self.call(GetExternalIPAddressRequest(), GetExternalIPAddressResponse)
