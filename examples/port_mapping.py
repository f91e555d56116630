#!/usr/bin/env python
#
# Open a port on the gateway, show the public address, and close it again.
#

import igdclient

try:
    client = igdclient.discover()
except igdclient.ServiceNotFoundError as exc:
    # Every reason a candidate service was turned down is kept.
    for error in exc.errors:
        print(type(error).__name__, error)
    raise SystemExit(1)

print("Public address:", client.get_external_ip_address().external_ip_address)

# The internal client defaults to this host's address. A lease duration of 0
# asks for a permanent mapping.
client.add_port_mapping(6881, "TCP", 6881, description="Transmission at 6881", lease_duration=3600)
print("Mapped 6881/TCP to %s:6881" % client.local_ip)

try:
    client.add_port_mapping(70000, "TCP", 6881)
except igdclient.ValidationError as exc:
    print(str(exc))

client.delete_port_mapping(6881, "TCP")
