#!/usr/bin/env python
#
# Demonstrate a simple gateway discovery.
#

import logging

import igdclient

logging.basicConfig(level=logging.DEBUG)

# Multicast an M-SEARCH and collect the replies until the network has been
# quiet for 3 seconds.
replies = igdclient.scan(read_timeout=3)
for reply in replies:
    print(reply["LOCATION"], reply.get("SERVER"))

# Find the first service able to do port mapping, whichever device of
# whichever gateway it's on.
service = igdclient.resolve(replies)
print(service.service_type, "@", service.control_location)
