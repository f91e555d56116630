HTTP_TIMEOUT = 10

# Rolling deadline for each SSDP read. Collection stops at the first read
# that sees nothing for this long.
READ_TIMEOUT = 5

SSDP_TARGET = ("239.255.255.250", 1900)
SSDP_MX = 5
ST_ALL = "ssdp:all"
MULTICAST_TTL = 2
USER_AGENT = "Python UPnP/1.1 igdclient/0.1"

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENCODING = "http://schemas.xmlsoap.org/soap/encoding/"

ADD_PORT_MAPPING = "AddPortMapping"
DELETE_PORT_MAPPING = "DeletePortMapping"
GET_EXTERNAL_IP_ADDRESS = "GetExternalIPAddress"

REQUIRED_ACTIONS = frozenset(
    [ADD_PORT_MAPPING, DELETE_PORT_MAPPING, GET_EXTERNAL_IP_ADDRESS]
)

PROTOCOLS = frozenset(["TCP", "UDP"])

# Device trees are shallow in practice. Anything deeper is a broken document.
MAX_DEVICE_DEPTH = 16

# Arbitrary address used to pick the outbound interface. Nothing is sent to it.
LOCAL_IP_PROBE = ("6.9.6.9", 6969)
