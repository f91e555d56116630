import requests
from lxml import etree

from .const import HTTP_TIMEOUT, SOAP_ENCODING, SOAP_ENV_NS
from .errors import MalformedResponseError, ProtocolDecodeError, RemoteFault, TransportError
from .util import _getLogger, _XMLGetNodeText, _XMLLocalName


class SOAP(object):
    """SOAP (Simple Object Access Protocol) implementation
    This class defines a simple SOAP client, bound to the control URL of one
    service.
    """
    def __init__(self, url, service_type, timeout=HTTP_TIMEOUT):
        self.url = url
        self.service_type = service_type
        self.timeout = timeout
        self._log = _getLogger('igdclient.soap')

    def __repr__(self):
        return "<SOAP '%s'>" % (self.url)

    def envelope(self, action_name, arg_in=None):
        """
        Return the request body for `action_name` with the arguments in
        `arg_in`, in the order they're given.
        """
        if not self.service_type:
            raise MalformedResponseError(
                "%s: service has no serviceType to address %s to" % (self.url, action_name))
        if arg_in is None:
            arg_in = {}
        envelope = etree.Element(
            etree.QName(SOAP_ENV_NS, 'Envelope'), nsmap={'s': SOAP_ENV_NS})
        envelope.set(etree.QName(SOAP_ENV_NS, 'encodingStyle'), SOAP_ENCODING)
        body = etree.SubElement(envelope, etree.QName(SOAP_ENV_NS, 'Body'))
        action = etree.SubElement(
            body, etree.QName(self.service_type, action_name), nsmap={'u': self.service_type})
        for name, value in arg_in.items():
            etree.SubElement(action, name).text = value
        return etree.tostring(envelope, xml_declaration=True, encoding='utf-8')

    def call(self, action_name, arg_in=None):
        """
        Invoke `action_name` and return the out arguments of the response as
        a dict. A gateway answering 200 without a response element (or without
        a body at all) has accepted the call, and gets an empty dict.
        """
        body = self.envelope(action_name, arg_in)
        headers = {
            'SOAPAction': '"%s#%s"' % (self.service_type, action_name),
            'Content-Type': 'text/xml; charset="utf-8"',
        }

        self._log.debug(">> %s %s (%s)", self.url, action_name, arg_in)
        try:
            resp = requests.post(self.url, body, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise TransportError("%s: %s" % (self.url, exc))

        if resp.status_code != 200:
            raise RemoteFault(resp.status_code, resp.text, url=self.url)

        raw_xml = resp.content.strip()
        if not raw_xml:
            self._log.debug("<< %s: empty body", action_name)
            return {}
        try:
            contents = etree.fromstring(raw_xml, parser=etree.XMLParser(resolve_entities=False))
        except etree.XMLSyntaxError as exc:
            raise ProtocolDecodeError(
                "%s: invalid response to %s: %s" % (self.url, action_name, exc))

        params_out = {}
        response_name = '%sResponse' % action_name
        for node in contents.iter(etree.Element):
            if _XMLLocalName(node) == response_name:
                for param_out_node in node.iterchildren(etree.Element):
                    params_out[_XMLLocalName(param_out_node)] = _XMLGetNodeText(param_out_node)
                break
        else:
            self._log.debug("<< %s: no %s element", action_name, response_name)

        self._log.debug("<< %s: %s", action_name, params_out)
        return params_out
