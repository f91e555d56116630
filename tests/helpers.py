import os
import os.path as path
import socketserver as sockserver
import threading
import http.server as httpserver
from functools import partial

import mock

from tests.const import LOCALHOST

XML_DIR = path.join(path.dirname(path.realpath(__file__)), "xml")


class QuietHTTPRequestHandler(httpserver.SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        pass


class XMLServerTestCase(object):
    """
    Mixin for TestCases which need an HTTP server serving the files in
    tests/xml. The URLBase of upnp/IGD.xml is set to the server's port.
    """

    @classmethod
    def setUpClass(cls):
        handler = partial(QuietHTTPRequestHandler, directory=XML_DIR)
        cls.httpd = sockserver.TCPServer((LOCALHOST, 0), handler)
        cls.httpd_thread = threading.Thread(target=cls.httpd.serve_forever)
        cls.httpd_thread.daemon = True
        cls.httpd_thread.start()
        cls.httpd_port = cls.httpd.server_address[1]

        with open(path.join(XML_DIR, "upnp", "IGD.xml"), "w") as out_f:
            with open(path.join(XML_DIR, "upnp", "IGD.xml.templ")) as in_f:
                out_f.write(in_f.read().format(port=cls.httpd_port))

        cls.http_base = "http://%s:%s" % (LOCALHOST, cls.httpd_port)

    @classmethod
    def tearDownClass(cls):
        """
        Shut down the HTTP server and delete the IGD.xml file.
        """
        cls.httpd.shutdown()
        cls.httpd.server_close()
        try:
            os.unlink(path.join(XML_DIR, "upnp", "IGD.xml"))
        except OSError:
            pass

    def url(self, name):
        return "%s/upnp/%s" % (self.http_base, name)


def mock_response(status_code=200, content=b""):
    """Mock a requests Response."""
    resp = mock.Mock()
    resp.status_code = status_code
    resp.content = content
    resp.text = content.decode("utf-8")
    return resp


def mock_adapter(*ips):
    """Mock an ifaddr Adapter holding the given addresses."""
    adapter = mock.Mock()
    adapter.ips = [
        mock.Mock(ip=ip, is_IPv4=isinstance(ip, str)) for ip in ips
    ]
    return adapter
