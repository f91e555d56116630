import unittest

import mock

import igdclient as igd
from igdclient.const import LOCAL_IP_PROBE
from tests.helpers import mock_adapter


class TestJoinPath(unittest.TestCase):
    def test_join(self):
        """
        Should put exactly one slash between parts.
        """
        self.assertEqual(
            igd.join_path("http://10.0.0.1:1234/desc/", "/ctl/1"),
            "http://10.0.0.1:1234/desc/ctl/1",
        )

    def test_join_slashes(self):
        expected = "http://10.0.0.1:1234/desc/ctl/1"
        for base in ("http://10.0.0.1:1234/desc", "http://10.0.0.1:1234/desc/"):
            for path in ("ctl/1", "/ctl/1", "ctl/1/", "/ctl/1/", "//ctl/1"):
                self.assertEqual(igd.join_path(base, path), expected)

    def test_join_empty(self):
        self.assertEqual(igd.join_path("http://10.0.0.1:1234", ""), "http://10.0.0.1:1234")
        self.assertEqual(igd.join_path("http://10.0.0.1:1234/", "/"), "http://10.0.0.1:1234")

    def test_join_absolute(self):
        """
        Should restart from a part which is an absolute URL.
        """
        self.assertEqual(
            igd.join_path("http://10.0.0.1:1234/desc", "http://10.0.0.1:5000/ctl"),
            "http://10.0.0.1:5000/ctl",
        )


class TestBaseLocation(unittest.TestCase):
    def test_base_location(self):
        self.assertEqual(
            igd.util.base_location("http://192.168.1.1:5000/rootDesc.xml?x=1"),
            "http://192.168.1.1:5000",
        )

    def test_base_location_no_port(self):
        self.assertEqual(
            igd.util.base_location("http://192.168.1.1/igd.xml"), "http://192.168.1.1"
        )

    def test_base_location_invalid(self):
        self.assertRaises(
            igd.MalformedResponseError, igd.util.base_location, "/rootDesc.xml"
        )


@mock.patch("igdclient.util.socket.socket")
class TestLocalIP(unittest.TestCase):
    def test_local_ip(self, mock_socket):
        """
        Should read the address of a connected but unused UDP socket.
        """
        sock = mock_socket.return_value
        sock.getsockname.return_value = ("192.168.1.10", 54321)
        self.assertEqual(igd.get_local_ip(), "192.168.1.10")
        sock.connect.assert_called_once_with(LOCAL_IP_PROBE)
        sock.settimeout.assert_called_once_with(0)
        sock.send.assert_not_called()
        sock.sendto.assert_not_called()
        sock.recv.assert_not_called()
        sock.close.assert_called_once_with()

    @mock.patch("igdclient.util.ifaddr.get_adapters")
    def test_local_ip_no_route(self, mock_adapters, mock_socket):
        """
        Should fall back to the first non-loopback interface address.
        """
        sock = mock_socket.return_value
        sock.connect.side_effect = OSError("Network is unreachable")
        mock_adapters.return_value = [
            mock_adapter("127.0.0.1", ("::1", 0, 0)),
            mock_adapter("10.0.0.5", ("fe80::1", 0, 2)),
        ]
        self.assertEqual(igd.get_local_ip(), "10.0.0.5")
        sock.close.assert_called_once_with()

    @mock.patch("igdclient.util.ifaddr.get_adapters", return_value=[])
    def test_local_ip_no_address(self, mock_adapters, mock_socket):
        sock = mock_socket.return_value
        sock.connect.side_effect = OSError("Network is unreachable")
        self.assertRaises(igd.TransportError, igd.get_local_ip)
