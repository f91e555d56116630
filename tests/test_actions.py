import unittest

import igdclient as igd
from igdclient.actions import validate_arg


class TestValidateArg(unittest.TestCase):
    def test_validate_port(self):
        """
        Should validate the 'ui2' type.
        """
        for port in (0, 1, 8080, 65535, "443", " 80 ", 80.0):
            self.assertEqual(validate_arg(port, dict(datatype="ui2")), (True, set()))

    def test_validate_bad_port(self):
        for port in (-1, 65536, "http", None, True, 80.5, "80.5"):
            valid, reasons = validate_arg(port, dict(datatype="ui2"))
            self.assertTrue(reasons)
            self.assertFalse(valid)

    def test_validate_lease_duration(self):
        self.assertEqual(validate_arg(604800, dict(datatype="ui4")), (True, set()))
        valid, reasons = validate_arg(4294967296, dict(datatype="ui4"))
        self.assertFalse(valid)

    def test_validate_bool(self):
        for value in (True, False, 0, 1, "yes", "NO", "true", "0"):
            self.assertEqual(validate_arg(value, dict(datatype="boolean")), (True, set()))

    def test_validate_bad_bool(self):
        """
        Should reject an invalid 'boolean'.
        """
        for value in ("2", 2, "maybe"):
            valid, reasons = validate_arg(value, dict(datatype="boolean"))
            self.assertTrue(reasons)
            self.assertFalse(valid)

    def test_validate_allowed_values(self):
        argdef = dict(datatype="string", allowed_values={"TCP", "UDP"})
        self.assertEqual(validate_arg("UDP", argdef), (True, set()))
        valid, reasons = validate_arg("SCTP", argdef)
        self.assertFalse(valid)

    def test_validate_unknown_datatype(self):
        valid, reasons = validate_arg("x", dict(datatype="bin.base64"))
        self.assertFalse(valid)


class TestRequests(unittest.TestCase):
    def test_add_port_mapping_arguments(self):
        """
        Should serialize the arguments in the order the gateway expects.
        """
        request = igd.AddPortMappingRequest(
            8080, "udp", 80, internal_client="10.0.0.2", enabled="no", description="game"
        )
        self.assertEqual(request.protocol, "UDP")
        self.assertEqual(
            list(request.arguments().items()),
            [
                ("NewRemoteHost", ""),
                ("NewExternalPort", "8080"),
                ("NewProtocol", "UDP"),
                ("NewInternalPort", "80"),
                ("NewInternalClient", "10.0.0.2"),
                ("NewEnabled", "0"),
                ("NewPortMappingDescription", "game"),
                ("NewLeaseDuration", "0"),
            ],
        )

    def test_port_arguments_sent_as_integers(self):
        """
        Should send whole-number ports without padding or a fraction.
        """
        arguments = igd.DeletePortMappingRequest(" 8080 ", "TCP").arguments()
        self.assertEqual(arguments["NewExternalPort"], "8080")
        arguments = igd.DeletePortMappingRequest(8080.0, "TCP").arguments()
        self.assertEqual(arguments["NewExternalPort"], "8080")

    def test_delete_port_mapping_invalid(self):
        with self.assertRaises(igd.ValidationError) as ctx:
            igd.DeletePortMappingRequest(99999, "TCP").arguments()
        self.assertEqual(list(ctx.exception.reasons), ["external_port"])
        self.assertIn("external_port", str(ctx.exception))

    def test_get_external_ip_address_arguments(self):
        self.assertEqual(dict(igd.GetExternalIPAddressRequest().arguments()), {})

    def test_request_equality(self):
        self.assertEqual(
            igd.DeletePortMappingRequest(80, "tcp"), igd.DeletePortMappingRequest(80, "TCP")
        )
        self.assertNotEqual(
            igd.DeletePortMappingRequest(80, "TCP"), igd.DeletePortMappingRequest(81, "TCP")
        )


class TestResponses(unittest.TestCase):
    def test_from_params(self):
        ret = igd.GetExternalIPAddressResponse.from_params({"NewExternalIPAddress": "1.2.3.4"})
        self.assertEqual(ret.external_ip_address, "1.2.3.4")

    def test_from_params_missing(self):
        """
        Should give missing out arguments their zero value.
        """
        ret = igd.GetExternalIPAddressResponse.from_params({})
        self.assertEqual(ret, igd.GetExternalIPAddressResponse(external_ip_address=""))

    def test_from_params_ignores_extra(self):
        ret = igd.AddPortMappingResponse.from_params({"NewSomething": "1"})
        self.assertEqual(ret, igd.AddPortMappingResponse())

    def test_unexpected_argument(self):
        self.assertRaises(TypeError, igd.AddPortMappingResponse, external_ip_address="1.2.3.4")


class TestMarshal(unittest.TestCase):
    def test_marshal_string(self):
        self.assertEqual(igd.marshal.marshal_value("string", "1.2.3.4"), (True, "1.2.3.4"))

    def test_marshal_missing(self):
        """
        Should give the zero value of the datatype for a missing value.
        """
        self.assertEqual(igd.marshal.marshal_value("string", None), (False, ""))
        self.assertEqual(igd.marshal.marshal_value("uuid", None), (False, None))

    def test_marshal_unknown(self):
        self.assertEqual(igd.marshal.marshal_value("uuid", "abc"), (False, "abc"))
