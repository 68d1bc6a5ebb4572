import io
import unittest
from pathlib import Path
from unittest import mock

from alkanes_abi.server import create_app

CONTRACTS = Path(__file__).resolve().parent / "contracts"


class AbiRouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app()
        self.client = self.app.test_client()

    def test_upload_contract(self) -> None:
        data = {"file": (io.BytesIO((CONTRACTS / "mintable.rs").read_bytes()), "mintable.rs")}
        resp = self.client.post("/api/abi", data=data, content_type="multipart/form-data")
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertTrue(body["success"])
        self.assertEqual(body["file"], "mintable.rs")
        self.assertEqual(body["abi"]["name"], "MintableAlkane")
        self.assertEqual([m["opcode"] for m in body["abi"]["methods"]], [0, 77, 99, 101])

    def test_response_keeps_schema_order(self) -> None:
        resp = self.client.post("/api/abi/source", json={"source": (CONTRACTS / "multi.rs").read_text()})
        text = resp.get_data(as_text=True)
        self.assertLess(text.index('"name"'), text.index('"methods"'))
        self.assertLess(text.index('"opcode"'), text.index('"inputs"'))

    def test_upload_without_file(self) -> None:
        resp = self.client.post("/api/abi", data={}, content_type="multipart/form-data")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"]["stage"], "upload")

    def test_upload_wrong_extension(self) -> None:
        data = {"file": (io.BytesIO(b"fn main() {}"), "main.c")}
        resp = self.client.post("/api/abi", data=data, content_type="multipart/form-data")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Only .rs files", resp.get_json()["error"]["message"])

    def test_source_endpoint(self) -> None:
        resp = self.client.post("/api/abi/source", json={"source": ""})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.get_json(),
            {"success": True, "abi": {"name": "UnknownContract", "methods": []}},
        )

    def test_source_endpoint_requires_source(self) -> None:
        resp = self.client.post("/api/abi/source", json={"code": "fn main() {}"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"]["stage"], "request")

    def test_extraction_errors_are_reported(self) -> None:
        source = (
            "impl AlkaneResponder for &Foo {\n"
            "    fn execute(&self) {}\n"
            "}\n"
        )
        resp = self.client.post("/api/abi/source", json={"source": source})
        self.assertEqual(resp.status_code, 400)
        body = resp.get_json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["stage"], "extract")

    def test_syntax_errors_are_reported(self) -> None:
        resp = self.client.post("/api/abi/source", json={"source": "impl {"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"]["stage"], "parse")

    def test_non_utf8_upload_is_rejected(self) -> None:
        data = {"file": (io.BytesIO(b"fn main() { let s = \"\xff\xfe\"; }"), "bad.rs")}
        resp = self.client.post("/api/abi", data=data, content_type="multipart/form-data")
        self.assertEqual(resp.status_code, 400)
        body = resp.get_json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["stage"], "read")

    def test_unexpected_error_is_logged_and_returns_500(self) -> None:
        with mock.patch("alkanes_abi.routes.extract_abi", side_effect=RuntimeError("boom")):
            with self.assertLogs(self.app.logger, level="ERROR") as logs:
                resp = self.client.post("/api/abi/source", json={"source": "fn main() {}"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(
            resp.get_json(),
            {"success": False, "error": {"stage": "internal", "message": "boom"}},
        )
        self.assertIn("Error extracting ABI", logs.output[0])


if __name__ == "__main__":
    unittest.main()
