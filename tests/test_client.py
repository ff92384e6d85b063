import logging
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

import requests

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from getonbrd import schema  # noqa: E402
from getonbrd.client import DEFAULT_BASE_URL, Getonbrd  # noqa: E402
from getonbrd.registry import RelationshipRegistry, ResourceInstance  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)


class FakeResponse:
    def __init__(self, *, content=b"{}", json_payload=None, json_error=False, status_error=None):
        self.content = content
        self._json_payload = json_payload
        self._json_error = json_error
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        if self._json_error:
            raise ValueError("bad json")
        return self._json_payload


class FakeSession:
    def __init__(self, response: FakeResponse):
        self.response = response
        self.calls = []

    def request(self, method, url, params=None, timeout=None):
        self.calls.append((method, url, params, timeout))
        return self.response


class ClientTests(unittest.TestCase):
    def test_defaults(self):
        client = Getonbrd()
        self.assertEqual(client.base_url, DEFAULT_BASE_URL.rstrip("/"))
        self.assertFalse(client.raise_on_error)
        self.assertTrue(client.registry.frozen)
        self.assertEqual(client.tools.batch.resolve_batch.__module__, "getonbrd.tools.batch")

    def test_request_path_normalization(self):
        response = FakeResponse(json_payload={"ok": True})
        session = FakeSession(response)
        client = Getonbrd(base_url="https://example.com/api/v0/", session=session)
        client.request("GET", "tags")
        self.assertEqual(len(session.calls), 1)
        method, url, params, timeout = session.calls[0]
        self.assertEqual(method, "GET")
        self.assertEqual(url, "https://example.com/api/v0/tags")
        self.assertIsNone(params)
        self.assertEqual(timeout, client.default_timeout)

    def test_request_keeps_leading_slash(self):
        session = FakeSession(FakeResponse(json_payload={"ok": True}))
        client = Getonbrd(base_url="https://example.com/api/v0", session=session)
        client.request("GET", "/jobs/dev", params={"a": 1}, timeout=3)
        self.assertEqual(session.calls[0], ("GET", "https://example.com/api/v0/jobs/dev", {"a": 1}, 3))

    def test_request_empty_body_returns_none(self):
        client = Getonbrd(session=FakeSession(FakeResponse(content=b"")))
        self.assertIsNone(client.request("GET", "/tags"))

    def test_request_non_json_returns_none(self):
        client = Getonbrd(session=FakeSession(FakeResponse(content=b"not json", json_error=True)))
        self.assertIsNone(client.request("GET", "/tags"))

    def test_request_json_dict_and_list(self):
        response = FakeResponse(json_payload={"data": 1})
        client = Getonbrd(session=FakeSession(response))
        self.assertEqual(client.request("GET", "/tags"), {"data": 1})
        response._json_payload = [1, 2]
        self.assertEqual(client.request("GET", "/tags"), [1, 2])
        response._json_payload = "not dict"
        self.assertIsNone(client.request("GET", "/tags"))

    def test_request_http_error_returns_none(self):
        for body in ({"message": "problem"}, {"error": "nope"}, {"errors": ["nope"]}, {"other": 1}, ["nope"]):
            response = FakeResponse(json_payload=body, status_error=requests.HTTPError("bad"))
            client = Getonbrd(session=FakeSession(response))
            self.assertIsNone(client.request("GET", "/tags"))

    def test_request_http_error_bad_json_body(self):
        response = FakeResponse(json_error=True, status_error=requests.HTTPError("bad"))
        client = Getonbrd(session=FakeSession(response))
        self.assertIsNone(client.request("GET", "/tags"))

    def test_request_http_error_raises_when_enabled(self):
        response = FakeResponse(json_payload={"message": "problem"}, status_error=requests.HTTPError("bad"))
        client = Getonbrd(session=FakeSession(response), raise_on_error=True)
        with self.assertRaises(requests.HTTPError):
            client.request("GET", "/tags")

    def test_request_other_exception_returns_none(self):
        client = Getonbrd()
        with patch("getonbrd.client.requests.request", side_effect=RuntimeError("boom")):
            self.assertIsNone(client.request("GET", "/tags"))

    def test_request_other_exception_raises_when_enabled(self):
        client = Getonbrd(raise_on_error=True)
        with patch("getonbrd.client.requests.request", side_effect=requests.Timeout("slow")):
            with self.assertRaises(requests.Timeout):
                client.request("GET", "/tags")

    def test_tag_jobs_end_to_end(self):
        payload = {
            "data": [
                {
                    "id": "python-dev-acme",
                    "type": "job",
                    "attributes": {"title": "Python Dev"},
                    "relationships": {"company": {"data": {"id": "acme", "type": "company"}}},
                }
            ]
        }
        session = FakeSession(FakeResponse(json_payload=payload))
        client = Getonbrd(base_url="https://example.com/api/v0", session=session)
        jobs = client.tags.jobs("python").all()
        self.assertEqual(session.calls[0][1], "https://example.com/api/v0/tags/python/jobs")
        self.assertEqual(jobs[0].id, "python-dev-acme")
        self.assertEqual(jobs[0]["company_id"], "acme")

        session.response._json_payload = {"data": {"id": "acme", "attributes": {"name": "Acme"}}}
        company = client.jobs.company(jobs[0])
        self.assertEqual(session.calls[1][1], "https://example.com/api/v0/companies/acme")
        self.assertEqual(company, ResourceInstance("Company", "acme", {"name": "Acme"}))

    def test_resolve_uses_client_registry(self):
        session = FakeSession(FakeResponse(json_payload={"data": []}))
        client = Getonbrd(session=session)
        self.assertEqual(client.resolve(ResourceInstance("Category", "programming"), "jobs").all(), [])
        self.assertTrue(session.calls[0][1].endswith("/categories/programming/jobs"))

    def test_custom_registry(self):
        registry = RelationshipRegistry()
        client = Getonbrd(registry=registry)
        self.assertIs(client.registry, registry)

    def test_unbound_registry_is_bound_to_client(self):
        registry = schema.load_public_schema(RelationshipRegistry())
        session = FakeSession(FakeResponse(json_payload={"data": [{"id": "dev"}]}))
        client = Getonbrd(session=session, registry=registry)
        self.assertIs(registry.fetcher, client.fetcher)
        self.assertEqual(client.tags.jobs("python").all(), [ResourceInstance("Job", "dev")])

    def test_bound_registry_keeps_its_fetcher(self):
        other = schema.build_registry(object())  # type: ignore[arg-type]
        client = Getonbrd(registry=other)
        self.assertIsNot(other.fetcher, client.fetcher)

    def test_error_detail_shapes(self):
        cases = [
            ({"message": "problem"}, "problem"),
            ({"error": "nope"}, "nope"),
            ({"errors": [{"title": "Not found", "detail": "No tag cobol"}, "bare"]}, "Not found - No tag cobol; bare"),
            ({"errors": []}, None),
            ({"other": 1}, None),
            (["nope"], None),
        ]
        for body, expected in cases:
            self.assertEqual(Getonbrd._error_detail(FakeResponse(json_payload=body)), expected, body)
        self.assertIsNone(Getonbrd._error_detail(FakeResponse(json_error=True)))

    def test_http_error_logs_detail(self):
        body = {"errors": [{"title": "Not found"}]}
        response = FakeResponse(json_payload=body, status_error=requests.HTTPError("404"))
        client = Getonbrd(session=FakeSession(response))
        with self.assertLogs("getonbrd.client", level="WARNING") as logs:
            self.assertIsNone(client.request("GET", "/tags/cobol/jobs"))
        self.assertIn("(Not found)", logs.output[0])


if __name__ == "__main__":
    unittest.main()
