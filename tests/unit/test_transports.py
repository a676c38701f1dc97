"""Transport tests."""

import httpx
import pytest

from cloudproof.errors import TransportError
from cloudproof.security.canonical import Phase, build_canonical_request
from cloudproof.transports import HttpResponse
from cloudproof.transports.httpx import HttpxTransport
from cloudproof.transports.inmemory import InMemoryTransport
from cloudproof.variants import IDENTITY, ORGANIZATION


def test_httpx_transport_sends_request_unchanged():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = request.content
        return httpx.Response(200, content=b"ok", headers={"x-amzn-requestid": "1"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = HttpxTransport(client=client)
    request = build_canonical_request(IDENTITY).with_headers({"Authorization": "sig"})

    response = transport.send(request)

    assert response.status_code == 200
    assert response.body == b"ok"
    assert response.headers["x-amzn-requestid"] == "1"
    assert response.ok
    assert seen["method"] == "POST"
    assert seen["url"] == "https://sts.amazonaws.com/"
    assert seen["body"] == b"Action=GetCallerIdentity&Version=2011-06-15"
    assert seen["headers"]["content-length"] == "43"
    assert seen["headers"]["authorization"] == "sig"
    assert seen["headers"]["accept-encoding"] == "identity"
    assert "transfer-encoding" not in seen["headers"]


def test_httpx_transport_reports_status_and_body():
    client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(403, content=b"AccessDenied"))
    )
    response = HttpxTransport(client=client).send(
        build_canonical_request(ORGANIZATION, phase=Phase.REPLAY)
    )
    assert response.status_code == 403
    assert response.body == b"AccessDenied"
    assert not response.ok


def test_httpx_transport_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError):
        HttpxTransport(client=client).send(build_canonical_request(IDENTITY))


def test_httpx_transport_leaves_caller_client_open():
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    HttpxTransport(client=client).close()
    assert not client.is_closed


def test_inmemory_transport_records_requests():
    transport = InMemoryTransport.returning(200, "<xml/>")
    request = build_canonical_request(IDENTITY)

    response = transport.send(request)

    assert response.status_code == 200
    assert response.body == b"<xml/>"
    assert transport.requests == [request]


def test_inmemory_transport_queued_responses():
    transport = InMemoryTransport(
        responses=[HttpResponse(status_code=500), HttpResponse(status_code=200)]
    )
    request = build_canonical_request(IDENTITY)

    assert transport.send(request).status_code == 500
    assert transport.send(request).status_code == 200
    with pytest.raises(TransportError):
        transport.send(request)
