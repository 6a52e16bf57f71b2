import httpx

from conftest import network_error, ok, raw, read_timeout, status

from algolia_client import HttpError, ParseError, Permission, Success, TransportExhausted


def test_success_decodes_body(service, dispatcher):
    service.queue(ok({"hits": []}))
    outcome = dispatcher.dispatch(Permission.READ, "get", "products?query=shoe")
    assert outcome == Success(body={"hits": []})
    assert outcome.ok
    assert service.calls == 1
    assert service.last.method == "GET"
    assert str(service.last.url) == "https://appid-dsn.algolia.net/1/indexes/products?query=shoe"


def test_headers_use_key_for_permission(service, dispatcher):
    dispatcher.dispatch(Permission.READ, "GET", "products")
    assert service.last.headers["X-Algolia-API-Key"] == "search-key"
    assert service.last.headers["X-Algolia-Application-Id"] == "appid"

    dispatcher.dispatch(Permission.WRITE, "POST", "products/clear")
    assert service.last.headers["X-Algolia-API-Key"] == "write-key"
    assert service.last.url.host == "appid.algolia.net"


def test_transport_failure_exhausts_after_four_hosts(service, dispatcher):
    service.queue(network_error)
    outcome = dispatcher.dispatch(Permission.WRITE, "PUT", "products/1", b"{}")
    assert isinstance(outcome, TransportExhausted)
    assert outcome.attempts == 4
    assert not outcome.ok
    assert service.calls == 4
    assert [r.url.host for r in service.requests] == [
        "appid.algolia.net",
        "appid-1.algolianet.com",
        "appid-2.algolianet.com",
        "appid-3.algolianet.com",
    ]


def test_timeouts_grow_with_each_attempt(service, dispatcher):
    service.queue(read_timeout)
    dispatcher.dispatch(Permission.READ, "GET", "products")
    timeouts = [r.extensions["timeout"] for r in service.requests]
    assert [t["connect"] for t in timeouts] == [2.0, 4.0, 6.0, 8.0]
    assert [t["read"] for t in timeouts] == [30.0, 60.0, 90.0, 120.0]


def test_recovers_on_fallback_host(service, dispatcher):
    service.queue(network_error, network_error, ok({"objectID": "1"}))
    outcome = dispatcher.dispatch(Permission.READ, "GET", "products/1")
    assert outcome == Success(body={"objectID": "1"})
    assert service.calls == 3
    assert service.last.url.host == "appid-2.algolianet.com"


def test_http_error_is_not_retried(service, dispatcher):
    service.queue(status(404, '{"message":"ObjectID does not exist"}'))
    outcome = dispatcher.dispatch(Permission.READ, "GET", "products/missing")
    assert outcome == HttpError(status=404, body='{"message":"ObjectID does not exist"}')
    assert service.calls == 1


def test_malformed_success_body_is_a_parse_error(service, dispatcher):
    service.queue(raw(200, b"{not json"))
    outcome = dispatcher.dispatch(Permission.READ, "GET", "products/1")
    assert isinstance(outcome, ParseError)
    assert outcome.status == 200
    assert outcome.body == "{not json"
    assert service.calls == 1


def test_body_is_sent_with_json_content_type(service, dispatcher):
    dispatcher.dispatch(Permission.WRITE, "PUT", "/products/settings", b'{"a":1}')
    assert service.last.content == b'{"a":1}'
    assert service.last.headers["Content-Type"].startswith("application/json")
    assert service.last.url.path == "/1/indexes/products/settings"


def test_broken_content_encoding_is_a_parse_error(service, dispatcher):
    service.queue(lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"))
    outcome = dispatcher.dispatch(Permission.READ, "GET", "products/1")
    assert isinstance(outcome, ParseError)
    assert outcome.status is None
    assert not outcome.ok
    assert service.calls == 1
