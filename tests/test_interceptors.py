"""
Tests for interceptors and the interceptor chain.
"""
import logging
import threading

import pytest

from endpoint_client.interceptors import (
    AuthInjector,
    HeaderInjector,
    Interceptor,
    InterceptorChain,
    RequestLogger,
    RetrySignaler,
    RotatingTokenCache,
    TimeoutSetter,
    default_interceptors,
)
from endpoint_client.types import UNCHANGED, HttpMethod, HttpRequest, HttpResponse


@pytest.fixture
def request_():
    return HttpRequest(method=HttpMethod.POST, url="https://api.example.com/api/v1/posts", body=b'{"a":1}')


class Tagger(Interceptor):
    """Appends its tag to X-Trace on the way out and to the body on the way back."""

    def __init__(self, tag):
        self.tag = tag

    def transform_request(self, request):
        trace = request.header("X-Trace") or ""
        return request.with_header("X-Trace", trace + self.tag)

    def transform_response(self, request, response):
        return HttpResponse(status=response.status, headers=response.headers, body=(response.body or b"") + self.tag.encode())


class TestInterceptorChain:
    def test_request_phase_in_list_order(self, request_):
        chain = InterceptorChain([Tagger("A"), Tagger("B"), Tagger("C")])
        assert chain.apply_request(request_).headers["X-Trace"] == "ABC"

    def test_response_phase_in_list_order(self, request_):
        chain = InterceptorChain([Tagger("A"), Tagger("B"), Tagger("C")])
        response = chain.apply_response(request_, HttpResponse(status=200, body=b""))
        assert response.body == b"ABC"

    def test_unchanged_and_none_keep_previous_response(self, request_):
        class Keep(Interceptor):
            pass

        class ReturnsNone(Interceptor):
            def transform_response(self, request, response):
                return None

        raw = HttpResponse(status=201, body=b"raw")
        chain = InterceptorChain([Keep(), ReturnsNone()])
        assert chain.apply_response(request_, raw) is raw

    def test_invalid_response_transform_rejected(self, request_):
        class Broken(Interceptor):
            def transform_response(self, request, response):
                return "nope"

        with pytest.raises(TypeError):
            InterceptorChain([Broken()]).apply_response(request_, HttpResponse(status=200))

    def test_rejects_non_interceptors(self):
        with pytest.raises(TypeError):
            InterceptorChain([object()])

    def test_extended_returns_new_chain(self):
        chain = InterceptorChain([Tagger("A")])
        longer = chain.extended(Tagger("B"))
        assert len(chain) == 1
        assert len(longer) == 2

    def test_default_interceptors_order(self):
        names = [i.name for i in default_interceptors("tok")]
        assert names == ["AuthInjector", "RequestLogger", "RetrySignaler", "TimeoutSetter", "HeaderInjector"]


class TestAuthInjector:
    def test_static_token(self, request_):
        result = AuthInjector("my_token").transform_request(request_)
        assert result.headers["Authorization"] == "Bearer my_token"

    def test_callable_token(self, request_):
        result = AuthInjector(lambda: "dynamic").transform_request(request_)
        assert result.headers["Authorization"] == "Bearer dynamic"

    def test_missing_token_is_noop(self, request_):
        assert AuthInjector(lambda: None).transform_request(request_) is request_
        assert AuthInjector(None).transform_request(request_) is request_

    def test_does_not_mutate_input(self, request_):
        AuthInjector("t").transform_request(request_)
        assert "Authorization" not in request_.headers


class TestRotatingTokenCache:
    def test_refreshes_after_ttl(self):
        now = [0.0]
        tokens = iter(["t1", "t2"])
        cache = RotatingTokenCache(lambda: next(tokens), ttl_seconds=10, clock=lambda: now[0])

        assert cache() == "t1"
        now[0] = 5.0
        assert cache() == "t1"
        now[0] = 10.0
        assert cache() == "t2"

    def test_concurrent_callers_fetch_once(self):
        calls = []

        def fetch():
            calls.append(1)
            return "token"

        cache = RotatingTokenCache(fetch, ttl_seconds=60)
        threads = [threading.Thread(target=cache) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(calls) == 1

    def test_invalidate(self):
        tokens = iter(["a", "b"])
        cache = RotatingTokenCache(lambda: next(tokens), ttl_seconds=60)
        assert cache() == "a"
        cache.invalidate()
        assert cache() == "b"


class TestRequestLogger:
    def test_logs_when_enabled_without_altering(self, request_, caplog):
        interceptor = RequestLogger(enabled=True)
        authed = request_.with_header("Authorization", "Bearer supersecrettoken")
        with caplog.at_level(logging.DEBUG, logger="endpoint_client.interceptors.logger"):
            assert interceptor.transform_request(authed) is authed
            response = HttpResponse(status=200, body=b'{"ok":true}')
            assert interceptor.transform_response(authed, response) is UNCHANGED

        text = caplog.text
        assert "Request: POST https://api.example.com/api/v1/posts" in text
        assert "Response: 200" in text
        assert "supersecrettoken" not in text

    def test_silent_when_disabled(self, request_, caplog):
        with caplog.at_level(logging.DEBUG, logger="endpoint_client.interceptors.logger"):
            RequestLogger(enabled=False).transform_request(request_)
        assert caplog.text == ""

    def test_follows_debug_env(self, monkeypatch):
        monkeypatch.setenv("ENDPOINT_CLIENT_DEBUG", "0")
        assert RequestLogger().enabled is False
        monkeypatch.setenv("ENDPOINT_CLIENT_DEBUG", "1")
        assert RequestLogger().enabled is True


class TestRetrySignaler:
    @pytest.mark.parametrize("status", [500, 503, 599])
    def test_signals_server_errors(self, status):
        assert RetrySignaler().should_retry(HttpResponse(status=status)) is True

    @pytest.mark.parametrize("status", [200, 404, 499, 600])
    def test_ignores_other_statuses(self, status):
        assert RetrySignaler().should_retry(HttpResponse(status=status)) is False

    def test_custom_statuses(self):
        signaler = RetrySignaler(statuses=[429])
        assert signaler.should_retry(HttpResponse(status=429)) is True
        assert signaler.should_retry(HttpResponse(status=503)) is False

    def test_never_alters_values(self, request_):
        signaler = RetrySignaler()
        assert signaler.transform_request(request_) is request_
        assert signaler.transform_response(request_, HttpResponse(status=503)) is UNCHANGED


class TestTimeoutSetter:
    def test_sets_timeout_only(self, request_):
        result = TimeoutSetter(10).transform_request(request_)
        assert result.timeout == 10.0
        assert result.headers == request_.headers
        assert result.body == request_.body

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            TimeoutSetter(0)


class TestHeaderInjector:
    def test_adds_missing_headers(self, request_):
        result = HeaderInjector({"User-Agent": "MyApp/1.0"}).transform_request(request_)
        assert result.headers["User-Agent"] == "MyApp/1.0"

    def test_does_not_overwrite_existing(self, request_):
        existing = request_.with_header("user-agent", "Caller/2.0")
        result = HeaderInjector({"User-Agent": "MyApp/1.0"}).transform_request(existing)
        assert result.headers == {"user-agent": "Caller/2.0"}
