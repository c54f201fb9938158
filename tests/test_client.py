"""
Tests for ProductAdvertisingClient, RequestDispatcher and transports

Tests:
- End-to-end calls through a spy transport (body, URL, headers)
- Fail-fast validation before any network work
- Resource and marketplace defaults carried between calls
- Pass-through of transport failures and non-success statuses
- RequestsTransport against a patched requests session
"""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from conftest import SpyTransport
from paapi import ProductAdvertisingClient, RequestDispatcher, RequestsTransport
from paapi.api.transport import Transport, TransportResponse
from paapi.builder import BROWSE_NODE_RESOURCES, ItemsRequest
from paapi.errors import (
    InvalidOperation,
    InvalidRequest,
    RemoteError,
    SigningError,
    TransportError,
    UnknownMarketplace,
)
from paapi.signing.signer import sha256_hex


EXPECTED_HEADERS = {
    "Content-Type",
    "Content-Encoding",
    "X-Amz-Target",
    "Authorization",
    "X-Amz-Content-Sha256",
    "X-Amz-Date",
    "Host",
}


def sent_body(spy, index=-1):
    return json.loads(spy.calls[index]["body"].decode("utf-8"))


# ============================================================================
# TEST: End-to-end dispatch
# ============================================================================


class TestDispatch:
    """Tests for the full build -> sign -> send pipeline"""

    def test_get_items_end_to_end(self, client, spy_transport):
        """Test the GetItems body, endpoint and Authorization header"""
        response = client.get_items(item_ids=["B000123456"])

        assert len(spy_transport.calls) == 1
        call = spy_transport.calls[0]
        assert call["url"] == "https://webservices.amazon.com/paapi5/getitems"
        assert sent_body(spy_transport) == {
            "ItemIds": ["B000123456"],
            "PartnerTag": "tag-01",
            "PartnerType": "Associates",
            "Marketplace": "www.amazon.com",
            "Resources": ["ItemInfo.Title"],
        }
        assert call["headers"]["Authorization"].startswith("AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/")
        assert response.status == 200
        assert response.ok

    def test_wire_headers(self, client, spy_transport):
        """Test the exact outbound header set"""
        client.get_items(item_ids="B000123456")
        headers = spy_transport.calls[0]["headers"]

        assert set(headers) == EXPECTED_HEADERS
        assert headers["Content-Type"] == "application/json; charset=UTF-8"
        assert headers["Content-Encoding"] == "amz-1.0"
        assert headers["X-Amz-Target"] == "com.amazon.paapi5.v1.ProductAdvertisingAPIv1.GetItems"
        assert headers["Host"] == "webservices.amazon.com"
        assert headers["X-Amz-Date"] == "20240115T120000Z"

    def test_signature_covers_sent_bytes(self, client, spy_transport, signer, credentials):
        """Test the headers were computed from exactly the bytes sent"""
        client.get_items(item_ids="B000123456")
        call = spy_transport.calls[0]

        assert call["headers"]["X-Amz-Content-Sha256"] == sha256_hex(call["body"])

        resigned = signer.sign(
            "POST",
            call["url"],
            {
                "X-Amz-Target": call["headers"]["X-Amz-Target"],
                "Content-Encoding": call["headers"]["Content-Encoding"],
                "Host": call["headers"]["Host"],
            },
            call["body"],
            credentials,
            "us-east-1",
        )
        assert resigned.authorization == call["headers"]["Authorization"]

    def test_get_variations_only_asin(self, client, spy_transport):
        """Test unset optional fields are absent, not null"""
        client.get_variations(asin="B000123456")

        body = sent_body(spy_transport)
        assert set(body) == {"ASIN", "PartnerTag", "PartnerType", "Marketplace", "Resources"}
        assert body["ASIN"] == "B000123456"
        assert spy_transport.calls[0]["url"].endswith("/paapi5/getvariations")

    def test_get_browse_nodes(self, client, spy_transport):
        client.get_browse_nodes(browse_node_ids="3040", languages_of_preference=["en_US"])

        body = sent_body(spy_transport)
        assert body["BrowseNodeIds"] == ["3040"]
        assert body["LanguagesOfPreference"] == ["en_US"]
        assert body["Resources"] == list(BROWSE_NODE_RESOURCES)
        assert spy_transport.calls[0]["headers"]["X-Amz-Target"].endswith(".GetBrowseNodes")

    def test_execute_by_name(self, client, spy_transport):
        response = client.execute("Items", item_ids=["B000123456"], condition="New")

        assert sent_body(spy_transport)["Condition"] == "New"
        assert response.operation.value == "GetItems"

    def test_marketplace_endpoint_and_region(self, client, spy_transport):
        """Test host, site and signing region follow the marketplace"""
        client.get_items(item_ids="B1", marketplace="jp")
        call = spy_transport.calls[0]

        assert call["url"] == "https://webservices.amazon.co.jp/paapi5/getitems"
        assert call["headers"]["Host"] == "webservices.amazon.co.jp"
        assert "/us-west-2/ProductAdvertisingAPI/" in call["headers"]["Authorization"]
        assert sent_body(spy_transport)["Marketplace"] == "www.amazon.co.jp"

    def test_dispatcher_execute_directly(self, spy_transport, signer, credentials, client_config):
        dispatcher = RequestDispatcher(transport=spy_transport, signer=signer)

        response = dispatcher.execute(ItemsRequest(item_ids="B1"), client_config, credentials)

        assert response.config == client_config
        assert len(spy_transport.calls) == 1


# ============================================================================
# TEST: Fail-fast validation
# ============================================================================


class TestValidation:
    """Tests for errors raised before the transport is used"""

    def test_unsupported_operation(self, client, spy_transport):
        """Test unsupported names never reach the transport"""
        with pytest.raises(InvalidOperation):
            client.execute("DeleteItems", item_ids=["B000123456"])

        assert spy_transport.calls == []

    def test_unknown_parameter(self, client, spy_transport):
        with pytest.raises(InvalidRequest):
            client.execute("GetItems", item_ids="B1", keywords="shoes")

        assert spy_transport.calls == []

    def test_empty_identifiers(self, client, spy_transport):
        with pytest.raises(InvalidRequest):
            client.get_items(item_ids=[])

        assert spy_transport.calls == []

    def test_list_asin_not_sent(self, client, spy_transport):
        """Test a list passed as the variations ASIN fails before signing"""
        with pytest.raises(InvalidRequest):
            client.get_variations(asin=["B000123456"])

        assert spy_transport.calls == []

    def test_unknown_marketplace(self, client, spy_transport):
        with pytest.raises(UnknownMarketplace):
            client.get_items(item_ids="B1", marketplace="zz")

        assert spy_transport.calls == []

    def test_bad_credentials(self, spy_transport, signer):
        client = ProductAdvertisingClient(
            access_key="AKID",
            secret_key="",
            partner_tag="tag-01",
            transport=spy_transport,
            signer=signer,
        )

        with pytest.raises(SigningError):
            client.get_items(item_ids="B1")

        assert spy_transport.calls == []


# ============================================================================
# TEST: Defaults carried between calls
# ============================================================================


class TestClientDefaults:
    """Tests for resources and marketplace reuse"""

    def test_supplied_resources_are_reused(self, client, spy_transport):
        """Test a resources list given once applies to later calls"""
        client.get_items(item_ids="B1", resources=["Offers.Listings.Price"])
        client.get_items(item_ids="B2")

        assert sent_body(spy_transport, 0)["Resources"] == ["Offers.Listings.Price"]
        assert sent_body(spy_transport, 1)["Resources"] == ["Offers.Listings.Price"]
        assert client.resources == ("Offers.Listings.Price",)

    def test_browse_node_selectors_not_persisted(self, client, spy_transport):
        client.get_browse_nodes(browse_node_ids="3040")
        client.get_items(item_ids="B1")

        assert client.resources == ("ItemInfo.Title",)
        assert sent_body(spy_transport)["Resources"] == ["ItemInfo.Title"]

    def test_explicit_browse_node_resources_are_persisted(self, client, spy_transport):
        client.get_browse_nodes(browse_node_ids="3040", resources=["BrowseNodes.Ancestor"])
        client.get_items(item_ids="B1")

        assert client.resources == ("BrowseNodes.Ancestor",)
        assert sent_body(spy_transport)["Resources"] == ["BrowseNodes.Ancestor"]

    def test_marketplace_is_reused(self, client, spy_transport):
        client.get_items(item_ids="B1", marketplace="de")
        client.get_variations(asin="B1")

        assert client.marketplace == "de"
        assert spy_transport.calls[1]["url"] == "https://webservices.amazon.de/paapi5/getvariations"

    def test_failed_call_keeps_defaults(self, client):
        """Test invalid calls leave the configuration untouched"""
        with pytest.raises(InvalidRequest):
            client.get_items(item_ids=[], resources=["Offers.Listings.Price"])

        assert client.resources == ("ItemInfo.Title",)

    def test_response_carries_config_used(self, client):
        response = client.get_items(item_ids="B1", resources=["Images.Primary.Small"])

        assert response.config.resources == ("Images.Primary.Small",)
        assert response.config is client.config

    def test_prepare_does_not_send_or_persist(self, client, spy_transport):
        prepared = client.prepare("GetItems", item_ids="B1", resources=["Offers.Listings.Price"])

        assert spy_transport.calls == []
        assert client.resources == ("ItemInfo.Title",)
        assert json.loads(prepared.body)["Resources"] == ["Offers.Listings.Price"]
        assert prepared.headers["Authorization"]

    def test_configure(self, client):
        config = client.configure(resources=["ItemInfo.Features"], marketplace="gb")

        assert config.resources == ("ItemInfo.Features",)
        assert client.marketplace == "gb"

    def test_repr_hides_secret(self, client, credentials):
        assert credentials.secret_key not in repr(client)


# ============================================================================
# TEST: Transport results and failures
# ============================================================================


class TestTransportResults:
    """Tests for statuses and failures surfaced to the caller"""

    def test_non_success_status_is_returned(self, signer):
        spy = SpyTransport(response=TransportResponse(status=429, body=b'{"Errors": []}'))
        client = ProductAdvertisingClient("AKID", "secret", "tag-01", transport=spy, signer=signer)

        response = client.get_items(item_ids="B1")

        assert response.status == 429
        assert not response.ok
        assert response.json() == {"Errors": []}
        with pytest.raises(RemoteError) as exc_info:
            response.raise_for_status()
        assert exc_info.value.response is response

    def test_raise_for_status_on_success(self, client):
        response = client.get_items(item_ids="B1")

        assert response.raise_for_status() is response
        assert "ItemsResult" in response.text

    def test_transport_error_passes_through(self, signer):
        error = TransportError("connection refused")
        spy = SpyTransport(error=error)
        client = ProductAdvertisingClient("AKID", "secret", "tag-01", transport=spy, signer=signer)

        with pytest.raises(TransportError) as exc_info:
            client.get_items(item_ids="B1")

        assert exc_info.value is error
        assert len(spy.calls) == 1


class TestRequestsTransport:
    """Tests for the requests-backed transport"""

    @patch("requests.Session.post")
    def test_post(self, mock_post):
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.headers = {"Content-Type": "application/json"}
        mock_response.content = b"{}"
        mock_post.return_value = mock_response

        transport = RequestsTransport(timeout=5)
        result = transport.post("https://webservices.amazon.com/paapi5/getitems", {"Host": "x"}, b"{}")

        assert result.status == 200
        assert result.body == b"{}"
        assert result.headers == {"Content-Type": "application/json"}
        mock_post.assert_called_once_with(
            "https://webservices.amazon.com/paapi5/getitems",
            data=b"{}",
            headers={"Host": "x"},
            timeout=5,
        )

    @patch("requests.Session.post")
    def test_connection_failure(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError, match="refused"):
            RequestsTransport().post("https://webservices.amazon.com/paapi5/getitems", {}, b"{}")

    @patch("requests.Session.post")
    def test_client_uses_requests_by_default(self, mock_post, signer):
        mock_response = Mock()
        mock_response.status_code = 400
        mock_response.headers = {}
        mock_response.content = b'{"Errors": [{"Code": "InvalidParameterValue"}]}'
        mock_post.return_value = mock_response

        client = ProductAdvertisingClient("AKID", "secret", "tag-01", signer=signer, timeout=7)
        response = client.get_items(item_ids="B1")

        assert response.status == 400
        _, kwargs = mock_post.call_args
        assert kwargs["timeout"] == 7
        assert set(kwargs["headers"]) == EXPECTED_HEADERS

    def test_transport_requires_post(self):
        """Test a transport without post cannot be instantiated"""

        class Incomplete(Transport):
            pass

        with pytest.raises(TypeError):
            Incomplete()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
