"""
brikvest/test_bids_api.py

API tests for developer bids.

Run:
    pytest brikvest/test_bids_api.py -v
"""

from unittest.mock import patch

import pytest


def bid_body(**overrides):
    body = {
        "developerName": "Chinedu Okafor",
        "companyName": "Okafor Builders Ltd",
        "email": "chinedu@okaforbuilders.ng",
        "phone": "+2348022222222",
        "estimatedCost": 850_000_000,
        "description": "Twin tower residential build with basement parking",
        "timeline": 18,
        "pastProjectLink": "https://okaforbuilders.ng/portfolio",
        "whySelected": "Twelve completed projects in Lekki",
    }
    body.update(overrides)
    return body


class TestSubmitBid:
    def test_submit(self, client):
        response = client.post("/api/developer-bids", json=bid_body())

        assert response.status_code == 201, response.json()
        data = response.json()
        assert data["status"] == "pending"
        assert data["costCurrency"] == "NGN"
        assert data["timeline"] == 18

    def test_currency_normalised(self, client):
        response = client.post("/api/developer-bids", json=bid_body(costCurrency="usd"))
        assert response.json()["costCurrency"] == "USD"

    @pytest.mark.parametrize(
        "overrides",
        [{"estimatedCost": 0}, {"timeline": 0}, {"email": "nope"}, {"whySelected": ""}, {"costCurrency": "NAIRA"}],
    )
    def test_validation(self, client, overrides):
        response = client.post("/api/developer-bids", json=bid_body(**overrides))
        assert response.status_code == 400

    def test_acknowledgement_email(self, client):
        with patch("brikvest.mailer.send_email", return_value=True) as send:
            client.post("/api/developer-bids", json=bid_body())

        send.assert_called_once()
        to_email, subject, html = send.call_args.args
        assert to_email == "chinedu@okaforbuilders.ng"
        assert "Development Proposal" in subject
        assert "Okafor Builders Ltd" in html


class TestReviewBids:
    def test_list_requires_admin(self, client):
        assert client.get("/api/developer-bids").status_code == 401

    def test_list_and_get(self, client, admin_headers):
        first = client.post("/api/developer-bids", json=bid_body()).json()
        second = client.post("/api/developer-bids", json=bid_body(companyName="Second Co")).json()

        listed = client.get("/api/developer-bids", headers=admin_headers).json()
        assert [b["id"] for b in listed] == [second["id"], first["id"]]

        detail = client.get(f"/api/developer-bids/{first['id']}", headers=admin_headers)
        assert detail.status_code == 200
        assert detail.json()["companyName"] == "Okafor Builders Ltd"

    def test_get_unknown(self, client, admin_headers):
        assert client.get("/api/developer-bids/999", headers=admin_headers).status_code == 404
