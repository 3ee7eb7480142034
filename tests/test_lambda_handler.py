"""Tests for AWS Lambda handler."""

import base64
import json

from lambda_handler import lambda_handler

PAYLOAD = {
    "amount": 30,
    "events": [
        {
            "paymentRequestID": "pr-1",
            "eventType": "card_sale",
            "inserted": "2024-03-01T09:00:00Z",
            "amount": 30,
            "currency": "GBP",
            "status": "Captured",
            "paymentProcessorName": "Checkout",
            "cardAuthorizationResponseID": "pay_123",
            "walletName": "GooglePay",
        }
    ],
}


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"

    def test_api_info(self):
        """GET /api returns API information."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "ok"
        assert "payment_attempts" in body["endpoints"]

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/payment_attempts"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_payment_attempts_success(self):
        """POST /payment_attempts reconstructs the attempts."""
        event = {"httpMethod": "POST", "path": "/payment_attempts", "body": json.dumps(PAYLOAD)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["attempt_count"] == 1
        attempt = body["payment_attempts"][0]
        assert attempt["attempt_key"] == "pay_123"
        assert attempt["authorised_at"] == attempt["settled_at"]
        assert attempt["wallet_name"] == "GooglePay"

    def test_payment_attempts_dict_body(self):
        """Bodies already decoded by the integration are accepted."""
        event = {"httpMethod": "POST", "path": "/payment_attempts", "body": PAYLOAD}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_payment_attempts_base64_body(self):
        body = base64.b64encode(json.dumps(PAYLOAD).encode("utf-8")).decode("ascii")
        event = {"httpMethod": "POST", "path": "/payment_attempts", "body": body, "isBase64Encoded": True}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_payment_attempts_empty_body(self):
        """POST /payment_attempts with empty body returns 400."""
        event = {"httpMethod": "POST", "path": "/payment_attempts", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert "error" in body

    def test_payment_attempts_invalid_json(self):
        """POST /payment_attempts with invalid JSON returns 400."""
        event = {"httpMethod": "POST", "path": "/payment_attempts", "body": "not valid json"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert "error" in body

    def test_payment_attempts_validation_error(self):
        """POST /payment_attempts with invalid data returns 400."""
        payload = {"amount": 30, "events": [{"eventType": "card_sale"}]}
        event = {"httpMethod": "POST", "path": "/payment_attempts", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["status"] == "validation_failed"

    def test_http_api_format(self):
        """Supports HTTP API v2 event format."""
        event = {"requestContext": {"http": {"method": "GET"}}, "rawPath": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
