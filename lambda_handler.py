"""
AWS Lambda handler for the MoneyMoov Payment Attempts API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import json
import logging
import os

from moneymoov import AttemptReconstructor

# Root logger, so CloudWatch picks up moneymoov logs too
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Deployment stage, reported by /health and /api
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Stateless, kept across warm invocations
reconstructor = AttemptReconstructor()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /payment_attempts
    - OPTIONS (CORS preflight)
    """
    # CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # REST API uses "path", HTTP API v2 uses "rawPath"
    path = event.get("path") or event.get("rawPath", "")

    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/payment_attempts" and http_method == "POST":
        return handle_payment_attempts(event)
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    else:
        return {"statusCode": 404, "headers": CORS_HEADERS, "body": json.dumps({"error": "Not found", "path": path})}


def handle_health():
    """Health check endpoint."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": json.dumps({"status": "healthy", "environment": ENVIRONMENT}),
    }


def handle_api_info():
    """API information endpoint."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": json.dumps(
            {
                "status": "ok",
                "message": "MoneyMoov Payment Attempts API",
                "version": "1.0",
                "environment": ENVIRONMENT,
                "runtime": "AWS Lambda",
                "endpoints": {"payment_attempts": "/payment_attempts [POST]", "health": "/health [GET]"},
            }
        ),
    }


def handle_payment_attempts(event):
    """Reconstruct the payment attempts of a payment request."""
    try:
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return {
                    "statusCode": 400,
                    "headers": CORS_HEADERS,
                    "body": json.dumps({"error": "No input data provided", "status": "failed"}),
                }
            # Binary media types arrive base64 encoded
            if event.get("isBase64Encoded"):
                import base64

                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        result = reconstructor.process_from_dict(input_data)

        logger.info(
            f"Reconstructed {result['attempt_count']} attempt(s) for payment request {result['payment_request_id']}"
        )

        return {"statusCode": 200, "headers": CORS_HEADERS, "body": json.dumps(result)}

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return {
            "statusCode": 400,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": f"Invalid JSON: {str(e)}", "status": "failed"}),
        }

    except (ValueError, KeyError, TypeError) as e:
        # Malformed payload or event
        logger.error(f"Validation error: {str(e)}")
        return {
            "statusCode": 400,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": f"Validation error: {str(e)}", "status": "validation_failed"}),
        }

    except Exception as e:
        # Internal error text stays in the logs
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return {
            "statusCode": 500,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": "An unexpected error occurred during processing", "status": "failed"}),
        }
