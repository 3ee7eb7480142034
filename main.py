from flask import Flask, request, jsonify
from flask_cors import CORS
from moneymoov import AttemptReconstructor
import os
import logging

# Request logs go to stdout
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes so reporting dashboards can call the API
CORS(app)

# Stateless, shared by all requests
reconstructor = AttemptReconstructor()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "MoneyMoov Payment Attempts API",
        "version": "1.0",
        "endpoints": {
            "payment_attempts": "/payment_attempts [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/payment_attempts", methods=["POST"])
def payment_attempts():
    """
    Reconstruct the payment attempts of a payment request from its events
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        event_count = len(input_data.get("events") or []) if isinstance(input_data, dict) else 0
        logger.info(f"Reconstructing attempts from {event_count} event(s)")

        result = reconstructor.process_from_dict(input_data)

        logger.info(f"Reconstructed {result['attempt_count']} attempt(s) for payment request {result['payment_request_id']}")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Malformed payload or event
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Internal error text stays in the logs
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
