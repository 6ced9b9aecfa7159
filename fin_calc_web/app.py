"""JSON API for the financial calculators.

Each calculator registered in ``fin_calc.registry`` is available at
``POST /api/calculators/<name>``. The request body holds the raw form values;
they are parsed the same lenient way the dashboard forms parse keystrokes.
A validation failure returns 400 and the client keeps whatever it showed
before.
"""

import logging
import os

from flask import Flask, jsonify, request

from fin_calc.errors import CalculatorValidationError
from fin_calc.registry import CALCULATORS, list_calculators, serialize


def _settings_from_env() -> dict:
    return {
        "LOG_LEVEL": os.environ.get("FIN_CALC_LOG_LEVEL", "INFO").upper(),
        "MAX_SCHEDULE_ROWS": int(os.environ.get("FIN_CALC_MAX_SCHEDULE_ROWS", "120")),
        "PORT": int(os.environ.get("FIN_CALC_PORT", "8710")),
    }


def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config.update(_settings_from_env())
    if config:
        app.config.update(config)
    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @app.get("/api/calculators")
    def calculators():
        return jsonify({"calculators": list_calculators()})

    @app.post("/api/calculators/<name>")
    def calculate(name):
        calculator = CALCULATORS.get(name)
        if calculator is None:
            return jsonify({"error": f"Unknown calculator: {name}"}), 404
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict()
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        try:
            if calculator.accepts_schedule_limit:
                result = calculator.run(data, schedule_limit=app.config["MAX_SCHEDULE_ROWS"])
            else:
                result = calculator.run(data)
        except CalculatorValidationError as exc:
            app.logger.info("Rejected %s input: %s", name, exc)
            return jsonify({"error": str(exc), "field": exc.field}), 400

        return jsonify({"calculator": name, "result": serialize(result)})

    @app.errorhandler(500)
    def internal_error(error):
        original = getattr(error, "original_exception", None) or error
        app.logger.exception("Unhandled error in %s", request.path, exc_info=original)
        return jsonify({"error": "An unexpected error occurred. Please try again later."}), 500

    return app


app = create_app()


if __name__ == "__main__":
    print("Starting financial calculators API...")
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=True)
