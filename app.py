import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

import config
from routes.co2_routes import co2_bp
from routes.scan_routes import scan_bp

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)
CORS(app)

# Register blueprints
app.register_blueprint(co2_bp)
app.register_blueprint(scan_bp)


@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)), debug=False)
