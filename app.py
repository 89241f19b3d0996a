"""
Devfolio API server
===================

Run with:
    python app.py

Endpoints:
    http://localhost:5000/health          - Health check
    http://localhost:5000/api/public/...  - Portfolio data (no auth)
    http://localhost:5000/api/...         - Admin API (bearer token)
"""

from flask import Flask
from devfolio import Devfolio
from devfolio.core import Config

# Create Flask app
app = Flask(__name__)

# Initialize Devfolio - this registers all modules automatically
devfolio = Devfolio(app)


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Devfolio API")
    print("=" * 60)
    print(f"Health:   http://localhost:{Config.port}/health")
    print(f"Modules:  {', '.join(devfolio.get_registered_modules())}")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
