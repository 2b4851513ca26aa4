import logging

from flask import Flask
from flask_cors import CORS

from .config import Config
from .errors import register_error_handlers
from .logging_config import configure_logging
from .models import db
from .quote_storage import build_quote_storage
from .store import build_store
from .utils.airports import AirportDirectory
from .utils.middleware import register_middlewares

# Import Blueprints
from .routes.travel_requests import travel_requests_bp
from .routes.quotes import quotes_bp
from .routes.dashboard import dashboard_bp

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def _cors_origins(value):
    if not value or value == "*":
        return "*"
    return [o.strip() for o in value.split(",") if o.strip()]


def create_app(config_class=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize Extensions
    CORS(app, resources={r"/api/*": {
        "origins": _cors_origins(app.config.get("CORS_ORIGINS")),
        "allow_headers": ["Content-Type"],
        "methods": ["GET", "POST", "PATCH", "OPTIONS"],
    }})
    db.init_app(app)
    register_middlewares(app)
    register_error_handlers(app)

    app.extensions["request_store"] = build_store(app.config["REQUEST_STORE"])
    app.extensions["quote_storage"] = build_quote_storage(app.config)
    app.extensions["airports"] = AirportDirectory(
        app.config["AIRPORTS_URL"],
        enabled=app.config["AIRPORTS_ENABLED"],
        retry_after=app.config["AIRPORTS_RETRY_SECONDS"],
    )

    # Register Blueprints
    app.register_blueprint(travel_requests_bp, url_prefix="/api")
    app.register_blueprint(quotes_bp, url_prefix="/api")
    app.register_blueprint(dashboard_bp)

    @app.route("/")
    def home():
        return {
            "service": "Travel Requests API",
            "version": API_VERSION,
            "endpoints": [
                "GET /api/requests - List all travel requests",
                "POST /api/requests - Create a new travel request",
                "POST /api/requests/:id/quote - Upload quote PDF",
                "PATCH /api/requests/:id/status - Update request status",
                "GET /api/quotes/:filename - Download a stored quote PDF",
                "GET /api/airports?q= - Search airports",
                "GET /api/health - Health check",
                "GET /dashboard/ - Travel request dashboard",
            ],
        }

    with app.app_context():
        db.create_all()

    logger.info(
        "Travel portal ready (store=%s, quotes=%s)",
        app.config["REQUEST_STORE"],
        app.extensions["quote_storage"].name,
    )
    return app

