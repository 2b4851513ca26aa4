import logging
import os

from .app import create_app

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    app = create_app()
    port = int(os.getenv("PORT", 4000))
    logger.info("API server listening on http://localhost:%s", port)
    app.run(debug=True, port=port)
