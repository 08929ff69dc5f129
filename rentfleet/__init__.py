import atexit
import os

from flask import Flask

from .controllers.rentals import bp as rentals_bp
from .services.rental_log import RentalLog, DEFAULT_LOG_PATH
from .services.rental_service import RentalManager
from .services.seed import seed_fleet


def create_app(config: dict | None = None, log=None):
    """
    Build the Flask app around one RentalManager.

    `log` may be any object with `log(message)`; by default a RentalLog is
    opened at RENTAL_LOG_PATH (LogSinkUnavailableError propagates: startup
    fails if the log cannot be opened).
    """
    app = Flask(__name__)
    app.config["RENTAL_LOG_PATH"] = os.getenv("RENTAL_LOG_PATH", str(DEFAULT_LOG_PATH))
    app.config["TIMEZONE"] = os.getenv("RENTAL_TZ", "UTC")
    app.config["SEED_FLEET"] = True
    app.config["ECHO"] = False
    if config:
        app.config.update(config)

    owns_log = log is None
    if owns_log:
        log = RentalLog(app.config["RENTAL_LOG_PATH"], tz_name=app.config["TIMEZONE"])
        # Close the log file on exit (skipped in test environments)
        if os.getenv("APP_ENV") != "test":
            atexit.register(log.close)

    try:
        manager = RentalManager(log, echo=app.config["ECHO"])
        if app.config["SEED_FLEET"]:
            seed_fleet(manager)
    except Exception:
        if owns_log:
            log.close()
        raise
    app.extensions["rentfleet"] = manager

    app.register_blueprint(rentals_bp)

    return app
