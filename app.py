import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import Config
from routes import health_bp, experiences_bp, bookings_bp, promo_bp

from models import db
from flask_migrate import Migrate
from services.errors import BookitError
from utils.logging_config import setup_logging
from utils.seed import seed_sample_data

logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # SQLite waits on its busy timeout when another reservation holds the write lock
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        engine_options = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
        connect_args = dict(engine_options.get("connect_args") or {})
        connect_args.setdefault("timeout", app.config.get("SLOT_LOCK_TIMEOUT_SECONDS", 5))
        engine_options["connect_args"] = connect_args
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(experiences_bp)
    app.register_blueprint(bookings_bp)
    app.register_blueprint(promo_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    # Optional sample catalog (create-if-empty)
    if app.config.get("SEED_SAMPLE_DATA"):
        with app.app_context():
            seed_sample_data()

    register_error_handlers(app)

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(BookitError)
    def _bookit_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc):
        return jsonify(error=exc.description, kind=exc.name.replace(" ", "")), exc.code

    @app.errorhandler(Exception)
    def _unexpected_error(exc):
        db.session.rollback()
        logger.exception("Unhandled error")
        return jsonify(error="Internal server error", kind="InternalError"), 500

#-------------------------
from datetime import date, datetime

import click

from services.catalog import CatalogService
from services.slot_store import SlotStore

def parse_time_label(value: str):
    """Accept "09:00 AM" or "09:00"."""
    for fmt in ("%I:%M %p", "%H:%M"):
        try:
            return datetime.strptime(value.strip().upper(), fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time: {value!r}")

def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (development; use `flask db upgrade` elsewhere)."""
        db.create_all()
        click.echo("Tables created")

    @app.cli.command("seed-catalog")
    def seed_catalog():
        """Insert the sample experiences and slots if the catalog is empty."""
        if seed_sample_data():
            click.echo("Sample catalog inserted")
        else:
            click.echo("Catalog not empty, nothing to do")

    @app.cli.command("add-slot")
    @click.argument("experience_id", type=int)
    @click.argument("slot_date")
    @click.argument("slot_time")
    @click.argument("total", type=int)
    def add_slot(experience_id, slot_date, slot_time, total):
        """Add a slot with TOTAL seats, e.g. add-slot 1 2026-11-10 "09:00 AM" 15."""
        try:
            on_date = date.fromisoformat(slot_date)
            at_time = parse_time_label(slot_time)
        except ValueError as exc:
            raise click.BadParameter(str(exc))
        if total < 0:
            raise click.BadParameter("total must be >= 0")

        try:
            CatalogService(db.session).get_experience(experience_id)
            slot = SlotStore(db.session).create_slot(experience_id, on_date, at_time, total)
            db.session.commit()
        except BookitError as exc:
            raise click.ClickException(exc.message)

        click.echo(f"Slot {slot.id} created: {slot.date.isoformat()} {slot.time_label}, {slot.total} seats")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5000, threaded=True)
