import click
from flask import Flask, jsonify

from fabtrack.config import Config
from fabtrack.errors import register_error_handlers, register_jwt_handlers
from fabtrack.extensions import db, migrate, jwt, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # models must be imported before create_all / migrations see the metadata
    from fabtrack.models import user, equipment, borrow_request, borrowed_item, reminder, audit_log  # noqa: F401

    register_error_handlers(app)
    register_jwt_handlers(jwt)

    from fabtrack.controllers.auth_controller import auth_bp
    from fabtrack.controllers.equipment_controller import equipment_bp
    from fabtrack.controllers.borrow_controller import borrow_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(equipment_bp, url_prefix="/equipment")
    app.register_blueprint(borrow_bp, url_prefix="/borrow")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("send-reminders")
    def send_reminders():
        """Run the due-date reminder sweep once."""
        from fabtrack.services.borrow_service import BorrowService
        result = BorrowService.send_due_reminders()
        click.echo(f"Reminders sent: {result['count']} (cutoff {result['cutoff']})")

    from fabtrack.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
