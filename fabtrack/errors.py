from flask import jsonify


class FabTrackError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FabTrackError):
    status_code = 400


class InvalidStateError(FabTrackError):
    status_code = 400


class AuthenticationError(FabTrackError):
    status_code = 401


class ForbiddenError(FabTrackError):
    status_code = 403


class NotFoundError(FabTrackError):
    status_code = 404


class ConflictError(FabTrackError):
    status_code = 409


def _json_error(message, code):
    return jsonify({"success": False, "message": message}), code


def register_error_handlers(app):
    @app.errorhandler(FabTrackError)
    def _handle_fabtrack_error(e: FabTrackError):
        return _json_error(e.message, e.status_code)

    @app.errorhandler(404)
    def _handle_not_found(e):
        return _json_error("Not found", 404)

    @app.errorhandler(405)
    def _handle_method_not_allowed(e):
        return _json_error("Method not allowed", 405)


def register_jwt_handlers(jwt):
    """Answer token problems with the same JSON shape as every other error."""

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return _json_error("No authorization header provided", 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return _json_error(f"Unauthorized: {reason}", 401)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _json_error("Unauthorized: token has expired", 401)
