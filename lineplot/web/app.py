"""
Flask application for the lineplot web service.

Routes:
    GET  /              upload form
    POST /upload        plot uploaded CSV files, redirect to the generated page
    GET  /static/...    static assets
    GET  /output/...    generated pages
    GET  /tmp/...       staged uploads
"""

import os
import socket
from typing import Optional

from flask import Flask, jsonify, redirect, request, send_from_directory
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.serving import make_server, select_address_family

from ..config import Settings, get_settings, resolve_form_options
from ..errors import LinePlotError
from ..logging import log_exception
from ..logging.error_codes import ErrorCode
from ..logging.loggers import web_logger as logger
from .session import UploadJob, UploadPart, UploadSessionManager

FORM_FIELDS = ('xaxis', 'yaxis', 'c1x', 'r1h', 'smooth')

# Room for multipart boundaries and text fields on top of the file cap
FORM_OVERHEAD_BYTES = 1024 * 1024

STATUS_BY_CODE = {
    ErrorCode.NO_UPLOAD: 400,
    ErrorCode.PAYLOAD_TOO_LARGE: 413,
}


def _part_size(storage: FileStorage) -> int:
    """Size of an uploaded part as received by the server."""
    stream = storage.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def _error_response(error: LinePlotError):
    status = STATUS_BY_CODE.get(error.error_code, 500)
    return jsonify({"error": error.message, "code": error.error_code.code}), status


def create_app(
    settings: Optional[Settings] = None,
    manager: Optional[UploadSessionManager] = None,
) -> Flask:
    """
    Create the Flask application.

    The output and temp directories are created here, so a failure surfaces
    before the server starts listening.

    Args:
        settings: Application settings (loaded from config/settings.yaml if None)
        manager: Upload session manager (built from settings if None)

    Raises:
        StartupError: If the output or temp directory cannot be created
    """
    settings = settings or get_settings()
    manager = manager or UploadSessionManager.from_settings(settings)
    manager.ensure_directories()

    app = Flask(
        __name__,
        static_folder=str(settings.static_dir),
        static_url_path='/static',
    )
    app.config['MAX_CONTENT_LENGTH'] = settings.max_upload_bytes + FORM_OVERHEAD_BYTES
    app.config['LINEPLOT_SETTINGS'] = settings
    app.config['LINEPLOT_SESSIONS'] = manager

    @app.route('/')
    def index():
        return send_from_directory(settings.static_dir, 'index.html')

    @app.route('/output/<path:filename>')
    def output_file(filename):
        return send_from_directory(manager.output_dir, filename)

    @app.route('/tmp/<path:filename>')
    def temp_file(filename):
        return send_from_directory(manager.temp_dir, filename)

    @app.route('/upload', methods=['POST'])
    def upload():
        options = resolve_form_options(
            {key: request.form.get(key) for key in FORM_FIELDS},
            settings.form_defaults,
        )
        parts = [
            UploadPart(filename=storage.filename or '', stream=storage.stream, size=_part_size(storage))
            for storage in request.files.getlist('files')
            if storage.filename
        ]
        try:
            result = manager.handle(UploadJob(parts=parts, options=options))
        except LinePlotError as e:
            return _error_response(e)
        return redirect(result.public_path, code=302)

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_error):
        mb = settings.max_upload_bytes // (1024 * 1024)
        return jsonify({
            "error": f"File size exceeds the maximum limit of {mb}MB",
            "code": ErrorCode.PAYLOAD_TOO_LARGE.code,
        }), 413

    @app.errorhandler(500)
    def internal_error(error):
        log_exception(logger, "Unhandled error while serving request",
                      exc=getattr(error, 'original_exception', None),
                      error_code=ErrorCode.INTERNAL_ERROR)
        return jsonify({"error": "An unexpected server error occurred.",
                        "code": ErrorCode.INTERNAL_ERROR.code}), 500

    return app


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Open the listening socket for the service.

    werkzeug exits the process itself when it cannot bind, so the bind is
    done here and the descriptor handed over.

    Raises:
        OSError: If the address is in use or cannot be bound
    """
    return socket.create_server((host, port), family=select_address_family(host, port))


def serve(settings: Optional[Settings] = None, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """
    Start the web service and block.

    Each request is handled on its own thread.

    Raises:
        StartupError: If the service directories cannot be created
        OSError: If the address cannot be bound
    """
    settings = settings or get_settings()
    app = create_app(settings)
    host = host or settings.host
    port = port or settings.port
    sock = bind_socket(host, port)
    bound_port = sock.getsockname()[1]
    try:
        server = make_server(host, bound_port, app, threaded=True, fd=sock.fileno())
    finally:
        sock.close()
    logger.info(f"Serving lineplot on http://{host}:{bound_port}")
    server.serve_forever()
