import logging
import os
import traceback

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException

from .config import config, parse_flag, RelaySettings
from .deploy_orchestrator import DeployOrchestrator
from .errors import RelayError, ValidationError
from .models import DeploymentRequest
from .netlify_client import NetlifyClient, build_client

logger = logging.getLogger(__name__)


def create_app(config_name: str = None, netlify_client: NetlifyClient = None) -> Flask:
    """Application factory for the relay service."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Settings are frozen here and handed to every service
    settings = RelaySettings.from_mapping(app.config)
    if netlify_client is None:
        netlify_client = build_client(settings)

    app.settings = settings
    app.orchestrator = DeployOrchestrator(netlify_client, settings)

    register_cors(app)
    register_error_handlers(app)
    register_api_routes(app)

    return app


def register_cors(app: Flask):
    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config['CORS_ALLOW_ORIGIN']
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        return response


def register_error_handlers(app: Flask):
    """Map the relay error taxonomy onto JSON responses."""

    @app.errorhandler(RelayError)
    def handle_relay_error(e: RelayError):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description}), e.code

        logger.exception(f"Unexpected error handling {request.method} {request.path}")
        payload = {'error': str(e) or e.__class__.__name__}
        if app.config.get('DEBUG') or app.config.get('TESTING'):
            payload['trace'] = traceback.format_exc()
        return jsonify(payload), 500


def parse_deploy_request(settings: RelaySettings) -> DeploymentRequest:
    """Read username + HTML from a JSON body or a multipart upload."""
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        username = data.get('username')
        html = data.get('html')
        escaped = data.get('escaped')
        unescape = settings.unescape_html_default if escaped is None else parse_flag(escaped)
    else:
        username = request.form.get('username')
        upload = request.files.get('portfolio')
        if upload is not None:
            html = upload.read()
            unescape = False
        else:
            html = request.form.get('html')
            unescape = settings.unescape_html_default

    missing = []
    if not isinstance(username, str) or not username.strip():
        missing.append('username')
    if not isinstance(html, (str, bytes)) or not html:
        missing.append('html')
    if missing:
        raise ValidationError(missing)

    return DeploymentRequest(username=username.strip(), html=html, unescape=unescape)


def register_api_routes(app: Flask):
    """Register API routes."""

    @app.route('/deploy', methods=['POST'])
    def deploy():
        """Provision a site, upload the page and return its live URL."""
        deploy_request = parse_deploy_request(app.settings)
        logger.info(f"Deploy requested for {deploy_request.username!r}")

        result = app.orchestrator.deploy(deploy_request)
        return jsonify(result.to_dict())

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'ok',
            'token': 'present' if app.settings.has_token else 'missing'
        })
