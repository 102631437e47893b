#!/usr/bin/env python3
"""
Videojocs server - JSON REST API over the video-game catalog.

Routes (mounted under the configured base path, ``/videojocs`` by default):

    GET    /                    all games
    GET    /<id>                one game
    GET    /empresa/<company>   games of one company
    POST   /                    create a game (id assigned by the catalog)
    PUT    /update              replace a game
    DELETE /delete/<id>         delete a game
    GET    /openapi.json        OpenAPI 3.0 description of the above
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from flask import Flask, abort, jsonify, request
from werkzeug.exceptions import HTTPException

from openapi_spec import build_spec
from videojocs.config import load_config, normalize_base_path, setup_logging
from videojocs.errors import CatalogError, GameNotFoundError, StorageFatalError
from videojocs.models import ID, validate_candidate, validate_game
from videojocs.repositories import VideoGameRepository
from videojocs.services import VideoGameService

server_logger = logging.getLogger('videojocs.server')

UNPROCESSABLE_DESCRIPTION = (
    'The request was well-formed but was unable to be followed due to semantic errors'
)


def error_body(message: str, description: Optional[str], code: int):
    """Return a ``(response, status)`` pair carrying the standard error body."""
    return jsonify({'message': message, 'description': description, 'code': code}), code


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask app for *config* and seed the catalog if it is empty.

    Raises:
        StorageFatalError: if the catalog file cannot be opened.
        StorageWriteError: if the seed games cannot be written.
    """
    if config is None:
        config = load_config()
    base = normalize_base_path(config.get('base_path', '/videojocs'))

    repository = VideoGameRepository(config['db_path'],
                                     atomic=bool(config.get('atomic_writes')))
    service = VideoGameService(repository,
                               serialize_writes=bool(config.get('serialize_writes')))
    service.initialize()

    app = Flask(__name__)
    # Records keep their wire field order (ID, TITOL, ANY, MODALITAT, EMPRESA)
    app.json.sort_keys = False
    app.json.ensure_ascii = False
    app.extensions['videojocs'] = service

    # ===========================================================================================
    # Catalog Endpoints
    # ===========================================================================================

    @app.route(f'{base}/', methods=['GET'], strict_slashes=False)
    def get_all_games():
        """Get every game"""
        return jsonify(service.list_all())

    @app.route(f'{base}/<int(signed=True):game_id>', methods=['GET'])
    def get_game(game_id: int):
        """Get one game by id"""
        game = service.get_by_id(game_id)
        if game is None:
            return error_body('Game not found', None, 404)
        return jsonify(game)

    @app.route(f'{base}/empresa/<company>', methods=['GET'])
    def get_games_by_company(company: str):
        """Get the games of one company (exact match)"""
        return jsonify(service.list_by_company(company))

    @app.route(f'{base}/', methods=['POST'], strict_slashes=False)
    def create_game():
        """Create a game; the id is assigned by the catalog"""
        try:
            candidate = validate_candidate(request.get_json(silent=True))
        except ValueError as exc:
            server_logger.info('Rejected create body: %s', exc)
            abort(422)
        if not service.create(candidate):
            return error_body('Error creating game', None, 500)
        return jsonify('Game created')

    @app.route(f'{base}/update', methods=['PUT'])
    def update_game():
        """Replace the game whose id matches the body's ID"""
        try:
            game = validate_game(request.get_json(silent=True))
        except ValueError as exc:
            server_logger.info('Rejected update body: %s', exc)
            abort(422)
        try:
            ok = service.update(game[ID], game)
        except GameNotFoundError as exc:
            return error_body('Error updating game', str(exc), 404)
        if not ok:
            return error_body('Error updating game', None, 500)
        return jsonify('Game updated')

    @app.route(f'{base}/delete/<int(signed=True):game_id>', methods=['DELETE'])
    def delete_game(game_id: int):
        """Delete every game with this id"""
        if not service.delete(game_id):
            return error_body('Error deleting game', None, 500)
        return jsonify('Game deleted')

    @app.route(f'{base}/openapi.json', methods=['GET'])
    def openapi_document():
        """Serve the OpenAPI description of this API"""
        return jsonify(build_spec(base_path=base, server_url=request.host_url.rstrip('/')))

    # ===========================================================================================
    # Error handlers
    # ===========================================================================================

    @app.errorhandler(404)
    def not_found(_error):
        return error_body('Resource not found',
                          f'The requested resource {request.path} was not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return error_body('Method not allowed',
                          f'The method {request.method} is not allowed for {request.path}', 405)

    @app.errorhandler(422)
    def unprocessable_entity(_error):
        return error_body('Unprocessable entity', UNPROCESSABLE_DESCRIPTION, 422)

    @app.errorhandler(StorageFatalError)
    def storage_unavailable(error: StorageFatalError):
        server_logger.critical('Storage failure on %s %s: %s',
                               request.method, request.path, error)
        return error_body('Storage unavailable', str(error), 500)

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return error_body(error.name, error.description, error.code or 500)

    return app


def main(argv=None) -> int:
    """Main entry point for the server"""
    try:
        config = load_config()
    except ValueError as exc:
        setup_logging()
        server_logger.critical('Invalid configuration: %s', exc)
        return 1
    parser = argparse.ArgumentParser(description='Videojocs catalog REST API')
    parser.add_argument('--db', dest='db_path', default=config['db_path'],
                        help='Path to the catalog JSON file')
    parser.add_argument('--base-path', default=config['base_path'],
                        help='URL prefix the routes are mounted under')
    parser.add_argument('--host', default=config['host'], help='Interface to bind')
    parser.add_argument('--port', type=int, default=config['port'], help='Port to bind')
    parser.add_argument('--log-level', default=config['log_level'],
                        help='DEBUG, INFO, WARNING, ERROR or CRITICAL')
    parser.add_argument('--atomic-writes', action='store_true',
                        default=config['atomic_writes'],
                        help='Write to a temp file and rename it over the catalog')
    parser.add_argument('--serialize-writes', action='store_true',
                        default=config['serialize_writes'],
                        help='Hold one lock across every load/modify/save cycle')
    args = parser.parse_args(argv)
    config.update(vars(args))

    setup_logging(config['log_level'])
    try:
        app = create_app(config)
    except CatalogError as exc:
        server_logger.critical('Could not start: %s', exc)
        return 1

    server_logger.info('Serving %s on http://%s:%s%s/',
                       config['db_path'], config['host'], config['port'],
                       normalize_base_path(config['base_path']))
    app.run(host=config['host'], port=config['port'], debug=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
