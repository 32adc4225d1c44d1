from typing import Optional

from flask import Flask, Response as FlaskResponse, jsonify, request

from .config import configure_logging
from .handlers import Request, Response, TaskHandlers
from .repository import TaskRepository
from .store import TaskStore, build_store


def _to_flask(response: Response) -> FlaskResponse:
    return FlaskResponse(response.body, status=response.status_code, headers=response.headers)


def _incoming(**path_params) -> Request:
    return Request(
        body=request.get_data(as_text=True) or None,
        path_params=path_params,
        query_params=request.args.to_dict(),
    )


def create_app(store: Optional[TaskStore] = None) -> Flask:
    """Build the HTTP front door over a task store."""
    configure_logging()
    if store is None:
        store = build_store()
    handlers = TaskHandlers(TaskRepository(store))

    app = Flask(__name__)

    @app.route('/todos', methods=['POST'])
    def create_todo():
        """Create a task."""
        return _to_flask(handlers.create(_incoming()))

    @app.route('/todos', methods=['GET'])
    def list_todos():
        """List an owner's tasks."""
        return _to_flask(handlers.list(_incoming()))

    @app.route('/todos/<task_id>', methods=['PUT', 'PATCH'])
    def update_todo(task_id):
        """Partially update a task."""
        return _to_flask(handlers.update(_incoming(taskId=task_id)))

    @app.route('/todos/<owner>/<task_id>', methods=['DELETE'])
    def delete_todo(owner, task_id):
        """Delete a task."""
        return _to_flask(handlers.delete(_incoming(owner=owner, taskId=task_id)))

    @app.route('/health', methods=['GET'])
    def health():
        """Store reachability check."""
        if store.ping():
            return jsonify({'status': 'healthy'})
        return jsonify({'status': 'unavailable'}), 503

    return app
