"""
To-Do List API Routes

Flask Blueprint for To-Do list REST API endpoints.
"""

import logging
from flask import Blueprint, jsonify, request

# Create Blueprint
todo_bp = Blueprint('todo', __name__)
logger = logging.getLogger(__name__)

# ToDoScreen instance will be set by webserver
todo_screen = None


def init_routes(screen):
    """
    Initialize routes with ToDoScreen instance

    Args:
        screen: ToDoScreen instance (gives access to the draft and the task store)
    """
    global todo_screen
    todo_screen = screen
    logger.info("Initialized To-Do routes")


def _task_payload(task):
    data = task.to_dict()
    data['status'] = todo_screen.status_label(task)
    return data


def _tasks_payload():
    return {
        'tasks': [_task_payload(task) for task in todo_screen.store.snapshot()],
        'draft': todo_screen.new_task_title
    }


@todo_bp.route('/api/todos', methods=['GET'])
def get_todos():
    """Get all to-do tasks and the current draft title"""
    return jsonify(_tasks_payload())


@todo_bp.route('/api/todos', methods=['POST'])
def add_todo():
    """
    Add a new to-do task

    With a title the draft is replaced first; without one the current
    draft is submitted.
    """
    data = request.get_json(silent=True) or {}
    title = data.get('title')

    if title is not None:
        if not isinstance(title, str) or not title.strip():
            return jsonify({'error': 'Task title is required'}), 400
        todo_screen.set_draft(title)

    task = todo_screen.submit_new_task()
    if task is None:
        return jsonify({'error': 'Task title is required'}), 400

    return jsonify({'success': True, 'task': _task_payload(task)})


@todo_bp.route('/api/todos/draft', methods=['PUT'])
def update_draft():
    """Set the draft title shown on the display"""
    data = request.get_json(silent=True) or {}
    title = data.get('title', '')
    if not isinstance(title, str):
        return jsonify({'error': 'Task title must be a string'}), 400

    todo_screen.set_draft(title)
    return jsonify({'draft': todo_screen.new_task_title})


@todo_bp.route('/api/todos/<task_id>', methods=['PUT'])
def toggle_todo(task_id):
    """Toggle task completion status"""
    task = todo_screen.store.toggle_completion(task_id)
    if task is None:
        return jsonify({'error': 'Task not found'}), 404

    return jsonify({'success': True, 'task': _task_payload(task)})


@todo_bp.route('/api/todos/<task_id>', methods=['DELETE'])
def delete_todo(task_id):
    """Delete a to-do task"""
    if todo_screen.store.remove(task_id) is None:
        return jsonify({'error': 'Task not found'}), 404

    return jsonify({'success': True})


@todo_bp.route('/api/todos/remove', methods=['POST'])
def remove_todos():
    """Delete tasks by list position"""
    data = request.get_json(silent=True) or {}
    positions = data.get('positions')

    if not isinstance(positions, list) or not all(isinstance(p, int) and not isinstance(p, bool) for p in positions):
        return jsonify({'error': 'positions must be a list of integers'}), 400

    removed = todo_screen.store.remove_at(positions)
    logger.info(f"Removed {len(removed)} task(s) by position")
    return jsonify({'success': True, 'removed': [_task_payload(task) for task in removed]})
