"""
Timer API Routes

Flask Blueprint for remote control of the countdown timer.
"""

import logging
from flask import Blueprint, jsonify, request

from .screen import PICKER_FIELDS, PICKER_LIMITS

# Create Blueprint
timer_bp = Blueprint('timer', __name__)
logger = logging.getLogger(__name__)

# TimerScreen instance will be set by webserver
timer_screen = None


def init_routes(screen):
    """
    Initialize routes with TimerScreen instance

    Args:
        screen: TimerScreen instance (gives access to the picker and the timer)
    """
    global timer_screen
    timer_screen = screen
    logger.info("Initialized timer routes")


def _state():
    state = timer_screen.timer.snapshot()
    state['picker'] = {name: getattr(timer_screen, name) for name in PICKER_FIELDS}
    state['primary_label'] = timer_screen.primary_label
    state['accessibility_label'] = timer_screen.primary_accessibility_label
    state['accessibility_hint'] = timer_screen.primary_hint
    return state


@timer_bp.route('/api/timer', methods=['GET'])
def get_timer():
    """Get timer state"""
    return jsonify(_state())


@timer_bp.route('/api/timer/start', methods=['POST'])
def start_timer():
    """Start with an optional duration, or resume"""
    data = request.get_json(silent=True) or {}

    values = {}
    for name in PICKER_FIELDS:
        value = data.get(name, getattr(timer_screen, name))
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= PICKER_LIMITS[name]:
            return jsonify({'error': f'{name} must be an integer between 0 and {PICKER_LIMITS[name]}'}), 400
        values[name] = value

    if timer_screen.timer.is_idle:
        timer_screen.set_duration(values['hours'], values['minutes'], values['seconds'])
    timer_screen.timer.start(values['hours'], values['minutes'], values['seconds'])
    return jsonify(_state())


@timer_bp.route('/api/timer/pause', methods=['POST'])
def pause_timer():
    timer_screen.timer.pause()
    return jsonify(_state())


@timer_bp.route('/api/timer/stop', methods=['POST'])
def stop_timer():
    timer_screen.timer.stop()
    return jsonify(_state())


@timer_bp.route('/api/timer/reset', methods=['POST'])
def reset_timer():
    timer_screen.timer.reset()
    return jsonify(_state())
