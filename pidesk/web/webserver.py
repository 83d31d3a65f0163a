"""
Flask web server for PiDesk remote control.
Provides web interface for:
- Switching between the Timer and To Do screens
- Starting, pausing and resetting the timer
- Adding, completing and deleting tasks
"""

from flask import Flask, render_template_string, request, jsonify
import logging
import threading

from pidesk.apps.timer.routes import timer_bp, init_routes as init_timer_routes
from pidesk.apps.todo.routes import todo_bp, init_routes as init_todo_routes
from pidesk.hardware.gpio_handler import BUTTON_ACTIONS


class PiDeskWebServer:
    """
    Web server for remote control
    """

    def __init__(self, app_instance, port: int = 5000):
        """
        Initialize web server

        Args:
            app_instance: PiDeskApp instance for remote control
            port: Port to run server on
        """
        self.logger = logging.getLogger(__name__)
        self.app_instance = app_instance
        self.port = port
        self.flask_app = Flask(__name__)

        init_timer_routes(app_instance.timer_screen)
        init_todo_routes(app_instance.todo_screen)
        self.flask_app.register_blueprint(timer_bp)
        self.flask_app.register_blueprint(todo_bp)

        self._setup_routes()

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.flask_app.route('/')
        def index():
            """Remote control page"""
            return render_template_string(HTML_TEMPLATE)

        @self.flask_app.route('/control/<action>')
        def control(action):
            """Same actions as the hardware buttons"""
            if action not in BUTTON_ACTIONS:
                return jsonify({'error': f'Unknown action: {action}'}), 404

            self.app_instance.handle_action(action)
            return jsonify({'status': 'ok', 'action': action})

        @self.flask_app.route('/api/screen', methods=['GET'])
        def get_screen():
            """Currently selected screen"""
            screen = self.app_instance.navigation.current_screen
            return jsonify({'screen': screen.value, 'label': screen.label})

        @self.flask_app.route('/api/screen', methods=['POST'])
        def select_screen():
            """Select a screen by name"""
            data = request.get_json(silent=True) or {}
            name = data.get('screen', '')
            screen = self.app_instance.navigation.select_by_name(name) if isinstance(name, str) else None
            if screen is None:
                return jsonify({'error': f'Unknown screen: {name}'}), 400
            return jsonify({'screen': screen.value, 'label': screen.label})

    def run(self):
        """Start the web server in a separate thread"""
        thread = threading.Thread(target=self._run_server, daemon=True)
        thread.start()
        self.logger.info(f"Web server started on port {self.port}")

    def _run_server(self):
        """Internal method to run Flask server"""
        self.flask_app.run(host='0.0.0.0', port=self.port, debug=False, use_reloader=False)


# HTML Template for the web interface
HTML_TEMPLATE = '''
<!DOCTYPE html>
<html>
<head>
    <title>PiDesk</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        body {
            font-family: Arial, sans-serif;
            max-width: 600px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
        }
        .section {
            background: white;
            padding: 20px;
            margin: 20px 0;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .tabs {
            display: grid;
            grid-template-columns: 1fr 1fr;
            gap: 10px;
        }
        .btn {
            padding: 15px;
            font-size: 16px;
            border: none;
            border-radius: 5px;
            cursor: pointer;
            background: #4CAF50;
            color: white;
        }
        .btn-pause { background: #FF9800; }
        .btn-danger { background: #f44336; }
        .btn-secondary { background: #008CBA; }
        .time {
            font-size: 48px;
            font-weight: bold;
            text-align: center;
        }
        .picker input { width: 60px; }
        .done { text-decoration: line-through; color: #999; }
        ul { list-style: none; padding: 0; }
        li { padding: 8px 0; border-bottom: 1px solid #ddd; }
    </style>
</head>
<body>
    <h1>PiDesk</h1>

    <div class="section tabs">
        <button class="btn btn-secondary" onclick="selectScreen('timer')">Timer</button>
        <button class="btn btn-secondary" onclick="selectScreen('todo')">To Do</button>
    </div>

    <div class="section">
        <h2>Timer</h2>
        <div class="time" id="time">00:00:00</div>
        <div class="picker" id="picker">
            <input type="number" id="hours" min="0" max="23" value="0"> hours
            <input type="number" id="minutes" min="0" max="59" value="15"> min
            <input type="number" id="seconds" min="0" max="59" value="0"> sec
        </div>
        <p>
            <button class="btn" id="primary" onclick="primary()">Start</button>
            <button class="btn btn-danger" onclick="post('/api/timer/reset')">Reset</button>
        </p>
    </div>

    <div class="section">
        <h2>To Do</h2>
        <ul id="tasks"></ul>
        <input type="text" id="title" placeholder="Add a new task" oninput="updateDraft()">
        <button class="btn" onclick="addTask()">+</button>
    </div>

    <script>
        let timerState = null;

        function post(url, body) {
            return fetch(url, {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify(body || {})
            }).then(r => r.json()).then(refresh);
        }

        function selectScreen(name) {
            post('/api/screen', {screen: name});
        }

        function primary() {
            if (timerState && timerState.run_state === 'running') {
                post('/api/timer/pause');
            } else if (timerState && timerState.run_state === 'paused') {
                post('/api/timer/start');
            } else {
                post('/api/timer/start', {
                    hours: parseInt(document.getElementById('hours').value) || 0,
                    minutes: parseInt(document.getElementById('minutes').value) || 0,
                    seconds: parseInt(document.getElementById('seconds').value) || 0
                });
            }
        }

        function addTask() {
            const field = document.getElementById('title');
            post('/api/todos', {title: field.value}).then(() => { field.value = ''; });
        }

        function updateDraft() {
            fetch('/api/todos/draft', {
                method: 'PUT',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify({title: document.getElementById('title').value})
            });
        }

        function toggleTask(id) {
            fetch('/api/todos/' + id, {method: 'PUT'}).then(refresh);
        }

        function deleteTask(id) {
            fetch('/api/todos/' + id, {method: 'DELETE'}).then(refresh);
        }

        function refresh() {
            fetch('/api/timer').then(r => r.json()).then(state => {
                timerState = state;
                document.getElementById('time').textContent = state.display;
                document.getElementById('primary').textContent = state.primary_label;
                document.getElementById('primary').setAttribute('aria-label', state.accessibility_label);
                document.getElementById('primary').title = state.accessibility_hint;
                document.getElementById('primary').className =
                    state.run_state === 'running' ? 'btn btn-pause' : 'btn';
                document.getElementById('picker').style.display =
                    state.run_state === 'idle' ? 'block' : 'none';
            });
            fetch('/api/todos').then(r => r.json()).then(data => {
                const list = document.getElementById('tasks');
                list.innerHTML = '';
                data.tasks.forEach(task => {
                    const li = document.createElement('li');
                    const box = document.createElement('input');
                    box.type = 'checkbox';
                    box.checked = task.is_completed;
                    box.onclick = () => toggleTask(task.id);
                    box.setAttribute('aria-label', task.title + ', ' + task.status);
                    const label = document.createElement('span');
                    label.textContent = ' ' + task.title + ' ';
                    if (task.is_completed) label.className = 'done';
                    label.title = task.status;
                    const del = document.createElement('button');
                    del.textContent = 'Delete';
                    del.onclick = () => deleteTask(task.id);
                    li.append(box, label, del);
                    list.appendChild(li);
                });
            });
        }

        refresh();
        setInterval(refresh, 1000);
    </script>
</body>
</html>
'''
