"""
To Do screen: task list with checkboxes, cursor and a draft title field.
"""

import logging
from typing import Callable, List, Optional

from PIL import Image, ImageDraw

from pidesk.ui.drawing import draw_centered, load_font, text_size
from .store import TaskRecord, TaskStore


class ToDoScreen:
    """
    To Do list screen for managing tasks
    """

    def __init__(self, store: TaskStore, width: int = 800, height: int = 480, items_per_page: int = 8):
        """
        Initialize To Do screen

        Args:
            store: TaskStore shown by this screen
            width: Screen width
            height: Screen height
            items_per_page: Number of tasks shown per page
        """
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.width = width
        self.height = height
        self.items_per_page = max(1, items_per_page)

        self.current_index = 0
        self.new_task_title = ""
        self._listeners: List[Callable[['ToDoScreen'], None]] = []

        self.title_font = load_font(28, bold=True)
        self.item_font = load_font(28)
        self.font = load_font(18)

    @property
    def current_page(self) -> int:
        return self.current_index // self.items_per_page

    def selected_task(self) -> Optional[TaskRecord]:
        tasks = self.store.snapshot()
        if 0 <= self.current_index < len(tasks):
            return tasks[self.current_index]
        return None

    def add_listener(self, callback: Callable[['ToDoScreen'], None]):
        """Register a callback run when the draft title changes"""
        self._listeners.append(callback)

    # -------------------- editing --------------------
    def set_draft(self, title: str):
        """Replace the draft title shown under the list"""
        if title == self.new_task_title:
            return
        self.new_task_title = title
        self._notify()

    def submit_new_task(self) -> Optional[TaskRecord]:
        """Add the draft title as a task and clear the draft"""
        task = self.store.add(self.new_task_title)
        if task:
            self.new_task_title = ""
            self._notify()
        return task

    def _notify(self):
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                self.logger.error(f"Draft listener failed: {e}", exc_info=True)

    def toggle_selected(self):
        """Toggle completion of the selected task"""
        task = self.selected_task()
        if task:
            self.store.toggle_completion(task.id)

    def delete_selected(self):
        """Delete the selected task"""
        if not self.store.remove_at({self.current_index}):
            return
        if self.current_index >= len(self.store):
            self.current_index = max(0, len(self.store) - 1)

    # -------------------- cursor --------------------
    def next_item(self):
        """Move to next task"""
        if len(self.store) > 0:
            self.current_index = (self.current_index + 1) % len(self.store)

    def prev_item(self):
        """Move to previous task"""
        if len(self.store) > 0:
            self.current_index = (self.current_index - 1) % len(self.store)

    @staticmethod
    def status_label(task: TaskRecord) -> str:
        return "Completed" if task.is_completed else "Not completed"

    # -------------------- rendering --------------------
    def _fit(self, draw: ImageDraw.ImageDraw, text: str, max_width: int) -> str:
        """Truncate text with an ellipsis to fit max_width"""
        if text_size(draw, text, self.item_font)[0] <= max_width:
            return text
        while text and text_size(draw, text + "...", self.item_font)[0] > max_width:
            text = text[:-1]
        return text + "..."

    def render(self) -> Image.Image:
        """
        Render the To Do screen

        Returns:
            PIL Image of the screen
        """
        tasks: List[TaskRecord] = self.store.snapshot()
        # The list may have shrunk since the last cursor move
        if self.current_index >= len(tasks):
            self.current_index = max(0, len(tasks) - 1)

        image = Image.new('L', (self.width, self.height), 255)
        draw = ImageDraw.Draw(image)

        y_offset = 10
        y_offset += draw_centered(draw, self.width, y_offset, "To Do", self.title_font) + 20
        draw.line([(10, y_offset), (self.width - 10, y_offset)], fill=0, width=2)
        y_offset += 10

        if not tasks:
            draw_centered(draw, self.width, self.height // 2, "No tasks yet", self.font, fill=128)
        else:
            line_height = 44
            checkbox_size = 24
            checkbox_x = 20
            text_x = checkbox_x + checkbox_size + 12
            start = self.current_page * self.items_per_page
            end = min(start + self.items_per_page, len(tasks))

            for index in range(start, end):
                task = tasks[index]

                if index == self.current_index:
                    draw.rectangle(
                        [(10, y_offset - 2), (self.width - 10, y_offset + line_height - 6)],
                        fill=220
                    )

                checkbox_y = y_offset + (line_height - checkbox_size) // 2 - 4
                draw.rectangle(
                    [(checkbox_x, checkbox_y), (checkbox_x + checkbox_size, checkbox_y + checkbox_size)],
                    outline=0,
                    width=2
                )
                if task.is_completed:
                    draw.line([(checkbox_x + 4, checkbox_y + 4),
                               (checkbox_x + checkbox_size - 4, checkbox_y + checkbox_size - 4)], fill=0, width=3)
                    draw.line([(checkbox_x + checkbox_size - 4, checkbox_y + 4),
                               (checkbox_x + 4, checkbox_y + checkbox_size - 4)], fill=0, width=3)

                title = self._fit(draw, task.title, self.width - text_x - 20)
                draw.text((text_x, y_offset), title, fill=0, font=self.item_font)

                if task.is_completed:
                    bbox = draw.textbbox((text_x, y_offset), title, font=self.item_font)
                    strike_y = (bbox[1] + bbox[3]) // 2
                    draw.line([(text_x, strike_y), (bbox[2], strike_y)], fill=0, width=3)

                y_offset += line_height

            total_pages = (len(tasks) + self.items_per_page - 1) // self.items_per_page
            if total_pages > 1:
                page_info = f"Page {self.current_page + 1}/{total_pages}"
                draw_centered(draw, self.width, self.height - 60, page_info, self.font)

        if self.new_task_title:
            draw_centered(draw, self.width, self.height - 30, f"New: {self.new_task_title}", self.font, fill=96)

        return image
