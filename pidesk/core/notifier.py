"""
User notifications: spoken announcements and the timer alert sound.
Supports espeak/aplay speech output and a mock backend, with auto-detection.
"""

import logging
import os
import shutil
import subprocess
import threading
from abc import ABC, abstractmethod
from typing import List, Optional


class NotifierBackend(ABC):
    """Abstract base class for notification backends"""

    @abstractmethod
    def announce(self, message: str):
        """Speak or otherwise present a short message to the user"""
        pass

    @abstractmethod
    def play_alert(self):
        """Play the alert sound"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if backend is available"""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get backend name"""
        pass


class SpeechBackend(NotifierBackend):
    """Text-to-speech through espeak-ng/espeak, alert sound through aplay"""

    def __init__(self, voice: str = "en", alert_sound: Optional[str] = None, timeout: float = 10.0):
        self.logger = logging.getLogger(__name__)
        self.voice = voice
        self.alert_sound = alert_sound
        self.timeout = timeout
        self.espeak = shutil.which("espeak-ng") or shutil.which("espeak")
        self.aplay = shutil.which("aplay")
        self._speech: Optional[subprocess.Popen] = None
        self._speech_lock = threading.Lock()

    def _run(self, args: List[str]):
        try:
            result = subprocess.run(args, capture_output=True, text=True, timeout=self.timeout)
            if result.returncode != 0:
                self.logger.warning(f"{args[0]} exited with {result.returncode}: {result.stderr.strip()}")
        except Exception as e:
            self.logger.error(f"Failed to run {args[0]}: {e}")

    def announce(self, message: str):
        """Start speaking and return at once; a new message cuts off the previous one"""
        with self._speech_lock:
            if self._speech is not None and self._speech.poll() is None:
                self._speech.terminate()
            try:
                self._speech = subprocess.Popen(
                    [self.espeak, "-v", self.voice, message],
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL
                )
            except Exception as e:
                self._speech = None
                self.logger.error(f"Failed to run {self.espeak}: {e}")

    def play_alert(self):
        if not self.aplay or not self.alert_sound or not os.path.exists(self.alert_sound):
            self.logger.debug("No alert sound available, skipping")
            return
        self._run([self.aplay, "-q", self.alert_sound])

    def is_available(self) -> bool:
        return self.espeak is not None

    def get_name(self) -> str:
        return "Speech"


class MockBackend(NotifierBackend):
    """Logs notifications and keeps them for inspection"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.announcements: List[str] = []
        self.alerts = 0

    def announce(self, message: str):
        self.announcements.append(message)
        self.logger.info(f"Announcement: {message}")

    def play_alert(self):
        self.alerts += 1
        self.logger.info("Alert sound")

    def is_available(self) -> bool:
        return True

    def get_name(self) -> str:
        return "Mock"


class Notifier:
    """
    Unified notifier with auto-detection of available backends
    """

    def __init__(self, enabled: bool = True, voice: str = "en", alert_sound: Optional[str] = None,
                 backend: Optional[NotifierBackend] = None):
        """
        Initialize notifier

        Args:
            enabled: Use speech output if available; False forces mock mode
            voice: espeak voice name
            alert_sound: Path to a WAV file played when the timer finishes
            backend: Explicit backend (skips auto-detection)
        """
        self.logger = logging.getLogger(__name__)
        self.backend = backend or self._detect_backend(enabled, voice, alert_sound)
        self.logger.info(f"Notifier backend: {self.backend.get_name()}")

    def _detect_backend(self, enabled: bool, voice: str, alert_sound: Optional[str]) -> NotifierBackend:
        if enabled:
            speech = SpeechBackend(voice=voice, alert_sound=alert_sound)
            if speech.is_available():
                return speech
            self.logger.warning("espeak not found. Using mock notifier.")
        return MockBackend()

    def announce(self, message: str):
        try:
            self.backend.announce(message)
        except Exception as e:
            self.logger.error(f"Announcement failed: {e}")

    def play_alert(self):
        try:
            self.backend.play_alert()
        except Exception as e:
            self.logger.error(f"Alert sound failed: {e}")
