# rep_coach/client/voice.py

import logging
from queue import Queue
from threading import Thread
from typing import Iterable, Optional

import pyttsx3

from rep_coach.landmarks import ExerciseKind
from rep_coach.rep_logic import RepCounted, FormReset, FormCorrected, FormBroken

logger = logging.getLogger(__name__)

RESET_PHRASE = "Reps reset. Let's go again!"

FORM_PHRASES = {
    # exercise: (corrected, broken). Rep exercises announce counts instead.
    ExerciseKind.PLANK: ("Nice plank", "Adjust your posture"),
}


def phrase_for(event) -> Optional[str]:
    if isinstance(event, RepCounted):
        return str(event.count)
    if isinstance(event, FormReset):
        return RESET_PHRASE
    if isinstance(event, FormCorrected):
        return FORM_PHRASES.get(event.exercise, (None, None))[0]
    if isinstance(event, FormBroken):
        return FORM_PHRASES.get(event.exercise, (None, None))[1]
    return None


def pick_voice(voices):
    """Prefer a female English voice, then any English voice, else None (engine default)."""
    def langs(v):
        out = []
        for lang in getattr(v, "languages", None) or []:
            if isinstance(lang, bytes):
                lang = lang.decode("utf-8", errors="ignore")
            out.append(str(lang).lower())
        return out

    def is_english(v):
        name = (getattr(v, "name", "") or "").lower()
        return "english" in name or any("en" in lang for lang in langs(v))

    def is_female(v):
        name = (getattr(v, "name", "") or "").lower()
        gender = (getattr(v, "gender", "") or "").lower()
        return "female" in name or gender == "female"

    for v in voices:
        if is_female(v) and is_english(v):
            return v
    for v in voices:
        if is_english(v):
            return v
    return None


class VoiceNotifier:
    """
    Speaks event cues on a background worker so the camera loop never blocks.
    A fresh pyttsx3 engine is created per message.
    """

    def __init__(self, rate: int = 165, enabled: bool = True):
        self.rate = rate
        self.enabled = enabled
        self.queue: Queue = Queue()
        self._voice_id = None
        self._voice_checked = False
        self._worker: Optional[Thread] = None

    def start(self):
        if self._worker is None and self.enabled:
            self._worker = Thread(target=self._run, daemon=True)
            self._worker.start()
        return self

    def notify(self, events: Iterable[object]):
        """Queue a phrase for each event; returns immediately."""
        if not self.enabled:
            return
        for event in events:
            text = phrase_for(event)
            if text:
                self.queue.put(text)

    def speak_message(self, text: str):
        if not text:
            return
        engine = pyttsx3.init()
        try:
            if not self._voice_checked:
                voice = pick_voice(engine.getProperty("voices") or [])
                self._voice_id = voice.id if voice is not None else None
                self._voice_checked = True
                logger.info("Selected voice: %s", getattr(voice, "name", "default"))
            if self._voice_id is not None:
                engine.setProperty("voice", self._voice_id)
            engine.setProperty("rate", self.rate)
            engine.say(text)
            engine.runAndWait()
        finally:
            engine.stop()

    def _run(self):
        while True:
            text = self.queue.get()
            try:
                self.speak_message(text)
            except Exception:
                logger.exception("TTS error")
            finally:
                self.queue.task_done()
