#!/usr/bin/env python3
"""
Scripted Challenge Example - Reading Challenge Engine

This script replays a recognizer event stream against the engine with a
manual clock, showing how to:
- Plug in a host recognition session
- Start a challenge from the sentence bank
- Watch word outcomes, help and the completion summary

Run: python examples/scripted_challenge.py
"""

import random
import tempfile
from pathlib import Path

from rtw_app.engine import ReadingChallengeEngine
from rtw_app.logging.config import configure_logging
from rtw_app.observer import ChallengeObserver
from rtw_app.persistence.progress_store import ProgressStore
from rtw_app.recognition.models import RecognitionEvent
from rtw_app.recognition.session import RecognitionSession
from rtw_app.utils.clock import ManualClock


class ScriptedSession(RecognitionSession):
    """Session whose events are pushed by the script."""

    def start(self):
        print("🎤 recognizer started")

    def stop(self):
        print("🔇 recognizer stopped")

    def hear(self, text):
        self.handler.on_result([RecognitionEvent(is_final=True, transcript=text)])


class PrintingObserver(ChallengeObserver):
    """Prints what a UI would show."""

    def on_word_outcome(self, index, outcome):
        print(f"  word {index}: {outcome.value}")

    def on_sentence_complete(self, result):
        print(f"\n🎉 Finished: {result.sentence}")
        print(f"  words correct: {result.words_correct}/{result.total_words}")
        print(f"  helped: {', '.join(result.helped_words) or 'none'}")
        print(f"  first attempt mastery: {result.first_attempt_mastery}%")

    def on_gesture_required(self):
        print("👆 tap to start listening")


def main():
    configure_logging(level="WARNING")

    clock = ManualClock()
    sessions = []

    def session_factory(options):
        session = ScriptedSession(options)
        sessions.append(session)
        return session

    config_dir = Path(__file__).parent.parent / "config"
    with tempfile.TemporaryDirectory() as tmp:
        store = ProgressStore(str(Path(tmp) / "progress.db"))
        engine = ReadingChallengeEngine(
            session_factory=session_factory,
            clock=clock,
            observer=PrintingObserver(),
            config_dir=config_dir,
            store=store,
            rng=random.Random(4),
        )

        target = engine.start_challenge(level_id=1)
        print(f"\n📖 Read aloud: {target.sentence}")
        session = sessions[-1]

        for i, word in enumerate(target):
            if i == 1:
                # Two misses on the second word reveal it
                for _ in range(2):
                    session.handler.on_speech_end()
                    clock.advance(800)
                clock.advance(1100)
                continue
            session.hear(word)

        stats = store.get_today_stats()
        print(f"\n📅 Today: {stats['count']} sentences, streak {stats['streak']} days")
        print(f"🧩 Struggling words: {store.load_struggling_words()}")


if __name__ == "__main__":
    main()
